"""
Starter menu catalogue loaded into an empty database.
Nutrition values are per serving; ingredient values per 100 g.
"""

INITIAL_CATEGORIES = [
    {"name": "breakfast", "description": "Morning meals"},
    {"name": "main_course", "description": "Lunch and dinner plates"},
    {"name": "salad", "description": "Cold bowls and salads"},
    {"name": "snack", "description": "Small bites between meals"},
]

INITIAL_INGREDIENTS = [
    {"name": "Rolled oats", "calories_per_100g": 379, "protein_per_100g": 13.2, "carbs_per_100g": 67.7, "fats_per_100g": 6.5},
    {"name": "Milk", "calories_per_100g": 61, "protein_per_100g": 3.2, "carbs_per_100g": 4.8, "fats_per_100g": 3.3,
     "is_allergen": True, "allergen_type": "dairy"},
    {"name": "Almonds", "calories_per_100g": 579, "protein_per_100g": 21.2, "carbs_per_100g": 21.6, "fats_per_100g": 49.9,
     "is_allergen": True, "allergen_type": "nuts"},
    {"name": "Egg", "calories_per_100g": 155, "protein_per_100g": 13.0, "carbs_per_100g": 1.1, "fats_per_100g": 11.0,
     "is_allergen": True, "allergen_type": "eggs"},
    {"name": "Whole wheat bread", "calories_per_100g": 247, "protein_per_100g": 13.0, "carbs_per_100g": 41.0, "fats_per_100g": 3.4,
     "is_allergen": True, "allergen_type": "gluten"},
    {"name": "Chicken breast", "calories_per_100g": 165, "protein_per_100g": 31.0, "carbs_per_100g": 0.0, "fats_per_100g": 3.6},
    {"name": "Brown rice", "calories_per_100g": 112, "protein_per_100g": 2.3, "carbs_per_100g": 23.5, "fats_per_100g": 0.8},
    {"name": "Broccoli", "calories_per_100g": 34, "protein_per_100g": 2.8, "carbs_per_100g": 6.6, "fats_per_100g": 0.4},
    {"name": "Salmon", "calories_per_100g": 208, "protein_per_100g": 20.4, "carbs_per_100g": 0.0, "fats_per_100g": 13.4,
     "is_allergen": True, "allergen_type": "fish"},
    {"name": "Sweet potato", "calories_per_100g": 86, "protein_per_100g": 1.6, "carbs_per_100g": 20.1, "fats_per_100g": 0.1},
    {"name": "Tofu", "calories_per_100g": 76, "protein_per_100g": 8.0, "carbs_per_100g": 1.9, "fats_per_100g": 4.8,
     "is_allergen": True, "allergen_type": "soy"},
    {"name": "Mixed greens", "calories_per_100g": 20, "protein_per_100g": 1.5, "carbs_per_100g": 3.6, "fats_per_100g": 0.2},
    {"name": "Olive oil", "calories_per_100g": 884, "protein_per_100g": 0.0, "carbs_per_100g": 0.0, "fats_per_100g": 100.0},
    {"name": "Greek yogurt", "calories_per_100g": 97, "protein_per_100g": 9.0, "carbs_per_100g": 3.6, "fats_per_100g": 5.0,
     "is_allergen": True, "allergen_type": "dairy"},
    {"name": "Banana", "calories_per_100g": 89, "protein_per_100g": 1.1, "carbs_per_100g": 22.8, "fats_per_100g": 0.3},
]

INITIAL_MENUS = [
    {
        "name": "Almond oatmeal",
        "description": "Oats cooked in milk topped with almonds",
        "category": "breakfast",
        "calories_per_serving": 420, "protein_per_serving": 16, "carbs_per_serving": 52, "fats_per_serving": 17,
        "serving_size": "1 bowl", "preparation_time": 10,
        "ingredients": [("Rolled oats", 60, "g"), ("Milk", 200, "ml"), ("Almonds", 20, "g")],
    },
    {
        "name": "Egg toast",
        "description": "Two eggs on whole wheat toast",
        "category": "breakfast",
        "calories_per_serving": 380, "protein_per_serving": 22, "carbs_per_serving": 34, "fats_per_serving": 16,
        "serving_size": "2 slices", "preparation_time": 8,
        "ingredients": [("Egg", 100, "g"), ("Whole wheat bread", 70, "g")],
    },
    {
        "name": "Chicken rice bowl",
        "description": "Grilled chicken breast with brown rice and broccoli",
        "category": "main_course",
        "calories_per_serving": 560, "protein_per_serving": 48, "carbs_per_serving": 60, "fats_per_serving": 11,
        "serving_size": "1 bowl", "preparation_time": 25,
        "ingredients": [("Chicken breast", 150, "g"), ("Brown rice", 200, "g"), ("Broccoli", 100, "g")],
    },
    {
        "name": "Baked salmon with sweet potato",
        "description": "Oven baked salmon fillet and roasted sweet potato",
        "category": "main_course",
        "calories_per_serving": 610, "protein_per_serving": 38, "carbs_per_serving": 45, "fats_per_serving": 28,
        "serving_size": "1 plate", "preparation_time": 35,
        "ingredients": [("Salmon", 150, "g"), ("Sweet potato", 200, "g"), ("Olive oil", 5, "ml")],
    },
    {
        "name": "Tofu green salad",
        "description": "Mixed greens with pan fried tofu and olive oil",
        "category": "salad",
        "calories_per_serving": 310, "protein_per_serving": 18, "carbs_per_serving": 14, "fats_per_serving": 20,
        "serving_size": "1 bowl", "preparation_time": 15,
        "ingredients": [("Tofu", 150, "g"), ("Mixed greens", 100, "g"), ("Olive oil", 10, "ml")],
    },
    {
        "name": "Yogurt banana cup",
        "description": "Greek yogurt with sliced banana",
        "category": "snack",
        "calories_per_serving": 230, "protein_per_serving": 15, "carbs_per_serving": 30, "fats_per_serving": 6,
        "serving_size": "1 cup", "preparation_time": 3,
        "ingredients": [("Greek yogurt", 150, "g"), ("Banana", 100, "g")],
    },
]
