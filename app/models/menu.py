from datetime import datetime
from typing import List

from sqlalchemy import Column, Integer, String, Float, Boolean, DateTime, ForeignKey, Text, Index
from sqlalchemy.orm import relationship

from app.core.base import Base


class MenuCategory(Base):
    __tablename__ = "menu_categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), unique=True, nullable=False)
    description = Column(Text, nullable=True)

    menus = relationship("Menu", back_populates="category")


class Menu(Base):
    """Catalogue dish; nutrition values are per serving."""
    __tablename__ = "menu"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False, index=True)
    description = Column(Text, nullable=True)
    image_url = Column(String, nullable=True)
    category_id = Column(Integer, ForeignKey("menu_categories.id"), nullable=True)
    calories_per_serving = Column(Float, nullable=False)
    protein_per_serving = Column(Float, default=0, nullable=False)
    carbs_per_serving = Column(Float, default=0, nullable=False)
    fats_per_serving = Column(Float, default=0, nullable=False)
    serving_size = Column(String(50), nullable=True)
    preparation_time = Column(Integer, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    category = relationship("MenuCategory", back_populates="menus")
    menu_ingredients = relationship("MenuIngredient", back_populates="menu", cascade="all, delete-orphan")

    __table_args__ = (
        Index('idx_menu_active_calories', 'is_active', 'calories_per_serving'),
    )

    @property
    def allergen_types(self) -> List[str]:
        return sorted({
            mi.ingredient.allergen_type
            for mi in self.menu_ingredients
            if mi.ingredient is not None and mi.ingredient.is_allergen and mi.ingredient.allergen_type
        })


class Ingredient(Base):
    __tablename__ = "ingredients"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), unique=True, nullable=False)
    calories_per_100g = Column(Float, default=0, nullable=False)
    protein_per_100g = Column(Float, default=0, nullable=False)
    carbs_per_100g = Column(Float, default=0, nullable=False)
    fats_per_100g = Column(Float, default=0, nullable=False)
    is_allergen = Column(Boolean, default=False, nullable=False)
    allergen_type = Column(String(50), nullable=True)  # "nuts", "dairy", "gluten", ...
    unit = Column(String(20), default="g")

    menu_ingredients = relationship("MenuIngredient", back_populates="ingredient")


class MenuIngredient(Base):
    __tablename__ = "menu_ingredients"

    id = Column(Integer, primary_key=True)
    menu_id = Column(Integer, ForeignKey("menu.id"), nullable=False, index=True)
    ingredient_id = Column(Integer, ForeignKey("ingredients.id"), nullable=False, index=True)
    amount = Column(Float, nullable=True)
    unit = Column(String(20), nullable=True)

    menu = relationship("Menu", back_populates="menu_ingredients")
    ingredient = relationship("Ingredient", back_populates="menu_ingredients")
