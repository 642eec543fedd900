from types import MappingProxyType
from typing import Iterable, List, Mapping, Sequence

from app.models.menu import Menu
from app.schemas.menu import MenuRead, ScoredMenu


class MenuScorer:
    """
    Ranks catalogue menus against a user's macro targets.

    The score is a weighted sum of absolute macro differences, lower is
    better. A single menu is compared with MEAL_RATIO of the daily targets
    whatever plan it is being picked for.
    """

    MACRO_WEIGHTS = MappingProxyType({
        "protein": 1.2,
        "carbs": 0.7,
        "fats": 1.0,
    })
    MEAL_RATIO = 0.3

    @staticmethod
    def is_allergen_safe(menu: Menu, allergies: Iterable[str]) -> bool:
        allergies = set(allergies or [])
        if not allergies:
            return True
        return not allergies.intersection(menu.allergen_types)

    @classmethod
    def filter_allergens(cls, menus: Iterable[Menu], allergies: Sequence[str]) -> List[Menu]:
        return [menu for menu in menus if cls.is_allergen_safe(menu, allergies)]

    @classmethod
    def weighted_difference(
        cls,
        protein: float,
        carbs: float,
        fats: float,
        macro_targets: Mapping[str, float],
        ratio: float = 1.0,
    ) -> float:
        return (
            abs(protein - macro_targets["protein"] * ratio) * cls.MACRO_WEIGHTS["protein"]
            + abs(carbs - macro_targets["carbs"] * ratio) * cls.MACRO_WEIGHTS["carbs"]
            + abs(fats - macro_targets["fats"] * ratio) * cls.MACRO_WEIGHTS["fats"]
        )

    @classmethod
    def score_menu(cls, menu: Menu, macro_targets: Mapping[str, float]) -> float:
        return cls.weighted_difference(
            menu.protein_per_serving,
            menu.carbs_per_serving,
            menu.fats_per_serving,
            macro_targets,
            ratio=cls.MEAL_RATIO,
        )

    @classmethod
    def rank_menus(
        cls,
        menus: Iterable[Menu],
        macro_targets: Mapping[str, float],
        allergies: Sequence[str] = (),
    ) -> List[ScoredMenu]:
        """Drop unsafe menus, then sort by score; equal scores keep input order."""
        scored = [
            ScoredMenu(
                **MenuRead.model_validate(menu).model_dump(),
                score=cls.score_menu(menu, macro_targets),
            )
            for menu in cls.filter_allergens(menus, allergies)
        ]
        return sorted(scored, key=lambda item: item.score)
