"""Nutrition domain models."""

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class NutritionFacts:
    """Nutrient values per 100 g (or 100 ml) of a food."""

    calories: float
    protein: float
    carbs: float
    fats: float
    fiber: float | None = None
    sodium: float | None = None
    sugar: float | None = None
    saturated_fat: float | None = None


@dataclass(frozen=True)
class NutritionInfo:
    """Aggregated nutrition for an ingredient list."""

    calories: float
    protein: float
    carbohydrates: float
    fats: float
    fiber: float | None = None
    sodium: float | None = None
    sugar: float | None = None
    saturated_fat: float | None = None


@dataclass(frozen=True)
class NutritionDelta:
    """Nutrition difference introduced by a swap."""

    calories: float
    protein: float
    carbohydrates: float
    fats: float


@dataclass(frozen=True)
class HealthFactors:
    """Individual contributions that make up a health score."""

    protein_bonus: float
    fiber_bonus: float
    macro_balance: float
    sodium_penalty: float
    calorie_density_bonus: float

    @property
    def nutritional_density(self) -> float:
        return self.protein_bonus + self.fiber_bonus


@dataclass(frozen=True)
class HealthScore:
    """Normalized 0-100 indicator of nutritional quality."""

    value: int
    factors: HealthFactors


class Affordability(str, Enum):
    """Affordability bucket of a cost score."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(frozen=True)
class CostScore:
    """Normalized 0-100 indicator of affordability."""

    value: int
    cost_per_portion: float
    affordability: Affordability
