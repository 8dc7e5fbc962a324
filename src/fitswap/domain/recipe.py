"""Recipe domain models."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from uuid import uuid4

from fitswap.domain.nutrition import CostScore, HealthScore, NutritionDelta, NutritionInfo


class Goal(str, Enum):
    """User goal driving which variants are generated."""

    LOSE_WEIGHT = "lose_weight"
    GAIN_MASS = "gain_mass"
    GENERAL_HEALTH = "general_health"

    @classmethod
    def coerce(cls, value: "Goal | str | None") -> "Goal":
        """Map a raw goal value to a Goal, defaulting to general health."""
        if isinstance(value, Goal):
            return value
        if value is None:
            return cls.GENERAL_HEALTH
        cleaned = value.strip().lower()
        if cleaned == "gain_muscle":
            return cls.GAIN_MASS
        for goal in cls:
            if goal.value == cleaned:
                return goal
        return cls.GENERAL_HEALTH


def new_id(prefix: str) -> str:
    """Return a random identifier with a readable prefix."""
    return f"{prefix}_{uuid4().hex[:12]}"


@dataclass(frozen=True)
class Ingredient:
    """Single recipe ingredient."""

    id: str
    name: str
    amount: float
    unit: str
    category: str | None = None


@dataclass(frozen=True)
class CookingStep:
    """Single ordered cooking instruction."""

    id: str
    order: int
    instruction: str
    duration: int | None = None
    temperature: int | None = None
    timer_required: bool = False


@dataclass(frozen=True)
class ParsedRecipe:
    """Structured recipe extracted from text or an external parser."""

    id: str
    title: str
    ingredients: tuple[Ingredient, ...]
    steps: tuple[CookingStep, ...]
    servings: int = 4
    description: str | None = None
    prep_time: int | None = None
    cook_time: int | None = None
    total_time: int | None = None
    source: str | None = None
    image_url: str | None = None
    partial: bool = False


@dataclass(frozen=True)
class Swap:
    """Single ingredient substitution with its rationale and impact."""

    id: str
    original_ingredient: Ingredient
    swapped_ingredient: Ingredient
    reason: str
    impact: NutritionDelta


@dataclass(frozen=True)
class RecipeVariant:
    """Goal-specific transformation of a base recipe."""

    id: str
    name: str
    recipe: ParsedRecipe
    swaps: tuple[Swap, ...]
    nutrition: NutritionInfo
    health_score: HealthScore
    cost_score: CostScore
    explanation: str | None = None


@dataclass(frozen=True)
class Recipe:
    """Aggregate returned by a transformation: original plus its variants."""

    id: str
    original: ParsedRecipe
    variants: tuple[RecipeVariant, ...]
    created_at: datetime
    user_id: str | None = None
    favorited: bool = False
    goal: Goal | None = None
    category: str | None = None

    def variant(self, variant_id: str) -> RecipeVariant | None:
        """Return the variant with the given id, if present."""
        for variant in self.variants:
            if variant.id == variant_id:
                return variant
        return None

    @property
    def variant_ids(self) -> list[str]:
        return [variant.id for variant in self.variants]


@dataclass(frozen=True)
class UserPreferences:
    """Optional preferences that shape a transformation."""

    budget_per_portion: float | None = None
    average_cooking_time: int | None = None
    restrictions: tuple[str, ...] = field(default_factory=tuple)
