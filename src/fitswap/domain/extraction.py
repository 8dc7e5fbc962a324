"""Models for AI recipe extraction results."""

from pydantic import BaseModel, ConfigDict, Field


class ExtractedIngredient(BaseModel):
    """Single ingredient returned by the extraction model."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=1)
    amount: float | None = Field(default=None, ge=0)
    unit: str | None = None
    category: str | None = None


class ExtractedStep(BaseModel):
    """Single instruction returned by the extraction model."""

    model_config = ConfigDict(str_strip_whitespace=True)

    order: int | None = Field(default=None, ge=1)
    instruction: str = Field(min_length=1)
    duration: int | None = Field(default=None, ge=0)
    temperature: int | None = None


class ExtractedRecipe(BaseModel):
    """Structured output for recipe extraction."""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: str | None = None
    description: str | None = None
    ingredients: list[ExtractedIngredient] = Field(default_factory=list)
    steps: list[ExtractedStep] = Field(default_factory=list)
    servings: int | None = Field(default=None, ge=1)
    prep_time: int | None = Field(default=None, ge=0)
    cook_time: int | None = Field(default=None, ge=0)
