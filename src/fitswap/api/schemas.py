"""Pydantic models for API request payloads."""

from pydantic import BaseModel, Field

from fitswap.domain.recipe import UserPreferences


class PreferencesPayload(BaseModel):
    """User preferences payload."""

    budget_per_portion: float | None = Field(default=None, alias="budgetPerPortion")
    average_cooking_time: int | None = Field(default=None, alias="averageCookingTime")
    restrictions: list[str] = Field(default_factory=list)

    def to_domain(self) -> UserPreferences:
        return UserPreferences(
            budget_per_portion=self.budget_per_portion,
            average_cooking_time=self.average_cooking_time,
            restrictions=tuple(self.restrictions),
        )


class TransformRequest(BaseModel):
    """Recipe text transformation request."""

    text: str
    goal: str | None = None
    preferences: PreferencesPayload | None = None
    user_id: str | None = Field(default=None, alias="userId")
    persist: bool = False


class TransformImageRequest(BaseModel):
    """Recipe photo transformation request."""

    image_base64: str = Field(alias="imageBase64")
    goal: str | None = None
    preferences: PreferencesPayload | None = None
    user_id: str | None = Field(default=None, alias="userId")
    persist: bool = False


class ParseRecipeRequest(BaseModel):
    """Recipe text parse request."""

    text: str


class GenerateImageRequest(BaseModel):
    """Recipe image generation request."""

    title: str | None = None


class FavoriteRequest(BaseModel):
    """Favorite toggle request."""

    favorited: bool = True
