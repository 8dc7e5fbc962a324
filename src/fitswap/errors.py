"""Errors raised by the collaborator layer around the engine."""


class FitSwapError(Exception):
    """Base class for FitSwap errors."""


class RecipeExtractionError(FitSwapError):
    """The extraction service returned no usable recipe."""


class UnsupportedInputError(FitSwapError):
    """Input that cannot be treated as recipe text or an image."""


class RecipeNotFoundError(FitSwapError):
    """A stored recipe does not exist."""
