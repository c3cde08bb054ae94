"""Errors raised by menu generation."""

from daily_menu.domain.foods import Bucket


class MenuGenerationError(Exception):
    """Base class for expected menu generation failures."""


class NutritionProfileMissingError(MenuGenerationError):
    """The user has no complete nutrition profile yet."""


class FoodsUnavailableError(MenuGenerationError):
    """Filtering left no usable foods for a required slot."""

    def __init__(self, message: str, buckets: tuple[Bucket, ...]) -> None:
        super().__init__(message)
        self.buckets = buckets


class MenuAlreadyExistsError(Exception):
    """A menu for the same user and date was stored concurrently."""
