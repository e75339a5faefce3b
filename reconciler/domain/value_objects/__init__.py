"""Domain value objects."""

from reconciler.domain.value_objects.money import Money

__all__ = [
    "Money",
]
