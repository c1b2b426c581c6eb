"""Models for spoon."""

from .options import SpoonOptions

__all__ = [
    'SpoonOptions',
]
