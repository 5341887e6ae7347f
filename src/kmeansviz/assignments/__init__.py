"""Assignment strategies for the K-Means engine."""

from .hard import HardAssignment

__all__ = [
    'HardAssignment'
]
