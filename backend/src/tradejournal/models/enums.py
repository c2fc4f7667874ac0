"""
Closed value sets shared by the ORM models and the API schemas.
"""

from enum import Enum


class Direction(str, Enum):
    """Side of a logged trade."""

    LONG = "LONG"
    SHORT = "SHORT"


class SetupQuality(str, Enum):
    """Self-assessed grade of the trade setup."""

    A = "A"
    B = "B"
    C = "C"
