"""
Base Domain Classes

Only value objects are needed by the pricing and booking contexts:
bookings, seasons and periods live as Django models.
"""

from abc import ABC
from dataclasses import dataclass


@dataclass(frozen=True)
class ValueObject(ABC):
    """
    Immutable object without identity, equal to any other instance
    carrying the same attribute values.
    """
    pass
