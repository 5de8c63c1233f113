"""Pure pricing domain (no ORM access)."""

from .engine import (  # noqa: F401
    DEFAULT_MIN_NIGHTS,
    WEEKLY_RATE_THRESHOLD,
    PriceCalculation,
    PriceDetail,
    PricedPeriod,
    SeasonRate,
    calculate,
    min_nights_required,
)
