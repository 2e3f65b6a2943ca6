"""Pure urgency classification for pantry products.

Every function takes an optional ``now``. When omitted, the current time is read in the
timezone of the product's expiry date (naive local time for naive dates).
"""

import math
from collections.abc import Iterable
from datetime import datetime, timedelta
from enum import StrEnum

from pydantic import BaseModel

from src.core.config import constants
from src.domain.product import Product, ProductStatus


class UrgencyLevel(StrEnum):
    """Display tier for how soon a product should be used."""

    OK = "ok"
    USE_SOON = "use_soon"
    USE_TODAY = "use_today"
    WOULDNT_TRUST = "wouldnt_trust"


class UrgencyInfo(BaseModel):
    """Urgency level plus the message key presentation code translates."""

    level: UrgencyLevel
    message_key: str


# Sort keys, lower is more urgent
SCORE_EXPIRED = 0
SCORE_EXPIRING_SOON = 1
SCORE_ALMOST_EMPTY = 2
SCORE_OPENED = 3
SCORE_DEFAULT = 4

_ONE_DAY = timedelta(days=1)


def _resolve_now(date: datetime, now: datetime | None) -> datetime:
    return now if now is not None else datetime.now(date.tzinfo)


def effective_expiry(product: Product) -> datetime | None:
    """Return the manual expiry date if set, else the estimated one."""
    if product.expiry_date is not None:
        return product.expiry_date
    return product.estimated_expiry_date


def days_until_expiry(product: Product, now: datetime | None = None) -> int | None:
    """Calculate whole days until the product expires.

    Both dates are compared at midnight, so 0 means it expires today and a negative
    number means it already expired.

    Returns:
        Signed day difference, or None when the product has no expiry date
    """
    date = effective_expiry(product)
    if date is None:
        return None
    current = _resolve_now(date, now)
    return (date.date() - current.date()).days


def is_expired(product: Product, now: datetime | None = None) -> bool:
    """Return True if the effective expiry is strictly in the past."""
    date = effective_expiry(product)
    if date is None:
        return False
    return date < _resolve_now(date, now)


def is_expiring_soon(product: Product, now: datetime | None = None) -> bool:
    """Return True if the product expires within the next EXPIRING_SOON_DAYS days."""
    date = effective_expiry(product)
    if date is None:
        return False
    days = math.ceil((date - _resolve_now(date, now)) / _ONE_DAY)
    return 0 <= days <= constants.EXPIRING_SOON_DAYS


def urgency_score(product: Product, now: datetime | None = None) -> int:
    """Return the urgency sort key (0 = most urgent, 4 = least).

    Expiry checks always run before status checks.
    """
    if is_expired(product, now):
        return SCORE_EXPIRED
    if is_expiring_soon(product, now):
        return SCORE_EXPIRING_SOON
    if product.status == ProductStatus.ALMOST_EMPTY:
        return SCORE_ALMOST_EMPTY
    if product.status == ProductStatus.OPENED:
        return SCORE_OPENED
    return SCORE_DEFAULT


def sort_by_urgency(products: Iterable[Product], now: datetime | None = None) -> list[Product]:
    """Return a new list ordered from most to least urgent. Ties keep input order."""
    return sorted(products, key=lambda product: urgency_score(product, now))


def urgency_level(product: Product, now: datetime | None = None) -> UrgencyLevel:
    """Classify a product into a display tier.

    Business rules:
    - Expired -> wouldnt_trust
    - Expires today -> use_today
    - Expires within the soon window -> use_soon
    - Anything else, including no date at all -> ok
    """
    if effective_expiry(product) is None:
        return UrgencyLevel.OK
    if is_expired(product, now):
        return UrgencyLevel.WOULDNT_TRUST
    if days_until_expiry(product, now) == 0:
        return UrgencyLevel.USE_TODAY
    if is_expiring_soon(product, now):
        return UrgencyLevel.USE_SOON
    return UrgencyLevel.OK


def urgency_info(product: Product, now: datetime | None = None) -> UrgencyInfo:
    """Return the urgency level with its ``product.urgency.<level>`` message key."""
    level = urgency_level(product, now)
    return UrgencyInfo(level=level, message_key=f"product.urgency.{level}")
