"""Rule-based expiry estimator for offline use.

Provides conservative estimates based on common food safety guidelines:
- Perishables (dairy, meat, fish): 0-7 days, shorter once opened
- Fresh produce: 2-7 days
- Dry goods: 180-365 days
- Freezer extends every shelf life to 90-180 days
- Any status other than "new" roughly halves the shelf life
"""

import logging
from datetime import datetime, timedelta
from enum import StrEnum

from src.core.logging import span
from src.domain.ports import Confidence, ExpiryEstimation
from src.domain.product import ProductLocation, ProductStatus


logger = logging.getLogger(__name__)


class FoodCategory(StrEnum):
    """Coarse food category derived from the product name."""

    DAIRY = "dairy"
    MEAT = "meat"
    FRESH_PRODUCE = "fresh_produce"
    DRY_GOODS = "dry_goods"
    UNKNOWN = "unknown"


# Keywords are matched as substrings of the lowercase product name (English and Spanish)
_CATEGORY_KEYWORDS: dict[FoodCategory, tuple[str, ...]] = {
    FoodCategory.DAIRY: ("milk", "leche", "yogur", "queso", "cheese", "nata", "cream"),
    FoodCategory.MEAT: (
        "pollo",
        "chicken",
        "carne",
        "meat",
        "pescado",
        "fish",
        "salmon",
        "cerdo",
        "pork",
        "ternera",
        "beef",
    ),
    FoodCategory.FRESH_PRODUCE: (
        "tomat",
        "lettuce",
        "lechuga",
        "zanahoria",
        "carrot",
        "apple",
        "manzana",
        "banana",
        "plátano",
        "pepper",
        "pimiento",
    ),
    FoodCategory.DRY_GOODS: (
        "rice",
        "arroz",
        "pasta",
        "flour",
        "harina",
        "bean",
        "alubia",
        "lentil",
        "lenteja",
        "cereal",
    ),
}


def classify_food(product_name: str) -> FoodCategory:
    """Classify a product name into a food category by keyword."""
    name = product_name.lower()
    for category, keywords in _CATEGORY_KEYWORDS.items():
        if any(keyword in name for keyword in keywords):
            return category
    return FoodCategory.UNKNOWN


def _shelf_life(
    category: FoodCategory,
    status: ProductStatus,
    location: ProductLocation | None,
) -> tuple[int, Confidence]:
    """Return (days from today, confidence) for a category, status and location."""
    is_new = status == ProductStatus.NEW

    # Freezer dominates every category
    if location == ProductLocation.FREEZER:
        return (180 if is_new else 90), Confidence.MEDIUM

    in_fridge = location == ProductLocation.FRIDGE

    if category == FoodCategory.DAIRY:
        if not in_fridge:
            return 1, Confidence.HIGH
        return (7 if is_new else 3), Confidence.HIGH

    if category == FoodCategory.MEAT:
        if not in_fridge:
            return 0, Confidence.HIGH
        return (3 if is_new else 1), Confidence.HIGH

    if category == FoodCategory.FRESH_PRODUCE:
        base_days = 7 if in_fridge else 5
        return (base_days if is_new else base_days // 2), Confidence.MEDIUM

    if category == FoodCategory.DRY_GOODS:
        return (365 if is_new else 180), Confidence.MEDIUM

    # Unknown product, conservative estimate
    if in_fridge:
        return 5, Confidence.LOW
    if location == ProductLocation.PANTRY:
        return 30, Confidence.LOW
    return 3, Confidence.LOW


class RuleBasedExpiryEstimator:
    """Offline ExpiryEstimatorService driven by keyword rules."""

    async def estimate_expiry_date(
        self,
        product_name: str,
        status: ProductStatus,
        location: ProductLocation | None = None,
    ) -> ExpiryEstimation:
        """Estimate the expiry date from name keywords, status and location."""
        with span("rule_expiry_estimator.estimate_expiry_date"):
            category = classify_food(product_name)
            days, confidence = _shelf_life(category, status, location)

            logger.debug(
                "Estimated expiry by rules",
                extra={"product_name": product_name, "category": category, "days": days},
            )
            return ExpiryEstimation(date=datetime.now() + timedelta(days=days), confidence=confidence)
