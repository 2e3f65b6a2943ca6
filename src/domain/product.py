"""Product domain models, enums, and lifecycle functions."""

from datetime import datetime, timedelta
from enum import StrEnum

from pydantic import BaseModel, Field, field_validator

from src.core.errors import NameEmptyError, OutcomeRequiresFinishedStatusError


class ProductStatus(StrEnum):
    """Product lifecycle status. Every transition is allowed in both directions."""

    NEW = "new"
    OPENED = "opened"
    ALMOST_EMPTY = "almost_empty"
    FINISHED = "finished"


class ProductLocation(StrEnum):
    """Where a product is stored."""

    FRIDGE = "fridge"
    PANTRY = "pantry"
    FREEZER = "freezer"


class ProductOutcome(StrEnum):
    """What happened to a finished product."""

    USED = "used"
    THROWN_AWAY = "thrown_away"


class Product(BaseModel):
    """Tracked pantry item."""

    id: str = Field(..., description="Unique product ID")
    name: str = Field(..., description="Product name (e.g., 'Milk', 'Chicken breast')")
    status: ProductStatus = Field(default=ProductStatus.NEW, description="Lifecycle status")
    location: ProductLocation | None = Field(default=None, description="Storage location")
    quantity: str | None = Field(default=None, description="Free-text quantity (e.g., '1 L', 'half')")
    expiry_date: datetime | None = Field(default=None, description="Expiry date entered by the user")
    estimated_expiry_date: datetime | None = Field(default=None, description="System-estimated expiry date")
    outcome: ProductOutcome | None = Field(default=None, description="Outcome once finished")
    created_at: datetime = Field(..., description="When the product was added")
    updated_at: datetime = Field(..., description="When the product was last changed")


class ProductCreate(BaseModel):
    """Pydantic model for creating a product with a repository-assigned id."""

    name: str = Field(..., description="Trimmed, non-empty product name")
    location: ProductLocation | None = Field(default=None, description="Storage location")
    quantity: str | None = Field(default=None, description="Free-text quantity")
    expiry_date: datetime | None = Field(default=None, description="Expiry date entered by the user")


class FieldChange(StrEnum):
    """How a single field is affected by a ProductUpdate."""

    UNCHANGED = "unchanged"
    SET = "set"
    CLEARED = "cleared"


class ProductUpdate(BaseModel):
    """Partial update for a product.

    Only fields passed explicitly are applied. Passing ``None`` clears an optional field,
    leaving a field out keeps its current value:

        ProductUpdate(location=ProductLocation.FRIDGE)  # set location
        ProductUpdate(location=None)                    # clear location
        ProductUpdate()                                 # change nothing
    """

    name: str = None  # type: ignore[assignment]
    status: ProductStatus = None  # type: ignore[assignment]
    location: ProductLocation | None = None
    quantity: str | None = None
    expiry_date: datetime | None = None
    estimated_expiry_date: datetime | None = None
    outcome: ProductOutcome | None = None

    @field_validator("name")
    @classmethod
    def validate_name_not_blank(cls, v: str) -> str:
        """Reject blank names and trim the rest."""
        trimmed = v.strip()
        if not trimmed:
            raise NameEmptyError()
        return trimmed

    def change_of(self, field: str) -> FieldChange:
        """Return whether ``field`` is left unchanged, set to a value, or cleared."""
        if field not in type(self).model_fields:
            msg = f"Unknown product field: {field}"
            raise ValueError(msg)
        if field not in self.model_fields_set:
            return FieldChange.UNCHANGED
        if getattr(self, field) is None:
            return FieldChange.CLEARED
        return FieldChange.SET


def normalize_product_name(name: str) -> str:
    """Trim a product name, raising NameEmptyError if nothing is left."""
    trimmed = name.strip()
    if not trimmed:
        raise NameEmptyError()
    return trimmed


def ensure_outcome_allowed(status: ProductStatus, outcome: ProductOutcome | None) -> None:
    """Raise OutcomeRequiresFinishedStatusError when an outcome is set on an unfinished product."""
    if outcome is not None and status != ProductStatus.FINISHED:
        raise OutcomeRequiresFinishedStatusError()


def create_product(
    *,
    id: str,  # noqa: A002
    name: str,
    status: ProductStatus = ProductStatus.NEW,
    location: ProductLocation | None = None,
    quantity: str | None = None,
    expiry_date: datetime | None = None,
    estimated_expiry_date: datetime | None = None,
    outcome: ProductOutcome | None = None,
    created_at: datetime | None = None,
    updated_at: datetime | None = None,
) -> Product:
    """Validate input and build a Product.

    Raises:
        NameEmptyError: If the name is blank after trimming
        OutcomeRequiresFinishedStatusError: If an outcome is given for an unfinished product
    """
    ensure_outcome_allowed(status, outcome)
    now = datetime.now()
    return Product(
        id=id,
        name=normalize_product_name(name),
        status=status,
        location=location,
        quantity=quantity,
        expiry_date=expiry_date,
        estimated_expiry_date=estimated_expiry_date,
        outcome=outcome,
        created_at=created_at or now,
        updated_at=updated_at or now,
    )


def _next_updated_at(previous: datetime) -> datetime:
    """Return a timestamp strictly after ``previous``."""
    now = datetime.now(previous.tzinfo)
    return max(now, previous + timedelta(microseconds=1))


def update_product(product: Product, changes: ProductUpdate) -> Product:
    """Apply a partial update and return a new Product.

    Fields not supplied in ``changes`` are preserved; ``updated_at`` always advances.
    An outcome may only be set when the resulting status is finished, clearing is
    always allowed.

    Raises:
        OutcomeRequiresFinishedStatusError: If the change sets an outcome on an unfinished product
    """
    if changes.change_of("outcome") == FieldChange.SET:
        status = changes.status if changes.change_of("status") == FieldChange.SET else product.status
        ensure_outcome_allowed(status, changes.outcome)

    update_data = changes.model_dump(exclude_unset=True)
    update_data["updated_at"] = _next_updated_at(product.updated_at)
    return product.model_copy(update=update_data)


def is_active(product: Product) -> bool:
    """Return True unless the product is finished."""
    return product.status != ProductStatus.FINISHED
