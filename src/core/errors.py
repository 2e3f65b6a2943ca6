"""Domain error vocabulary and user-facing error classification."""

from enum import Enum, StrEnum

from pydantic import BaseModel


class ErrorCode(StrEnum):
    """Stable error codes for domain failures."""

    # Product errors
    NAME_EMPTY = "name_empty"
    NOT_FOUND = "not_found"
    OUTCOME_REQUIRES_FINISHED_STATUS = "outcome_requires_finished_status"

    # Suggestion errors
    NOT_ENOUGH_PRODUCTS = "not_enough_products"
    GENERATION_FAILED = "generation_failed"
    INVALID_SUGGESTION = "invalid_suggestion"

    # Generic errors
    UNKNOWN = "unknown"


class ErrorSeverity(Enum):
    """Severity levels for errors."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class FoodieError(Exception):
    """Base class for every domain error raised by the core."""

    code: ErrorCode = ErrorCode.UNKNOWN

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ProductError(FoodieError):
    """Validation and business-rule failures of the Product aggregate."""


class NameEmptyError(ProductError):
    """Raised when a product name is blank after trimming."""

    code = ErrorCode.NAME_EMPTY

    def __init__(self) -> None:
        super().__init__("Product name cannot be empty")


class ProductNotFoundError(ProductError):
    """Raised when a product id does not exist in the repository."""

    code = ErrorCode.NOT_FOUND

    def __init__(self, product_id: str) -> None:
        super().__init__(f"Product with id {product_id} not found")
        self.product_id = product_id


class OutcomeRequiresFinishedStatusError(ProductError):
    """Raised when an outcome is set on a product that is not finished."""

    code = ErrorCode.OUTCOME_REQUIRES_FINISHED_STATUS

    def __init__(self) -> None:
        super().__init__("Outcome can only be set when product status is finished")


class SuggestionError(FoodieError):
    """Failures of the suggestion domain."""


class NotEnoughProductsError(SuggestionError):
    """Raised when there are too few active products to suggest a meal."""

    code = ErrorCode.NOT_ENOUGH_PRODUCTS

    def __init__(self, count: int, required: int) -> None:
        super().__init__(f"Not enough products to generate suggestions ({count} < {required})")
        self.count = count
        self.required = required


class GenerationFailedError(SuggestionError):
    """Raised when a suggestion generator cannot produce a valid batch."""

    code = ErrorCode.GENERATION_FAILED

    def __init__(self, reason: str | None = None) -> None:
        message = "Failed to generate suggestions"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.reason = reason


class InvalidSuggestionError(SuggestionError):
    """Raised by the Suggestion factory on malformed input."""

    code = ErrorCode.INVALID_SUGGESTION

    def __init__(self, reason: str) -> None:
        super().__init__(f"Invalid suggestion: {reason}")
        self.reason = reason


class ShoppingItemError(FoodieError):
    """Failures of the shopping list."""


class ShoppingItemNameEmptyError(ShoppingItemError):
    """Raised when a shopping item name is blank after trimming."""

    code = ErrorCode.NAME_EMPTY

    def __init__(self) -> None:
        super().__init__("Shopping item name cannot be empty")


class ShoppingItemNotFoundError(ShoppingItemError):
    """Raised when a shopping item id does not exist."""

    code = ErrorCode.NOT_FOUND

    def __init__(self, item_id: str) -> None:
        super().__init__(f"Shopping item with id {item_id} not found")
        self.item_id = item_id


class ErrorResponse(BaseModel):
    """Structured error response with user-friendly messaging."""

    code: str
    message: str
    suggestion: str
    severity: ErrorSeverity


_RESPONSES: dict[ErrorCode, tuple[str, str, ErrorSeverity]] = {
    ErrorCode.NAME_EMPTY: (
        "The name cannot be empty.",
        "Type a name such as 'Milk' or 'Chicken breast'.",
        ErrorSeverity.LOW,
    ),
    ErrorCode.NOT_FOUND: (
        "I couldn't find that item.",
        "Refresh the list and try again.",
        ErrorSeverity.LOW,
    ),
    ErrorCode.OUTCOME_REQUIRES_FINISHED_STATUS: (
        "Only finished products can be marked as used or thrown away.",
        "Mark the product as finished first.",
        ErrorSeverity.LOW,
    ),
    ErrorCode.NOT_ENOUGH_PRODUCTS: (
        "There are not enough products in your pantry for suggestions.",
        "Add at least two products and try again.",
        ErrorSeverity.LOW,
    ),
    ErrorCode.GENERATION_FAILED: (
        "Suggestions are not available right now.",
        "Please try again in a moment.",
        ErrorSeverity.MEDIUM,
    ),
    ErrorCode.INVALID_SUGGESTION: (
        "A suggestion could not be built.",
        "Please try again in a moment.",
        ErrorSeverity.MEDIUM,
    ),
}


def classify_error_with_response(exception: Exception) -> ErrorResponse:
    """Classify an error and return a structured response with recovery suggestions.

    Domain errors map through their code. Timeouts and connection problems are reported
    as network errors; anything else is unknown.

    Args:
        exception: The exception raised during execution

    Returns:
        ErrorResponse with code, message, suggestion, and severity
    """
    if isinstance(exception, FoodieError) and exception.code in _RESPONSES:
        message, suggestion, severity = _RESPONSES[exception.code]
        return ErrorResponse(code=exception.code, message=message, suggestion=suggestion, severity=severity)

    if isinstance(exception, TimeoutError | ConnectionError):
        return ErrorResponse(
            code="network_error",
            message="Network error occurred.",
            suggestion="Please check your connection and try again.",
            severity=ErrorSeverity.MEDIUM,
        )

    return ErrorResponse(
        code=ErrorCode.UNKNOWN,
        message="An unexpected error occurred.",
        suggestion="Please try again later. If the problem persists, contact support.",
        severity=ErrorSeverity.MEDIUM,
    )
