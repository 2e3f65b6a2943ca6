"""Product use cases: add, update, status change, outcome, expiry estimation, listing."""

import asyncio
import logging
from dataclasses import dataclass

from src.core.errors import ProductNotFoundError
from src.core.logging import log_with_context, span
from src.domain.ports import UNKNOWN_ESTIMATION, ExpiryEstimatorService, ProductRepository
from src.domain.product import (
    FieldChange,
    Product,
    ProductCreate,
    ProductLocation,
    ProductOutcome,
    ProductStatus,
    ProductUpdate,
    normalize_product_name,
    update_product,
)


_default_logger = logging.getLogger(__name__)


async def _load(repository: ProductRepository, product_id: str) -> Product:
    product = await repository.get_by_id(product_id)
    if product is None:
        raise ProductNotFoundError(product_id)
    return product


class EstimateExpiry:
    """Estimate and store a product's expiry date.

    Only ``estimated_expiry_date`` is written; a manual ``expiry_date`` is never
    overridden. If the estimator misbehaves the estimate is cleared.
    """

    def __init__(
        self,
        repository: ProductRepository,
        estimator: ExpiryEstimatorService,
        logger: logging.Logger | None = None,
    ) -> None:
        self._repository = repository
        self._estimator = estimator
        self._logger = logger or _default_logger

    async def execute(self, product_id: str) -> Product:
        """Re-estimate ``product_id`` and return the saved product.

        Raises:
            ProductNotFoundError: If the product does not exist
        """
        with span("estimate_expiry.execute", product_id=product_id):
            self._logger.info("Estimating product expiry", extra={"product_id": product_id})
            existing = await _load(self._repository, product_id)

            try:
                estimation = await self._estimator.estimate_expiry_date(
                    existing.name,
                    existing.status,
                    existing.location,
                )
                self._logger.info(
                    "Expiry estimated",
                    extra={
                        "product_id": product_id,
                        "confidence": estimation.confidence,
                        "has_date": estimation.date is not None,
                    },
                )
            except Exception as e:
                self._logger.error("Expiry estimation failed", extra={"product_id": product_id, "error": str(e)})
                estimation = UNKNOWN_ESTIMATION

            updated = update_product(existing, ProductUpdate(estimated_expiry_date=estimation.date))
            await self._repository.save(updated)
            return updated


async def _estimate_best_effort(
    estimate_expiry: EstimateExpiry,
    product_id: str,
    logger: logging.Logger,
) -> None:
    """Run EstimateExpiry, logging and swallowing any failure."""
    try:
        await estimate_expiry.execute(product_id)
    except Exception as e:
        logger.warning(
            "Automatic expiry re-estimation failed",
            extra={"product_id": product_id, "error": str(e)},
        )


class AddProduct:
    """Add a new product to the pantry and estimate its expiry."""

    def __init__(
        self,
        repository: ProductRepository,
        estimate_expiry: EstimateExpiry,
        logger: logging.Logger | None = None,
    ) -> None:
        self._repository = repository
        self._estimate_expiry = estimate_expiry
        self._logger = logger or _default_logger

    async def execute(
        self,
        name: str,
        *,
        location: ProductLocation | None = None,
        quantity: str | None = None,
    ) -> Product:
        """Create a product with status new.

        Returns:
            The product as created, before the expiry estimate is applied

        Raises:
            NameEmptyError: If the name is blank
        """
        trimmed_name = normalize_product_name(name)

        with span("add_product.execute", product_name=trimmed_name):
            self._logger.info("Adding product", extra={"product_name": trimmed_name})

            product = await self._repository.create(
                ProductCreate(name=trimmed_name, location=location, quantity=quantity)
            )
            await _estimate_best_effort(self._estimate_expiry, product.id, self._logger)
            return product


class UpdateProduct:
    """Apply a partial update to a product."""

    def __init__(
        self,
        repository: ProductRepository,
        estimate_expiry: EstimateExpiry,
        logger: logging.Logger | None = None,
    ) -> None:
        self._repository = repository
        self._estimate_expiry = estimate_expiry
        self._logger = logger or _default_logger

    async def execute(self, product_id: str, changes: ProductUpdate) -> Product:
        """Update only the fields supplied in ``changes``.

        A location change re-estimates expiry unless the same change-set supplies a
        manual expiry date.

        Raises:
            ProductNotFoundError: If the product does not exist
            OutcomeRequiresFinishedStatusError: If an outcome is set on an unfinished product
        """
        with span("update_product.execute", product_id=product_id):
            self._logger.info(
                "Updating product",
                extra={"product_id": product_id, "fields": sorted(changes.model_fields_set)},
            )
            existing = await _load(self._repository, product_id)

            updated = update_product(existing, changes)
            await self._repository.save(updated)

            location_changed = (
                changes.change_of("location") != FieldChange.UNCHANGED and changes.location != existing.location
            )
            manual_expiry_provided = changes.change_of("expiry_date") != FieldChange.UNCHANGED

            if location_changed and not manual_expiry_provided:
                await _estimate_best_effort(self._estimate_expiry, product_id, self._logger)

            return updated


class UpdateProductStatus:
    """Move a product to another lifecycle status. Every transition is allowed."""

    def __init__(
        self,
        repository: ProductRepository,
        estimate_expiry: EstimateExpiry,
        logger: logging.Logger | None = None,
    ) -> None:
        self._repository = repository
        self._estimate_expiry = estimate_expiry
        self._logger = logger or _default_logger

    async def execute(self, product_id: str, status: ProductStatus) -> Product:
        """Set the status and re-estimate expiry.

        Raises:
            ProductNotFoundError: If the product does not exist
        """
        with span("update_product_status.execute", product_id=product_id, status=status):
            self._logger.info("Updating product status", extra={"product_id": product_id, "status": status})
            existing = await _load(self._repository, product_id)

            updated = update_product(existing, ProductUpdate(status=status))
            await self._repository.save(updated)

            await _estimate_best_effort(self._estimate_expiry, product_id, self._logger)
            return updated


class SetProductOutcome:
    """Record whether a finished product was used or thrown away."""

    def __init__(self, repository: ProductRepository, logger: logging.Logger | None = None) -> None:
        self._repository = repository
        self._logger = logger or _default_logger

    async def execute(self, product_id: str, outcome: ProductOutcome | None) -> Product:
        """Set or clear the outcome.

        Setting requires status finished; clearing (``None``) is always allowed.

        Raises:
            ProductNotFoundError: If the product does not exist
            OutcomeRequiresFinishedStatusError: If setting an outcome on an unfinished product
        """
        with span("set_product_outcome.execute", product_id=product_id, outcome=outcome):
            self._logger.info("Setting product outcome", extra={"product_id": product_id, "outcome": outcome})
            existing = await _load(self._repository, product_id)

            updated = update_product(existing, ProductUpdate(outcome=outcome))
            await self._repository.save(updated)
            return updated


class DeleteProduct:
    """Remove a product from the pantry."""

    def __init__(self, repository: ProductRepository, logger: logging.Logger | None = None) -> None:
        self._repository = repository
        self._logger = logger or _default_logger

    async def execute(self, product_id: str) -> None:
        """Delete ``product_id``.

        Raises:
            ProductNotFoundError: If the product does not exist
        """
        with span("delete_product.execute", product_id=product_id):
            await _load(self._repository, product_id)
            await self._repository.delete(product_id)
            self._logger.info("Deleted product", extra={"product_id": product_id})


@dataclass
class GetAllProductsResult:
    """Active products plus the total count including finished ones."""

    active: list[Product]
    total_count: int


class GetAllProducts:
    """List the active pantry and count everything tracked."""

    def __init__(self, repository: ProductRepository, logger: logging.Logger | None = None) -> None:
        self._repository = repository
        self._logger = logger or _default_logger

    async def execute(self) -> GetAllProductsResult:
        """Read active and all products concurrently."""
        with span("get_all_products.execute"):
            active, all_products = await asyncio.gather(
                self._repository.get_active_products(),
                self._repository.get_all(),
            )
            log_with_context(
                self._logger,
                "info",
                "Retrieved products",
                active_count=len(active),
                total_count=len(all_products),
            )
            return GetAllProductsResult(active=active, total_count=len(all_products))
