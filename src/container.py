"""Composition root: strategy selection and use-case wiring."""

import logging
from dataclasses import dataclass

from src.agents.agent_instance import create_text_agent
from src.core.config import Settings, constants
from src.domain.ports import (
    ExpiryEstimatorService,
    ProductRepository,
    ShoppingItemRepository,
    SuggestionGeneratorService,
)
from src.services import (
    AIExpiryEstimator,
    AISuggestionGenerator,
    RuleBasedExpiryEstimator,
    RuleBasedSuggestionGenerator,
)
from src.use_cases import (
    AddProduct,
    AddShoppingItem,
    ClearBoughtItems,
    DeleteProduct,
    DeleteShoppingItem,
    EstimateExpiry,
    GetAllProducts,
    GetShoppingItems,
    GetSuggestions,
    SetProductOutcome,
    ToggleShoppingItem,
    UpdateProduct,
    UpdateProductStatus,
)


logger = logging.getLogger(__name__)


def create_expiry_estimator(settings: Settings) -> ExpiryEstimatorService:
    """Build the configured expiry estimator.

    Raises:
        ValueError: If the "ai" strategy is selected without an OpenRouter API key
    """
    if settings.expiry_estimator == "ai":
        logger.info("Using AI expiry estimator", extra={"model_id": settings.model_id})
        return AIExpiryEstimator(create_text_agent(settings), timeout_seconds=constants.ESTIMATOR_TIMEOUT_SECONDS)

    logger.info("Using rule-based expiry estimator")
    return RuleBasedExpiryEstimator()


def create_suggestion_generator(settings: Settings) -> SuggestionGeneratorService:
    """Build the configured suggestion generator.

    Raises:
        ValueError: If the "ai" strategy is selected without an OpenRouter API key
    """
    if settings.suggestion_generator == "ai":
        logger.info("Using AI suggestion generator", extra={"model_id": settings.model_id})
        return AISuggestionGenerator(create_text_agent(settings))

    logger.info("Using rule-based suggestion generator")
    return RuleBasedSuggestionGenerator()


@dataclass
class UseCases:
    """One handler per user intent."""

    add_product: AddProduct
    update_product: UpdateProduct
    update_product_status: UpdateProductStatus
    set_product_outcome: SetProductOutcome
    delete_product: DeleteProduct
    estimate_expiry: EstimateExpiry
    get_all_products: GetAllProducts
    get_suggestions: GetSuggestions
    add_shopping_item: AddShoppingItem
    get_shopping_items: GetShoppingItems
    toggle_shopping_item: ToggleShoppingItem
    delete_shopping_item: DeleteShoppingItem
    clear_bought_items: ClearBoughtItems


def build_use_cases(
    *,
    product_repository: ProductRepository,
    shopping_item_repository: ShoppingItemRepository,
    estimator: ExpiryEstimatorService,
    generator: SuggestionGeneratorService,
    logger: logging.Logger | None = None,
) -> UseCases:
    """Wire every handler against the given adapters.

    Product handlers that re-estimate expiry share a single EstimateExpiry instance.
    """
    estimate_expiry = EstimateExpiry(product_repository, estimator, logger)

    return UseCases(
        add_product=AddProduct(product_repository, estimate_expiry, logger),
        update_product=UpdateProduct(product_repository, estimate_expiry, logger),
        update_product_status=UpdateProductStatus(product_repository, estimate_expiry, logger),
        set_product_outcome=SetProductOutcome(product_repository, logger),
        delete_product=DeleteProduct(product_repository, logger),
        estimate_expiry=estimate_expiry,
        get_all_products=GetAllProducts(product_repository, logger),
        get_suggestions=GetSuggestions(product_repository, generator, logger),
        add_shopping_item=AddShoppingItem(shopping_item_repository, logger),
        get_shopping_items=GetShoppingItems(shopping_item_repository),
        toggle_shopping_item=ToggleShoppingItem(shopping_item_repository, logger),
        delete_shopping_item=DeleteShoppingItem(shopping_item_repository, logger),
        clear_bought_items=ClearBoughtItems(shopping_item_repository, logger),
    )
