"""Suggestion use case: what can I cook right now?"""

import logging

from src.core.config import constants
from src.core.errors import NotEnoughProductsError
from src.core.logging import span
from src.domain.ports import ProductRepository, SuggestionGeneratorService
from src.domain.suggestion import Suggestion, ensure_enough_products
from src.domain.urgency import sort_by_urgency


_default_logger = logging.getLogger(__name__)


class GetSuggestions:
    """Suggest meals from the active pantry, most urgent products first."""

    def __init__(
        self,
        product_repository: ProductRepository,
        generator: SuggestionGeneratorService,
        logger: logging.Logger | None = None,
    ) -> None:
        self._product_repository = product_repository
        self._generator = generator
        self._logger = logger or _default_logger

    async def execute(self, limit: int = constants.DEFAULT_SUGGESTION_LIMIT) -> list[Suggestion]:
        """Return at most ``limit`` suggestions.

        An empty list means the pantry is too small to suggest anything.

        Raises:
            GenerationFailedError: If the generator fails
        """
        with span("get_suggestions.execute", limit=limit):
            products = await self._product_repository.get_active_products()

            try:
                ensure_enough_products(len(products))
            except NotEnoughProductsError as e:
                self._logger.info(
                    "Not enough products for suggestions",
                    extra={"count": e.count, "required": e.required},
                )
                return []

            sorted_products = sort_by_urgency(products)
            suggestions = await self._generator.generate(sorted_products, limit)

            self._logger.info(
                "Generated suggestions",
                extra={"product_count": len(products), "suggestion_count": len(suggestions)},
            )
            return suggestions[: max(limit, 0)]
