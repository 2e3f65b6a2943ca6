"""LLM-backed expiry estimator with in-process memoization."""

import asyncio
import logging
from datetime import datetime, timedelta

from src.agents.agent_instance import TextAgent
from src.agents.json_reply import extract_first_json_object
from src.core.config import constants
from src.core.logging import span
from src.domain.ports import UNKNOWN_ESTIMATION, Confidence, ExpiryEstimation
from src.domain.product import ProductLocation, ProductStatus


logger = logging.getLogger(__name__)


SYSTEM_PROMPT = """You are an expiry date estimator for a Spanish kitchen inventory app.
Given a product name, its current status, and storage location, estimate how long until it expires.

Rules:
1. Return ONLY a JSON object with these fields:
   - "daysUntilExpiry": number of days from TODAY until the product expires (integer)
   - "confidence": "high" (well-known products), "medium" (reasonable guess), "low" (uncertain), or "none" (cannot estimate)

2. Consider the product's current status:
   - "new": Unopened, sealed package
   - "opened": Package has been opened
   - "almost_empty": Nearly finished
   - "finished": Empty (treat as 0 days)

3. Consider storage location (affects shelf life):
   - "fridge": Refrigerated (extends perishables)
   - "freezer": Frozen (significantly extends shelf life)
   - "pantry": Room temperature (dry goods)
   - missing: Assume room temperature

4. Base estimates on food safety guidelines, not "best before" dates.

5. If you cannot estimate (e.g., too generic like "food"), return:
   {"daysUntilExpiry":null,"confidence":"none"}

Examples:
{"daysUntilExpiry":3,"confidence":"high"}  // Opened milk in fridge
{"daysUntilExpiry":180,"confidence":"high"} // New rice in pantry
{"daysUntilExpiry":2,"confidence":"high"}  // Opened chicken in fridge
{"daysUntilExpiry":null,"confidence":"none"} // Cannot estimate"""


def build_cache_key(product_name: str, status: ProductStatus, location: ProductLocation | None) -> str:
    """Build the memo key ``lowercase(name)|status|location``."""
    return f"{product_name.lower()}|{status}|{location or 'none'}"


def build_user_prompt(product_name: str, status: ProductStatus, location: ProductLocation | None) -> str:
    """Build the per-product user prompt."""
    parts = [f"Product: {product_name}", f"Status: {status}"]
    if location:
        parts.append(f"Location: {location}")
    parts.append("Estimate expiry date.")
    return "\n".join(parts)


def parse_reply(reply: str) -> tuple[int | None, Confidence]:
    """Parse the agent reply into a day offset and a confidence.

    Raises:
        ValueError: If the reply has no JSON object or lacks the expected keys
    """
    parsed = extract_first_json_object(reply)
    if "daysUntilExpiry" not in parsed or "confidence" not in parsed:
        msg = "Invalid response format: expected {daysUntilExpiry, confidence}"
        raise ValueError(msg)

    raw_confidence = parsed["confidence"]
    valid_confidences = {c.value for c in Confidence}
    is_valid = isinstance(raw_confidence, str) and raw_confidence in valid_confidences
    confidence = Confidence(raw_confidence) if is_valid else Confidence.NONE

    days = parsed["daysUntilExpiry"]
    # bool is an int subclass, exclude it explicitly
    if not isinstance(days, int) or isinstance(days, bool):
        days = None
    return days, confidence


def to_estimation(days: int | None, confidence: Confidence, now: datetime | None = None) -> ExpiryEstimation:
    """Anchor a day offset to ``now``."""
    date = None if days is None else (now or datetime.now()) + timedelta(days=days)
    return ExpiryEstimation(date=date, confidence=confidence)


def parse_estimation(reply: str, now: datetime | None = None) -> ExpiryEstimation:
    """Parse the agent reply into an ExpiryEstimation dated from ``now``.

    Raises:
        ValueError: If the reply has no JSON object or lacks the expected keys
    """
    return to_estimation(*parse_reply(reply), now=now)


class AIExpiryEstimator:
    """ExpiryEstimatorService backed by a text-generation agent.

    Features:
    - In-memory memo keyed by name/status/location, lost on restart. It stores the
      day offset so a hit on a later day is dated from that day
    - Hard timeout per request, independent of any caller cancellation
    - Never raises: any failure yields UNKNOWN_ESTIMATION

    The memo is not synchronised. Concurrent identical requests may both miss and
    call the agent twice.
    """

    def __init__(
        self,
        agent: TextAgent,
        *,
        timeout_seconds: float = constants.ESTIMATOR_TIMEOUT_SECONDS,
    ) -> None:
        self._agent = agent
        self._timeout_seconds = timeout_seconds
        self._cache: dict[str, tuple[int | None, Confidence]] = {}

    async def estimate_expiry_date(
        self,
        product_name: str,
        status: ProductStatus,
        location: ProductLocation | None = None,
    ) -> ExpiryEstimation:
        """Estimate the expiry date, serving repeated requests from the memo."""
        cache_key = build_cache_key(product_name, status, location)
        cached = self._cache.get(cache_key)
        if cached is not None:
            logger.debug("Expiry estimation served from cache", extra={"cache_key": cache_key})
            return to_estimation(*cached)

        with span("ai_expiry_estimator.estimate_expiry_date", cache_key=cache_key):
            try:
                user_prompt = build_user_prompt(product_name, status, location)
                days, confidence = await self._estimate_with_timeout(user_prompt)
            except TimeoutError:
                logger.warning(
                    "Expiry estimation timed out",
                    extra={"product_name": product_name, "timeout_seconds": self._timeout_seconds},
                )
                return UNKNOWN_ESTIMATION
            except Exception as e:
                logger.warning(
                    "Expiry estimation failed",
                    extra={"product_name": product_name, "error": str(e)},
                )
                return UNKNOWN_ESTIMATION

            self._cache[cache_key] = (days, confidence)
            return to_estimation(days, confidence)

    async def _estimate_with_timeout(self, user_prompt: str) -> tuple[int | None, Confidence]:
        async with asyncio.timeout(self._timeout_seconds):
            result = await self._agent.run(
                user_prompt,
                instructions=SYSTEM_PROMPT,
                model_settings={"temperature": constants.ESTIMATOR_TEMPERATURE},
            )

        reply = result.output
        if not reply:
            msg = "Empty response from agent"
            raise ValueError(msg)
        return parse_reply(reply)
