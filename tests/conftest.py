"""Pytest configuration and shared fixtures."""

from collections.abc import Generator
from datetime import datetime

import logfire
import pytest

from src.core.config import Settings
from src.domain.product import Product, ProductLocation, ProductStatus, create_product


@pytest.fixture(scope="session", autouse=True)
def configure_logfire_for_tests() -> Generator[None, None, None]:
    """Keep spans local so tests never talk to Logfire."""
    logfire.configure(send_to_logfire=False, console=False)
    yield


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    """Settings isolated from the developer's environment and .env file."""
    return Settings(
        _env_file=None,  # type: ignore[call-arg]
        openrouter_api_key="test-openrouter-key",
        logfire_token=None,
        sqlite_db_path=str(tmp_path / "foodie.db"),
    )


@pytest.fixture
def now() -> datetime:
    """Fixed reference instant for urgency calculations."""
    return datetime(2025, 2, 15, 12, 0, 0)


@pytest.fixture
def make_product():
    """Factory for products with sensible defaults."""

    def _make(
        name: str = "Milk",
        *,
        id: str | None = None,  # noqa: A002
        status: ProductStatus = ProductStatus.NEW,
        location: ProductLocation | None = None,
        quantity: str | None = None,
        expiry_date: datetime | None = None,
        estimated_expiry_date: datetime | None = None,
    ) -> Product:
        return create_product(
            id=id or name.lower().replace(" ", "-"),
            name=name,
            status=status,
            location=location,
            quantity=quantity,
            expiry_date=expiry_date,
            estimated_expiry_date=estimated_expiry_date,
        )

    return _make

