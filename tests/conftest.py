"""Test configuration and shared fixtures for the quote engine."""

from collections.abc import Generator
from typing import Any

import pytest
from fastapi.testclient import TestClient

from dbl_pfl_quote.core.config import clear_settings_cache
from dbl_pfl_quote.models.rate_card import RateCard
from dbl_pfl_quote.services import quote_engine
from dbl_pfl_quote.services.quote_engine import QuoteEngine
from dbl_pfl_quote.services.rating.rate_tables import RateTable, get_default_rate_card


@pytest.fixture(autouse=True)
def reset_process_caches(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Give every test fresh settings, rate card and default engine."""
    clear_settings_cache()
    get_default_rate_card.cache_clear()
    monkeypatch.setattr(quote_engine, "_default_engine", None)
    yield
    clear_settings_cache()
    get_default_rate_card.cache_clear()


@pytest.fixture
def rate_card() -> RateCard:
    """Bundled NY 2026 rate card."""
    return get_default_rate_card()


@pytest.fixture
def rate_table(rate_card: RateCard) -> RateTable:
    """Lookups over the bundled rate card."""
    return RateTable(rate_card)


@pytest.fixture
def engine(rate_card: RateCard) -> QuoteEngine:
    """Quote engine over the bundled rate card."""
    return QuoteEngine(rate_card)


@pytest.fixture
def sample_form() -> dict[str, Any]:
    """Wizard answers for a small group buying enriched coverage."""
    return {
        "maleEmployees": "5",
        "femaleEmployees": "5",
        "dblBenefits": "enriched2x",
        "billingOption": "annual",
        "inHospitalRider": "on",
        "annualPayroll": "400000",
        "employeesOverNYSAWW": "0",
        "payrollBelowNYSAWW": "400000",
        "eap": "on",
        "adddBenefit": "100000",
    }


@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    """HTTP client against a freshly created application."""
    from dbl_pfl_quote.main import create_app

    with TestClient(create_app()) as test_client:
        yield test_client
