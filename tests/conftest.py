"""Pytest configuration and fixtures."""

import os

import pytest

from app.core.config import Settings

# Set before test modules import the app
os.environ.setdefault("SUPABASE_URL", "https://test.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "test-key")
os.environ.setdefault("OPENAI_API_KEY", "test-openai-key")

DOCUMENT_ID = "inst-001"
ENTITY_ID = "issuer-001"
ORGANIZATION_ID = "sponsor-001"


@pytest.fixture(scope="session", autouse=True)
def setup_test_env():
    """Set up test environment variables."""
    os.environ["SUPABASE_URL"] = "https://test.supabase.co"
    os.environ["SUPABASE_SERVICE_ROLE_KEY"] = "test-key"
    os.environ["OPENAI_API_KEY"] = "test-openai-key"
    os.environ["LISTING_ENGINE_ENV"] = "test"


@pytest.fixture
def settings() -> Settings:
    """Explicit settings with fast LLM retries and memory disabled."""
    return Settings(
        SUPABASE_URL="https://test.supabase.co",
        SUPABASE_SERVICE_ROLE_KEY="test-key",
        OPENAI_API_KEY="test-openai-key",
        MEM0_API_KEY=None,
        LISTING_ENGINE_ENV="test",
        LLM_TIMEOUT_SECONDS=0.5,
        LLM_RETRY_DELAY_SECONDS=0.0,
    )


@pytest.fixture
def memory_settings(settings: Settings) -> Settings:
    return settings.model_copy(update={"MEM0_API_KEY": "m0-test-key"})


@pytest.fixture
def issuer_row() -> dict:
    return {
        "id": ENTITY_ID,
        "issuer_name": "Acme Mining Ltd",
        "organization_name": "Acme Mining",
        "industry": "Mining",
        "business_overview": "Acme explores for copper in Zambia.",
        "registered_address": "1 Main Street, Lusaka",
        "incorporation_date": "2015-03-09",
        "chief_executiveofficer": "Jane Banda",
        "financial_director": "Peter Phiri",
        "how_many_directors_total": "2",
        "director_1": "Jane Banda",
        "d1_title": "CEO",
        "director_2": "Peter Phiri",
        "d2_title": "FD",
    }


@pytest.fixture
def listing_row() -> dict:
    return {
        "instrumentid": DOCUMENT_ID,
        "instrumentissuerid": ENTITY_ID,
        "instrumentsponsorid": ORGANIZATION_ID,
        "instrumentname": "Acme Ordinary Shares",
        "instrumenttype": "Equity",
        "instrumentexchange": "MERJ Exchange",
        "instrumentlistingdate": "2024-01-05",
    }


@pytest.fixture
def document_row() -> dict:
    return {
        "instrumentid": DOCUMENT_ID,
        "sec1_warning": "Investors should read this document in full.",
        "sec1_boardofdirectors": "***",
        "sec1_generalinfo": "",
        "sec1_status": "draft",
    }
