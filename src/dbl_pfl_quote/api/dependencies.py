"""FastAPI dependencies shared by the v1 routers."""

from beartype import beartype

from ..core.config import Settings, get_settings
from ..services.quote_engine import QuoteEngine, get_quote_engine


@beartype
def get_engine() -> QuoteEngine:
    """Quote engine over the process-wide rate card."""
    return get_quote_engine()


@beartype
def get_app_settings() -> Settings:
    """Application settings."""
    return get_settings()
