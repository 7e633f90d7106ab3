"""API request and response schemas."""

from .quote import (
    BenefitTierResponse,
    FormattedQuote,
    QuoteFormRequest,
    QuoteResponse,
)

__all__ = [
    "BenefitTierResponse",
    "FormattedQuote",
    "QuoteFormRequest",
    "QuoteResponse",
]
