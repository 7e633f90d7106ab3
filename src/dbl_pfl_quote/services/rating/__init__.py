"""Rating services package.

This package provides the premium calculations behind a quote:
- Rate card loading, validation and lookup
- DBL, PFL and optional benefit calculators
- Minimum premium and installment fee adjustment
- The legacy flat-rate model, for callers that opt into it
"""

from .calculators import (
    DBLPremiumCalculator,
    MinimumPremiumAdjuster,
    OptionalBenefitsCalculator,
    PFLPremiumCalculator,
)
from .legacy_calculators import (
    LegacyBillingOption,
    LegacyFlatRateCalculator,
    LegacyFlatRatePricing,
    LegacyQuoteResult,
)
from .rate_tables import (
    RateTable,
    get_default_rate_card,
    load_rate_card,
    parse_rate_card,
    validate_rate_card,
)

__all__ = [
    # Calculators
    "DBLPremiumCalculator",
    "PFLPremiumCalculator",
    "OptionalBenefitsCalculator",
    "MinimumPremiumAdjuster",
    # Legacy model
    "LegacyBillingOption",
    "LegacyFlatRateCalculator",
    "LegacyFlatRatePricing",
    "LegacyQuoteResult",
    # Rate tables
    "RateTable",
    "get_default_rate_card",
    "load_rate_card",
    "parse_rate_card",
    "validate_rate_card",
]
