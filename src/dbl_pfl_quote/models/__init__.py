"""Domain models package.

Exports the immutable Pydantic models for rate cards, quote inputs and
quote results.
"""

from .base import BaseModelConfig
from .quote import (
    AdddOption,
    BenefitTier,
    BillingFrequency,
    BillingPeriod,
    EmployeeInfo,
    GenderRatio,
    Money,
    OptionalBenefit,
    PerEmployeeBreakdown,
    PeriodBreakdown,
    PFLPremium,
    QuoteInput,
    QuoteResult,
    RateVariant,
)
from .rate_card import (
    BenefitTierDescription,
    DBLRateSet,
    MinimumPremiums,
    OptionalBenefitCatalog,
    PFLRate,
    RateCard,
)

__all__ = [
    # Base
    "BaseModelConfig",
    # Quote
    "AdddOption",
    "BenefitTier",
    "BillingFrequency",
    "BillingPeriod",
    "EmployeeInfo",
    "GenderRatio",
    "Money",
    "OptionalBenefit",
    "PerEmployeeBreakdown",
    "PeriodBreakdown",
    "PFLPremium",
    "QuoteInput",
    "QuoteResult",
    "RateVariant",
    # Rate card
    "BenefitTierDescription",
    "DBLRateSet",
    "MinimumPremiums",
    "OptionalBenefitCatalog",
    "PFLRate",
    "RateCard",
]
