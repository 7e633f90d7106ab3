"""Legacy flat-rate pricing model.

Earlier versions of the wizard priced DBL as a flat base rate per employee
scaled by a tier multiplier, with an optional payroll-percentage basis for
quarterly payroll billing. Minimums and the installment fee applied to the
combined total rather than to DBL alone.

Its numbers do not agree with the gender-based rate card, so it is never
used implicitly: a caller has to construct ``LegacyFlatRateCalculator``
to get these figures.
"""

from decimal import Decimal
from enum import Enum

from beartype import beartype
from pydantic import Field

from ...core.logging_utils import get_logger
from ...models.base import BaseModelConfig
from ...models.quote import AdddOption, BenefitTier, BillingPeriod, Money
from .calculators import (
    ZERO,
    non_negative_amount,
    non_negative_int,
    round_cents,
)

logger = get_logger(__name__)


class LegacyBillingOption(str, Enum):
    """Billing options offered by the flat-rate wizard."""

    ANNUAL = "annual"
    QUARTERLY = "quarterly"
    QUARTERLY_PAYROLL = "quarterlyPayroll"

    @property
    def is_quarterly(self) -> bool:
        """Both quarterly options bill per quarter."""
        return self is not LegacyBillingOption.ANNUAL


@beartype
class LegacyFlatRatePricing(BaseModelConfig):
    """Pricing constants of the flat-rate model."""

    base_rate_per_employee: Decimal = Field(default=Decimal("50"), ge=ZERO)
    tier_multipliers: dict[BenefitTier, Decimal] = Field(
        default_factory=lambda: {
            BenefitTier.STATUTORY: Decimal("1.0"),
            BenefitTier.ENRICHED_1_5X: Decimal("1.5"),
            BenefitTier.ENRICHED_2X: Decimal("2.0"),
            BenefitTier.ENRICHED_3X: Decimal("3.0"),
            BenefitTier.ENRICHED_4X: Decimal("4.0"),
            BenefitTier.ENRICHED_5X: Decimal("5.0"),
        }
    )

    in_hospital_rider: Decimal = Field(default=Decimal("2.50"), ge=ZERO)
    addd_50k: Decimal = Field(default=Decimal("1.25"), ge=ZERO)
    addd_100k: Decimal = Field(default=Decimal("2.50"), ge=ZERO)

    term_life_15k: Decimal = Field(default=Decimal("1.50"), ge=ZERO)
    eap: Decimal = Field(default=Decimal("0.75"), ge=ZERO)
    nurse_helpline: Decimal = Field(default=Decimal("0.50"), ge=ZERO)

    quarterly_fee: Decimal = Field(default=Decimal("15.00"), ge=ZERO)
    annual_minimum: Decimal = Field(default=Decimal("125.00"), ge=ZERO)
    quarterly_minimum: Decimal = Field(default=Decimal("35.00"), ge=ZERO)

    # Share of monthly payroll for quarterly payroll billing
    payroll_rate: Decimal = Field(default=Decimal("0.005"), ge=ZERO)


@beartype
class LegacyQuoteBreakdown(BaseModelConfig):
    """Period-scaled lines of a legacy quote."""

    base_premium: Money = ZERO
    riders_cost: Money = ZERO
    optional_cost: Money = ZERO
    total_cost: Money = ZERO


@beartype
class LegacyQuoteResult(BaseModelConfig):
    """Output of the flat-rate model."""

    base_monthly_premium: Money = ZERO
    riders_monthly: Money = ZERO
    optional_monthly: Money = ZERO
    total_monthly: Money = ZERO
    display_amount: Money = ZERO
    billing_period: BillingPeriod = BillingPeriod.YEAR
    breakdown: LegacyQuoteBreakdown = Field(default_factory=LegacyQuoteBreakdown)


@beartype
class LegacyFlatRateCalculator:
    """Flat base-rate-times-multiplier quote calculation."""

    def __init__(self, pricing: LegacyFlatRatePricing | None = None) -> None:
        """Initialize with pricing constants, defaulting to the original ones."""
        self._pricing = pricing or LegacyFlatRatePricing()

    def tier_multiplier(self, tier: BenefitTier | str | None) -> Decimal:
        """Multiplier for a tier; unknown tiers use the statutory multiplier."""
        try:
            resolved = BenefitTier(tier)
        except ValueError:
            resolved = BenefitTier.STATUTORY
        return self._pricing.tier_multipliers.get(resolved, Decimal("1.0"))

    def base_premium(
        self,
        total_employees: int,
        multiplier: Decimal,
        billing: LegacyBillingOption,
        monthly_payroll: Decimal,
    ) -> Decimal:
        """Monthly base premium, payroll-rated for quarterly payroll billing."""
        if billing is LegacyBillingOption.QUARTERLY_PAYROLL and monthly_payroll > ZERO:
            return monthly_payroll * self._pricing.payroll_rate
        return total_employees * self._pricing.base_rate_per_employee * multiplier

    def riders_cost(
        self, total_employees: int, in_hospital: bool, addd: AdddOption
    ) -> Decimal:
        """Monthly in-hospital and AD&D rider cost."""
        pricing = self._pricing
        cost = ZERO
        if in_hospital:
            cost += total_employees * pricing.in_hospital_rider
        if addd is AdddOption.ADDD_50K:
            cost += total_employees * pricing.addd_50k
        elif addd is AdddOption.ADDD_100K:
            cost += total_employees * pricing.addd_100k
        return cost

    def optional_cost(
        self, total_employees: int, term_life: bool, eap: bool, nurse_helpline: bool
    ) -> Decimal:
        """Monthly baseline benefits cost."""
        pricing = self._pricing
        cost = ZERO
        if term_life:
            cost += total_employees * pricing.term_life_15k
        if eap:
            cost += total_employees * pricing.eap
        if nurse_helpline:
            cost += total_employees * pricing.nurse_helpline
        return cost

    def apply_minimums(self, monthly: Decimal, billing: LegacyBillingOption) -> Decimal:
        """Floor applied to the combined monthly total."""
        if billing.is_quarterly:
            if monthly * 3 < self._pricing.quarterly_minimum:
                return self._pricing.quarterly_minimum / 3
        elif monthly * 12 < self._pricing.annual_minimum:
            return self._pricing.annual_minimum / 12
        return monthly

    def add_billing_fees(self, monthly: Decimal, billing: LegacyBillingOption) -> Decimal:
        """Quarterly installment fee prorated per month."""
        if billing.is_quarterly:
            return monthly + self._pricing.quarterly_fee / 3
        return monthly

    def calculate(
        self,
        total_employees: int,
        tier: BenefitTier | str | None = BenefitTier.STATUTORY,
        billing: LegacyBillingOption | str | None = LegacyBillingOption.ANNUAL,
        monthly_payroll: Decimal | int | None = None,
        in_hospital: bool = False,
        addd: AdddOption = AdddOption.NONE,
        term_life: bool = False,
        eap: bool = False,
        nurse_helpline: bool = False,
    ) -> LegacyQuoteResult:
        """Full legacy quote; zero employees yields an all-zero result."""
        employees = non_negative_int(total_employees)
        if employees == 0:
            return LegacyQuoteResult()

        try:
            billing_option = LegacyBillingOption(billing)
        except ValueError:
            billing_option = LegacyBillingOption.ANNUAL
        payroll = non_negative_amount(monthly_payroll)

        base = self.base_premium(
            employees, self.tier_multiplier(tier), billing_option, payroll
        )
        riders = self.riders_cost(employees, in_hospital, addd)
        optional = self.optional_cost(employees, term_life, eap, nurse_helpline)

        total = self.apply_minimums(base + riders + optional, billing_option)
        total = self.add_billing_fees(total, billing_option)

        period = BillingPeriod.QUARTER if billing_option.is_quarterly else BillingPeriod.YEAR
        multiplier = period.multiplier
        logger.debug(
            "Legacy flat-rate quote: %s employees, %s monthly", employees, total
        )

        def scaled(monthly: Decimal) -> Decimal:
            return round_cents(monthly * multiplier)

        display_amount = scaled(total)
        return LegacyQuoteResult(
            base_monthly_premium=base,
            riders_monthly=riders,
            optional_monthly=optional,
            total_monthly=total,
            display_amount=display_amount,
            billing_period=period,
            breakdown=LegacyQuoteBreakdown(
                base_premium=scaled(base),
                riders_cost=scaled(riders),
                optional_cost=scaled(optional),
                total_cost=display_amount,
            ),
        )
