"""Rate card reference data models.

A rate card is a jurisdiction's complete pricing data: DBL unit rates,
the PFL contribution rate, minimum premiums and optional benefit prices.
Cards are parsed from JSON so another state's card can be dropped in
without touching the calculators.
"""

from decimal import Decimal

from beartype import beartype
from pydantic import Field

from .base import BaseModelConfig
from .quote import BenefitTier, BillingFrequency, Money, OptionalBenefit, RateVariant

ZERO = Decimal("0")


@beartype
class DBLRateSet(BaseModelConfig):
    """Monthly per-employee DBL rates for one tier and billing frequency."""

    male: Decimal = Field(..., ge=ZERO, decimal_places=2)
    female: Decimal = Field(..., ge=ZERO, decimal_places=2)
    male_with_hospital: Decimal = Field(
        ..., ge=ZERO, decimal_places=2, alias="maleWithHospital"
    )
    female_with_hospital: Decimal = Field(
        ..., ge=ZERO, decimal_places=2, alias="femaleWithHospital"
    )

    def rate_for(self, variant: RateVariant) -> Decimal:
        """Unit rate for a rate card column."""
        return {
            RateVariant.MALE: self.male,
            RateVariant.FEMALE: self.female,
            RateVariant.MALE_WITH_HOSPITAL: self.male_with_hospital,
            RateVariant.FEMALE_WITH_HOSPITAL: self.female_with_hospital,
        }[variant]


@beartype
class PFLRate(BaseModelConfig):
    """Paid Family Leave contribution rate.

    Employees earning at or above ``wage_threshold`` contribute the flat
    ``annual_cap_per_employee``; everyone else contributes
    ``percent_of_payroll`` of their wages.
    """

    percent_of_payroll: Decimal = Field(
        ..., ge=ZERO, le=Decimal("1"), alias="percentOfPayroll"
    )
    annual_cap_per_employee: Decimal = Field(
        ..., ge=ZERO, decimal_places=2, alias="annualCapPerEmployee"
    )
    wage_threshold: Decimal = Field(
        ..., gt=ZERO, decimal_places=2, alias="wageThreshold"
    )


@beartype
class MinimumPremiums(BaseModelConfig):
    """Minimum DBL premium per billing period, plus the installment fee."""

    annual: Decimal = Field(..., ge=ZERO, decimal_places=2)
    quarterly: Decimal = Field(..., ge=ZERO, decimal_places=2)
    quarterly_installment_fee: Decimal = Field(
        default=ZERO, ge=ZERO, decimal_places=2, alias="quarterlyInstallmentFee"
    )

    def for_frequency(self, frequency: BillingFrequency) -> Decimal:
        """Floor expressed as a period total."""
        if frequency is BillingFrequency.QUARTERLY:
            return self.quarterly
        return self.annual


@beartype
class OptionalBenefitCatalog(BaseModelConfig):
    """Monthly per-employee price of each optional benefit."""

    term_life_15k: Decimal = Field(..., ge=ZERO, alias="termLife15k")
    eap: Decimal = Field(..., ge=ZERO)
    nurse_helpline: Decimal = Field(..., ge=ZERO, alias="nurseHelpline")
    addd_50k: Decimal = Field(..., ge=ZERO, alias="addd50k")
    addd_100k: Decimal = Field(..., ge=ZERO, alias="addd100k")
    # Published list price only; a quote rates the rider through the
    # with-hospital DBL columns, never as an optional benefit
    in_hospital_rider: Decimal = Field(..., ge=ZERO, alias="inHospitalRider")

    def unit_cost(self, benefit: OptionalBenefit) -> Decimal:
        """Monthly per-employee price of a benefit code."""
        return {
            OptionalBenefit.TERM_LIFE_15K: self.term_life_15k,
            OptionalBenefit.EAP: self.eap,
            OptionalBenefit.NURSE_HELPLINE: self.nurse_helpline,
            OptionalBenefit.ADDD_50K: self.addd_50k,
            OptionalBenefit.ADDD_100K: self.addd_100k,
            OptionalBenefit.IN_HOSPITAL_RIDER: self.in_hospital_rider,
        }[benefit]


@beartype
class BenefitTierDescription(BaseModelConfig):
    """Static display text for a DBL benefit tier."""

    name: str = Field(..., min_length=1, max_length=100)
    max_weekly_benefit: Money = Field(..., ge=ZERO, alias="maxWeeklyBenefit")
    max_weekly_with_hospital: Money | None = Field(
        default=None, ge=ZERO, alias="maxWeeklyWithHospital"
    )
    description: str = Field(..., min_length=1, max_length=500)


@beartype
class RateCard(BaseModelConfig):
    """Complete pricing data for one jurisdiction and rate year."""

    jurisdiction: str = Field(..., min_length=2, max_length=10)
    carrier: str = Field(..., min_length=1, max_length=100)
    effective_year: int = Field(..., ge=2000, le=2100, alias="effectiveYear")
    currency: str = Field(default="USD", pattern="^[A-Z]{3}$")

    dbl_rates: dict[BenefitTier, dict[BillingFrequency, DBLRateSet]] = Field(
        ..., alias="dblRates"
    )
    pfl: PFLRate
    minimums: MinimumPremiums
    optional_benefits: OptionalBenefitCatalog = Field(..., alias="optionalBenefits")
    benefit_tiers: dict[BenefitTier, BenefitTierDescription] = Field(
        default_factory=dict, alias="benefitTiers"
    )
