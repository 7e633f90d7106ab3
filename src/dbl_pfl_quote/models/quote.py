"""Quote domain models: the engine's typed input and its itemized output."""

from decimal import Decimal
from enum import Enum
from typing import Annotated, Any

from beartype import beartype
from pydantic import ConfigDict, Field, PlainSerializer, model_validator
from pydantic.alias_generators import to_camel

from .base import BaseModelConfig

# Decimal internally, plain JSON number on the wire for the wizard
Money = Annotated[
    Decimal, PlainSerializer(float, return_type=float, when_used="json")
]

ZERO = Decimal("0")


class BenefitTier(str, Enum):
    """DBL benefit tiers, in ascending order of benefit richness."""

    STATUTORY = "statutory"
    ENRICHED_1_5X = "enriched1.5x"
    ENRICHED_2X = "enriched2x"
    ENRICHED_3X = "enriched3x"
    ENRICHED_4X = "enriched4x"
    ENRICHED_5X = "enriched5x"


class BillingFrequency(str, Enum):
    """How often the employer is billed."""

    ANNUAL = "annual"
    QUARTERLY = "quarterly"

    @property
    def period(self) -> "BillingPeriod":
        """Display period matching this frequency."""
        if self is BillingFrequency.QUARTERLY:
            return BillingPeriod.QUARTER
        return BillingPeriod.YEAR

    @property
    def months(self) -> int:
        """Number of months in one billing period."""
        return self.period.multiplier


class BillingPeriod(str, Enum):
    """Period a quote total is displayed for."""

    YEAR = "year"
    QUARTER = "quarter"

    @property
    def multiplier(self) -> int:
        """Months per period."""
        return 3 if self is BillingPeriod.QUARTER else 12


class RateVariant(str, Enum):
    """Rate card column: gender, with or without the in-hospital rider."""

    MALE = "male"
    FEMALE = "female"
    MALE_WITH_HOSPITAL = "maleWithHospital"
    FEMALE_WITH_HOSPITAL = "femaleWithHospital"

    @classmethod
    def for_gender(cls, *, male: bool, with_hospital: bool) -> "RateVariant":
        """Pick the column for a gender and hospital rider selection."""
        if male:
            return cls.MALE_WITH_HOSPITAL if with_hospital else cls.MALE
        return cls.FEMALE_WITH_HOSPITAL if with_hospital else cls.FEMALE


class OptionalBenefit(str, Enum):
    """Optional riders and baseline benefits priced per employee per month."""

    TERM_LIFE_15K = "termLife15k"
    EAP = "eap"
    NURSE_HELPLINE = "nurseHelpline"
    ADDD_50K = "addd50k"
    ADDD_100K = "addd100k"
    # Catalog code only; never part of a QuoteInput's selections
    IN_HOSPITAL_RIDER = "inHospitalRider"


class AdddOption(str, Enum):
    """AD&D benefit amount; the two amounts are mutually exclusive."""

    NONE = "none"
    ADDD_50K = "50000"
    ADDD_100K = "100000"

    @property
    def benefit(self) -> OptionalBenefit | None:
        """Catalog code for this selection, if any."""
        return {
            AdddOption.ADDD_50K: OptionalBenefit.ADDD_50K,
            AdddOption.ADDD_100K: OptionalBenefit.ADDD_100K,
        }.get(self)


@beartype
class QuoteInput(BaseModelConfig):
    """Normalized employer census and plan selections.

    Built by the normalization boundary from raw wizard fields; every
    calculator downstream works only with this strictly typed record.
    """

    male_employees: int = Field(default=0, ge=0)
    female_employees: int = Field(default=0, ge=0)
    benefit_tier: BenefitTier = Field(default=BenefitTier.STATUTORY)
    billing_frequency: BillingFrequency = Field(default=BillingFrequency.ANNUAL)
    include_hospital_rider: bool = Field(default=False)
    annual_payroll: Decimal = Field(default=ZERO, ge=ZERO)
    employees_over_wage_threshold: int = Field(default=0, ge=0)
    payroll_below_wage_threshold: Decimal = Field(default=ZERO, ge=ZERO)

    term_life_15k: bool = Field(default=False)
    eap: bool = Field(default=False)
    nurse_helpline: bool = Field(default=False)
    addd: AdddOption = Field(default=AdddOption.NONE)

    @property
    def total_employees(self) -> int:
        """Total covered employees."""
        return self.male_employees + self.female_employees

    @property
    def optional_selections(self) -> frozenset[OptionalBenefit]:
        """Selected optional benefit codes."""
        selected = set()
        if self.term_life_15k:
            selected.add(OptionalBenefit.TERM_LIFE_15K)
        if self.eap:
            selected.add(OptionalBenefit.EAP)
        if self.nurse_helpline:
            selected.add(OptionalBenefit.NURSE_HELPLINE)
        if self.addd.benefit is not None:
            selected.add(self.addd.benefit)
        return frozenset(selected)


class ResultModel(BaseModelConfig):
    """Output value rendered with the wizard's camelCase field names."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        validate_assignment=True,
        validate_default=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )

    def to_dict(self) -> dict[str, Any]:
        """JSON-safe mapping keyed the way the wizard reads it."""
        return self.model_dump(mode="json", by_alias=True)


@beartype
class PFLPremium(ResultModel):
    """Paid Family Leave contribution for the whole group."""

    annual_total: Money = Field(default=ZERO, ge=ZERO)
    monthly_total: Money = Field(default=ZERO, ge=ZERO)
    annual_per_employee: Money = Field(default=ZERO, ge=ZERO)
    monthly_per_employee: Money = Field(default=ZERO, ge=ZERO)

    employees_over_cap: int = Field(default=0, ge=0)
    pfl_from_over_cap: Money = Field(default=ZERO, ge=ZERO)
    payroll_below_cap: Money = Field(default=ZERO, ge=ZERO)
    pfl_from_below_cap: Money = Field(default=ZERO, ge=ZERO)


@beartype
class PeriodBreakdown(ResultModel):
    """Each line scaled to the billing period, rounded to the cent."""

    dbl_premium: Money = Field(default=ZERO)
    pfl_premium: Money = Field(default=ZERO)
    optional_cost: Money = Field(default=ZERO)
    total_cost: Money = Field(default=ZERO)


@beartype
class PerEmployeeBreakdown(ResultModel):
    """Monthly cost of each line divided by covered employees."""

    dbl_per_employee: Money = Field(default=ZERO)
    pfl_per_employee: Money = Field(default=ZERO)
    optional_per_employee: Money = Field(default=ZERO)
    total_per_employee: Money = Field(default=ZERO)


@beartype
class EmployeeInfo(ResultModel):
    """Headcount the quote was rated on."""

    male: int = Field(default=0, ge=0)
    female: int = Field(default=0, ge=0)
    total: int = Field(default=0, ge=0)


@beartype
class GenderRatio(ResultModel):
    """Gender split assumed for an estimated quote."""

    male: float = Field(..., ge=0.0, le=1.0)
    female: float = Field(..., ge=0.0, le=1.0)


@beartype
class QuoteResult(ResultModel):
    """Itemized premium quote.

    Monthly figures are exact decimals; ``breakdown`` and ``display_amount``
    are the monthly figures scaled to the billing period and rounded to the
    cent.
    """

    dbl_monthly: Money = Field(default=ZERO, ge=ZERO)
    pfl_monthly: Money = Field(default=ZERO, ge=ZERO)
    optional_monthly: Money = Field(default=ZERO, ge=ZERO)
    total_monthly: Money = Field(default=ZERO, ge=ZERO)
    display_amount: Money = Field(default=ZERO, ge=ZERO)
    billing_period: BillingPeriod = Field(default=BillingPeriod.YEAR)
    period_multiplier: int = Field(default=12)
    breakdown: PeriodBreakdown = Field(default_factory=PeriodBreakdown)
    per_employee_breakdown: PerEmployeeBreakdown | None = Field(default=None)
    employee_info: EmployeeInfo = Field(default_factory=EmployeeInfo)
    pfl_detail: PFLPremium | None = Field(default=None)
    is_estimated: bool = Field(default=False)
    estimated_gender_ratio: GenderRatio | None = Field(default=None)
    rate_card_jurisdiction: str = Field(default="NY")

    @model_validator(mode="after")
    def validate_period(self) -> "QuoteResult":
        """Multiplier must match the billing period."""
        if self.period_multiplier != self.billing_period.multiplier:
            raise ValueError(
                f"period_multiplier {self.period_multiplier} does not match "
                f"billing period '{self.billing_period.value}'"
            )
        return self
