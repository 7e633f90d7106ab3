"""Quote assembly: the engine's public entry points.

A quote is one deterministic pass over the input:

1. normalize raw form values into a ``QuoteInput``
2. short-circuit to an all-zero quote when nobody is covered
3. rate the DBL line against the rate card
4. apply the minimum floor and installment fee to the DBL line only
5. rate the PFL line
6. price the optional benefits
7. sum the three lines into a monthly total
8. scale every line to the billing period
9. assemble the breakdown, optionally per employee

No step has side effects, so the same input always yields an identical
result and the engine can be shared freely across threads.
"""

from collections.abc import Mapping
from decimal import Decimal
from typing import Any

from beartype import beartype

from ..core.config import get_settings
from ..core.logging_utils import get_logger
from ..models.quote import (
    BillingPeriod,
    EmployeeInfo,
    GenderRatio,
    PeriodBreakdown,
    PerEmployeeBreakdown,
    PFLPremium,
    QuoteInput,
    QuoteResult,
)
from ..models.rate_card import RateCard
from .normalization import (
    MAX_EMPLOYEES,
    normalize_form_data,
    parse_count,
    split_headcount,
)
from .rating.calculators import (
    DBLPremiumCalculator,
    MinimumPremiumAdjuster,
    OptionalBenefitsCalculator,
    PFLPremiumCalculator,
    round_cents,
    safe_divide,
)
from .rating.rate_tables import RateTable, get_default_rate_card

logger = get_logger(__name__)

RawQuoteInput = QuoteInput | Mapping[str, Any]


@beartype
def to_period(monthly: Decimal, period: BillingPeriod) -> Decimal:
    """Scale a monthly amount to the billing period, rounded to the cent."""
    return round_cents(monthly * period.multiplier)


@beartype
class QuoteEngine:
    """Canonical rate-card quote calculator for one jurisdiction."""

    def __init__(self, rate_card: RateCard | None = None) -> None:
        """Initialize calculators against a rate card (default: bundled NY card)."""
        card = rate_card or get_default_rate_card()
        self._rate_table = RateTable(card)
        self._dbl = DBLPremiumCalculator(self._rate_table)
        self._pfl = PFLPremiumCalculator(card.pfl)
        self._optional = OptionalBenefitsCalculator(card.optional_benefits)
        self._adjuster = MinimumPremiumAdjuster(self._rate_table)

    @property
    def rate_card(self) -> RateCard:
        """Rate card this engine quotes from."""
        return self._rate_table.card

    def normalize(self, raw: RawQuoteInput) -> QuoteInput:
        """Typed input from either a ``QuoteInput`` or raw form values."""
        if isinstance(raw, QuoteInput):
            return raw
        return normalize_form_data(raw)

    def zero_quote(self, quote_input: QuoteInput, include_per_employee: bool = True) -> QuoteResult:
        """All-zero quote for a census with no covered employees."""
        period = quote_input.billing_frequency.period
        return QuoteResult(
            billing_period=period,
            period_multiplier=period.multiplier,
            per_employee_breakdown=PerEmployeeBreakdown() if include_per_employee else None,
            pfl_detail=PFLPremium(),
            rate_card_jurisdiction=self.rate_card.jurisdiction,
        )

    def calculate(
        self, raw: RawQuoteInput, *, include_per_employee: bool = True
    ) -> QuoteResult:
        """Price a quote from typed or raw wizard input."""
        quote_input = self.normalize(raw)
        total_employees = quote_input.total_employees
        if total_employees == 0:
            return self.zero_quote(quote_input, include_per_employee)

        frequency = quote_input.billing_frequency
        dbl_monthly = self._dbl.monthly_premium(
            quote_input.male_employees,
            quote_input.female_employees,
            quote_input.benefit_tier,
            frequency,
            quote_input.include_hospital_rider,
        )
        dbl_monthly = self._adjuster.adjust(dbl_monthly, frequency)

        pfl = self._pfl.calculate(
            quote_input.employees_over_wage_threshold,
            quote_input.payroll_below_wage_threshold,
            total_employees,
        )
        pfl_monthly = pfl.monthly_total

        optional_monthly = self._optional.monthly_cost(
            total_employees, quote_input.optional_selections
        )

        total_monthly = dbl_monthly + pfl_monthly + optional_monthly
        period = frequency.period
        display_amount = to_period(total_monthly, period)

        per_employee = None
        if include_per_employee:
            per_employee = PerEmployeeBreakdown(
                dbl_per_employee=safe_divide(dbl_monthly, total_employees),
                pfl_per_employee=safe_divide(pfl_monthly, total_employees),
                optional_per_employee=safe_divide(optional_monthly, total_employees),
                total_per_employee=safe_divide(total_monthly, total_employees),
            )

        logger.debug(
            "Quoted %s employees (%s, %s): DBL %s PFL %s optional %s per month",
            total_employees,
            quote_input.benefit_tier.value,
            frequency.value,
            dbl_monthly,
            pfl_monthly,
            optional_monthly,
        )

        return QuoteResult(
            dbl_monthly=dbl_monthly,
            pfl_monthly=pfl_monthly,
            optional_monthly=optional_monthly,
            total_monthly=total_monthly,
            display_amount=display_amount,
            billing_period=period,
            period_multiplier=period.multiplier,
            breakdown=PeriodBreakdown(
                dbl_premium=to_period(dbl_monthly, period),
                pfl_premium=to_period(pfl_monthly, period),
                optional_cost=to_period(optional_monthly, period),
                total_cost=display_amount,
            ),
            per_employee_breakdown=per_employee,
            employee_info=EmployeeInfo(
                male=quote_input.male_employees,
                female=quote_input.female_employees,
                total=total_employees,
            ),
            pfl_detail=pfl,
            rate_card_jurisdiction=self.rate_card.jurisdiction,
        )

    def calculate_from_form(
        self, form_data: Mapping[str, Any], *, include_per_employee: bool = True
    ) -> QuoteResult:
        """Price a quote straight from the wizard's raw field values."""
        return self.calculate(
            normalize_form_data(form_data), include_per_employee=include_per_employee
        )

    def calculate_with_estimate(
        self,
        partial_input: Mapping[str, Any],
        assumed_male_ratio: float | None = None,
        *,
        include_per_employee: bool = True,
    ) -> QuoteResult:
        """Quote from a total headcount when the gender split is unknown.

        Males are ``round(total * ratio)``, females the remainder. The
        result is tagged as estimated along with the ratio it assumed.
        """
        if assumed_male_ratio is None:
            assumed_male_ratio = get_settings().default_male_ratio
        male_ratio = min(1.0, max(0.0, assumed_male_ratio))

        if partial_input.get("totalEmployees") is not None:
            total = parse_count(partial_input.get("totalEmployees"))
        else:
            total = min(
                MAX_EMPLOYEES,
                parse_count(partial_input.get("maleEmployees"))
                + parse_count(partial_input.get("femaleEmployees")),
            )
        males, females = split_headcount(total, male_ratio)

        form_data = dict(partial_input)
        form_data.pop("totalEmployees", None)
        form_data["maleEmployees"] = males
        form_data["femaleEmployees"] = females

        quote = self.calculate(form_data, include_per_employee=include_per_employee)
        return quote.model_copy(
            update={
                "is_estimated": True,
                "estimated_gender_ratio": GenderRatio(
                    male=male_ratio, female=1.0 - male_ratio
                ),
            }
        )


_default_engine: QuoteEngine | None = None


@beartype
def get_quote_engine() -> QuoteEngine:
    """Process-wide engine over the default rate card."""
    global _default_engine
    if _default_engine is None:
        _default_engine = QuoteEngine()
    return _default_engine


@beartype
def calculate_quote(
    quote_input: RawQuoteInput, *, include_per_employee: bool = True
) -> QuoteResult:
    """Price a quote with the default engine."""
    return get_quote_engine().calculate(
        quote_input, include_per_employee=include_per_employee
    )


@beartype
def calculate_quote_with_estimate(
    partial_input: Mapping[str, Any],
    assumed_male_ratio: float | None = None,
    *,
    include_per_employee: bool = True,
) -> QuoteResult:
    """Price an estimated quote from a total headcount with the default engine."""
    return get_quote_engine().calculate_with_estimate(
        partial_input,
        assumed_male_ratio,
        include_per_employee=include_per_employee,
    )
