"""Premium calculators, one per coverage line.

All amounts are exact ``Decimal`` monthly figures; rounding to the cent
happens only when the quote is scaled to its billing period.
"""

from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal, localcontext

from beartype import beartype

from ...core.logging_utils import get_logger
from ...models.quote import (
    BenefitTier,
    BillingFrequency,
    OptionalBenefit,
    PFLPremium,
    RateVariant,
)
from ...models.rate_card import OptionalBenefitCatalog, PFLRate
from .rate_tables import RateTable

logger = get_logger(__name__)

ZERO = Decimal("0")
MONTHS_PER_YEAR = Decimal("12")
CENTS = Decimal("0.01")


@beartype
def non_negative_int(value: int | None) -> int:
    """Clamp a count to a non-negative integer."""
    return max(0, value or 0)


@beartype
def non_negative_amount(value: Decimal | int | None) -> Decimal:
    """Clamp a currency amount to a non-negative decimal."""
    amount = Decimal(value or 0)
    return amount if amount > ZERO else ZERO


@beartype
def round_cents(amount: Decimal) -> Decimal:
    """Round half up to the cent, widening precision for very large amounts."""
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, amount.adjusted() + 3)
        return amount.quantize(CENTS, rounding=ROUND_HALF_UP)


@beartype
def safe_divide(numerator: Decimal, denominator: Decimal | int) -> Decimal:
    """Divide, yielding 0 instead of failing on a zero denominator."""
    if not denominator:
        return ZERO
    return numerator / Decimal(denominator)


@beartype
class DBLPremiumCalculator:
    """Disability Benefits Law premium rated per employee by gender."""

    def __init__(self, rate_table: RateTable) -> None:
        """Initialize with the rate table to rate against."""
        self._rates = rate_table

    def monthly_premium(
        self,
        male_employees: int,
        female_employees: int,
        tier: BenefitTier | str | None,
        frequency: BillingFrequency | str | None,
        include_hospital: bool = False,
    ) -> Decimal:
        """Monthly DBL premium for the group.

        The in-hospital rider switches both genders to the with-hospital
        column; it cannot be applied to one gender only.
        """
        male = non_negative_int(male_employees)
        female = non_negative_int(female_employees)
        with_hospital = bool(include_hospital)

        rates = self._rates.rate_set(tier, frequency)
        male_rate = rates.rate_for(
            RateVariant.for_gender(male=True, with_hospital=with_hospital)
        )
        female_rate = rates.rate_for(
            RateVariant.for_gender(male=False, with_hospital=with_hospital)
        )
        return male * male_rate + female * female_rate


@beartype
class PFLPremiumCalculator:
    """Paid Family Leave contribution on a blended wage basis.

    Employees at or above the wage threshold are charged the flat annual
    cap; payroll of employees below it is charged the percentage rate. The
    wizard buckets employees by the threshold, so this works on aggregate
    figures only.
    """

    def __init__(self, pfl_rate: PFLRate) -> None:
        """Initialize with the jurisdiction's PFL rate."""
        self._rate = pfl_rate

    def calculate(
        self,
        employees_over_threshold: int,
        payroll_below_threshold: Decimal | int,
        total_employees: int,
    ) -> PFLPremium:
        """Annual, monthly and per-employee PFL figures.

        ``total_employees`` only feeds the per-employee figures, never the
        rating itself.
        """
        over = non_negative_int(employees_over_threshold)
        payroll_below = non_negative_amount(payroll_below_threshold)
        headcount = non_negative_int(total_employees)

        from_over_cap = over * self._rate.annual_cap_per_employee
        from_below_cap = payroll_below * self._rate.percent_of_payroll
        annual = from_over_cap + from_below_cap
        monthly = annual / MONTHS_PER_YEAR

        return PFLPremium(
            annual_total=annual,
            monthly_total=monthly,
            annual_per_employee=safe_divide(annual, headcount),
            monthly_per_employee=safe_divide(monthly, headcount),
            employees_over_cap=over,
            pfl_from_over_cap=from_over_cap,
            payroll_below_cap=payroll_below,
            pfl_from_below_cap=from_below_cap,
        )


@beartype
class OptionalBenefitsCalculator:
    """Flat per-employee pricing of optional riders and baseline benefits."""

    def __init__(self, catalog: OptionalBenefitCatalog) -> None:
        """Initialize with the optional benefit price list."""
        self._catalog = catalog

    def line_items(
        self, employee_count: int, selections: Iterable[OptionalBenefit]
    ) -> dict[OptionalBenefit, Decimal]:
        """Monthly cost of each selected benefit."""
        count = non_negative_int(employee_count)
        # Enum order keeps the mapping stable regardless of selection order
        selected = set(selections)
        return {
            benefit: count * self._catalog.unit_cost(benefit)
            for benefit in OptionalBenefit
            if benefit in selected
        }

    def monthly_cost(
        self, employee_count: int, selections: Iterable[OptionalBenefit]
    ) -> Decimal:
        """Total monthly cost of the selected benefits."""
        return sum(self.line_items(employee_count, selections).values(), ZERO)


@beartype
class MinimumPremiumAdjuster:
    """Billing-frequency minimum floor and installment fee for a line.

    The floor is enforced on the period total and re-expressed as a
    monthly figure. The installment fee is added after the floor and is
    never itself subject to it.
    """

    def __init__(self, rate_table: RateTable) -> None:
        """Initialize with the rate table holding floors and fees."""
        self._rates = rate_table

    def apply_minimum(
        self, monthly_premium: Decimal, frequency: BillingFrequency | str | None
    ) -> Decimal:
        """Raise a monthly premium to the period minimum if it falls short."""
        resolved = self._rates.resolve_frequency(frequency)
        months = Decimal(resolved.months)
        floor = self._rates.minimum(resolved)
        if monthly_premium * months < floor:
            logger.debug(
                "Premium %s per %s is below the %s minimum, using floor",
                (monthly_premium * months).quantize(Decimal("0.01")),
                resolved.period.value,
                floor,
            )
            return floor / months
        return monthly_premium

    def apply_fees(
        self, monthly_premium: Decimal, frequency: BillingFrequency | str | None
    ) -> Decimal:
        """Add the per-period installment fee, prorated to a month."""
        resolved = self._rates.resolve_frequency(frequency)
        fee = self._rates.installment_fee(resolved)
        if not fee:
            return monthly_premium
        return monthly_premium + fee / Decimal(resolved.months)

    def adjust(
        self, monthly_premium: Decimal, frequency: BillingFrequency | str | None
    ) -> Decimal:
        """Minimum floor first, then fees."""
        return self.apply_fees(
            self.apply_minimum(monthly_premium, frequency), frequency
        )
