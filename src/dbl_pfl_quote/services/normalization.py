"""Normalization of raw wizard form values into a typed ``QuoteInput``.

This is the only place that tolerates loosely typed input: strings typed
into number fields, checkbox ``"on"`` sentinels, absent fields. Everything
that cannot be read as a sensible value becomes 0, ``False`` or the
documented default rather than an error, since the quote preview refreshes
on every keystroke.
"""

import math
import re
from collections.abc import Mapping
from decimal import Decimal, InvalidOperation
from typing import Any

from beartype import beartype

from ..core.logging_utils import get_logger
from ..models.quote import AdddOption, BenefitTier, BillingFrequency, QuoteInput

logger = get_logger(__name__)

# Leading number, the way browsers read a partially typed field
_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")
_LEADING_DECIMAL = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+))")

_CHECKED_VALUES = frozenset({"on", "true", "1", "yes", "checked"})

# Display formatting a user may paste into a number field
_FORMATTING_CHARS = str.maketrans("", "", "$,_ ")

# Billing options the wizard may post that bill per quarter
_QUARTERLY_ALIASES = frozenset({"quarterly", "quarterlyPayroll"})

# Largest values read from a form field; anything above is clamped so that
# period totals stay within the decimal context
MAX_EMPLOYEES = 1_000_000
MAX_AMOUNT = Decimal("1000000000000")


def _clamp_count(count: int) -> int:
    return min(MAX_EMPLOYEES, max(0, count))


@beartype
def parse_count(value: Any) -> int:
    """Read an employee count, capped at ``MAX_EMPLOYEES``.

    Anything unreadable or negative is 0.
    """
    if isinstance(value, bool) or value is None:
        return 0
    if isinstance(value, int):
        return _clamp_count(value)
    if isinstance(value, (float, Decimal)):
        if isinstance(value, float) and not math.isfinite(value):
            return 0
        if isinstance(value, Decimal) and not value.is_finite():
            return 0
        return _clamp_count(int(value))
    match = _LEADING_INT.match(str(value).strip().translate(_FORMATTING_CHARS))
    if match is None:
        return 0
    digits = match.group(1)
    if len(digits.lstrip("+-").lstrip("0")) > len(str(MAX_EMPLOYEES)):
        return 0 if digits.startswith("-") else MAX_EMPLOYEES
    return _clamp_count(int(digits))


@beartype
def parse_amount(value: Any) -> Decimal:
    """Read a currency amount, capped at ``MAX_AMOUNT``.

    Anything unreadable or negative is 0. Exponent notation is not read:
    ``"1e30"`` is 1.
    """
    if isinstance(value, bool) or value is None:
        return Decimal("0")
    if isinstance(value, float):
        if not math.isfinite(value):
            return Decimal("0")
        # repr round-trip avoids binary float noise such as 0.1000000000000000055
        amount = Decimal(repr(value))
    elif isinstance(value, (int, Decimal)):
        amount = Decimal(value)
    else:
        match = _LEADING_DECIMAL.match(str(value).strip().translate(_FORMATTING_CHARS))
        if match is None:
            return Decimal("0")
        try:
            amount = Decimal(match.group(1))
        except InvalidOperation:
            return Decimal("0")
    if not amount.is_finite() or amount < 0:
        return Decimal("0")
    return min(amount, MAX_AMOUNT)


@beartype
def parse_checkbox(value: Any) -> bool:
    """Checkbox state: ``True`` or one of the sentinels a form posts."""
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() in _CHECKED_VALUES


@beartype
def parse_benefit_tier(value: Any) -> BenefitTier:
    """Benefit tier code, statutory when missing or unrecognized."""
    if isinstance(value, BenefitTier):
        return value
    if value is None or str(value).strip() == "":
        return BenefitTier.STATUTORY
    try:
        return BenefitTier(str(value).strip())
    except ValueError:
        logger.warning("Unknown benefit tier %r, rating as statutory", value)
        return BenefitTier.STATUTORY


@beartype
def parse_billing_frequency(value: Any) -> BillingFrequency:
    """Billing frequency, annual when missing or unrecognized."""
    if isinstance(value, BillingFrequency):
        return value
    if value is not None and str(value).strip() in _QUARTERLY_ALIASES:
        return BillingFrequency.QUARTERLY
    return BillingFrequency.ANNUAL


@beartype
def parse_addd(value: Any) -> AdddOption:
    """AD&D amount; only one of the two amounts can ever be selected."""
    if isinstance(value, AdddOption):
        return value
    if value is None or isinstance(value, bool):
        return AdddOption.NONE
    text = str(value).strip().replace(",", "").lower()
    if text in {"50000", "50k", "addd50k"}:
        return AdddOption.ADDD_50K
    if text in {"100000", "100k", "addd100k"}:
        return AdddOption.ADDD_100K
    return AdddOption.NONE


@beartype
def normalize_form_data(form_data: Mapping[str, Any]) -> QuoteInput:
    """Build a ``QuoteInput`` from raw wizard field values."""
    addd_value = form_data.get("adddBenefit")
    if addd_value is None:
        # Older wizard pages posted the AD&D radio as ``addBenefit``
        addd_value = form_data.get("addBenefit")

    return QuoteInput(
        male_employees=parse_count(form_data.get("maleEmployees")),
        female_employees=parse_count(form_data.get("femaleEmployees")),
        benefit_tier=parse_benefit_tier(form_data.get("dblBenefits")),
        billing_frequency=parse_billing_frequency(form_data.get("billingOption")),
        include_hospital_rider=parse_checkbox(form_data.get("inHospitalRider")),
        annual_payroll=parse_amount(form_data.get("annualPayroll")),
        employees_over_wage_threshold=parse_count(
            form_data.get("employeesOverNYSAWW")
        ),
        payroll_below_wage_threshold=parse_amount(form_data.get("payrollBelowNYSAWW")),
        term_life_15k=parse_checkbox(form_data.get("termLife15k")),
        eap=parse_checkbox(form_data.get("eap")),
        nurse_helpline=parse_checkbox(form_data.get("nurseHelpline")),
        addd=parse_addd(addd_value),
    )


@beartype
def split_headcount(total_employees: int, male_ratio: float) -> tuple[int, int]:
    """Estimated (male, female) split of a total headcount.

    Males are ``total * ratio`` rounded half up, females the remainder.
    """
    total = max(0, total_employees)
    ratio = min(1.0, max(0.0, male_ratio)) if math.isfinite(male_ratio) else 0.5
    males = math.floor(total * ratio + 0.5)
    return males, total - males
