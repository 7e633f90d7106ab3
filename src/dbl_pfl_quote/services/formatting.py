"""Display helpers for the wizard: currency strings and tier descriptions.

Nothing here feeds back into a calculation.
"""

import math
from decimal import Decimal

from beartype import beartype

from ..core.config import get_settings
from ..models.quote import BenefitTier
from ..models.rate_card import BenefitTierDescription, RateCard
from .rating.calculators import round_cents
from .rating.rate_tables import RateTable, get_default_rate_card


@beartype
def format_currency(amount: Decimal | float | int | None, symbol: str | None = None) -> str:
    """Format an amount as ``$1,234.56``.

    Rounds half up to the cent. Negative amounts get a leading minus
    (``-$12.00``); missing or non-finite amounts format as zero.
    """
    if symbol is None:
        symbol = get_settings().currency_symbol
    if amount is None or (isinstance(amount, float) and not math.isfinite(amount)):
        value = Decimal("0")
    elif isinstance(amount, float):
        value = Decimal(repr(amount))
    else:
        value = Decimal(amount)
    if not value.is_finite():
        value = Decimal("0")

    rounded = round_cents(value)
    sign = "-" if rounded < 0 else ""
    return f"{sign}{symbol}{rounded.copy_abs():,.2f}"


@beartype
def describe_benefit_tier(
    tier: BenefitTier | str | None, rate_card: RateCard | None = None
) -> BenefitTierDescription:
    """Name, maximum weekly benefit and description of a DBL tier.

    Unknown tiers are described as statutory.
    """
    table = RateTable(rate_card or get_default_rate_card())
    description = table.describe_tier(tier)
    if description is None:
        # A card without display text still gets a usable label
        resolved = table.resolve_tier(tier)
        return BenefitTierDescription(
            name=resolved.value,
            max_weekly_benefit=Decimal("0"),
            description=resolved.value,
        )
    return description
