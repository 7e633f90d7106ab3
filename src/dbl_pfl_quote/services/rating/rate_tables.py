"""Rate card loading, validation and lookup.

Rate cards are static reference data: loaded once per process, validated,
then only ever read. Lookups sit on the live-preview path, so they never
raise; an unknown tier or billing frequency falls back to a documented
default and logs a warning instead.
"""

from decimal import Decimal
from functools import lru_cache
from pathlib import Path

from beartype import beartype
from pydantic import ValidationError

from ...core.config import get_settings
from ...core.logging_utils import get_logger
from ...core.result_types import Err, Ok, Result
from ...models.quote import BenefitTier, BillingFrequency, RateVariant
from ...models.rate_card import BenefitTierDescription, DBLRateSet, RateCard

logger = get_logger(__name__)

DEFAULT_RATE_CARD_PATH = (
    Path(__file__).resolve().parents[2] / "data" / "ny_shelterpoint_2026.json"
)

# Ascending benefit richness; unit rates must not decrease along this order
TIER_ORDER: tuple[BenefitTier, ...] = tuple(BenefitTier)

# Allowed relative gap between percent * threshold and the flat PFL cap
PFL_CAP_TOLERANCE = Decimal("0.01")


@beartype
def validate_rate_card(card: RateCard) -> Result[RateCard, str]:
    """Check the structural invariants calculators rely on.

    - every tier has a rate set for every billing frequency
    - unit rates never decrease as the tier gets richer
    - the with-hospital rate is never below its base rate

    PFL cap consistency is only warned about, not enforced.
    """
    for tier in TIER_ORDER:
        by_frequency = card.dbl_rates.get(tier)
        if by_frequency is None:
            return Err(f"Rate card {card.jurisdiction} has no DBL rates for tier '{tier.value}'")
        for frequency in BillingFrequency:
            if frequency not in by_frequency:
                return Err(
                    f"Rate card {card.jurisdiction} has no '{frequency.value}' rates "
                    f"for tier '{tier.value}'"
                )

    for frequency in BillingFrequency:
        for variant in RateVariant:
            previous: Decimal | None = None
            for tier in TIER_ORDER:
                rate = card.dbl_rates[tier][frequency].rate_for(variant)
                if previous is not None and rate < previous:
                    return Err(
                        f"DBL rate for '{tier.value}'/{frequency.value}/{variant.value} "
                        f"({rate}) is below the previous tier ({previous})"
                    )
                previous = rate

    for tier in TIER_ORDER:
        for frequency in BillingFrequency:
            rates = card.dbl_rates[tier][frequency]
            if (
                rates.male_with_hospital < rates.male
                or rates.female_with_hospital < rates.female
            ):
                return Err(
                    f"Hospital rider rate below base rate for '{tier.value}'/{frequency.value}"
                )

    implied_cap = card.pfl.percent_of_payroll * card.pfl.wage_threshold
    cap = card.pfl.annual_cap_per_employee
    if cap > 0 and abs(implied_cap - cap) / cap > PFL_CAP_TOLERANCE:
        logger.warning(
            "PFL cap %s on %s rate card is inconsistent with %s of %s (%s)",
            cap,
            card.jurisdiction,
            card.pfl.percent_of_payroll,
            card.pfl.wage_threshold,
            implied_cap.quantize(Decimal("0.01")),
        )

    return Ok(card)


@beartype
def _decode_rate_card(document: str) -> Result[RateCard, str]:
    try:
        return Ok(RateCard.model_validate_json(document))
    except ValidationError as e:
        return Err(f"Invalid rate card: {e.error_count()} validation error(s): {e}")


@beartype
def parse_rate_card(document: str) -> Result[RateCard, str]:
    """Parse and validate a JSON rate card document."""
    return _decode_rate_card(document).and_then(validate_rate_card)


@beartype
def load_rate_card(path: Path) -> Result[RateCard, str]:
    """Read, parse and validate a rate card file."""
    try:
        document = path.read_text(encoding="utf-8")
    except OSError as e:
        return Err(f"Unable to read rate card {path}: {e}")

    result = parse_rate_card(document)
    if result.is_ok():
        card = result.unwrap()
        logger.info(
            "Loaded %s %s rate card (%s) from %s",
            card.jurisdiction,
            card.effective_year,
            card.carrier,
            path,
        )
    return result


@lru_cache(maxsize=1)
def get_default_rate_card() -> RateCard:
    """Process-wide rate card, loaded once.

    Uses the card named by settings when one is configured and valid,
    otherwise the bundled NY card.
    """
    override = get_settings().rate_card_path
    if override is not None:
        result = load_rate_card(override)
        if result.is_ok():
            return result.unwrap()
        logger.error(
            "Configured rate card rejected, using bundled card: %s", result.unwrap_err()
        )
    return load_rate_card(DEFAULT_RATE_CARD_PATH).unwrap()


@beartype
class RateTable:
    """Read-only lookups over a rate card."""

    def __init__(self, card: RateCard) -> None:
        """Initialize with an already validated rate card."""
        self._card = card

    @property
    def card(self) -> RateCard:
        """Underlying rate card."""
        return self._card

    def resolve_tier(self, tier: BenefitTier | str | None) -> BenefitTier:
        """Coerce a tier code, falling back to statutory."""
        if isinstance(tier, BenefitTier):
            return tier
        try:
            return BenefitTier(tier)
        except ValueError:
            if tier not in (None, ""):
                logger.warning("Unknown benefit tier %r, rating as statutory", tier)
            return BenefitTier.STATUTORY

    def resolve_frequency(
        self, frequency: BillingFrequency | str | None
    ) -> BillingFrequency:
        """Coerce a billing frequency, falling back to annual."""
        if isinstance(frequency, BillingFrequency):
            return frequency
        try:
            return BillingFrequency(frequency)
        except ValueError:
            return BillingFrequency.ANNUAL

    def rate_set(
        self,
        tier: BenefitTier | str | None,
        frequency: BillingFrequency | str | None,
    ) -> DBLRateSet:
        """All four variant rates for a tier and frequency."""
        resolved_tier = self.resolve_tier(tier)
        resolved_frequency = self.resolve_frequency(frequency)
        by_frequency = self._card.dbl_rates.get(resolved_tier)
        if by_frequency is None:
            logger.warning(
                "No %s rates for tier %s, rating as statutory",
                self._card.jurisdiction,
                resolved_tier.value,
            )
            by_frequency = self._card.dbl_rates[BenefitTier.STATUTORY]
        return by_frequency.get(
            resolved_frequency, by_frequency[BillingFrequency.ANNUAL]
        )

    def rate(
        self,
        tier: BenefitTier | str | None,
        frequency: BillingFrequency | str | None,
        variant: RateVariant,
    ) -> Decimal:
        """Monthly per-employee DBL unit rate."""
        return self.rate_set(tier, frequency).rate_for(variant)

    def minimum(self, frequency: BillingFrequency | str | None) -> Decimal:
        """Minimum DBL premium for one billing period."""
        return self._card.minimums.for_frequency(self.resolve_frequency(frequency))

    def installment_fee(self, frequency: BillingFrequency | str | None) -> Decimal:
        """Flat fee charged per billing period."""
        if self.resolve_frequency(frequency) is BillingFrequency.QUARTERLY:
            return self._card.minimums.quarterly_installment_fee
        return Decimal("0")

    def describe_tier(self, tier: BenefitTier | str | None) -> BenefitTierDescription | None:
        """Display text for a tier, statutory when the tier is unknown."""
        descriptions = self._card.benefit_tiers
        return descriptions.get(self.resolve_tier(tier)) or descriptions.get(
            BenefitTier.STATUTORY
        )
