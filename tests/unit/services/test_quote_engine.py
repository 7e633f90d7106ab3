"""Unit tests for quote assembly and the engine's public entry points."""

from decimal import Decimal
from typing import Any

import pytest

from dbl_pfl_quote import calculate_quote, calculate_quote_with_estimate
from dbl_pfl_quote.core.config import clear_settings_cache
from dbl_pfl_quote.models.quote import (
    BenefitTier,
    BillingFrequency,
    BillingPeriod,
    QuoteInput,
)
from dbl_pfl_quote.services.normalization import MAX_EMPLOYEES
from dbl_pfl_quote.services.quote_engine import QuoteEngine, get_quote_engine, to_period


class TestQuoteCalculation:
    """Test the full calculation pass."""

    def test_sample_group(self, engine: QuoteEngine, sample_form: dict[str, Any]) -> None:
        """Enriched coverage with hospital rider, EAP and AD&D."""
        quote = engine.calculate(sample_form)

        # DBL: 5 * 2.75 + 5 * 6.00 = 43.75 a month
        assert quote.dbl_monthly == Decimal("43.75")
        # PFL: 400000 * 0.00432 / 12
        assert quote.pfl_monthly == Decimal("144")
        # Optional: 10 * (3.00 EAP + 2.00 AD&D)
        assert quote.optional_monthly == Decimal("50.00")
        assert quote.total_monthly == Decimal("237.75")

        assert quote.billing_period is BillingPeriod.YEAR
        assert quote.period_multiplier == 12
        assert quote.breakdown.dbl_premium == Decimal("525.00")
        assert quote.breakdown.pfl_premium == Decimal("1728.00")
        assert quote.breakdown.optional_cost == Decimal("600.00")
        assert quote.display_amount == Decimal("2853.00")
        assert quote.breakdown.total_cost == quote.display_amount
        assert quote.per_employee_breakdown is not None
        assert quote.per_employee_breakdown.total_per_employee == Decimal("23.775")
        assert quote.employee_info.total == 10
        assert quote.is_estimated is False

    def test_same_input_same_quote(
        self, engine: QuoteEngine, sample_form: dict[str, Any]
    ) -> None:
        """The calculation is deterministic."""
        assert engine.calculate(sample_form) == engine.calculate(dict(sample_form))

    def test_no_employees(self, engine: QuoteEngine) -> None:
        """An empty census is an all-zero quote, even with selections made."""
        quote = engine.calculate(
            {
                "maleEmployees": "0",
                "femaleEmployees": "",
                "billingOption": "quarterly",
                "eap": "on",
                "payrollBelowNYSAWW": "100000",
            }
        )

        assert quote.total_monthly == Decimal("0")
        assert quote.display_amount == Decimal("0")
        assert quote.billing_period is BillingPeriod.QUARTER
        assert quote.period_multiplier == 3
        assert quote.per_employee_breakdown is not None
        assert quote.per_employee_breakdown.total_per_employee == Decimal("0")
        assert quote.pfl_detail is not None
        assert quote.pfl_detail.annual_total == Decimal("0")

    def test_minimum_premium_floor(self, engine: QuoteEngine) -> None:
        """A tiny group pays the annual DBL minimum."""
        quote = engine.calculate({"maleEmployees": 1})

        assert quote.breakdown.dbl_premium == Decimal("125.00")
        assert quote.display_amount == Decimal("125.00")

    def test_quarterly_minimum_and_fee(self, engine: QuoteEngine) -> None:
        """Quarterly billing adds the installment fee to DBL."""
        quote = engine.calculate(
            {"maleEmployees": 10, "dblBenefits": "statutory", "billingOption": "quarterly"}
        )

        # 10 * 1.85 * 3 = 55.50, plus the $15 fee
        assert quote.breakdown.dbl_premium == Decimal("70.50")
        assert quote.billing_period is BillingPeriod.QUARTER

    def test_minimum_applies_to_dbl_only(self, engine: QuoteEngine) -> None:
        """PFL and optional costs neither count toward nor get the floor."""
        quote = engine.calculate({"maleEmployees": 1, "eap": True})

        assert quote.breakdown.dbl_premium == Decimal("125.00")
        assert quote.breakdown.optional_cost == Decimal("36.00")
        assert quote.display_amount == Decimal("161.00")

    def test_hospital_rider_is_additive(self, engine: QuoteEngine) -> None:
        """Above the floor the rider adds exactly the column difference."""
        form = {"maleEmployees": 50, "femaleEmployees": 50, "dblBenefits": "enriched2x"}
        base = engine.calculate(form)
        with_hospital = engine.calculate({**form, "inHospitalRider": "on"})

        # 50 * (2.75 - 2.55) + 50 * (6.00 - 5.60)
        assert with_hospital.dbl_monthly - base.dbl_monthly == Decimal("30.00")
        assert with_hospital.optional_monthly == base.optional_monthly

    def test_period_scaling(self, engine: QuoteEngine) -> None:
        """Display amount is the monthly total scaled and rounded."""
        form = {"maleEmployees": 7, "femaleEmployees": 3, "dblBenefits": "enriched3x"}
        annual = engine.calculate(form)
        quarterly = engine.calculate({**form, "billingOption": "quarterly"})

        assert annual.display_amount == to_period(annual.total_monthly, BillingPeriod.YEAR)
        assert quarterly.display_amount == to_period(
            quarterly.total_monthly, BillingPeriod.QUARTER
        )

    def test_pfl_lines(self, engine: QuoteEngine) -> None:
        """PFL is rated on payroll below and headcount above the threshold."""
        below = engine.calculate({"femaleEmployees": 10, "payrollBelowNYSAWW": "500,000"})
        over = engine.calculate({"femaleEmployees": 1, "employeesOverNYSAWW": 1})

        assert below.breakdown.pfl_premium == Decimal("2160.00")
        assert over.breakdown.pfl_premium == Decimal("411.91")

    def test_per_employee_lines_add_up(
        self, engine: QuoteEngine, sample_form: dict[str, Any]
    ) -> None:
        """Per-employee lines sum to the per-employee total."""
        per_employee = engine.calculate(sample_form).per_employee_breakdown

        assert per_employee is not None
        assert (
            per_employee.dbl_per_employee
            + per_employee.pfl_per_employee
            + per_employee.optional_per_employee
            == per_employee.total_per_employee
        )

    def test_per_employee_total_scales_back_to_total(self, engine: QuoteEngine) -> None:
        """Per-employee total times headcount is the monthly total."""
        quote = engine.calculate(
            {
                "maleEmployees": 4,
                "femaleEmployees": 3,
                "dblBenefits": "enriched1.5x",
                "payrollBelowNYSAWW": "123456.78",
                "nurseHelpline": "on",
            }
        )

        per_employee = quote.per_employee_breakdown
        assert per_employee is not None
        assert quote.employee_info.total == 7
        assert per_employee.total_per_employee * quote.employee_info.total == pytest.approx(
            quote.total_monthly, abs=Decimal("0.000001")
        )

    def test_per_employee_breakdown_can_be_skipped(
        self, engine: QuoteEngine, sample_form: dict[str, Any]
    ) -> None:
        """Callers that do not need per-employee figures can drop them."""
        quote = engine.calculate(sample_form, include_per_employee=False)

        assert quote.per_employee_breakdown is None
        assert quote.display_amount == Decimal("2853.00")

    def test_typed_input(self, engine: QuoteEngine) -> None:
        """A ``QuoteInput`` is used as is."""
        quote_input = QuoteInput(
            male_employees=10,
            benefit_tier=BenefitTier.STATUTORY,
            billing_frequency=BillingFrequency.QUARTERLY,
        )

        assert engine.calculate(quote_input).breakdown.dbl_premium == Decimal("70.50")

    def test_calculate_from_form(
        self, engine: QuoteEngine, sample_form: dict[str, Any]
    ) -> None:
        """Raw field values can be priced without building an input first."""
        assert engine.calculate_from_form(sample_form) == engine.calculate(sample_form)

    def test_unknown_tier_rates_as_statutory(self, engine: QuoteEngine) -> None:
        """An unrecognized tier quotes the same as statutory."""
        form = {"maleEmployees": 100}

        assert engine.calculate({**form, "dblBenefits": "platinum"}) == engine.calculate(
            {**form, "dblBenefits": "statutory"}
        )


class TestOversizedInput:
    """Test that absurdly large answers still produce a quote."""

    def test_exponent_payroll(self, engine: QuoteEngine) -> None:
        """Scientific notation in the payroll field is read as its leading number."""
        quote = engine.calculate({"maleEmployees": "5", "payrollBelowNYSAWW": "1e30"})

        assert quote.pfl_detail is not None
        assert quote.pfl_detail.payroll_below_cap == Decimal("1")

    def test_huge_payroll_is_capped(self, engine: QuoteEngine) -> None:
        """Payroll above the cap is rated at the cap."""
        quote = engine.calculate({"maleEmployees": "5", "payrollBelowNYSAWW": 1e30})

        # 10**12 * 0.00432
        assert quote.breakdown.pfl_premium == Decimal("4320000000.00")

    def test_huge_headcount_is_capped(self, engine: QuoteEngine) -> None:
        """A thirty-digit headcount is rated at the employee cap."""
        quote = engine.calculate({"maleEmployees": "1" + "0" * 30})

        assert quote.employee_info.male == MAX_EMPLOYEES
        # 1,000,000 * 1.50 * 12
        assert quote.display_amount == Decimal("18000000.00")

    def test_huge_typed_input_still_rounds(self, engine: QuoteEngine) -> None:
        """Typed input bypasses the caps and is still scaled to the cent."""
        quote = engine.calculate(QuoteInput(male_employees=10**30))

        assert quote.display_amount == Decimal(18 * 10**30)

    def test_huge_estimate_total(self, engine: QuoteEngine) -> None:
        """Estimated headcounts are capped before they are split."""
        quote = engine.calculate_with_estimate(
            {"maleEmployees": "1" + "0" * 30, "femaleEmployees": "1" + "0" * 30}, 1.0
        )

        assert quote.employee_info.male == MAX_EMPLOYEES
        assert quote.employee_info.female == 0


class TestEstimatedQuotes:
    """Test quoting from a total headcount."""

    def test_even_split_rounds_males_up(self, engine: QuoteEngine) -> None:
        """An odd total gives the extra employee to the male count."""
        quote = engine.calculate_with_estimate({"totalEmployees": 11}, 0.5)

        assert quote.employee_info.male == 6
        assert quote.employee_info.female == 5
        assert quote.is_estimated is True
        assert quote.estimated_gender_ratio is not None
        assert quote.estimated_gender_ratio.male == pytest.approx(0.5)

    def test_custom_ratio(self, engine: QuoteEngine) -> None:
        """The assumed ratio drives the split."""
        quote = engine.calculate_with_estimate({"totalEmployees": "10"}, 0.3)

        assert quote.employee_info.male == 3
        assert quote.employee_info.female == 7
        assert quote.estimated_gender_ratio is not None
        assert quote.estimated_gender_ratio.female == pytest.approx(0.7)

    def test_default_ratio_from_settings(
        self, engine: QuoteEngine, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Without an explicit ratio the configured one is assumed."""
        monkeypatch.setenv("QUOTE_ENGINE_DEFAULT_MALE_RATIO", "1.0")
        clear_settings_cache()

        quote = engine.calculate_with_estimate({"totalEmployees": 4})

        assert quote.employee_info.male == 4
        assert quote.employee_info.female == 0

    def test_total_from_gender_counts(self, engine: QuoteEngine) -> None:
        """Without a total, the posted counts are re-split."""
        quote = engine.calculate_with_estimate(
            {"maleEmployees": 8, "femaleEmployees": 2}, 0.5
        )

        assert quote.employee_info.male == 5
        assert quote.employee_info.female == 5

    def test_estimate_matches_explicit_split(self, engine: QuoteEngine) -> None:
        """Apart from the estimate tags the figures equal an explicit quote."""
        estimated = engine.calculate_with_estimate(
            {"totalEmployees": 20, "dblBenefits": "enriched2x"}, 0.5
        )
        explicit = engine.calculate(
            {"maleEmployees": 10, "femaleEmployees": 10, "dblBenefits": "enriched2x"}
        )

        assert estimated.display_amount == explicit.display_amount
        assert estimated.breakdown == explicit.breakdown

    def test_zero_estimate_is_still_tagged(self, engine: QuoteEngine) -> None:
        """An empty estimated quote still says it is an estimate."""
        quote = engine.calculate_with_estimate({"totalEmployees": 0}, 0.5)

        assert quote.display_amount == Decimal("0")
        assert quote.is_estimated is True


class TestQuoteSerialization:
    """Test the JSON shape handed to the wizard."""

    def test_camel_case_numbers(
        self, engine: QuoteEngine, sample_form: dict[str, Any]
    ) -> None:
        """Keys are camelCase and amounts are plain numbers."""
        data = engine.calculate(sample_form).to_dict()

        assert data["displayAmount"] == 2853.0
        assert data["billingPeriod"] == "year"
        assert data["periodMultiplier"] == 12
        assert data["breakdown"]["dblPremium"] == 525.0
        assert data["perEmployeeBreakdown"]["totalPerEmployee"] == 23.775
        assert data["employeeInfo"] == {"male": 5, "female": 5, "total": 10}
        assert data["pflDetail"]["annualTotal"] == 1728.0
        assert data["isEstimated"] is False
        assert data["estimatedGenderRatio"] is None


class TestModuleFunctions:
    """Test the module-level convenience entry points."""

    def test_calculate_quote(self, sample_form: dict[str, Any]) -> None:
        """The default engine quotes from the bundled card."""
        assert calculate_quote(sample_form).display_amount == Decimal("2853.00")

    def test_calculate_quote_with_estimate(self) -> None:
        """Estimates are available without constructing an engine."""
        quote = calculate_quote_with_estimate({"totalEmployees": 11}, 0.5)

        assert quote.is_estimated is True
        assert quote.employee_info.male == 6

    def test_default_engine_is_shared(self) -> None:
        """The process-wide engine is built once."""
        assert get_quote_engine() is get_quote_engine()
