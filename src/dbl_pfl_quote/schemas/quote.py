"""Request and response schemas for the quote preview API."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..models.quote import BenefitTier, QuoteResult
from ..models.rate_card import BenefitTierDescription

# Whatever a form control can post: typed text, a checkbox sentinel, a number
FormValue = str | bool | int | float | None


class QuoteFormRequest(BaseModel):
    """Raw wizard field values, exactly as the form posts them.

    The wizard posts its whole form, so fields the quote does not read are
    ignored rather than rejected.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )

    male_employees: FormValue = Field(default=None, alias="maleEmployees")
    female_employees: FormValue = Field(default=None, alias="femaleEmployees")
    total_employees: FormValue = Field(default=None, alias="totalEmployees")
    dbl_benefits: FormValue = Field(default=None, alias="dblBenefits")
    billing_option: FormValue = Field(default=None, alias="billingOption")
    in_hospital_rider: FormValue = Field(default=None, alias="inHospitalRider")
    annual_payroll: FormValue = Field(default=None, alias="annualPayroll")
    employees_over_nysaww: FormValue = Field(default=None, alias="employeesOverNYSAWW")
    payroll_below_nysaww: FormValue = Field(default=None, alias="payrollBelowNYSAWW")
    term_life_15k: FormValue = Field(default=None, alias="termLife15k")
    eap: FormValue = Field(default=None)
    nurse_helpline: FormValue = Field(default=None, alias="nurseHelpline")
    addd_benefit: FormValue = Field(default=None, alias="adddBenefit")
    # Name of the AD&D radio on older wizard pages
    add_benefit: FormValue = Field(default=None, alias="addBenefit")

    def to_form_data(self) -> dict[str, Any]:
        """Field values keyed by their form names, absent fields omitted."""
        return self.model_dump(by_alias=True, exclude_none=True)


class FormattedQuote(BaseModel):
    """Display strings for the quote summary panel."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    display_amount: str = Field(..., description="Total for the billing period")
    dbl_premium: str
    pfl_premium: str
    optional_cost: str
    total_per_employee: str | None = Field(
        default=None, description="Monthly total per covered employee"
    )


class QuoteResponse(BaseModel):
    """Quote figures with their formatted display strings."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    quote: QuoteResult
    formatted: FormattedQuote


class BenefitTierResponse(BaseModel):
    """A benefit tier code with its display text."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    tier: BenefitTier
    details: BenefitTierDescription
