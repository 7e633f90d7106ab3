"""Quote preview API endpoints.

The wizard calls these on every field change, so they only ever compute:
nothing is stored and no request is rejected for incomplete answers.
"""

from beartype import beartype
from fastapi import APIRouter, Depends, Query

from ...core.config import Settings
from ...models.quote import QuoteResult
from ...schemas.quote import FormattedQuote, QuoteFormRequest, QuoteResponse
from ...services.formatting import format_currency
from ...services.quote_engine import QuoteEngine
from ..dependencies import get_app_settings, get_engine

router = APIRouter(prefix="/quotes", tags=["quotes"])


@beartype
def build_quote_response(quote: QuoteResult, settings: Settings) -> QuoteResponse:
    """Attach display strings to a quote."""
    symbol = settings.currency_symbol
    per_employee = quote.per_employee_breakdown
    return QuoteResponse(
        quote=quote,
        formatted=FormattedQuote(
            display_amount=format_currency(quote.display_amount, symbol),
            dbl_premium=format_currency(quote.breakdown.dbl_premium, symbol),
            pfl_premium=format_currency(quote.breakdown.pfl_premium, symbol),
            optional_cost=format_currency(quote.breakdown.optional_cost, symbol),
            total_per_employee=(
                format_currency(per_employee.total_per_employee, symbol)
                if per_employee is not None
                else None
            ),
        ),
    )


@router.post("/calculate", response_model=QuoteResponse)
@beartype
async def calculate_quote(
    form: QuoteFormRequest,
    include_per_employee: bool = Query(True, alias="perEmployee"),
    engine: QuoteEngine = Depends(get_engine),
    settings: Settings = Depends(get_app_settings),
) -> QuoteResponse:
    """Price a quote from the wizard's current answers."""
    quote = engine.calculate(
        form.to_form_data(), include_per_employee=include_per_employee
    )
    return build_quote_response(quote, settings)


@router.post("/estimate", response_model=QuoteResponse)
@beartype
async def estimate_quote(
    form: QuoteFormRequest,
    male_ratio: float | None = Query(None, ge=0.0, le=1.0, alias="maleRatio"),
    include_per_employee: bool = Query(True, alias="perEmployee"),
    engine: QuoteEngine = Depends(get_engine),
    settings: Settings = Depends(get_app_settings),
) -> QuoteResponse:
    """Price a quote from a total headcount with an assumed gender split."""
    quote = engine.calculate_with_estimate(
        form.to_form_data(),
        male_ratio,
        include_per_employee=include_per_employee,
    )
    return build_quote_response(quote, settings)
