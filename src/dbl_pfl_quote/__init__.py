# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""NY Disability Benefits Law and Paid Family Leave quote engine."""

from .services.formatting import describe_benefit_tier, format_currency
from .services.quote_engine import (
    QuoteEngine,
    calculate_quote,
    calculate_quote_with_estimate,
)

__version__ = "0.1.0"

__all__ = [
    "QuoteEngine",
    "calculate_quote",
    "calculate_quote_with_estimate",
    "describe_benefit_tier",
    "format_currency",
]
