"""Input normalization for the tax estimator.

Raw values from the CLI, MCP tools or any other caller pass through here
before reaching the engine. Normalization fails closed: text that is not a
number becomes 0, negatives become 0, and an unknown filing status becomes
single. Nothing in this module raises for bad user input.
"""

import logging
import math
import re
from typing import Any, Optional, Union

from .taxes.schemas import FilingStatus, TaxInputs

logger = logging.getLogger(__name__)

DEFAULT_STATE = "CA"
DEFAULT_FILING_STATUS = FilingStatus.SINGLE

_NON_NUMERIC = re.compile(r"[^0-9.\-]")
_NON_DIGIT = re.compile(r"[^0-9]")
_LEADING_NUMBER = re.compile(r"^-?(\d+\.?\d*|\.\d+)")

FILING_STATUS_ALIASES = {
    "mfj": FilingStatus.MARRIED_JOINTLY,
    "mfs": FilingStatus.MARRIED_SEPARATELY,
    "hoh": FilingStatus.HEAD_OF_HOUSEHOLD,
    "married_jointly": FilingStatus.MARRIED_JOINTLY,
    "married_separately": FilingStatus.MARRIED_SEPARATELY,
    "head_of_household": FilingStatus.HEAD_OF_HOUSEHOLD,
}


def parse_currency(value: Union[str, int, float, None]) -> float:
    """Parse user-entered currency into a non-negative amount.

    Formatting characters ($, commas, spaces) are stripped, and the leading
    number of what remains is used. Unparseable or negative input gives 0.

    Examples:
        "$1,234.50" -> 1234.5
        "abc"       -> 0.0
        "-50"       -> 0.0
    """
    if value is None or isinstance(value, bool):
        return 0.0

    if isinstance(value, (int, float)):
        try:
            parsed = float(value)
        except OverflowError:
            return 0.0
    else:
        cleaned = _NON_NUMERIC.sub("", str(value))
        match = _LEADING_NUMBER.match(cleaned)
        if not match:
            return 0.0
        parsed = float(match.group(0))

    if not math.isfinite(parsed):
        return 0.0
    return max(0.0, parsed)


def format_currency_input(value: str) -> str:
    """Reformat text typed into an amount field as whole dollars with commas.

    Example: "12345.67" -> "1,234,567", "" -> ""
    """
    digits = _NON_DIGIT.sub("", value or "")
    if not digits:
        return ""
    return f"{int(digits):,}"


def parse_filing_status(value: Any) -> FilingStatus:
    """Parse a filing status, falling back to single for unknown values."""
    if isinstance(value, FilingStatus):
        return value
    if value is None:
        return DEFAULT_FILING_STATUS

    key = str(value).strip().lower()
    if key in FILING_STATUS_ALIASES:
        return FILING_STATUS_ALIASES[key]
    try:
        return FilingStatus(key)
    except ValueError:
        logger.warning(f"unknown filing status {value!r}, using {DEFAULT_FILING_STATUS.value}")
        return DEFAULT_FILING_STATUS


def normalize_state_code(value: Optional[str]) -> str:
    """Upper-case and trim a state code. Empty input stays empty."""
    return (value or "").strip().upper()


def normalize_inputs(
    gross_income: Union[str, float, None],
    business_expenses: Union[str, float, None] = None,
    state: Optional[str] = DEFAULT_STATE,
    filing_status: Any = DEFAULT_FILING_STATUS,
) -> TaxInputs:
    """Build engine inputs from raw user values."""
    return TaxInputs(
        gross_income=parse_currency(gross_income),
        business_expenses=parse_currency(business_expenses),
        state_code=normalize_state_code(state),
        filing_status=parse_filing_status(filing_status),
    )
