"""One-call estimate from raw user values.

Normalizes raw inputs, loads the year's rules and runs the engine. This is
the entry point used by the CLI and the MCP server.
"""

from typing import Any, Optional, Union

from .inputs import DEFAULT_FILING_STATUS, DEFAULT_STATE, normalize_inputs
from .taxes.engine import compute_tax_result
from .taxes.rules import load_tax_rules
from .taxes.schemas import TaxInputs, TaxResult, TaxRules


def estimate(
    gross_income: Union[str, float, None],
    business_expenses: Union[str, float, None] = None,
    state: Optional[str] = DEFAULT_STATE,
    filing_status: Any = DEFAULT_FILING_STATUS,
    year: Optional[Union[int, str]] = None,
    rules: Optional[TaxRules] = None,
) -> tuple[TaxInputs, TaxResult]:
    """Estimate taxes for raw (possibly formatted) user values.

    Args:
        year: Tax year to load rules for (ignored when rules is given)
        rules: Already-loaded rules to use instead of loading by year

    Returns:
        Tuple of (normalized inputs, result)

    Raises:
        TaxRulesNotFoundError: If rules are not given and none exist for the year
    """
    if rules is None:
        rules = load_tax_rules(year)
    inputs = normalize_inputs(gross_income, business_expenses, state, filing_status)
    return inputs, compute_tax_result(inputs, rules)
