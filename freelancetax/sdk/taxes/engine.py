"""Self-employment tax estimate calculations.

Pure functions: every call recomputes a full TaxResult from its inputs and
the reference data passed in. Nothing here keeps state between calls.
"""

import logging
import math
from typing import Optional

from .rules import load_tax_rules, lookup_state_rate
from .schemas import SelfEmploymentRules, TaxBracket, TaxInputs, TaxResult, TaxRules

logger = logging.getLogger(__name__)


def round_cents(amount: float) -> float:
    """Round to 2 decimal places, halves rounding up.

    Amounts too large to scale by 100 are returned unchanged.

    Example: 12716.595 -> 12716.60, -2.345 -> -2.34
    """
    scaled = amount * 100
    if not math.isfinite(scaled):
        return amount
    return math.floor(scaled + 0.5) / 100


def compute_federal_tax(taxable_income: float, brackets: list[TaxBracket]) -> float:
    """Calculate federal income tax with progressive brackets.

    Only the slice of income inside each bracket is taxed at that bracket's
    rate. Slices are cut at each bracket's upper bound; the unbounded top
    bracket ends at the income itself. The total is rounded once, at the end.
    """
    tax_owed = 0.0
    previous_bracket_max = -1.0

    for bracket in brackets:
        bracket_max = taxable_income if bracket.upper_bound is None else bracket.upper_bound

        if taxable_income > previous_bracket_max:
            if previous_bracket_max < 0:
                bracket_start = previous_bracket_max + 1
            else:
                bracket_start = previous_bracket_max
            income_in_this_bracket = min(taxable_income, bracket_max) - bracket_start
            if income_in_this_bracket > 0:
                tax_owed += income_in_this_bracket * bracket.rate

        previous_bracket_max = bracket_max

    return round_cents(tax_owed)


def compute_self_employment_tax(
    net_income: float,
    rules: Optional[SelfEmploymentRules] = None,
) -> tuple[float, float]:
    """Calculate self-employment tax and its deductible half.

    SE tax is 15.3% of 92.35% of net earnings. The Social Security wage
    base cap is not applied.

    Returns:
        Tuple of (se_tax, se_deduction), both rounded to cents
    """
    if rules is None:
        rules = SelfEmploymentRules()

    se_taxable = net_income * rules.taxable_fraction
    se_tax = round_cents(se_taxable * rules.tax_rate)
    se_deduction = round_cents(se_tax * rules.deductible_fraction)
    return se_tax, se_deduction


def compute_tax_result(inputs: TaxInputs, rules: Optional[TaxRules] = None) -> TaxResult:
    """Compute a complete tax estimate.

    Args:
        inputs: Normalized inputs (non-negative amounts)
        rules: Reference data for the tax year. When omitted, the
            DEFAULT_TAX_YEAR rules are loaded from disk (cached after the
            first read); pass rules to keep the call free of file access.

    Returns:
        TaxResult. All-zero when expenses meet or exceed gross income.
    """
    if rules is None:
        rules = load_tax_rules()

    gross = inputs.gross_income
    expenses = inputs.business_expenses

    net_income = max(0, gross - expenses)
    if net_income <= 0:
        return TaxResult.zero()

    se_tax, se_deduction = compute_self_employment_tax(net_income, rules.self_employment)
    taxable_income = max(0, net_income - se_deduction)

    federal_tax = compute_federal_tax(taxable_income, rules.brackets_for(inputs.filing_status))

    state_rate = lookup_state_rate(inputs.state_code, rules)
    state_tax = round_cents(net_income * state_rate)

    total_tax = round_cents(se_tax + federal_tax + state_tax)
    quarterly_payment = round_cents(total_tax / 4)
    effective_rate = (total_tax / gross) * 100 if gross > 0 else 0

    # Uses raw expenses, not net_income
    take_home = round_cents(gross - expenses - total_tax)

    logger.debug(
        f"estimate {rules.year} {inputs.filing_status.value}/{inputs.state_code}: "
        f"net={net_income:.2f} se={se_tax:.2f} fed={federal_tax:.2f} "
        f"state={state_tax:.2f} total={total_tax:.2f}"
    )

    return TaxResult(
        net_income=round_cents(net_income),
        self_employment_tax=se_tax,
        se_tax_deduction=se_deduction,
        taxable_income=round_cents(taxable_income),
        federal_tax=federal_tax,
        state_tax=state_tax,
        total_tax=total_tax,
        quarterly_payment=quarterly_payment,
        effective_rate=effective_rate,
        take_home=take_home,
    )
