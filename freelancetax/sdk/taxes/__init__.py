"""taxes - Self-employment, federal and state tax estimate logic.

Scope:
- Federal income tax from progressive brackets
- Self-employment tax (15.3% of 92.35% of net earnings) and its deduction
- Flat-rate state income tax approximation
- Aggregation into total, quarterly payment, effective rate, take-home

Constraints:
- Pure calculation - no settings or I/O besides loading reference data
- Receives normalized inputs, returns results (see sdk.inputs for parsing)
- Year-specific rules loaded from tax_rules/{year}.yaml

Modules:
- engine: round_cents, federal/SE tax, compute_tax_result
- rules: tax rules loading (load_tax_rules) and state lookups
- schemas: FilingStatus, TaxRules, TaxInputs, TaxResult

Usage:
    from freelancetax.sdk.taxes import compute_tax_result, load_tax_rules, TaxInputs

    rules = load_tax_rules(2025)
    result = compute_tax_result(
        TaxInputs(gross_income=100000, business_expenses=10000, state_code="CA"),
        rules,
    )
"""

from .engine import (
    round_cents,
    compute_federal_tax,
    compute_self_employment_tax,
    compute_tax_result,
)

from .rules import (
    DEFAULT_TAX_YEAR,
    TaxRulesNotFoundError,
    get_tax_rules_dir,
    get_available_years,
    load_tax_rules,
    clear_rules_cache,
    get_state,
    lookup_state_rate,
)

from .schemas import (
    FilingStatus,
    TaxBracket,
    StateInfo,
    SelfEmploymentRules,
    TaxRules,
    TaxInputs,
    TaxResult,
    check_bracket_table,
)

__all__ = [
    # Engine
    "round_cents",
    "compute_federal_tax",
    "compute_self_employment_tax",
    "compute_tax_result",
    # Rules
    "DEFAULT_TAX_YEAR",
    "TaxRulesNotFoundError",
    "get_tax_rules_dir",
    "get_available_years",
    "load_tax_rules",
    "clear_rules_cache",
    "get_state",
    "lookup_state_rate",
    # Schemas
    "FilingStatus",
    "TaxBracket",
    "StateInfo",
    "SelfEmploymentRules",
    "TaxRules",
    "TaxInputs",
    "TaxResult",
    "check_bracket_table",
]
