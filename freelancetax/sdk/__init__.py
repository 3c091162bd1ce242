"""Freelance Tax SDK - Core functionality for freelance tax estimates."""

from .config import (
    get_config_dir,
    get_settings_path,
    load_settings,
    save_settings,
    get_setting,
    set_setting,
    unset_setting,
    validate_setting,
    get_defaults,
    SettingsError,
    SETTING_KEYS,
)

from .taxes import (
    FilingStatus,
    TaxInputs,
    TaxResult,
    TaxRules,
    TaxRulesNotFoundError,
    DEFAULT_TAX_YEAR,
    load_tax_rules,
    get_available_years,
    compute_tax_result,
)

from .inputs import (
    parse_currency,
    parse_filing_status,
    format_currency_input,
    normalize_inputs,
)

from .display import (
    format_currency,
    format_percent,
    DisplayTransition,
    result_rows,
)

from .estimator import estimate

__all__ = [
    # Config
    "get_config_dir",
    "get_settings_path",
    "load_settings",
    "save_settings",
    "get_setting",
    "set_setting",
    "unset_setting",
    "validate_setting",
    "get_defaults",
    "SettingsError",
    "SETTING_KEYS",
    # Taxes
    "FilingStatus",
    "TaxInputs",
    "TaxResult",
    "TaxRules",
    "TaxRulesNotFoundError",
    "DEFAULT_TAX_YEAR",
    "load_tax_rules",
    "get_available_years",
    "compute_tax_result",
    # Inputs
    "parse_currency",
    "parse_filing_status",
    "format_currency_input",
    "normalize_inputs",
    # Display
    "format_currency",
    "format_percent",
    "DisplayTransition",
    "result_rows",
    # Estimate
    "estimate",
]
