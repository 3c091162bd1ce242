"""Tax rules loading and reference-data lookups.

Each tax year's bracket tables, state table and self-employment constants
live in tax_rules/YYYY.yaml. Swapping in another year's tables means adding
a file, not changing the engine.
"""

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Optional, Union

import yaml

from .schemas import StateInfo, TaxRules

logger = logging.getLogger(__name__)

DEFAULT_TAX_YEAR = 2025
RULES_DIR_ENV = "FREELANCE_TAX_RULES_DIR"


class TaxRulesNotFoundError(FileNotFoundError):
    """Raised when no tax rules file exists for a year."""
    pass


def get_tax_rules_dir() -> Path:
    """Get the tax_rules directory path.

    Resolution order:
    1. FREELANCE_TAX_RULES_DIR environment variable
    2. tax_rules/ shipped alongside this module
    """
    env_path = os.environ.get(RULES_DIR_ENV)
    if env_path:
        return Path(env_path)
    return Path(__file__).parent / "tax_rules"


def get_available_years() -> list[int]:
    """Get sorted list of available tax rule years (descending)."""
    rules_dir = get_tax_rules_dir()
    years = [int(p.stem) for p in rules_dir.glob("*.yaml") if p.stem.isdigit()]
    return sorted(years, reverse=True)


def load_tax_rules(year: Optional[Union[int, str]] = None) -> TaxRules:
    """Load and validate tax rules for a year from tax_rules/YYYY.yaml.

    Args:
        year: Tax year (e.g., 2025 or "2025"). Defaults to DEFAULT_TAX_YEAR.

    Returns:
        Validated, immutable TaxRules

    Raises:
        TaxRulesNotFoundError: If no file exists for the year
        pydantic.ValidationError: If the file content is malformed
    """
    if year is None:
        year = DEFAULT_TAX_YEAR
    year_str = str(year).strip()
    if not year_str.isdigit():
        raise TaxRulesNotFoundError(f"Invalid tax year: {year!r}")
    return _load_tax_rules_file(get_tax_rules_dir() / f"{year_str}.yaml")


@lru_cache(maxsize=None)
def _load_tax_rules_file(config_file: Path) -> TaxRules:
    if not config_file.exists():
        raise TaxRulesNotFoundError(f"Tax rules file not found for year {config_file.stem}: {config_file}")

    logger.debug(f"loading tax rules from {config_file}")
    with open(config_file, "r") as f:
        data = yaml.safe_load(f) or {}

    data.setdefault("year", int(config_file.stem))
    return TaxRules.model_validate(data)


def clear_rules_cache() -> None:
    """Forget previously loaded rules (used after changing the rules dir)."""
    _load_tax_rules_file.cache_clear()


def get_state(code: str, rules: TaxRules) -> Optional[StateInfo]:
    """Find a state by exact postal code, or None."""
    for state in rules.states:
        if state.code == code:
            return state
    return None


def lookup_state_rate(code: str, rules: TaxRules) -> float:
    """Flat state income tax rate for a state code.

    Unknown codes are treated as no-tax states and return 0 rather than
    raising, so an estimate can always be produced.
    """
    state = get_state(code, rules)
    if state is None:
        logger.debug(f"no state entry for {code!r}, using rate 0")
        return 0.0
    return state.rate
