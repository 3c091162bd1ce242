"""Pydantic schemas for tax rules, estimator inputs and results.

These schemas validate the tax_rules/*.yaml files and provide typed access
to bracket tables, state rates and self-employment constants. Reference data
and results are frozen so a loaded rules object can be shared between calls.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class FilingStatus(str, Enum):
    """Filing status; selects which bracket table applies."""

    SINGLE = "single"
    MARRIED_JOINTLY = "married-jointly"
    MARRIED_SEPARATELY = "married-separately"
    HEAD_OF_HOUSEHOLD = "head-of-household"

    @property
    def label(self) -> str:
        return _STATUS_LABELS[self]


_STATUS_LABELS = {
    FilingStatus.SINGLE: "Single",
    FilingStatus.MARRIED_JOINTLY: "Married Filing Jointly",
    FilingStatus.MARRIED_SEPARATELY: "Married Filing Separately",
    FilingStatus.HEAD_OF_HOUSEHOLD: "Head of Household",
}


class TaxBracket(BaseModel):
    """Single tax bracket entry."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    lower_bound: float = Field(..., ge=0, description="First dollar taxed at this rate")
    upper_bound: Optional[float] = Field(default=None, description="Last dollar in bracket (None if unbounded)")
    rate: float = Field(..., ge=0, le=1, description="Marginal tax rate as decimal")

    @model_validator(mode="after")
    def check_bounds(self) -> "TaxBracket":
        if self.upper_bound is not None and self.upper_bound < self.lower_bound:
            raise ValueError(
                f"upper_bound ({self.upper_bound}) is below lower_bound ({self.lower_bound})"
            )
        return self


class StateInfo(BaseModel):
    """Flat-rate approximation of a state's income tax."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    code: str = Field(..., min_length=1, description="Postal code (e.g., 'CA')")
    name: str = Field(..., description="Display name")
    rate: float = Field(default=0, ge=0, le=1, description="Flat income tax rate as decimal")


class SelfEmploymentRules(BaseModel):
    """Self-employment (Social Security + Medicare) tax constants.

    No Social Security wage base cap is modeled: the full SE base is taxed
    at the combined rate regardless of income.
    """
    model_config = ConfigDict(extra="forbid", frozen=True)

    taxable_fraction: float = Field(default=0.9235, gt=0, le=1, description="Share of net earnings subject to SE tax")
    tax_rate: float = Field(default=0.153, ge=0, le=1, description="Combined SS + Medicare rate")
    deductible_fraction: float = Field(default=0.5, ge=0, le=1, description="Share of SE tax deducted before income tax")


def check_bracket_table(brackets: list[TaxBracket]) -> list[TaxBracket]:
    """Validate that a bracket table is contiguous and covers [0, infinity).

    Each bracket starts one unit above the previous bracket's upper bound,
    the first starts at 0, and only the last is unbounded.
    """
    if not brackets:
        raise ValueError("bracket table is empty")

    if brackets[0].lower_bound != 0:
        raise ValueError(f"first bracket must start at 0, not {brackets[0].lower_bound}")

    for previous, current in zip(brackets, brackets[1:]):
        if previous.upper_bound is None:
            raise ValueError("only the last bracket may be unbounded")
        if current.lower_bound != previous.upper_bound + 1:
            raise ValueError(
                f"bracket starting at {current.lower_bound} does not follow "
                f"bracket ending at {previous.upper_bound}"
            )

    if brackets[-1].upper_bound is not None:
        raise ValueError("last bracket must be unbounded (upper_bound: null)")

    return brackets


class TaxRules(BaseModel):
    """Complete reference data for one tax year."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    year: int = Field(..., ge=1913)
    brackets: dict[FilingStatus, list[TaxBracket]]
    states: list[StateInfo] = Field(default_factory=list)
    self_employment: SelfEmploymentRules = Field(default_factory=SelfEmploymentRules)

    @model_validator(mode="after")
    def check_tables(self) -> "TaxRules":
        missing = [s.value for s in FilingStatus if s not in self.brackets]
        if missing:
            raise ValueError(f"missing bracket tables for: {', '.join(missing)}")

        for status, table in self.brackets.items():
            try:
                check_bracket_table(table)
            except ValueError as e:
                raise ValueError(f"{status.value}: {e}") from e

        codes = [s.code for s in self.states]
        duplicates = sorted({c for c in codes if codes.count(c) > 1})
        if duplicates:
            raise ValueError(f"duplicate state codes: {', '.join(duplicates)}")
        return self

    def brackets_for(self, status: FilingStatus) -> list[TaxBracket]:
        """Bracket table for a filing status."""
        return self.brackets[FilingStatus(status)]


class TaxInputs(BaseModel):
    """Already-normalized estimator inputs."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    gross_income: float = Field(default=0, ge=0, allow_inf_nan=False, description="Gross freelance income")
    business_expenses: float = Field(default=0, ge=0, allow_inf_nan=False, description="Deductible business expenses")
    state_code: str = Field(default="", description="State postal code; unknown codes are taxed at 0")
    filing_status: FilingStatus = Field(default=FilingStatus.SINGLE)


class TaxResult(BaseModel):
    """Computed tax estimate.

    total_tax is the cent-rounded sum of the three cent-rounded components;
    quarterly_payment is total_tax / 4 rounded to cents. effective_rate is a
    percentage left unrounded. take_home is gross minus raw expenses minus
    total_tax, so it is not derived from net_income.
    """
    model_config = ConfigDict(extra="forbid", frozen=True)

    net_income: float = 0
    self_employment_tax: float = 0
    se_tax_deduction: float = 0
    taxable_income: float = 0
    federal_tax: float = 0
    state_tax: float = 0
    total_tax: float = 0
    quarterly_payment: float = 0
    effective_rate: float = Field(default=0, ge=0, description="Total tax / gross income, in percent")
    take_home: float = 0

    @classmethod
    def zero(cls) -> "TaxResult":
        """Result for no net income: every field is zero."""
        return cls()
