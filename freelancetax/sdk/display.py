"""Presentation helpers for tax estimates.

Formatting plus the eased transition used when a displayed amount moves
toward a new estimate. Transitions are immutable snapshots: they hold only
what the display needs (start value, target, start time) and read results
from the engine without sharing any state with it.
"""

from typing import Literal, NamedTuple

from pydantic import BaseModel, ConfigDict, Field

from .taxes.schemas import TaxResult

TRANSITION_SECONDS = 0.5


def format_currency(value: float) -> str:
    """Format as US dollars with cents, e.g. 1234.5 -> '$1,234.50'."""
    if value < 0:
        return f"-${-value:,.2f}"
    return f"${value:,.2f}"


def format_percent(value: float) -> str:
    """Format a percentage with two decimals, e.g. 34.40177 -> '34.40%'."""
    return f"{value:.2f}%"


def ease_out_cubic(progress: float) -> float:
    """Cubic ease-out curve; progress is clamped to [0, 1]."""
    progress = min(max(progress, 0.0), 1.0)
    return 1 - (1 - progress) ** 3


class DisplayTransition(BaseModel):
    """Eased move of one displayed value toward a target."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    start_value: float = Field(..., description="Value displayed when the transition began")
    target_value: float = Field(..., description="Value the display settles on")
    started_at: float = Field(..., description="Start time in seconds (any monotonic clock)")
    duration: float = Field(default=TRANSITION_SECONDS, gt=0, description="Length in seconds")

    @classmethod
    def settled(cls, value: float, now: float = 0.0) -> "DisplayTransition":
        """A transition that is already at rest on value."""
        return cls(start_value=value, target_value=value, started_at=now)

    def progress(self, now: float) -> float:
        return min(max((now - self.started_at) / self.duration, 0.0), 1.0)

    def value_at(self, now: float) -> float:
        """Displayed value at time now."""
        progress = self.progress(now)
        if progress >= 1:
            return self.target_value
        eased = ease_out_cubic(progress)
        return self.start_value + (self.target_value - self.start_value) * eased

    def done(self, now: float) -> bool:
        return self.start_value == self.target_value or self.progress(now) >= 1

    def retarget(self, target_value: float, now: float) -> "DisplayTransition":
        """Start moving toward a new target from whatever is displayed now.

        The current transition is abandoned. Retargeting to the same target
        leaves the transition unchanged.
        """
        if target_value == self.target_value:
            return self
        return DisplayTransition(
            start_value=self.value_at(now),
            target_value=target_value,
            started_at=now,
            duration=self.duration,
        )


class ResultRow(NamedTuple):
    label: str
    field: str
    kind: Literal["currency", "deduction", "percent"]


RESULT_ROWS = [
    ResultRow("Net Business Income", "net_income", "currency"),
    ResultRow("Self-Employment Tax", "self_employment_tax", "currency"),
    ResultRow("SE Tax Deduction (50%)", "se_tax_deduction", "deduction"),
    ResultRow("Taxable Income (for Federal)", "taxable_income", "currency"),
    ResultRow("Federal Income Tax", "federal_tax", "currency"),
    ResultRow("State Income Tax", "state_tax", "currency"),
    ResultRow("Total Estimated Tax Liability", "total_tax", "currency"),
    ResultRow("Quarterly Estimated Payment", "quarterly_payment", "currency"),
    ResultRow("Effective Tax Rate", "effective_rate", "percent"),
    ResultRow("Estimated Take-Home Income", "take_home", "currency"),
]


def format_value(value: float, kind: str) -> str:
    if kind == "percent":
        return format_percent(value)
    if kind == "deduction":
        return f"-{format_currency(value)}"
    return format_currency(value)


def result_rows(result: TaxResult) -> list[tuple[str, str]]:
    """Breakdown rows in display order as (label, formatted value)."""
    return [
        (row.label, format_value(getattr(result, row.field), row.kind))
        for row in RESULT_ROWS
    ]
