"""Freelance Tax MCP Server - FastMCP implementation for tax estimate tools."""

import json
import logging
from typing import Any

from mcp.server.fastmcp import FastMCP
from pydantic import Field, ValidationError

from freelancetax.sdk import (
    TaxRulesNotFoundError,
    estimate,
    get_available_years,
    load_tax_rules,
    parse_filing_status,
)
from freelancetax.sdk.taxes import get_state

logger = logging.getLogger(__name__)

# Initialize FastMCP server
mcp = FastMCP("freelance-tax")


# --- Tools ---

@mcp.tool()
async def estimate_tax(
    gross_income: str = Field(description="Annual gross freelance income (e.g., '100000' or '$100,000')"),
    business_expenses: str = Field(default="0", description="Deductible business expenses"),
    state: str = Field(default="CA", description="Two-letter state code; unknown states are taxed at 0"),
    filing_status: str = Field(
        default="single",
        description="single, married-jointly, married-separately or head-of-household",
    ),
    year: int | None = Field(default=None, description="Tax year (default 2025)"),
) -> dict[str, Any]:
    """Estimate self-employment, federal and state tax, quarterly payment and effective rate."""
    try:
        rules = load_tax_rules(year)
        inputs, result = estimate(gross_income, business_expenses, state, filing_status, rules=rules)
    except (TaxRulesNotFoundError, ValidationError) as e:
        logger.error(f"Error estimating tax: {e}")
        return {"error": str(e), "result": None}

    notes = []
    if get_state(inputs.state_code, rules) is None:
        notes.append(f"No state tax data for '{inputs.state_code}'; state tax assumed 0.")
    notes.append("Social Security wage base cap is not applied to self-employment tax.")

    return {
        "year": rules.year,
        "inputs": inputs.model_dump(mode="json"),
        "result": result.model_dump(mode="json"),
        "notes": notes,
    }


@mcp.tool()
async def list_states(
    year: int | None = Field(default=None, description="Tax year (default 2025)"),
) -> dict[str, Any]:
    """List states with flat income tax rates used by the estimator."""
    try:
        rules = load_tax_rules(year)
    except (TaxRulesNotFoundError, ValidationError) as e:
        logger.error(f"Error listing states: {e}")
        return {"error": str(e), "states": []}

    return {
        "year": rules.year,
        "states": [s.model_dump() for s in rules.states],
        "count": len(rules.states),
    }


@mcp.tool()
async def get_brackets(
    filing_status: str = Field(default="single", description="Filing status"),
    year: int | None = Field(default=None, description="Tax year (default 2025)"),
) -> dict[str, Any]:
    """Get federal income tax brackets for a filing status."""
    try:
        rules = load_tax_rules(year)
    except (TaxRulesNotFoundError, ValidationError) as e:
        logger.error(f"Error loading brackets: {e}")
        return {"error": str(e), "brackets": []}

    status = parse_filing_status(filing_status)
    return {
        "year": rules.year,
        "filing_status": status.value,
        "brackets": [b.model_dump() for b in rules.brackets_for(status)],
    }


# --- Resources ---

@mcp.resource("freelancetax://rules/years")
async def list_years_resource() -> str:
    """List tax years with reference data."""
    return json.dumps({"years": get_available_years()}, indent=2)


# --- Server Entry Point ---

def run_server():
    """Run the MCP server in stdio mode."""
    mcp.run(transport="stdio")


if __name__ == "__main__":
    run_server()
