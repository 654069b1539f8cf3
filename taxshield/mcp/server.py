"""Tax Shield MCP Server - FastMCP implementation for estimated tax tools."""

import json
import logging
from typing import Any

from mcp.server.fastmcp import FastMCP
from pydantic import Field, ValidationError

from taxshield.sdk import (
    TaxInputs,
    TaxRulesNotFoundError,
    generate_estimate,
    get_default_tax_year,
    list_tax_years,
    load_tax_rules,
)

logger = logging.getLogger(__name__)

# Initialize FastMCP server
mcp = FastMCP("tax-shield")


# --- Tools ---

@mcp.tool()
async def estimate_taxes(
    current_year_profit: float = Field(description="Projected net self-employment profit for the year"),
    prior_year_tax: float = Field(default=0, description="Total tax on last year's return (Form 1040 line 24)"),
    prior_year_agi: float = Field(default=0, description="Last year's adjusted gross income"),
    filing_status: str = Field(default="single", description="'single' or 'married' (filing jointly)"),
    year: str | None = Field(default=None, description="Tax year (default: configured tax year)"),
) -> dict[str, Any]:
    """Calculate the required quarterly estimated tax payment. Compares 90% of projected current-year tax with the Safe Harbor amount and returns the smaller, with full breakdown and due dates."""
    try:
        inputs = TaxInputs(
            filing_status=filing_status,
            prior_year_tax=prior_year_tax,
            prior_year_agi=prior_year_agi,
            current_year_profit=current_year_profit,
        )
        return generate_estimate(inputs, year=year or get_default_tax_year())

    except TaxRulesNotFoundError as e:
        return {"error": str(e), "result": None}
    except ValidationError as e:
        return {"error": f"Invalid input: {e}", "result": None}


@mcp.tool()
async def get_tax_rules(
    year: str | None = Field(default=None, description="Tax year (default: configured tax year)"),
) -> dict[str, Any]:
    """Get the tax rule table (brackets, SE tax rates, Safe Harbor thresholds, due dates) for a year."""
    try:
        rules = load_tax_rules(year or get_default_tax_year())
        return {"rules": rules.model_dump(mode="json")}
    except (TaxRulesNotFoundError, ValidationError) as e:
        logger.error(f"Error loading tax rules: {e}")
        return {"error": str(e), "rules": None}


# --- Resources (optional, for browsing) ---

@mcp.resource("taxshield://rules/years")
async def list_years_resource() -> str:
    """List tax years with rule tables."""
    return json.dumps({"years": list_tax_years()}, indent=2)


# --- Server Entry Point ---

def run_server():
    """Run the MCP server in stdio mode."""
    mcp.run(transport="stdio")


if __name__ == "__main__":
    run_server()
