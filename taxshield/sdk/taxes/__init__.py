"""taxes - Estimated tax rules and calculation.

Scope:
- Year-specific rule tables (brackets, SE tax, Safe Harbor thresholds)
- Self-employment tax (Schedule SE)
- Progressive federal income tax
- Safe Harbor comparison and quarterly payment

Constraints:
- Pure calculation - no settings, no saved inputs, no I/O beyond rule loading
- Year-specific rules loaded from tax_rules/{year}.yaml

Modules:
- schemas: Pydantic models for rule tables
- rules: Rule table discovery and loading
- estimate: The calculation functions

Usage:
    from taxshield.sdk.taxes import calculate_taxes, load_tax_rules

    rules = load_tax_rules("2026")
    result = calculate_taxes(TaxInputs(current_year_profit=120000), rules)
"""

# Tax rules schemas
from .schemas import (
    TaxRules,
    TaxBracket,
    FilingStatusRules,
)

# Tax rules loading
from .rules import (
    load_tax_rules,
    parse_tax_rules,
    list_tax_years,
    TaxRulesNotFoundError,
)

# Calculations
from .estimate import (
    compute_se_tax,
    compute_income_tax,
    compute_safe_harbor,
    calculate_taxes,
)

__all__ = [
    # Rules
    "TaxRules",
    "TaxBracket",
    "FilingStatusRules",
    "load_tax_rules",
    "parse_tax_rules",
    "list_tax_years",
    "TaxRulesNotFoundError",
    # Calculations
    "compute_se_tax",
    "compute_income_tax",
    "compute_safe_harbor",
    "calculate_taxes",
]
