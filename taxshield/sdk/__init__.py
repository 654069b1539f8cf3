"""Tax Shield SDK - Core functionality for estimated tax payments."""

from .config import (
    get_config_dir,
    get_settings_path,
    load_settings,
    save_settings,
    get_setting,
    set_setting,
    clear_setting,
    get_default_tax_year,
    get_data_path,
    DEFAULT_TAX_YEAR,
)

from .schemas import (
    FilingStatus,
    FILING_STATUSES,
    TaxInputs,
    SelfEmploymentBreakdown,
    BracketDetail,
    IncomeTaxBreakdown,
    SafeHarborResult,
    TaxResult,
    QuarterlyPayment,
    PenaltyComparison,
)

from .taxes import (
    TaxRules,
    load_tax_rules,
    list_tax_years,
    TaxRulesNotFoundError,
    compute_se_tax,
    compute_income_tax,
    compute_safe_harbor,
    calculate_taxes,
)

from .formatting import (
    format_currency,
    format_currency_with_cents,
    format_percentage,
    parse_currency,
    parse_amount,
    ParsedAmount,
)

from .inputs import (
    InputStore,
    FileInputStore,
    INPUT_DEFAULTS,
)

from . import newsletter

from .report import (
    generate_estimate,
    result_to_dict,
    recommended_method,
    payment_schedule,
    penalty_comparison,
    write_estimate_csv,
)

__all__ = [
    # Config
    "get_config_dir",
    "get_settings_path",
    "load_settings",
    "save_settings",
    "get_setting",
    "set_setting",
    "clear_setting",
    "get_default_tax_year",
    "get_data_path",
    "DEFAULT_TAX_YEAR",
    # Schemas
    "FilingStatus",
    "FILING_STATUSES",
    "TaxInputs",
    "SelfEmploymentBreakdown",
    "BracketDetail",
    "IncomeTaxBreakdown",
    "SafeHarborResult",
    "TaxResult",
    "QuarterlyPayment",
    "PenaltyComparison",
    # Taxes
    "TaxRules",
    "load_tax_rules",
    "list_tax_years",
    "TaxRulesNotFoundError",
    "compute_se_tax",
    "compute_income_tax",
    "compute_safe_harbor",
    "calculate_taxes",
    # Formatting
    "format_currency",
    "format_currency_with_cents",
    "format_percentage",
    "parse_currency",
    "parse_amount",
    "ParsedAmount",
    # Saved inputs
    "InputStore",
    "FileInputStore",
    "INPUT_DEFAULTS",
    # Output
    "generate_estimate",
    "result_to_dict",
    "recommended_method",
    "payment_schedule",
    "penalty_comparison",
    "write_estimate_csv",
]
