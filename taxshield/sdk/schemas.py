"""Pydantic schemas for estimate inputs and results.

All schemas are frozen value records: built once per calculation and
never mutated afterwards.
"""

from datetime import date
from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


FilingStatus = Literal["single", "married"]

FILING_STATUSES = ("single", "married")


class TaxInputs(BaseModel):
    """The four figures a filer enters."""

    model_config = ConfigDict(extra="forbid", frozen=True, allow_inf_nan=False)

    filing_status: FilingStatus = Field(default="single", description="single or married (filing jointly)")
    prior_year_tax: float = Field(default=0, description="Total tax on last year's return (Form 1040 line 24)")
    prior_year_agi: float = Field(default=0, description="Last year's adjusted gross income (Form 1040 line 11)")
    current_year_profit: float = Field(default=0, description="Projected net self-employment profit")

    @field_validator("prior_year_tax", "prior_year_agi", "current_year_profit")
    @classmethod
    def clamp_negative(cls, value: float) -> float:
        """Negative amounts are treated as zero income."""
        return max(0.0, value)


class SelfEmploymentBreakdown(BaseModel):
    """Schedule SE result."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    social_security_tax: float
    medicare_tax: float
    additional_medicare_tax: float
    total_se_tax: float
    se_tax_deduction: float


class BracketDetail(BaseModel):
    """Income taxed within one marginal bracket."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    rate: float
    taxable_at_rate: float
    tax_at_rate: float


class IncomeTaxBreakdown(BaseModel):
    """Federal income tax with per-bracket detail (ascending rate)."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    taxable_income: float
    federal_income_tax: float
    bracket_details: List[BracketDetail] = Field(default_factory=list)


class SafeHarborResult(BaseModel):
    """Prior-year Safe Harbor minimum."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    safe_harbor_minimum: float
    multiplier: float


class TaxResult(BaseModel):
    """Full estimate: current-year projection vs Safe Harbor."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    # Current year
    self_employment_tax: SelfEmploymentBreakdown
    income_tax: IncomeTaxBreakdown
    current_year_total_tax: float
    current_year_avoidance_minimum: float

    # Safe Harbor
    safe_harbor_multiplier: float
    safe_harbor_minimum: float

    # Final
    required_annual_payment: float
    quarterly_payment: float

    is_current_year_lower: bool
    savings: float = Field(..., ge=0)


class QuarterlyPayment(BaseModel):
    """One installment of the payment schedule."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    label: str
    due_date: date
    amount: float


class PenaltyComparison(BaseModel):
    """What paying the Safe Harbor amount protects against."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    worst_case_underpayment: float = Field(..., ge=0)
    potential_penalty: float = Field(..., ge=0)
    cash_flow_savings: float = Field(..., ge=0)
