"""Pydantic schemas for tax rules validation.

These schemas validate the tax_rules/*.yaml files and provide typed access
to tax parameters like the SS wage base, Safe Harbor multipliers, and
progressive brackets. Models are frozen so a loaded rule table can be
shared across calculations.
"""

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..schemas import FILING_STATUSES


class TaxBracket(BaseModel):
    """Single progressive bracket with inclusive whole-dollar bounds."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    lower_bound: float = Field(..., ge=0, description="First dollar taxed at this rate")
    upper_bound: Optional[float] = Field(
        default=None, description="Last dollar taxed at this rate (None for the top bracket)"
    )
    rate: float = Field(..., ge=0, le=1, description="Tax rate as decimal")

    @property
    def span(self) -> float:
        """Dollars of income that fit in this bracket."""
        if self.upper_bound is None:
            return float("inf")
        return self.upper_bound - self.lower_bound + 1


class FilingStatusRules(BaseModel):
    """Tax rules for a filing status (single, married filing jointly)."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    standard_deduction: float = Field(..., ge=0)
    additional_medicare_threshold: float = Field(..., ge=0)
    tax_brackets: List[TaxBracket] = Field(..., min_length=1)

    @model_validator(mode="after")
    def check_bracket_coverage(self) -> "FilingStatusRules":
        """Brackets must cover [0, inf) in order with no gaps or overlaps."""
        brackets = self.tax_brackets
        if brackets[0].lower_bound != 0:
            raise ValueError(f"first bracket must start at 0, got {brackets[0].lower_bound}")

        for current, following in zip(brackets, brackets[1:]):
            if current.upper_bound is None:
                raise ValueError("only the last bracket may omit upper_bound")
            if current.upper_bound < current.lower_bound:
                raise ValueError(
                    f"bracket upper_bound {current.upper_bound} is below lower_bound {current.lower_bound}"
                )
            if following.lower_bound != current.upper_bound + 1:
                raise ValueError(
                    f"bracket starting at {following.lower_bound} does not follow "
                    f"bracket ending at {current.upper_bound}"
                )
            if following.rate < current.rate:
                raise ValueError("bracket rates must be non-decreasing")

        if brackets[-1].upper_bound is not None:
            raise ValueError("last bracket must be unbounded (omit upper_bound)")
        return self


class SelfEmploymentRules(BaseModel):
    """Schedule SE parameters."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    earnings_factor: float = Field(default=0.9235, gt=0, le=1, description="Net earnings haircut")
    deduction_rate: float = Field(default=0.5, ge=0, le=1, description="Deductible share of SE tax")


class SocialSecurityRules(BaseModel):
    """Social Security tax rules (combined employer + employee share)."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    wage_base: float = Field(..., gt=0, description="SS wage base (max taxable)")
    tax_rate: float = Field(..., ge=0, le=1, description="SS tax rate")


class MedicareRules(BaseModel):
    """Medicare tax rules (combined employer + employee share)."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    tax_rate: float = Field(..., ge=0, le=1)
    additional_rate: float = Field(..., ge=0, le=1, description="Additional Medicare Tax (Form 8959)")


class SafeHarborRules(BaseModel):
    """Estimated tax penalty avoidance rules (Form 2210)."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    high_income_threshold: float = Field(..., ge=0, description="Prior-year AGI above which 110% applies")
    high_income_multiplier: float = Field(..., gt=0)
    standard_multiplier: float = Field(..., gt=0)
    current_year_multiplier: float = Field(..., gt=0, le=1)
    underpayment_interest_rate: float = Field(default=0.08, ge=0, le=1, description="Annual IRS underpayment rate")
    months_underpaid: int = Field(default=6, ge=0, le=12, description="Typical months a shortfall is outstanding")


class PaymentDueDate(BaseModel):
    """Estimated tax installment due date."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    label: str
    due_date: date


class TaxRules(BaseModel):
    """Complete tax rules for a year."""
    model_config = ConfigDict(extra="ignore", frozen=True)  # Allow unknown fields for forward compat

    year: int
    self_employment: SelfEmploymentRules = Field(default_factory=SelfEmploymentRules)
    social_security: SocialSecurityRules
    medicare: MedicareRules
    safe_harbor: SafeHarborRules
    payment_due_dates: List[PaymentDueDate] = Field(default_factory=list)
    single: FilingStatusRules
    married: FilingStatusRules

    def for_status(self, filing_status: str) -> FilingStatusRules:
        """Get the per-status section, e.g. rules.for_status("married")."""
        if filing_status not in FILING_STATUSES:
            raise ValueError(
                f"Invalid filing status: {filing_status}. Must be one of {', '.join(FILING_STATUSES)}."
            )
        return getattr(self, filing_status)
