"""Tax rules loading.

Rule tables are YAML files named <year>.yaml. The bundled tables ship in
taxshield/tax_rules/; settings.json "rules_dir" points at a directory of
custom tables, which is searched first.
"""

import logging
from pathlib import Path
from typing import Optional

import yaml

from ..config import get_setting
from .schemas import TaxRules

logger = logging.getLogger(__name__)


class TaxRulesNotFoundError(FileNotFoundError):
    """Raised when no rule table exists for a year."""
    pass


def get_bundled_rules_dir() -> Path:
    """Get the directory of rule tables shipped with the package."""
    return Path(__file__).parent.parent.parent / "tax_rules"  # taxes -> sdk -> taxshield


def get_rules_dirs() -> list[Path]:
    """Directories searched for rule tables, in priority order."""
    dirs = []
    custom = get_setting("rules_dir")
    if custom:
        dirs.append(Path(custom).expanduser())
    dirs.append(get_bundled_rules_dir())
    return dirs


def list_tax_years() -> list[int]:
    """Get sorted list of available tax rule years (descending)."""
    years = set()
    for rules_dir in get_rules_dirs():
        if rules_dir.is_dir():
            years.update(int(p.stem) for p in rules_dir.glob("*.yaml") if p.stem.isdigit())
    return sorted(years, reverse=True)


def find_rules_file(year: str) -> Optional[Path]:
    """Locate <year>.yaml, preferring the custom rules_dir."""
    for rules_dir in get_rules_dirs():
        candidate = rules_dir / f"{year}.yaml"
        if candidate.exists():
            return candidate
    return None


def parse_tax_rules(raw: dict) -> TaxRules:
    """Validate a raw rule mapping (as loaded from YAML)."""
    return TaxRules.model_validate(raw)


def load_tax_rules(year: str) -> TaxRules:
    """Load and validate tax rules for a specific year.

    Raises:
        TaxRulesNotFoundError: If no <year>.yaml exists
        pydantic.ValidationError: If the table is malformed
    """
    config_file = find_rules_file(str(year))
    if config_file is None:
        available = ", ".join(str(y) for y in list_tax_years()) or "none"
        raise TaxRulesNotFoundError(
            f"Tax rules file not found for year {year} (available: {available})"
        )

    logger.debug(f"loading tax rules from {config_file}")
    with open(config_file, "r") as f:
        raw = yaml.safe_load(f) or {}

    raw.setdefault("year", int(year))
    return parse_tax_rules(raw)
