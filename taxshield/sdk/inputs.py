"""Saved calculator inputs.

The four raw form fields are kept between sessions, one key per field,
as the text the user typed (not parsed numbers, not results). Callers
get a store injected; the tax engine never reads it.

Keys:
- filingStatus: 'single' or 'married' (default 'single')
- priorYearTax, priorYearAGI, currentYearProfit: raw text (default '')
"""

import json
import logging
from pathlib import Path
from typing import Dict, Optional

from .config import get_data_path
from .formatting import parse_currency
from .schemas import FILING_STATUSES, TaxInputs

logger = logging.getLogger(__name__)

INPUTS_FILENAME = "inputs.json"

INPUT_DEFAULTS: Dict[str, str] = {
    "filingStatus": "single",
    "priorYearTax": "",
    "priorYearAGI": "",
    "currentYearProfit": "",
}


class InputStore:
    """Key-value store for raw input fields, held in memory."""

    def __init__(self, values: Optional[Dict[str, str]] = None):
        self._values: Dict[str, str] = {}
        for key, value in (values or {}).items():
            self._check_key(key)
            self._values[key] = value

    @staticmethod
    def _check_key(key: str) -> None:
        if key not in INPUT_DEFAULTS:
            raise KeyError(f"Unknown input field: {key}. Must be one of {', '.join(INPUT_DEFAULTS)}.")

    def _persist(self) -> None:
        """Hook for subclasses that write through to storage."""
        pass

    def get(self, key: str) -> str:
        """Read a field, falling back to its default."""
        self._check_key(key)
        return self._values.get(key, INPUT_DEFAULTS[key])

    def set(self, key: str, value: str) -> None:
        """Write a field."""
        self._check_key(key)
        if key == "filingStatus" and value not in FILING_STATUSES:
            raise ValueError(f"Invalid filing status: {value}. Must be one of {', '.join(FILING_STATUSES)}.")
        self._values[key] = str(value)
        self._persist()

    def clear(self) -> None:
        """Remove every saved field; reads return defaults afterwards."""
        self._values.clear()
        self._persist()

    def items(self) -> Dict[str, str]:
        """All fields with defaults applied."""
        return {key: self.get(key) for key in INPUT_DEFAULTS}

    def is_saved(self, key: str) -> bool:
        self._check_key(key)
        return key in self._values

    def to_tax_inputs(self) -> TaxInputs:
        """Parse the saved text into engine inputs (unparseable -> 0)."""
        return TaxInputs(
            filing_status=self.get("filingStatus"),
            prior_year_tax=parse_currency(self.get("priorYearTax")),
            prior_year_agi=parse_currency(self.get("priorYearAGI")),
            current_year_profit=parse_currency(self.get("currentYearProfit")),
        )


class FileInputStore(InputStore):
    """InputStore persisted to a JSON file.

    Defaults to inputs.json in the data directory.
    """

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path else get_data_path() / INPUTS_FILENAME
        values = {}
        if self.path.exists():
            with open(self.path, "r") as f:
                stored = json.load(f)
            # Ignore fields written by other versions
            values = {k: str(v) for k, v in stored.items() if k in INPUT_DEFAULTS}
        super().__init__(values)

    def _persist(self) -> None:
        if not self._values:
            if self.path.exists():
                self.path.unlink()
                logger.debug(f"removed saved inputs: {self.path}")
            return

        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w") as f:
            json.dump(self._values, f, indent=2)
