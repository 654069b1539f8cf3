"""Tax Shield - Quarterly estimated tax calculator for the self-employed."""

__version__ = "0.3.0"
