"""
validation
----------
Checks an uploaded buffer before analysis: size within limit and ZIP signature.
Also derives user-facing hints from entry names when an export has no usable data.
Never raises — returns (ok, error) or a list of hints.
"""

from .validator import export_hints, validate_upload

__all__ = ["validate_upload", "export_hints"]
