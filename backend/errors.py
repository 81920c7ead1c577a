"""
errors.py
---------
Error kinds raised by the analysis pipeline.

Only archive-level and zero-result conditions reach the HTTP layer. Messages
are user-facing and never carry usernames or file contents.
"""


class AnalysisError(ValueError):
    """Base for failures reported back to the uploader."""

    status = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidArchive(AnalysisError):
    """Upload is not a readable ZIP (bad magic bytes or corrupt structure)."""

    BAD_FORMAT = "Invalid file format. Please upload a valid ZIP file."
    UNREADABLE = "Failed to read ZIP file. Please ensure it's a valid ZIP archive."


class NoDataFound(AnalysisError):
    """Archive parsed, but no following or no followers were extracted."""

    def __init__(self, kind: str, reasons: list[str] | None = None):
        super().__init__(f"No {kind} data found. Please upload a valid Instagram data export.")
        self.kind = kind
        self.reasons = reasons or []


class PayloadTooLarge(AnalysisError):
    status = 413

    def __init__(self, max_bytes: int):
        mb = max_bytes / (1024 * 1024)
        super().__init__(f"File too large. Maximum size is {mb:.0f}MB.")
        self.max_bytes = max_bytes


class EntryReadError(Exception):
    """A single archive member could not be read. Recovered by skipping it."""
