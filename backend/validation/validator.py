"""
validator.py
-----------
Upload preconditions and export-layout hints.

validate_upload() checks size and the ZIP signature on the raw bytes, before any
parsing. export_hints() looks only at entry names and explains the common ways
an export ends up without usable followers/following data.
"""

from archive_reader import has_zip_magic
from errors import AnalysisError, InvalidArchive, PayloadTooLarge

CONNECTIONS_DIR = "connections"
CONVENTIONAL_SUBDIR = "connections/followers_and_following"


def _normalize(name: str) -> str:
    return name.lstrip("/").replace("\\", "/")


def _files_in_subdir(names: list[str], subdir: str) -> list[str]:
    subdir = subdir.rstrip("/") + "/"
    out = []
    for n in names:
        lower = n.lower()
        idx = lower.find(subdir)
        if idx == -1 or n.endswith("/"):
            continue
        if "/" in lower[idx + len(subdir):]:
            continue
        out.append(n)
    return out


def _non_json_in_subdir(names: list[str], subdir: str) -> list[str]:
    return [n.rsplit("/", 1)[-1] for n in _files_in_subdir(names, subdir)
            if not n.lower().endswith(".json")]


def validate_upload(data: bytes, max_bytes: int) -> tuple[bool, AnalysisError | None]:
    """
    Returns (True, None) if the buffer may be handed to the archive reader,
    else (False, error). Does not raise.
    """
    if len(data) > max_bytes:
        return False, PayloadTooLarge(max_bytes)
    if not has_zip_magic(data):
        return False, InvalidArchive(InvalidArchive.BAD_FORMAT)
    return True, None


def export_hints(names: list[str]) -> list[str]:
    """Structural reasons an archive yielded no data. Empty if nothing stands out."""
    normalized = [_normalize(n) for n in names]
    hints: list[str] = []

    if not any(f"{CONNECTIONS_DIR}/" in n.lower() for n in normalized):
        hints.append("ZIP is missing the 'connections' folder.")

    if _non_json_in_subdir(normalized, CONVENTIONAL_SUBDIR):
        hints.append(
            "The tool reads JSON only. Your file has HTML. "
            "You must choose JSON as the format when creating the export."
        )

    if hints:
        hints.append(
            "→ What to do: In the Instagram export, select 'Followers and following', "
            "choose JSON format, then Export."
        )
    return hints
