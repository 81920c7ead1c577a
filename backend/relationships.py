"""
relationships.py
----------------
Decodes followers / following export files into NormalizedUser records.

Known shapes, tried in order (first match wins):
    FOLLOWERS_LIST   [ {title, string_list_data: [{href, value, timestamp}]}, ... ]
    FOLLOWING_OBJECT { "relationships_following": [ ...same records... ] }
    SINGLE_RECORD    { title, string_list_data: [...] }

A file that matches no shape yields no records; it never raises.
"""

import enum
import json
import logging
from dataclasses import dataclass

log = logging.getLogger(__name__)

PROFILE_URL = "https://instagram.com/{}"
FOLLOWING_KEY = "relationships_following"


@dataclass(frozen=True)
class NormalizedUser:
    username: str
    followed_at: int = 0

    @property
    def profile_url(self) -> str:
        return PROFILE_URL.format(self.username)

    @property
    def key(self) -> str:
        """Lookup key; comparisons are case-insensitive everywhere."""
        return self.username.lower()

    def to_dict(self) -> dict:
        out = {"username": self.username, "profile_url": self.profile_url}
        if self.followed_at:
            out["followed_at"] = self.followed_at
        return out


class ExportShape(enum.Enum):
    FOLLOWERS_LIST = "followers_list"
    FOLLOWING_OBJECT = "following_object"
    SINGLE_RECORD = "single_record"


# ── Record-level helpers ──────────────────────────────────────────

def _first_string_entry(record: dict) -> dict:
    data = record.get("string_list_data")
    if isinstance(data, list) and data and isinstance(data[0], dict):
        return data[0]
    return {}


def resolve_username(record: dict) -> str:
    """string_list_data[0].value if non-empty, else title. Empty if neither."""
    value = _first_string_entry(record).get("value")
    if isinstance(value, str) and value:
        return value
    title = record.get("title")
    return title if isinstance(title, str) else ""


def resolve_timestamp(record: dict) -> int:
    ts = _first_string_entry(record).get("timestamp")
    if isinstance(ts, int) and not isinstance(ts, bool):
        return ts
    return 0


def to_user(record) -> NormalizedUser | None:
    if not isinstance(record, dict):
        return None
    username = resolve_username(record)
    if not username:
        return None
    return NormalizedUser(username=username, followed_at=resolve_timestamp(record))


# ── Shape decoders: each returns the record list, or None for "no match" ──

def _decode_followers_list(doc):
    return doc if isinstance(doc, list) else None


def _decode_following_object(doc):
    if isinstance(doc, dict) and isinstance(doc.get(FOLLOWING_KEY), list):
        return doc[FOLLOWING_KEY]
    return None


def _decode_single_record(doc):
    return [doc] if isinstance(doc, dict) else None


_DECODERS = (
    (ExportShape.FOLLOWERS_LIST, _decode_followers_list),
    (ExportShape.FOLLOWING_OBJECT, _decode_following_object),
    (ExportShape.SINGLE_RECORD, _decode_single_record),
)


def match_shape(doc) -> tuple[ExportShape | None, list]:
    for shape, decode in _DECODERS:
        records = decode(doc)
        if records is not None:
            return shape, records
    return None, []


def load_document(content: bytes):
    """JSON-decode raw file bytes. Returns None when the content is not JSON."""
    try:
        return json.loads(content.decode("utf-8-sig"))
    except (ValueError, RecursionError):
        return None


def parse_relationships(content: bytes, source: str = "") -> list[NormalizedUser]:
    """
    Parse one export file. `source` is used for debug logging only and should
    be a base name, never a full path (export folders can embed the account name).
    """
    doc = load_document(content)
    if doc is None:
        log.debug("skipping %s: not valid JSON", source or "<entry>")
        return []

    shape, records = match_shape(doc)
    if shape is None:
        log.debug("skipping %s: no known export shape", source or "<entry>")
        return []

    users = [u for u in map(to_user, records) if u is not None]
    log.debug("%s decoded as %s: %d of %d records usable",
              source or "<entry>", shape.value, len(users), len(records))
    return users
