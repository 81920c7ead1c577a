"""
export.py
---------
CSV rendering of a non-followers list (same columns as the web download).
"""

import csv
import io
from datetime import datetime, timezone

CSV_HEADER = ["Username", "Profile URL", "Followed At"]


def ts_to_iso(ts) -> str:
    """UTC ISO-8601 for a Unix timestamp, or "" when unknown or out of range."""
    if not ts:
        return ""
    try:
        return datetime.fromtimestamp(ts, tz=timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
    except (OverflowError, ValueError, OSError):
        return ""


def to_csv(non_followers) -> str:
    buf = io.StringIO()
    writer = csv.writer(buf, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for user in non_followers:
        writer.writerow([user.username, user.profile_url, ts_to_iso(user.followed_at)])
    return buf.getvalue()
