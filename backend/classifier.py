"""
classifier.py
-------------
Decides which archive entries hold followers or following lists.

Name heuristics only: Instagram has moved and renamed these files across app
versions, so the conventional folder is preferred but never required.
"""

import enum
import re

from archive_reader import base_name

CONVENTIONAL_DIR = "connections/followers_and_following/"

_FOLLOWERS_RE = re.compile(r"^followers(_\d+)?\.json$", re.IGNORECASE)
_FOLLOWING_RE = re.compile(r"^following\.json$", re.IGNORECASE)


class FileKind(enum.Enum):
    FOLLOWERS = "followers"
    FOLLOWING = "following"
    IGNORED = "ignored"


def _is_followers(name: str) -> bool:
    lower = name.lower()
    if not (_FOLLOWERS_RE.match(name) or "followers" in lower):
        return False
    return "following" not in lower


def _is_following(name: str) -> bool:
    lower = name.lower()
    if not (_FOLLOWING_RE.match(name) or "following" in lower):
        return False
    return "followers" not in lower


def classify(path: str) -> FileKind:
    name = base_name(path)
    if _is_followers(name):
        return FileKind.FOLLOWERS
    if _is_following(name):
        return FileKind.FOLLOWING
    return FileKind.IGNORED


def in_conventional_path(path: str) -> bool:
    return CONVENTIONAL_DIR in path.replace("\\", "/").lower()


def prioritize(items, path=lambda item: item) -> list:
    """Conventional-folder files first; otherwise archive order is kept."""
    return sorted(items, key=lambda item: not in_conventional_path(path(item)))
