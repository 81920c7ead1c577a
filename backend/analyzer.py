"""
analyzer.py
-----------
Runs one analysis: upload bytes in, non-followers out. Everything stays in memory.
No network or server dependencies.

Public API:
    analyze(data, max_bytes, max_entry_bytes) -> AnalysisResult
    extract_lists(entries)                    -> (following, followers)
"""

import logging
from dataclasses import dataclass, field

from archive_reader import DEFAULT_MAX_ENTRY_BYTES, base_name, read_archive
from classifier import FileKind, classify, prioritize
from differ import difference, follower_set
from errors import EntryReadError, NoDataFound
from relationships import NormalizedUser, parse_relationships
from validation import export_hints, validate_upload

log = logging.getLogger(__name__)

DEFAULT_MAX_BYTES = 50 * 1024 * 1024  # 50 MB


@dataclass
class AnalysisResult:
    non_followers: list[NormalizedUser] = field(default_factory=list)
    total_following: int = 0
    total_followers: int = 0

    @property
    def count(self) -> int:
        return len(self.non_followers)

    def to_dict(self) -> dict:
        return {
            "non_followers": [u.to_dict() for u in self.non_followers],
            "total_following": self.total_following,
            "total_followers": self.total_followers,
            "count": self.count,
        }


# ── Extraction ────────────────────────────────────────────────────

def _parse_entry(entry) -> list[NormalizedUser]:
    name = base_name(entry.name)
    try:
        content = entry.read()
    except EntryReadError as e:
        log.debug("skipping unreadable entry: %s", e)
        return []
    return parse_relationships(content, source=name)


def extract_lists(entries) -> tuple[list[NormalizedUser], set[str]]:
    """
    Route every entry through the classifier and parser.
    Followers from all files are merged into one lookup set. Following files are
    read conventional-folder first; a username seen twice keeps its first entry.
    """
    followers_files, following_files = [], []
    for entry in entries:
        kind = classify(entry.name)
        if kind is FileKind.FOLLOWERS:
            followers_files.append(entry)
        elif kind is FileKind.FOLLOWING:
            following_files.append(entry)

    log.debug("classified %d followers file(s), %d following file(s)",
              len(followers_files), len(following_files))

    followers: set[str] = set()
    for entry in followers_files:
        followers |= follower_set(_parse_entry(entry))

    following: list[NormalizedUser] = []
    seen: set[str] = set()
    for entry in prioritize(following_files, path=lambda e: e.name):
        for user in _parse_entry(entry):
            if user.key in seen:
                continue
            seen.add(user.key)
            following.append(user)

    return following, followers


# ── Orchestration ─────────────────────────────────────────────────

def analyze(data: bytes, max_bytes: int = DEFAULT_MAX_BYTES,
            max_entry_bytes: int = DEFAULT_MAX_ENTRY_BYTES) -> AnalysisResult:
    """
    Raises PayloadTooLarge / InvalidArchive before touching the archive, and
    NoDataFound when either list comes out empty.
    """
    ok, error = validate_upload(data, max_bytes)
    if not ok:
        raise error

    entries = read_archive(data, max_entry_bytes=max_entry_bytes)
    following, followers = extract_lists(entries)

    if not following:
        raise NoDataFound("following", export_hints([e.name for e in entries]))
    if not followers:
        raise NoDataFound("followers", export_hints([e.name for e in entries]))

    return AnalysisResult(
        non_followers=difference(following, followers),
        total_following=len(following),
        total_followers=len(followers),
    )
