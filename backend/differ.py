"""
differ.py
---------
Case-insensitive "following minus followers".
"""

from relationships import NormalizedUser


def follower_set(users) -> set[str]:
    return {u.key for u in users}


def difference(following: list[NormalizedUser], followers: set[str]) -> list[NormalizedUser]:
    """Following entries absent from `followers`, in their original order and casing."""
    return [user for user in following if user.username.lower() not in followers]
