from differ import difference, follower_set
from relationships import NormalizedUser


def users(*names):
    return [NormalizedUser(n) for n in names]


def test_follower_set_is_lowercased():
    assert follower_set(users("User1", "USER2", "user2")) == {"user1", "user2"}


def test_case_insensitive_match():
    followers = follower_set(users("User1", "user2"))
    result = difference(users("USER1", "user3", "User2"), followers)
    assert [u.username for u in result] == ["user3"]


def test_original_casing_is_kept():
    result = difference(users("MixedCase"), set())
    assert result[0].username == "MixedCase"


def test_order_is_following_order():
    following = users("zed", "amy", "bob", "carl", "dan")
    result = difference(following, {"bob"})
    assert [u.username for u in result] == ["zed", "amy", "carl", "dan"]
    # subsequence of the input, never re-sorted
    it = iter(following)
    assert all(u in it for u in result)


def test_entries_are_returned_unchanged():
    following = [NormalizedUser("a", 111), NormalizedUser("b", 222)]
    assert difference(following, {"a"}) == [NormalizedUser("b", 222)]


def test_everyone_follows_back():
    assert difference(users("a", "b"), {"a", "b"}) == []
