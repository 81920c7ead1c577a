from export import to_csv, ts_to_iso
from relationships import NormalizedUser


def test_ts_to_iso():
    assert ts_to_iso(1234567890) == "2009-02-13T23:31:30Z"
    assert ts_to_iso(0) == ""
    assert ts_to_iso(None) == ""


def test_csv_rows():
    csv_text = to_csv([NormalizedUser("user3", 1234567890), NormalizedUser("user4")])
    assert csv_text.splitlines() == [
        '"Username","Profile URL","Followed At"',
        '"user3","https://instagram.com/user3","2009-02-13T23:31:30Z"',
        '"user4","https://instagram.com/user4",""',
    ]


def test_csv_empty_list_has_header_only():
    assert to_csv([]) == '"Username","Profile URL","Followed At"\n'


def test_csv_escapes_quotes():
    line = to_csv([NormalizedUser('we"ird')]).splitlines()[1]
    assert line.startswith('"we""ird",')


def test_out_of_range_timestamp_is_blank():
    assert ts_to_iso(10**20) == ""
    assert ts_to_iso(-(10**20)) == ""
    line = to_csv([NormalizedUser("far_future", 10**20)]).splitlines()[1]
    assert line == '"far_future","https://instagram.com/far_future",""'
