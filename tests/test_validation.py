from conftest import make_zip
from errors import InvalidArchive, PayloadTooLarge
from validation import export_hints, validate_upload


class TestValidateUpload:
    def test_valid_zip(self):
        assert validate_upload(make_zip({"a.json": "[]"}), 1024 * 1024) == (True, None)

    def test_too_large(self):
        ok, err = validate_upload(b"PK\x03\x04" + b"\x00" * 100, 50)
        assert not ok
        assert isinstance(err, PayloadTooLarge)
        assert err.status == 413

    def test_size_message_uses_limit(self):
        _, err = validate_upload(b"x" * 10, 1)
        assert PayloadTooLarge(50 * 1024 * 1024).message == "File too large. Maximum size is 50MB."
        assert isinstance(err, PayloadTooLarge)

    def test_bad_magic(self):
        ok, err = validate_upload(b"%PDF-1.7 ...", 1024)
        assert not ok
        assert isinstance(err, InvalidArchive)
        assert err.message == "Invalid file format. Please upload a valid ZIP file."


class TestExportHints:
    def test_clean_export_has_no_hints(self):
        names = [
            "connections/followers_and_following/followers_1.json",
            "connections/followers_and_following/following.json",
        ]
        assert export_hints(names) == []

    def test_html_export(self):
        names = ["connections/followers_and_following/followers_1.html"]
        hints = export_hints(names)
        assert any("JSON only" in h for h in hints)
        assert hints[-1].startswith("→ What to do")

    def test_missing_connections(self):
        hints = export_hints(["personal_information/personal_information.json"])
        assert "ZIP is missing the 'connections' folder." in hints

    def test_nested_export_folder(self):
        names = ["instagram-export/connections/followers_and_following/following.html"]
        assert any("JSON only" in h for h in export_hints(names))
