import io
import json
import zipfile

import pytest

from app import create_app

EXPORT_DIR = "connections/followers_and_following/"


def followers_json(*names, ts=1700000000):
    return json.dumps([
        {"title": "", "media_list_data": [],
         "string_list_data": [{"href": f"https://www.instagram.com/{n}", "value": n, "timestamp": ts + i}]}
        for i, n in enumerate(names)
    ])


def following_json(*names, ts=1700000000):
    return json.dumps({
        "relationships_following": [
            {"title": n,
             "string_list_data": [{"href": f"https://www.instagram.com/_u/{n}", "timestamp": ts + i}]}
            for i, n in enumerate(names)
        ]
    })


def make_zip(files: dict) -> bytes:
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w", zipfile.ZIP_DEFLATED) as z:
        for name, content in files.items():
            z.writestr(name, content)
    return buf.getvalue()


@pytest.fixture
def scenario_a_zip():
    return make_zip({
        EXPORT_DIR + "followers_1.json": followers_json("user1", "user2"),
        EXPORT_DIR + "following.json": following_json("user1", "user3", "user4"),
    })


@pytest.fixture
def app():
    return create_app({"TESTING": True, "ALLOWED_ORIGINS": ["*"]})


@pytest.fixture
def client(app):
    return app.test_client()
