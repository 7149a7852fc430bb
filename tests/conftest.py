"""Shared test fixtures."""

from urllib.parse import unquote

import pytest

from instapaper_client.client import Client
from instapaper_client.models import Bookmark, BookmarkList, Highlight, User

API_URL = "https://instapaper.test"


def parse_authorization(header: str) -> dict[str, str]:
    """Split an ``OAuth k="v", ...`` header into decoded parameters."""
    assert header.startswith("OAuth ")
    params = {}
    for part in header[len("OAuth "):].split(", "):
        key, value = part.split("=", 1)
        params[key] = unquote(value.strip('"'))
    return params


@pytest.fixture
def parse_header():
    return parse_authorization


@pytest.fixture
def api_url() -> str:
    return API_URL


@pytest.fixture
def url_for(api_url):
    def _url_for(action: str) -> str:
        return f"{api_url}/api/1.1/{action}"

    return _url_for


@pytest.fixture
def client(api_url) -> Client:
    """An authenticated client pointed at the fake API root."""
    return Client.from_credentials(
        "consumer_key", "consumer_secret", "token", "token_secret", base_url=api_url
    )


@pytest.fixture
def anonymous_client(api_url) -> Client:
    return Client.from_credentials("consumer_key", "consumer_secret", base_url=api_url)


@pytest.fixture
def sample_user() -> User:
    return User(username="reader@example.com", user_id=42, subscription="1")


@pytest.fixture
def sample_bookmarks() -> list[Bookmark]:
    return [
        Bookmark(
            bookmark_id=1001,
            title="How I Read",
            hash="abc123",
            url="https://sirupsen.com/read",
            description="Notes on reading",
            progress_timestamp=1500000000.0,
            time=1499999000.0,
            starred="1",
        ),
        Bookmark(
            bookmark_id=1002,
            title="Another Article",
            hash="def456",
            url="https://example.com/article",
            time=1499998000.0,
        ),
    ]


@pytest.fixture
def sample_list(sample_user, sample_bookmarks) -> BookmarkList:
    return BookmarkList(
        user=sample_user,
        bookmarks=sample_bookmarks,
        highlights=[
            Highlight(
                highlight_id=7,
                bookmark_id=1001,
                text="Read slowly.",
                note="good advice",
                time=1500000100,
                position=0,
            ),
            Highlight(
                highlight_id=8,
                bookmark_id=1001,
                text="Take notes.",
                time=1500000200,
                position=1,
            ),
        ],
    )
