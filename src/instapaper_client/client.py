"""Instapaper API client.

Every action is a signed POST to ``{base_url}/api/1.1/{action}`` with a
form-encoded body. A Client is plain data (credentials, base URL and
transport settings): it opens no connections of its own and can be copied
or shared freely.

The base URL can be overridden with an environment variable:
    INSTAPAPER_API_URL
"""

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field, replace

from .decoder import check_status, decode, decode_single
from .models import Bookmark, BookmarkList, User
from .signer import ConsumerCredentials, TokenCredentials, sign
from .transport import Transport

logger = logging.getLogger(__name__)

BASE_URL = os.environ.get("INSTAPAPER_API_URL", "https://www.instapaper.com")

API_PREFIX = "/api/1.1/"

# bookmarks/list never returns more than this many items per call
LIST_LIMIT = 500

DEFAULT_FOLDER = "unread"


@dataclass(frozen=True)
class Client:
    """Signed access to the API for one application and, optionally, one user.

    Without a token the client signs anonymously, which is only useful for
    the xAuth exchange; see ``instapaper_client.auth.authenticate``.
    """

    consumer: ConsumerCredentials
    token: TokenCredentials | None = None
    base_url: str = BASE_URL
    transport: Transport = field(default_factory=Transport)

    @classmethod
    def from_credentials(
        cls,
        consumer_key: str,
        consumer_secret: str,
        oauth_key: str | None = None,
        oauth_secret: str | None = None,
        **kwargs,
    ) -> "Client":
        """Build a client from previously stored flat credentials."""
        if (oauth_key is None) != (oauth_secret is None):
            raise ValueError("oauth_key and oauth_secret must be given together")
        token = None
        if oauth_key is not None:
            token = TokenCredentials(oauth_key, oauth_secret)
        return cls(
            consumer=ConsumerCredentials(consumer_key, consumer_secret),
            token=token,
            **kwargs,
        )

    def with_token(self, oauth_key: str, oauth_secret: str) -> "Client":
        return replace(self, token=TokenCredentials(oauth_key, oauth_secret))

    @property
    def consumer_key(self) -> str:
        return self.consumer.key

    @property
    def consumer_secret(self) -> str:
        return self.consumer.secret

    @property
    def oauth_key(self) -> str | None:
        return self.token.key if self.token else None

    @property
    def oauth_secret(self) -> str | None:
        return self.token.secret if self.token else None

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None

    def action_url(self, action: str) -> str:
        return f"{self.base_url.rstrip('/')}{API_PREFIX}{action}"

    def request(self, action: str, params: Mapping[str, str] | None = None) -> str:
        """Sign and POST one action; return the body of a 2xx response.

        Raises:
            UrlError: If the base URL is malformed.
            TransportError: If no response was received.
            RequestFailed: If the status is not 2xx.
        """
        params = dict(params or {})
        url = self.action_url(action)
        authorization = sign("POST", url, self.consumer, self.token, params)

        logger.debug("Calling %s with params %s", action, sorted(params))
        response = self.transport.post(url, params, authorization)
        check_status(response.status_code, url)
        return response.text

    def verify(self) -> User:
        """Return the user the credentials belong to."""
        body = self.request("account/verify_credentials")
        return decode_single(body, User)

    def archive(self, bookmark_id: int) -> Bookmark:
        """Move a bookmark to the archive folder."""
        body = self.request("bookmarks/archive", {"bookmark_id": str(bookmark_id)})
        return decode_single(body, Bookmark)

    def add(self, url: str, title: str = "", description: str = "") -> Bookmark:
        """Add a bookmark.

        Leave ``title`` or ``description`` empty to let Instapaper fill them in.
        """
        params = {"url": url}
        if title:
            params["title"] = title
        if description:
            params["description"] = description

        body = self.request("bookmarks/add", params)
        return decode_single(body, Bookmark)

    def bookmarks_in(self, folder: str) -> BookmarkList:
        """List bookmarks and highlights in a folder.

        ``folder`` is a folder id, or one of the names "unread", "starred"
        and "archive".
        """
        body = self.request(
            "bookmarks/list",
            {"limit": str(LIST_LIMIT), "folder_id": folder},
        )
        return decode(body, BookmarkList)

    def bookmarks(self) -> BookmarkList:
        """List bookmarks and highlights in the unread folder."""
        return self.bookmarks_in(DEFAULT_FOLDER)
