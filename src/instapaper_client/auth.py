"""xAuth token exchange.

Instapaper only supports the xAuth flavour of OAuth 1.0a: the user's
username and password are traded once for a long-lived token pair.

Flow:
1. POST x_auth_username, x_auth_password, x_auth_mode=client_auth to
   oauth/access_token, signed with the consumer credentials only
2. The response body is a query string, not JSON:
   oauth_token=...&oauth_token_secret=...
3. Store the pair; the password is no longer needed
"""

import logging

import httpx

from .client import BASE_URL, Client
from .errors import AuthResponseIncomplete
from .signer import ConsumerCredentials
from .transport import Transport

logger = logging.getLogger(__name__)

ACCESS_TOKEN_ACTION = "oauth/access_token"


def parse_token_response(body: str, base_url: str = BASE_URL) -> tuple[str, str]:
    """Extract (oauth_token, oauth_token_secret) from a query-string body.

    Field order does not matter, unrelated fields are ignored and a repeated
    field keeps its last value.

    Raises:
        AuthResponseIncomplete: If either field is missing. The message
            carries the body as the query of ``base_url``.
    """
    query = httpx.QueryParams(body.strip())
    # a repeated key keeps its last value
    tokens = query.get_list("oauth_token")
    secrets = query.get_list("oauth_token_secret")

    if not tokens or not secrets:
        raise AuthResponseIncomplete(f"{base_url.rstrip('/')}/?{body}")
    return tokens[-1], secrets[-1]


def exchange(
    username: str,
    password: str,
    consumer_key: str,
    consumer_secret: str,
    *,
    base_url: str = BASE_URL,
    transport: Transport | None = None,
) -> tuple[str, str]:
    """Trade a username and password for an (oauth_key, oauth_secret) pair."""
    client = Client(
        consumer=ConsumerCredentials(consumer_key, consumer_secret),
        base_url=base_url,
        transport=transport or Transport(),
    )
    params = {
        "x_auth_username": username,
        "x_auth_password": password,
        "x_auth_mode": "client_auth",
    }

    body = client.request(ACCESS_TOKEN_ACTION, params)
    oauth_key, oauth_secret = parse_token_response(body, base_url)
    logger.info("Obtained OAuth token for %s", username)
    return oauth_key, oauth_secret


def authenticate(
    username: str,
    password: str,
    consumer_key: str,
    consumer_secret: str,
    *,
    base_url: str = BASE_URL,
    transport: Transport | None = None,
) -> Client:
    """Run the xAuth exchange and return an authenticated Client.

    Once obtained, the token pair can be stored (see ``Client.oauth_key``
    and ``Client.oauth_secret``) and this call skipped next time with
    ``Client.from_credentials``.
    """
    transport = transport or Transport()
    oauth_key, oauth_secret = exchange(
        username,
        password,
        consumer_key,
        consumer_secret,
        base_url=base_url,
        transport=transport,
    )
    return Client.from_credentials(
        consumer_key,
        consumer_secret,
        oauth_key,
        oauth_secret,
        base_url=base_url,
        transport=transport,
    )
