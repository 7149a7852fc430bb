"""OAuth 1.0a request signing (HMAC-SHA1) for the Authorization header.

The signature base string is built from the request method, the normalized
endpoint URI and every request parameter (the form body plus the oauth_*
protocol parameters), percent-encoded and sorted by key then value.
The signing key is ``consumer_secret&token_secret``; without a token (the
xAuth exchange call) the token half is empty and no oauth_token is sent.

Reference: https://oauth.net/core/1.0a/#signing_process
"""

from collections.abc import Mapping
from dataclasses import dataclass

import httpx
from oauthlib import oauth1
from oauthlib.common import generate_nonce, generate_timestamp
from oauthlib.oauth1.rfc5849 import parameters, signature

from .errors import UrlError

SIGNATURE_METHOD = "HMAC-SHA1"
OAUTH_VERSION = "1.0"


@dataclass(frozen=True)
class ConsumerCredentials:
    """API-wide key/secret identifying the calling application."""

    key: str
    secret: str

    def __repr__(self) -> str:
        return f"ConsumerCredentials(key={self.key!r}, secret='***')"


@dataclass(frozen=True)
class TokenCredentials:
    """Per-user token pair obtained through the xAuth exchange."""

    key: str
    secret: str

    def __repr__(self) -> str:
        return f"TokenCredentials(key={self.key!r}, secret='***')"


def base_string_uri(url: str) -> str:
    """Normalize ``url`` for the signature base string, or raise UrlError."""
    try:
        parsed = httpx.URL(url)
    except (httpx.InvalidURL, TypeError) as e:
        raise UrlError(f"Malformed URL {url!r}: {e}") from e
    if not parsed.scheme or not parsed.host:
        raise UrlError(f"Malformed URL {url!r}: scheme and host are required")
    try:
        return signature.base_string_uri(url)
    except ValueError as e:
        raise UrlError(f"Malformed URL {url!r}: {e}") from e


def sign(
    method: str,
    url: str,
    consumer: ConsumerCredentials,
    token: TokenCredentials | None = None,
    params: Mapping[str, str] | None = None,
    *,
    nonce: str | None = None,
    timestamp: str | None = None,
) -> str:
    """Build the ``OAuth ...`` Authorization header value for one request.

    Args:
        method: HTTP method, e.g. "POST".
        url: Absolute endpoint URL, without the form parameters.
        consumer: Application credentials.
        token: User token pair, or None for the anonymous exchange call.
        params: Form parameters that will be sent in the request body.
        nonce: Override the random nonce (tests, reproducing a signature).
        timestamp: Override the current epoch-seconds timestamp.

    Raises:
        UrlError: If ``url`` cannot be parsed.
    """
    uri = base_string_uri(url)

    oauth_params = {
        "oauth_consumer_key": consumer.key,
        "oauth_nonce": nonce or generate_nonce(),
        "oauth_signature_method": SIGNATURE_METHOD,
        "oauth_timestamp": timestamp or generate_timestamp(),
        "oauth_version": OAUTH_VERSION,
    }
    if token is not None:
        oauth_params["oauth_token"] = token.key

    request_params = [(str(k), str(v)) for k, v in (params or {}).items()]
    normalized = signature.normalize_parameters(
        list(oauth_params.items()) + request_params
    )
    base_string = signature.signature_base_string(method.upper(), uri, normalized)

    signing_client = oauth1.Client(
        consumer.key,
        client_secret=consumer.secret,
        resource_owner_key=token.key if token is not None else None,
        resource_owner_secret=token.secret if token is not None else None,
    )
    oauth_params["oauth_signature"] = signature.sign_hmac_sha1_with_client(
        base_string, signing_client
    )

    headers = parameters.prepare_headers(sorted(oauth_params.items()))
    return headers["Authorization"]
