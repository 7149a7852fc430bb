"""Exceptions raised by the Instapaper client.

Every failure of an API call surfaces as an InstapaperError subclass carrying
enough context (status code, parse message or raw body) to diagnose it
without repeating the request. Nothing here is retried.
"""


class InstapaperError(Exception):
    """Base class for errors raised while talking to the API."""


class UrlError(InstapaperError, ValueError):
    """The endpoint URL could not be parsed for signing."""


class TransportError(InstapaperError):
    """Network-level failure (DNS, connection, TLS, timeout, bad encoding)."""


class RequestFailed(InstapaperError):
    """The server answered with a non-2xx status.

    The body is not parsed: error pages are arbitrary text.
    """

    def __init__(self, status_code: int, url: str = ""):
        self.status_code = status_code
        self.url = url
        where = f" for {url}" if url else ""
        super().__init__(f"Request failed with status {status_code}{where}")


class DecodeError(InstapaperError):
    """The response body does not decode into the expected shape."""


class AuthResponseIncomplete(InstapaperError):
    """The token exchange response lacked oauth_token or oauth_token_secret."""

    def __init__(self, qline: str):
        self.qline = qline
        super().__init__(f"oauth_tokens not both in response: {qline}")


class ConfigError(Exception):
    """Invalid configuration file.

    Not an InstapaperError: configuration has to be fixed by the user before
    any request is made.
    """
