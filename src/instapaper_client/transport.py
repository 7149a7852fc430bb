"""HTTP transport: one form-encoded POST per call.

A fresh httpx.Client is opened for every request and closed before
returning, so a Transport value is plain configuration and can be shared.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass

import httpx

from .errors import TransportError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0

USER_AGENT = "instapaper-client/0.1 (+https://www.instapaper.com/api)"


@dataclass(frozen=True)
class RawResponse:
    """Status code and undecoded body of an HTTP response."""

    status_code: int
    text: str


@dataclass(frozen=True)
class Transport:
    timeout: float = DEFAULT_TIMEOUT
    user_agent: str = USER_AGENT

    def post(
        self, url: str, params: Mapping[str, str], authorization: str
    ) -> RawResponse:
        """POST ``params`` as a form body with the given Authorization header.

        Raises:
            TransportError: If no complete HTTP response was received.
        """
        try:
            with httpx.Client(
                timeout=self.timeout,
                headers={"User-Agent": self.user_agent},
            ) as http:
                response = http.post(
                    url,
                    data=dict(params),
                    headers={"Authorization": authorization},
                )
        # RequestError also covers a body that fails to decompress
        except httpx.RequestError as e:
            raise TransportError(f"POST {url} failed: {e}") from e

        logger.debug("POST %s -> %d", url, response.status_code)
        return RawResponse(status_code=response.status_code, text=response.text)
