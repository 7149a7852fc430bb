"""Map raw API responses to models or errors.

Status is always checked before the body is looked at: non-2xx bodies are
arbitrary text, not JSON.
"""

import json
import logging
from typing import TypeVar

from .errors import DecodeError, RequestFailed

logger = logging.getLogger(__name__)

T = TypeVar("T")


def check_status(status_code: int, url: str = "") -> None:
    """Raise RequestFailed unless ``status_code`` is 2xx."""
    if not 200 <= status_code < 300:
        raise RequestFailed(status_code, url)


def _load_json(body: str):
    try:
        return json.loads(body)
    # deeply nested input overflows the parser with RecursionError
    except (ValueError, RecursionError) as e:
        raise DecodeError(f"invalid JSON: {e}") from e


def _build(model: type[T], data) -> T:
    try:
        return model.from_dict(data)
    except KeyError as e:
        raise DecodeError(f"{model.__name__}: missing field {e}") from e
    except (TypeError, ValueError) as e:
        raise DecodeError(f"{model.__name__}: {e}") from e


def decode(body: str, model: type[T]) -> T:
    """Decode a JSON object body directly into ``model``."""
    return _build(model, _load_json(body))


def decode_single(body: str, model: type[T]) -> T:
    """Decode the first element of a JSON array body into ``model``.

    Extra elements are ignored.
    """
    data = _load_json(body)
    if not isinstance(data, list):
        raise DecodeError(f"expected a JSON array, got {type(data).__name__}")
    if not data:
        raise DecodeError("expected at least one element, got an empty array")
    if len(data) > 1:
        logger.debug("Ignoring %d extra elements in response", len(data) - 1)
    return _build(model, data[0])
