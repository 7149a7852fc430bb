"""Data models for decoded Instapaper API responses.

Field names follow the wire format except where the API uses a Python
keyword or an awkward name: ``type`` becomes ``kind`` and
``subscription_is_active`` becomes ``subscription``.

``from_dict`` raises KeyError, TypeError or ValueError on a payload of the
wrong shape; the decoder turns those into DecodeError.
"""

from dataclasses import dataclass, field


def _require_str(data: dict, key: str) -> str:
    value = data[key]
    if not isinstance(value, str):
        raise TypeError(f"{key!r} must be a string, got {type(value).__name__}")
    return value


def _as_int(value, key: str) -> int:
    # bool is an int subclass
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise TypeError(f"{key!r} must be an integer, got {type(value).__name__}")
    return int(value)


def _require_int(data: dict, key: str) -> int:
    return _as_int(data[key], key)


def _require_float(data: dict, key: str) -> float:
    value = data[key]
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise TypeError(f"{key!r} must be a number, got {type(value).__name__}")
    return float(value)


def _require_list(data: dict, key: str) -> list:
    value = data[key]
    if not isinstance(value, list):
        raise TypeError(f"{key!r} must be a list, got {type(value).__name__}")
    return value


@dataclass(frozen=True)
class Bookmark:
    """A saved piece of media (article, video, ...) to be read later."""

    bookmark_id: int
    title: str = ""
    hash: str = ""
    url: str = ""
    description: str = ""
    kind: str = "bookmark"
    private_source: str = ""
    progress_timestamp: float = 0.0
    time: float = 0.0
    starred: str = "0"  # "0" or "1", not a boolean

    @property
    def is_starred(self) -> bool:
        return self.starred == "1"

    @classmethod
    def from_dict(cls, data: dict) -> "Bookmark":
        return cls(
            bookmark_id=_require_int(data, "bookmark_id"),
            title=_require_str(data, "title"),
            hash=_require_str(data, "hash"),
            url=_require_str(data, "url"),
            description=_require_str(data, "description"),
            kind=_require_str(data, "type"),
            private_source=_require_str(data, "private_source"),
            progress_timestamp=_require_float(data, "progress_timestamp"),
            time=_require_float(data, "time"),
            starred=_require_str(data, "starred"),
        )

    def to_dict(self) -> dict:
        return {
            "type": self.kind,
            "bookmark_id": self.bookmark_id,
            "title": self.title,
            "hash": self.hash,
            "url": self.url,
            "description": self.description,
            "private_source": self.private_source,
            "progress_timestamp": self.progress_timestamp,
            "time": self.time,
            "starred": self.starred,
        }


@dataclass(frozen=True)
class User:
    """Bare-bones account information."""

    username: str
    user_id: int
    kind: str = "user"
    subscription: str = "0"  # "0" or "1", not a boolean

    @classmethod
    def from_dict(cls, data: dict) -> "User":
        return cls(
            username=_require_str(data, "username"),
            user_id=_require_int(data, "user_id"),
            kind=_require_str(data, "type"),
            subscription=_require_str(data, "subscription_is_active"),
        )

    def to_dict(self) -> dict:
        return {
            "type": self.kind,
            "user_id": self.user_id,
            "username": self.username,
            "subscription_is_active": self.subscription,
        }


@dataclass(frozen=True)
class Highlight:
    highlight_id: int
    bookmark_id: int
    text: str
    note: str | None = None
    time: int = 0
    position: int = 0
    kind: str = "highlight"

    @classmethod
    def from_dict(cls, data: dict) -> "Highlight":
        if not isinstance(data, dict):
            raise TypeError(f"expected a JSON object, got {type(data).__name__}")
        note = data.get("note")
        if note is not None and not isinstance(note, str):
            raise TypeError(f"'note' must be a string, got {type(note).__name__}")
        return cls(
            highlight_id=_require_int(data, "highlight_id"),
            bookmark_id=_require_int(data, "bookmark_id"),
            text=_require_str(data, "text"),
            note=note,
            time=_require_int(data, "time"),
            position=_require_int(data, "position"),
            kind=_require_str(data, "type"),
        )

    def to_dict(self) -> dict:
        return {
            "type": self.kind,
            "highlight_id": self.highlight_id,
            "bookmark_id": self.bookmark_id,
            "text": self.text,
            "note": self.note,
            "time": self.time,
            "position": self.position,
        }


@dataclass(frozen=True)
class BookmarkList:
    """One folder listing: bookmarks, their highlights and the owning user."""

    user: User
    bookmarks: list[Bookmark] = field(default_factory=list)
    highlights: list[Highlight] = field(default_factory=list)
    delete_ids: list[int] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> "BookmarkList":
        if not isinstance(data, dict):
            raise TypeError(f"expected a JSON object, got {type(data).__name__}")
        user = data["user"]
        if not isinstance(user, dict):
            raise TypeError(f"'user' must be an object, got {type(user).__name__}")
        delete_ids = data.get("delete_ids", [])
        if not isinstance(delete_ids, list):
            raise TypeError(
                f"'delete_ids' must be a list, got {type(delete_ids).__name__}"
            )
        return cls(
            user=User.from_dict(user),
            bookmarks=[Bookmark.from_dict(b) for b in _require_list(data, "bookmarks")],
            highlights=[
                Highlight.from_dict(h) for h in _require_list(data, "highlights")
            ],
            delete_ids=[_as_int(i, "delete_ids") for i in delete_ids],
        )

    def to_dict(self) -> dict:
        return {
            "user": self.user.to_dict(),
            "bookmarks": [b.to_dict() for b in self.bookmarks],
            "highlights": [h.to_dict() for h in self.highlights],
            "delete_ids": list(self.delete_ids),
        }

    def highlights_for(self, bookmark_id: int) -> list[Highlight]:
        """Return the highlights belonging to one bookmark, in listing order."""
        return [h for h in self.highlights if h.bookmark_id == bookmark_id]
