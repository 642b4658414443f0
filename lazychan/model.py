"""Board, thread and post records decoded from provider JSON.

Records are immutable once fetched. Decoding is lenient about missing
fields (the provider omits empty ones) but strict about the overall shape.
"""

from __future__ import annotations

from dataclasses import dataclass


def _as_int(value: object, default: int = 0) -> int:
    """Coerce JSON numbers to ``int``, rejecting booleans and other types."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    return int(value)


def _as_str(value: object, default: str = "") -> str:
    return value if isinstance(value, str) else default


def _require_mapping(data: object, what: str) -> dict:
    if not isinstance(data, dict):
        raise ValueError(f"{what} must be a JSON object, got {type(data).__name__}")
    return data


def _require_list(data: dict, key: str, what: str) -> list:
    value = data.get(key)
    if not isinstance(value, list):
        raise ValueError(f"{what} is missing the {key!r} list")
    return value


@dataclass(frozen=True)
class Board:
    board: str
    title: str
    meta_description: str = ""
    per_page: int = 0
    pages: int = 0
    bump_limit: int = 0

    @classmethod
    def from_json(cls, data: object) -> Board:
        raw = _require_mapping(data, "board")
        board = _as_str(raw.get("board"))
        if not board:
            raise ValueError("board entry has no identifier")
        return cls(
            board=board,
            title=_as_str(raw.get("title")),
            meta_description=_as_str(raw.get("meta_description")),
            per_page=_as_int(raw.get("per_page")),
            pages=_as_int(raw.get("pages")),
            bump_limit=_as_int(raw.get("bump_limit")),
        )


@dataclass(frozen=True)
class Attachment:
    """Media attached to a post; ``tim`` is the storage-timestamp token."""

    filename: str
    ext: str
    tim: int

    @property
    def display_name(self) -> str:
        """Original upload name shown in post headers."""
        return f"{self.filename}{self.ext}"

    @property
    def media_filename(self) -> str:
        """Name of the stored media file on the provider's media host."""
        return f"{self.tim}{self.ext}"


@dataclass(frozen=True)
class Post:
    no: int
    time: int = 0
    name: str = ""
    sub: str = ""
    com: str = ""
    sticky: bool = False
    closed: bool = False
    replies: int = 0
    attachment: Attachment | None = None

    @classmethod
    def from_json(cls, data: object) -> Post:
        raw = _require_mapping(data, "post")
        filename = raw.get("filename")
        ext = raw.get("ext")
        tim = raw.get("tim")
        attachment = None
        if isinstance(filename, str) and isinstance(ext, str) and _as_int(tim, -1) >= 0:
            attachment = Attachment(filename=filename, ext=ext, tim=_as_int(tim))
        return cls(
            no=_as_int(raw.get("no")),
            time=_as_int(raw.get("time")),
            name=_as_str(raw.get("name")),
            sub=_as_str(raw.get("sub")),
            com=_as_str(raw.get("com")),
            sticky=_as_int(raw.get("sticky")) == 1,
            closed=_as_int(raw.get("closed")) == 1,
            replies=_as_int(raw.get("replies")),
            attachment=attachment,
        )


@dataclass(frozen=True)
class Thread:
    """Ordered posts of one thread; the first post is the opening post."""

    posts: tuple[Post, ...]

    @property
    def opening_post(self) -> Post:
        return self.posts[0]

    @classmethod
    def from_json(cls, data: object) -> Thread:
        raw = _require_mapping(data, "thread")
        posts = tuple(Post.from_json(item) for item in _require_list(raw, "posts", "thread"))
        return cls(posts=posts)


def boards_from_json(data: object) -> list[Board]:
    """Decode a ``{"boards": [...]}`` board-list payload."""
    raw = _require_mapping(data, "board list")
    return [Board.from_json(item) for item in _require_list(raw, "boards", "board list")]


def threads_from_json(data: object) -> list[Thread]:
    """Decode a ``{"threads": [...]}`` page payload, dropping empty threads."""
    raw = _require_mapping(data, "thread list")
    threads = [Thread.from_json(item) for item in _require_list(raw, "threads", "thread list")]
    return [thread for thread in threads if thread.posts]


def posts_from_json(data: object) -> list[Post]:
    """Decode a ``{"posts": [...]}`` full-thread payload."""
    raw = _require_mapping(data, "thread")
    return [Post.from_json(item) for item in _require_list(raw, "posts", "thread")]


__all__ = [
    "Attachment",
    "Board",
    "Post",
    "Thread",
    "boards_from_json",
    "posts_from_json",
    "threads_from_json",
]
