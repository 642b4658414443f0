"""Content-provider capability sets.

A provider knows where its JSON API lives and how to build human-facing
links to boards, threads, posts and media. It performs no I/O.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class ChanProvider(ABC):
    """Endpoint and link builders for one image-board flavor."""

    name: str = ""

    @abstractmethod
    def boards_endpoint(self) -> str:
        """API URL of the board list."""

    @abstractmethod
    def threads_endpoint(self, board: str, page: int) -> str:
        """API URL of one thread-list page of ``board``."""

    @abstractmethod
    def thread_endpoint(self, board: str, opening_post_id: int) -> str:
        """API URL of the full post list of one thread."""

    @abstractmethod
    def content_url(self, board: str) -> str:
        """Browser URL of ``board``."""

    @abstractmethod
    def thread_url(self, board: str, opening_post_id: int) -> str:
        """Browser URL of a thread."""

    @abstractmethod
    def post_url(self, board: str, opening_post_id: int, post_id: int) -> str:
        """Browser URL anchored at one post of a thread."""

    @abstractmethod
    def file_url(self, board: str, filename: str) -> str:
        """URL of a stored media file."""


class FourChanProvider(ChanProvider):
    name = "4chan"

    BASE_API_URL = "https://a.4cdn.org"
    BASE_URL = "https://boards.4chan.org"
    BASE_MEDIA_URL = "https://i.4cdn.org"

    def boards_endpoint(self) -> str:
        return f"{self.BASE_API_URL}/boards.json"

    def threads_endpoint(self, board: str, page: int) -> str:
        return f"{self.BASE_API_URL}/{board}/{page}.json"

    def thread_endpoint(self, board: str, opening_post_id: int) -> str:
        return f"{self.BASE_API_URL}/{board}/thread/{opening_post_id}.json"

    def content_url(self, board: str) -> str:
        return f"{self.BASE_URL}/{board}/"

    def thread_url(self, board: str, opening_post_id: int) -> str:
        return f"{self.BASE_URL}/{board}/thread/{opening_post_id}"

    def post_url(self, board: str, opening_post_id: int, post_id: int) -> str:
        return f"{self.BASE_URL}/{board}/thread/{opening_post_id}#p{post_id}"

    def file_url(self, board: str, filename: str) -> str:
        return f"{self.BASE_MEDIA_URL}/{board}/{filename}"


DEFAULT_PROVIDER_NAME = "default"

_PROVIDERS: dict[str, type[ChanProvider]] = {
    DEFAULT_PROVIDER_NAME: FourChanProvider,
    FourChanProvider.name: FourChanProvider,
}


def available_provider_names() -> tuple[str, ...]:
    return tuple(sorted(_PROVIDERS))


def provider_from_name(name: str) -> ChanProvider | None:
    """Return a provider for ``name`` or ``None`` when it is not recognized."""
    provider_cls = _PROVIDERS.get(name.strip().lower())
    if provider_cls is None:
        return None
    return provider_cls()


__all__ = [
    "ChanProvider",
    "DEFAULT_PROVIDER_NAME",
    "FourChanProvider",
    "available_provider_names",
    "provider_from_name",
]
