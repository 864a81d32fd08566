"""Stars: adding, removing and listing starred items."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Callable, Iterator, Mapping

from .transport import Paging, RateLimitedError, ResponseMetadata

DEFAULT_STARS_USER = ""
DEFAULT_STARS_COUNT = 100
DEFAULT_STARS_PAGE = 1
STARS_PAGE_LIMIT = 200


@dataclass
class StarsParameters:
    """Filters for a single page of starred items."""

    user: str = DEFAULT_STARS_USER
    count: int = DEFAULT_STARS_COUNT
    page: int = DEFAULT_STARS_PAGE


@dataclass(frozen=True)
class ItemRef:
    """A reference to a message, file or file comment."""

    channel: str = ""
    timestamp: str = ""
    file: str = ""
    comment: str = ""

    @classmethod
    def to_message(cls, channel: str, timestamp: str) -> ItemRef:
        return cls(channel=channel, timestamp=timestamp)

    @classmethod
    def to_file(cls, file: str) -> ItemRef:
        return cls(file=file)

    @classmethod
    def to_comment(cls, comment: str) -> ItemRef:
        return cls(comment=comment)

    def _values(self) -> dict[str, str]:
        pairs = {"timestamp": self.timestamp, "file": self.file, "file_comment": self.comment}
        return {key: value for key, value in pairs.items() if value}


@dataclass
class Item:
    """A starred item; which of message, file and comment is set depends on type."""

    type: str = ""
    channel: str = ""
    message: dict[str, Any] | None = None
    file: dict[str, Any] | None = None
    comment: dict[str, Any] | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Item:
        return cls(
            type=data.get("type") or "",
            channel=data.get("channel") or "",
            message=data.get("message"),
            file=data.get("file"),
            comment=data.get("comment"),
        )


StarredItem = Item


class StarsMethods:
    """Star related API methods; mixed into a client that provides post_method."""

    post_method: Callable[..., dict[str, Any]]

    def _star_request(self, method: str, channel: str, item: ItemRef) -> None:
        self.post_method(method, {"channel": channel, **item._values()})

    def add_star(self, channel: str, item: ItemRef) -> None:
        """Star an item in a channel."""
        self._star_request("stars.add", channel, item)

    def remove_star(self, channel: str, item: ItemRef) -> None:
        """Remove a star from an item in a channel."""
        self._star_request("stars.remove", channel, item)

    def list_stars(self, params: StarsParameters | None = None) -> tuple[list[Item], Paging]:
        """Return one page of the stars a user added, with its paging data."""
        params = params or StarsParameters()
        values: dict[str, str] = {}
        if params.user != DEFAULT_STARS_USER:
            values["user"] = params.user
        if params.count != DEFAULT_STARS_COUNT:
            values["count"] = str(params.count)
        if params.page != DEFAULT_STARS_PAGE:
            values["page"] = str(params.page)
        data = self.post_method("stars.list", values)
        items = [Item.from_dict(entry) for entry in data.get("items") or []]
        return items, Paging.from_dict(data.get("paging"))

    def get_starred(self, params: StarsParameters | None = None) -> tuple[list[StarredItem], Paging]:
        """Return one page of starred items, the same as list_stars."""
        items, paging = self.list_stars(params)
        return list(items), paging

    def _star_page(self, cursor: str, limit: int) -> tuple[list[Item], str]:
        data = self.post_method("stars.list", {"limit": str(limit), "cursor": cursor})
        items = [Item.from_dict(entry) for entry in data.get("items") or []]
        return items, ResponseMetadata.from_dict(data.get("response_metadata")).cursor

    def iter_star_pages(self, limit: int = STARS_PAGE_LIMIT) -> Iterator[list[Item]]:
        """Yield starred items page by page, following the response cursor."""
        cursor = ""
        while True:
            items, cursor = self._star_page(cursor, limit)
            yield items
            if not cursor:
                return

    def list_all_stars(self) -> list[Item]:
        """Return every starred item, waiting out rate limits between pages."""
        results: list[Item] = []
        cursor = ""
        while True:
            try:
                items, cursor = self._star_page(cursor, STARS_PAGE_LIMIT)
            except RateLimitedError as exc:
                time.sleep(exc.retry_after)
                continue
            results.extend(items)
            if not cursor:
                return results