"""HTTP transport shared by the API method groups, plus incoming webhooks."""

from __future__ import annotations

from dataclasses import dataclass, field
from http import HTTPStatus
from pathlib import Path
from typing import Any, Mapping

import requests

DEFAULT_API_URL = "https://slack.com/api/"


class SlackError(Exception):
    """An error reported by the Slack API or raised while talking to it."""


class RateLimitedError(SlackError):
    """The server asked the caller to slow down for ``retry_after`` seconds."""

    def __init__(self, retry_after: float) -> None:
        super().__init__(f"slack rate limit exceeded, retry after {retry_after:g}s")
        self.retry_after = retry_after


class StatusCodeError(SlackError):
    """The server answered with an unexpected HTTP status."""

    def __init__(self, code: int, status: str) -> None:
        super().__init__(f"slack server error: {status}")
        self.code = code
        self.status = status


@dataclass
class Paging:
    """Page-number based paging information."""

    count: int = 0
    total: int = 0
    page: int = 0
    pages: int = 0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> Paging:
        data = data or {}
        return cls(
            count=data.get("count") or 0,
            total=data.get("total") or 0,
            page=data.get("page") or 0,
            pages=data.get("pages") or 0,
        )


@dataclass
class ResponseMetadata:
    """Cursor based paging information."""

    cursor: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> ResponseMetadata:
        data = data or {}
        return cls(cursor=data.get("next_cursor") or "")


_WEBHOOK_KEYS = {
    "username": "username",
    "icon_emoji": "icon_emoji",
    "icon_url": "icon_url",
    "channel": "channel",
    "thread_timestamp": "thread_ts",
    "text": "text",
    "attachments": "attachments",
    "parse": "parse",
}


@dataclass
class WebhookMessage:
    """Payload posted to an incoming webhook."""

    username: str = ""
    icon_emoji: str = ""
    icon_url: str = ""
    channel: str = ""
    thread_timestamp: str = ""
    text: str = ""
    attachments: list[dict[str, Any]] = field(default_factory=list)
    parse: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON payload, leaving out empty fields."""
        return {
            key: getattr(self, attr)
            for attr, key in _WEBHOOK_KEYS.items()
            if getattr(self, attr)
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> WebhookMessage:
        kwargs = {attr: data[key] for attr, key in _WEBHOOK_KEYS.items() if data.get(key)}
        if "attachments" in kwargs:
            kwargs["attachments"] = list(kwargs["attachments"])
        return cls(**kwargs)


def _status_text(response: requests.Response) -> str:
    try:
        phrase = HTTPStatus(response.status_code).phrase
    except ValueError:
        phrase = response.reason or ""
    return f"{response.status_code} {phrase}".strip()


def _retry_after(response: requests.Response) -> float:
    header = response.headers.get("Retry-After", "")
    try:
        return float(int(header))
    except ValueError as exc:
        raise SlackError(f"invalid Retry-After header: {header!r}") from exc


def _check_status(response: requests.Response) -> None:
    if response.status_code == HTTPStatus.TOO_MANY_REQUESTS:
        raise RateLimitedError(_retry_after(response))
    if response.status_code != HTTPStatus.OK:
        raise StatusCodeError(response.status_code, _status_text(response))


def _decode(response: requests.Response) -> dict[str, Any]:
    _check_status(response)
    try:
        data = response.json()
    except ValueError as exc:
        raise SlackError("invalid JSON in response") from exc
    if not isinstance(data, dict):
        raise SlackError("unexpected response shape")
    if not data.get("ok"):
        raise SlackError(data.get("error") or "unknown error")
    return data


class BaseClient:
    """Posts API methods as form requests and decodes their JSON replies."""

    def __init__(
        self,
        token: str,
        api_url: str = DEFAULT_API_URL,
        session: requests.Session | None = None,
    ) -> None:
        self.token = token
        self.api_url = api_url
        self.session = session if session is not None else requests.Session()

    def _form(self, values: Mapping[str, str] | None) -> dict[str, str]:
        form = {"token": self.token}
        form.update(values or {})
        return form

    def post_method(self, method: str, values: Mapping[str, str] | None = None) -> dict[str, Any]:
        """Call an API method and return the decoded reply, raising on failure."""
        try:
            response = self.session.post(self.api_url + method, data=self._form(values))
        except requests.RequestException as exc:
            raise SlackError(f"failed to call {method}: {exc}") from exc
        return _decode(response)

    def post_file(
        self,
        method: str,
        path: str | Path,
        field: str,
        values: Mapping[str, str] | None = None,
    ) -> dict[str, Any]:
        """Upload a local file as a multipart field of an API method call."""
        path = Path(path)
        with path.open("rb") as handle:
            try:
                response = self.session.post(
                    self.api_url + method,
                    data=self._form(values),
                    files={field: (path.name, handle)},
                )
            except requests.RequestException as exc:
                raise SlackError(f"failed to call {method}: {exc}") from exc
        return _decode(response)


def post_webhook(
    url: str,
    msg: WebhookMessage,
    session: requests.Session | None = None,
) -> None:
    """Send a message to an incoming webhook."""
    poster = session if session is not None else requests
    try:
        response = poster.post(url, json=msg.to_dict())
    except requests.RequestException as exc:
        raise SlackError(f"failed to post webhook: {exc}") from exc
    _check_status(response)