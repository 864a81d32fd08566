"""Real-time messaging events: connection life-cycle and miscellaneous events."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from .users import User


@dataclass
class ConnectedEvent:
    """Sent when a connection is made; connection_count starts at 1."""

    connection_count: int = 0
    info: Any = None


@dataclass
class ConnectionErrorEvent:
    """A failed connection attempt, with the wait before the next one in seconds."""

    attempt: int = 0
    backoff: float = 0.0
    error: BaseException | None = None

    def __str__(self) -> str:
        return str(self.error)


@dataclass
class ConnectingEvent:
    """A connection attempt; attempt starts at 1."""

    attempt: int = 0
    connection_count: int = 0


@dataclass
class DisconnectedEvent:
    """How the connection ended."""

    intentional: bool = False
    cause: BaseException | None = None


@dataclass
class LatencyReport:
    """Measured round-trip latency in seconds."""

    value: float = 0.0


@dataclass
class InvalidAuthEvent:
    """Authentication with the API failed."""


@dataclass
class UnmarshallingErrorEvent:
    """A received event could not be decoded."""

    error: BaseException | None = None

    def __str__(self) -> str:
        return str(self.error)


@dataclass
class MessageTooLongEvent:
    """An outgoing message exceeded the length limit."""

    message: Any = None
    max_length: int = 0

    def __str__(self) -> str:
        return f"Message too long (max {self.max_length} characters)"


@dataclass
class RateLimitEvent:
    """The server warned that rate limits are being hit."""

    def __str__(self) -> str:
        return "Messages are being sent too fast."


@dataclass
class OutgoingErrorEvent:
    """Sending a message failed."""

    message: Any = None
    error: BaseException | None = None

    def __str__(self) -> str:
        return str(self.error)


@dataclass
class IncomingEventError:
    """An unexpected error while receiving an event."""

    error: BaseException | None = None

    def __str__(self) -> str:
        return str(self.error)


@dataclass
class AckErrorEvent:
    """The server rejected a sent message."""

    error: Any = None

    def __str__(self) -> str:
        return str(self.error)


@dataclass
class RTMError:
    """Error details as returned by the server."""

    code: int = 0
    msg: str = ""

    def __str__(self) -> str:
        return f"Code {self.code} - {self.msg}"

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> RTMError:
        return cls(code=int(data.get("code") or 0), msg=data.get("msg") or "")


@dataclass
class AckMessage:
    """A reply to a message sent over the connection."""

    reply_to: int = 0
    timestamp: str = ""
    text: str = ""
    ok: bool = False
    error: RTMError | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> AckMessage:
        error = data.get("error")
        return cls(
            reply_to=int(data.get("reply_to") or 0),
            timestamp=data.get("ts") or "",
            text=data.get("text") or "",
            ok=bool(data.get("ok")),
            error=None if error is None else RTMError.from_dict(error),
        )


@dataclass
class RTMEvent:
    """Wrapper for every event delivered to the caller."""

    type: str = ""
    data: Any = None


@dataclass
class HelloEvent:
    """The hello event."""


@dataclass
class PresenceChangeEvent:
    type: str = ""
    presence: str = ""
    user: str = ""
    users: list[str] = field(default_factory=list)


@dataclass
class UserTypingEvent:
    type: str = ""
    user: str = ""
    channel: str = ""


@dataclass
class PrefChangeEvent:
    """A preference change; value is kept as decoded JSON."""

    type: str = ""
    name: str = ""
    value: Any = None


@dataclass
class ManualPresenceChangeEvent:
    type: str = ""
    presence: str = ""


@dataclass
class UserChangeEvent:
    type: str = ""
    user: User = field(default_factory=User)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> UserChangeEvent:
        return cls(type=data.get("type") or "", user=User.from_dict(data.get("user")))


@dataclass
class EmojiChangedEvent:
    type: str = ""
    subtype: str = ""
    name: str = ""
    names: list[str] = field(default_factory=list)
    value: str = ""
    event_timestamp: str = ""


@dataclass
class CommandsChangedEvent:
    type: str = ""
    event_timestamp: str = ""


@dataclass
class EmailDomainChangedEvent:
    type: str = ""
    event_timestamp: str = ""
    email_domain: str = ""


@dataclass
class BotAddedEvent:
    type: str = ""
    bot: dict[str, Any] = field(default_factory=dict)


@dataclass
class BotChangedEvent:
    type: str = ""
    bot: dict[str, Any] = field(default_factory=dict)


@dataclass
class AccountsChangedEvent:
    type: str = ""


@dataclass
class ReconnectUrlEvent:
    type: str = ""
    url: str = ""


@dataclass
class MemberJoinedChannelEvent:
    """A user joined a public or private channel."""

    type: str = ""
    user: str = ""
    channel: str = ""
    channel_type: str = ""
    team: str = ""
    inviter: str = ""


@dataclass
class MemberLeftChannelEvent:
    """A user left a public or private channel."""

    type: str = ""
    user: str = ""
    channel: str = ""
    channel_type: str = ""
    team: str = ""