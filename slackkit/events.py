"""Real-time messaging events for channels, groups, IMs, files, pins, reactions,
stars, user groups and teams."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Callable, Mapping, TypeVar

from .stars import Item
from .usergroups import UserGroup
from .users import User

_E = TypeVar("_E", bound="_Event")


def _spec(
    key: str | None = None,
    load: Callable[[Any], Any] | None = None,
    **kwargs: Any,
) -> Any:
    """Declare a field with its JSON key and an optional converter."""
    metadata: dict[str, Any] = {}
    if key is not None:
        metadata["json"] = key
    if load is not None:
        metadata["load"] = load
    return field(metadata=metadata, **kwargs)


def _as_dict(raw: Any) -> dict[str, Any]:
    return dict(raw or {})


def _as_int(raw: Any) -> int:
    return int(raw or 0)


def _as_strings(raw: Any) -> list[str]:
    return list(raw or [])


def _nested(cls: type) -> Callable[[Any], Any]:
    def load(raw: Any) -> Any:
        return cls.from_dict(raw or {})

    return load


def _load(cls: type[_E], data: Mapping[str, Any] | None) -> _E:
    """Build the dataclass ``cls`` from a decoded JSON object."""
    data = data or {}
    kwargs: dict[str, Any] = {}
    for f in fields(cls):  # type: ignore[arg-type]
        raw = data.get(f.metadata.get("json", f.name))
        loader = f.metadata.get("load")
        if loader is not None:
            kwargs[f.name] = loader(raw)
        elif raw is not None:
            kwargs[f.name] = list(raw) if isinstance(raw, list) else raw
    return cls(**kwargs)


class _Event:
    """Builds a dataclass from a decoded JSON object."""

    @classmethod
    def from_dict(cls: type[_E], data: Mapping[str, Any] | None) -> _E:
        return _load(cls, data)


# Channels


@dataclass
class ChannelCreatedInfo(_Event):
    """The channel described by a channel created event."""

    id: str = ""
    is_channel: bool = False
    name: str = ""
    created: int = _spec(load=_as_int, default=0)
    creator: str = ""


@dataclass
class ChannelCreatedEvent(_Event):
    """A channel was created."""

    type: str = ""
    channel: ChannelCreatedInfo = _spec(
        load=_nested(ChannelCreatedInfo), default_factory=ChannelCreatedInfo
    )
    event_timestamp: str = _spec(key="event_ts", default="")

    @classmethod
    def from_dict(cls, data):
        """Build the event from a decoded JSON object."""
        return _load(cls, data)


@dataclass
class ChannelJoinedEvent(_Event):
    """The user joined a channel; the channel is kept as decoded JSON."""

    type: str = ""
    channel: dict[str, Any] = _spec(load=_as_dict, default_factory=dict)


@dataclass
class ChannelInfoEvent(_Event):
    """A channel left, deleted, archived or unarchived event."""

    type: str = ""
    channel: str = ""
    user: str = ""
    timestamp: str = _spec(key="ts", default="")

    @classmethod
    def from_dict(cls, data):
        """Build the event from a decoded JSON object."""
        return _load(cls, data)


@dataclass
class ChannelRenameInfo(_Event):
    """The channel described by a channel rename event."""

    id: str = ""
    name: str = ""
    created: str = ""


@dataclass
class ChannelRenameEvent(_Event):
    """A channel was renamed."""

    type: str = ""
    channel: ChannelRenameInfo = _spec(
        load=_nested(ChannelRenameInfo), default_factory=ChannelRenameInfo
    )
    timestamp: str = _spec(key="event_ts", default="")

    @classmethod
    def from_dict(cls, data):
        """Build the event from a decoded JSON object."""
        return _load(cls, data)


@dataclass
class ChannelHistoryChangedEvent(_Event):
    """The history of a channel changed."""

    type: str = ""
    latest: str = ""
    timestamp: str = _spec(key="ts", default="")
    event_timestamp: str = _spec(key="event_ts", default="")


class ChannelMarkedEvent(ChannelInfoEvent):
    """A channel was marked as read."""


class ChannelLeftEvent(ChannelInfoEvent):
    """The user left a channel."""


class ChannelDeletedEvent(ChannelInfoEvent):
    """A channel was deleted."""


class ChannelArchiveEvent(ChannelInfoEvent):
    """A channel was archived."""


class ChannelUnarchiveEvent(ChannelInfoEvent):
    """A channel was unarchived."""


# Desktop notifications


@dataclass
class DesktopNotificationEvent(_Event):
    """A desktop notification update."""

    type: str = ""
    title: str = ""
    subtitle: str = ""
    message: str = _spec(key="msg", default="")
    timestamp: str = _spec(key="ts", default="")
    content: str = ""
    channel: str = ""
    launch_uri: str = _spec(key="launchUri", default="")
    avatar_image: str = _spec(key="avatarImage", default="")
    ssb_filename: str = _spec(key="ssbFilename", default="")
    image_uri: str = _spec(key="imageUri", default="")
    is_shared: bool = False
    is_channel_invite: bool = False
    event_timestamp: str = _spec(key="event_ts", default="")


# Direct messages


@dataclass
class IMCreatedEvent(_Event):
    """A direct message channel was created."""

    type: str = ""
    user: str = ""
    channel: ChannelCreatedInfo = _spec(
        load=_nested(ChannelCreatedInfo), default_factory=ChannelCreatedInfo
    )


class IMHistoryChangedEvent(ChannelHistoryChangedEvent):
    """The history of a direct message channel changed."""


class IMOpenEvent(ChannelInfoEvent):
    """A direct message channel was opened."""


class IMCloseEvent(ChannelInfoEvent):
    """A direct message channel was closed."""


class IMMarkedEvent(ChannelInfoEvent):
    """A direct message channel was marked as read."""


class IMMarkedHistoryChanged(ChannelInfoEvent):
    """The marked history of a direct message channel changed."""


# Do not disturb


@dataclass
class DNDUpdatedEvent(_Event):
    """A user's Do Not Disturb status changed; the status is kept as decoded JSON."""

    type: str = ""
    user: str = ""
    status: dict[str, Any] = _spec(key="dnd_status", load=_as_dict, default_factory=dict)


# Files


@dataclass
class FileActionEvent(_Event):
    """Something happened to a file; file_id is set for deletions."""

    type: str = ""
    event_timestamp: str = _spec(key="event_ts", default="")
    file: dict[str, Any] = _spec(load=_as_dict, default_factory=dict)
    file_id: str = ""

    @classmethod
    def from_dict(cls, data):
        """Build the event from a decoded JSON object."""
        return _load(cls, data)


class FileCreatedEvent(FileActionEvent):
    """A file was created."""


class FileSharedEvent(FileActionEvent):
    """A file was shared."""


class FilePublicEvent(FileActionEvent):
    """A file was made public."""


class FileUnsharedEvent(FileActionEvent):
    """A file was unshared."""


class FileChangeEvent(FileActionEvent):
    """A file was changed."""


class FileDeletedEvent(FileActionEvent):
    """A file was deleted."""


class FilePrivateEvent(FileActionEvent):
    """A file was made private."""


@dataclass
class FileCommentAddedEvent(FileActionEvent):
    """A comment was added to a file."""

    comment: dict[str, Any] = _spec(load=_as_dict, default_factory=dict)


@dataclass
class FileCommentEditedEvent(FileActionEvent):
    """A comment on a file was edited."""

    comment: dict[str, Any] = _spec(load=_as_dict, default_factory=dict)


@dataclass
class FileCommentDeletedEvent(FileActionEvent):
    """A comment on a file was deleted; comment holds its id."""

    comment: str = ""


# Groups (private channels)


@dataclass
class GroupCreatedEvent(_Event):
    """A private channel was created."""

    type: str = ""
    user: str = ""
    channel: ChannelCreatedInfo = _spec(
        load=_nested(ChannelCreatedInfo), default_factory=ChannelCreatedInfo
    )


class GroupMarkedEvent(ChannelInfoEvent):
    """A private channel was marked as read."""


class GroupOpenEvent(ChannelInfoEvent):
    """A private channel was opened."""


class GroupCloseEvent(ChannelInfoEvent):
    """A private channel was closed."""


class GroupArchiveEvent(ChannelInfoEvent):
    """A private channel was archived."""


class GroupUnarchiveEvent(ChannelInfoEvent):
    """A private channel was unarchived."""


class GroupLeftEvent(ChannelInfoEvent):
    """The user left a private channel."""


class GroupJoinedEvent(ChannelJoinedEvent):
    """The user joined a private channel."""


@dataclass
class GroupRenameInfo(_Event):
    """The private channel described by a rename event."""

    id: str = ""
    name: str = ""
    created: str = ""


@dataclass
class GroupRenameEvent(_Event):
    """A private channel was renamed; the API sends the group as "channel"."""

    type: str = ""
    group: GroupRenameInfo = _spec(
        key="channel", load=_nested(GroupRenameInfo), default_factory=GroupRenameInfo
    )
    timestamp: str = _spec(key="ts", default="")

    @classmethod
    def from_dict(cls, data):
        """Build the event from a decoded JSON object."""
        return _load(cls, data)


class GroupHistoryChangedEvent(ChannelHistoryChangedEvent):
    """The history of a private channel changed."""


# Pins


@dataclass
class _PinEvent(_Event):
    type: str = ""
    user: str = ""
    item: Item = _spec(load=_nested(Item), default_factory=Item)
    channel: str = _spec(key="channel_id", default="")
    event_timestamp: str = _spec(key="event_ts", default="")
    has_pins: bool = False


class PinAddedEvent(_PinEvent):
    """An item was pinned."""


class PinRemovedEvent(_PinEvent):
    """An item was unpinned."""


# Reactions


@dataclass
class ReactionItem(_Event):
    """A lighter-weight item than the one returned by the reactions list."""

    type: str = ""
    channel: str = ""
    file: str = ""
    file_comment: str = ""
    timestamp: str = _spec(key="ts", default="")


@dataclass
class _ReactionEvent(_Event):
    type: str = ""
    user: str = ""
    item_user: str = ""
    item: ReactionItem = _spec(load=_nested(ReactionItem), default_factory=ReactionItem)
    reaction: str = ""
    event_timestamp: str = _spec(key="event_ts", default="")


class ReactionAddedEvent(_ReactionEvent):
    """A reaction was added to an item."""

    @classmethod
    def from_dict(cls, data):
        """Build the event from a decoded JSON object."""
        return _load(cls, data)


class ReactionRemovedEvent(_ReactionEvent):
    """A reaction was removed from an item."""


# Stars


@dataclass
class _StarEvent(_Event):
    type: str = ""
    user: str = ""
    item: Item = _spec(load=_nested(Item), default_factory=Item)
    event_timestamp: str = _spec(key="event_ts", default="")


class StarAddedEvent(_StarEvent):
    """An item was starred."""


class StarRemovedEvent(_StarEvent):
    """A star was removed from an item."""


# User groups


@dataclass
class SubteamCreatedEvent(_Event):
    """A user group was created."""

    type: str = ""
    subteam: UserGroup = _spec(load=UserGroup.from_dict, default_factory=UserGroup)


@dataclass
class SubteamMembersChangedEvent(_Event):
    """The membership of an existing user group changed."""

    type: str = ""
    subteam_id: str = ""
    team_id: str = ""
    date_previous_update: int = _spec(load=_as_int, default=0)
    date_update: int = _spec(load=_as_int, default=0)
    added_users: list[str] = _spec(load=_as_strings, default_factory=list)
    added_users_count: str = ""
    removed_users: list[str] = _spec(load=_as_strings, default_factory=list)
    removed_users_count: str = ""

    @classmethod
    def from_dict(cls, data):
        """Build the event from a decoded JSON object."""
        return _load(cls, data)


@dataclass
class SubteamSelfAddedEvent(_Event):
    """The user was added to a user group."""

    type: str = ""
    subteam_id: str = ""


class SubteamSelfRemovedEvent(SubteamSelfAddedEvent):
    """The user was removed from a user group."""


@dataclass
class SubteamUpdatedEvent(_Event):
    """An existing user group was updated or its members changed."""

    type: str = ""
    subteam: UserGroup = _spec(load=UserGroup.from_dict, default_factory=UserGroup)


# Teams


@dataclass
class TeamJoinEvent(_Event):
    """A new user joined the team."""

    type: str = ""
    user: User = _spec(load=User.from_dict, default_factory=User)

    @classmethod
    def from_dict(cls, data):
        """Build the event from a decoded JSON object."""
        return _load(cls, data)


@dataclass
class TeamRenameEvent(_Event):
    """The team was renamed."""

    type: str = ""
    name: str = ""
    event_timestamp: str = _spec(key="event_ts", default="")


@dataclass
class TeamPrefChangeEvent(_Event):
    """A team preference changed."""

    type: str = ""
    name: str = ""
    value: list[str] = _spec(load=_as_strings, default_factory=list)


@dataclass
class TeamDomainChangeEvent(_Event):
    """The team domain changed."""

    type: str = ""
    url: str = ""
    domain: str = ""


@dataclass
class TeamMigrationStartedEvent(_Event):
    """The team is being migrated between servers."""

    type: str = ""