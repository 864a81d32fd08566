"""The full API client combining every method group."""

from __future__ import annotations

from typing import TypeVar

from .stars import StarsMethods
from .team import TeamMethods
from .transport import BaseClient
from .usergroups import UserGroupMethods
from .users import UserMethods

MAX_MESSAGE_TEXT_LENGTH = 4000
"""Maximum message length in characters over the real-time connection."""

_Interval = TypeVar("_Interval")


def deadman_duration(interval: _Interval) -> _Interval:
    """Return how long to wait for a pong before treating the connection as dead."""
    return interval * 4  # type: ignore[operator]


class Client(StarsMethods, TeamMethods, UserMethods, UserGroupMethods, BaseClient):
    """A Slack Web API client supporting stars, team, user and user group methods."""