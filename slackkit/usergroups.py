"""User groups: creating, enabling, disabling, listing and membership."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Mapping


@dataclass
class UserGroupPrefs:
    """Default channels and groups (private channels) of a user group."""

    channels: list[str] = field(default_factory=list)
    groups: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> UserGroupPrefs:
        data = data or {}
        return cls(
            channels=list(data.get("channels") or []),
            groups=list(data.get("groups") or []),
        )


@dataclass
class UserGroup:
    """All the information of a user group."""

    id: str = ""
    team_id: str = ""
    is_user_group: bool = False
    name: str = ""
    description: str = ""
    handle: str = ""
    is_external: bool = False
    date_create: int = 0
    date_update: int = 0
    date_delete: int = 0
    auto_type: str = ""
    created_by: str = ""
    updated_by: str = ""
    deleted_by: str = ""
    prefs: UserGroupPrefs = field(default_factory=UserGroupPrefs)
    user_count: int = 0
    users: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> UserGroup:
        data = data or {}
        return cls(
            id=data.get("id") or "",
            team_id=data.get("team_id") or "",
            is_user_group=bool(data.get("is_usergroup")),
            name=data.get("name") or "",
            description=data.get("description") or "",
            handle=data.get("handle") or "",
            is_external=bool(data.get("is_external")),
            date_create=int(data.get("date_create") or 0),
            date_update=int(data.get("date_update") or 0),
            date_delete=int(data.get("date_delete") or 0),
            auto_type=data.get("auto_type") or "",
            created_by=data.get("created_by") or "",
            updated_by=data.get("updated_by") or "",
            deleted_by=data.get("deleted_by") or "",
            prefs=UserGroupPrefs.from_dict(data.get("prefs")),
            user_count=int(data.get("user_count") or 0),
            users=list(data.get("users") or []),
        )


def _optional_values(user_group: UserGroup) -> dict[str, str]:
    values: dict[str, str] = {}
    if user_group.handle:
        values["handle"] = user_group.handle
    if user_group.description:
        values["description"] = user_group.description
    if user_group.prefs.channels:
        values["channels"] = ",".join(user_group.prefs.channels)
    return values


class UserGroupMethods:
    """User group API methods; mixed into a client that provides post_method."""

    post_method: Callable[..., dict[str, Any]]

    def _user_group(self, method: str, values: dict[str, str]) -> UserGroup:
        data = self.post_method(method, values)
        return UserGroup.from_dict(data.get("usergroup"))

    def create_user_group(self, user_group: UserGroup) -> UserGroup:
        """Create a new user group and return it as the server sees it."""
        values = {"name": user_group.name, **_optional_values(user_group)}
        return self._user_group("usergroups.create", values)

    def disable_user_group(self, user_group: str) -> UserGroup:
        """Disable an existing user group."""
        return self._user_group("usergroups.disable", {"usergroup": user_group})

    def enable_user_group(self, user_group: str) -> UserGroup:
        """Enable an existing user group."""
        return self._user_group("usergroups.enable", {"usergroup": user_group})

    def get_user_groups(
        self,
        include_count: bool = False,
        include_disabled: bool = False,
        include_users: bool = False,
    ) -> list[UserGroup]:
        """Return the user groups of the team."""
        flags = {
            "include_count": include_count,
            "include_disabled": include_disabled,
            "include_users": include_users,
        }
        values = {key: "true" for key, enabled in flags.items() if enabled}
        data = self.post_method("usergroups.list", values)
        return [UserGroup.from_dict(entry) for entry in data.get("usergroups") or []]

    def update_user_group(self, user_group: UserGroup) -> UserGroup:
        """Update an existing user group, sending only the fields that are set."""
        values = {"usergroup": user_group.id}
        if user_group.name:
            values["name"] = user_group.name
        values.update(_optional_values(user_group))
        return self._user_group("usergroups.update", values)

    def get_user_group_members(self, user_group: str) -> list[str]:
        """Return the ids of the users in a group."""
        data = self.post_method("usergroups.users.list", {"usergroup": user_group})
        return list(data.get("users") or [])

    def update_user_group_members(self, user_group: str, members: str | Iterable[str]) -> UserGroup:
        """Replace the members of a group; members is a comma separated string or ids."""
        if not isinstance(members, str):
            members = ",".join(members)
        return self._user_group(
            "usergroups.users.update", {"usergroup": user_group, "users": members}
        )