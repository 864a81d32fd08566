"""Users: profiles, presence, identity, photos and listing."""

from __future__ import annotations

import dataclasses
import json
import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Iterator, Mapping

from .transport import RateLimitedError, ResponseMetadata

log = logging.getLogger(__name__)

DEFAULT_USER_PHOTO_CROP_X = -1
DEFAULT_USER_PHOTO_CROP_Y = -1
DEFAULT_USER_PHOTO_CROP_W = -1
USERS_PAGE_LIMIT = 200

_OMIT_EMPTY = {"omitempty": True}


def _json_key(f: dataclasses.Field) -> str:
    return f.metadata.get("json", f.name)


def _load_flat(cls: type, data: Mapping[str, Any] | None, skip: tuple[str, ...] = ()) -> Any:
    """Build a dataclass from a JSON object, keeping defaults for absent or null keys."""
    data = data or {}
    kwargs: dict[str, Any] = {}
    for f in dataclasses.fields(cls):
        if f.name in skip:
            continue
        value = data.get(_json_key(f))
        if value is not None:
            kwargs[f.name] = list(value) if isinstance(value, list) else value
    return cls(**kwargs)


def _dump_flat(obj: Any, skip: tuple[str, ...] = ()) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for f in dataclasses.fields(obj):
        if f.name in skip:
            continue
        value = getattr(obj, f.name)
        if f.metadata.get("omitempty") and not value:
            continue
        out[_json_key(f)] = list(value) if isinstance(value, list) else value
    return out


@dataclass
class UserProfileCustomField:
    """A custom user profile field."""

    value: str = ""
    alt: str = ""
    label: str = ""


class UserProfileCustomFields:
    """The custom fields of a profile; the API sends ``[]`` when there are none."""

    def __init__(self, mapping: Mapping[str, UserProfileCustomField] | None = None) -> None:
        self._fields: dict[str, UserProfileCustomField] = dict(mapping or {})

    def to_map(self) -> dict[str, UserProfileCustomField]:
        """Return the custom fields keyed by field id."""
        return self._fields

    def set_map(self, mapping: Mapping[str, UserProfileCustomField]) -> None:
        """Replace the custom fields."""
        self._fields = dict(mapping)

    def __len__(self) -> int:
        return len(self._fields)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, UserProfileCustomFields):
            return NotImplemented
        return self._fields == other._fields

    def __repr__(self) -> str:
        return f"UserProfileCustomFields({self._fields!r})"

    def _to_value(self) -> Any:
        if not self._fields:
            return []
        return {key: dataclasses.asdict(entry) for key, entry in self._fields.items()}

    @classmethod
    def _from_value(cls, value: Any) -> UserProfileCustomFields:
        if value is None or value == []:
            return cls()
        if not isinstance(value, dict):
            raise ValueError(f"custom fields must be an object, got {type(value).__name__}")
        return cls(
            {key: _load_flat(UserProfileCustomField, entry) for key, entry in value.items()}
        )

    def to_json(self) -> str:
        """Encode as JSON, writing ``[]`` when there are no fields."""
        return json.dumps(self._to_value(), separators=(",", ":"))

    @classmethod
    def from_json(cls, text: str) -> UserProfileCustomFields:
        """Decode from JSON, accepting ``[]`` as no fields."""
        return cls._from_value(json.loads(text))


@dataclass
class UserProfile:
    """The profile details of a user."""

    first_name: str = ""
    last_name: str = ""
    real_name: str = ""
    real_name_normalized: str = ""
    display_name: str = ""
    display_name_normalized: str = ""
    email: str = ""
    skype: str = ""
    phone: str = ""
    image_24: str = ""
    image_32: str = ""
    image_48: str = ""
    image_72: str = ""
    image_192: str = ""
    image_original: str = ""
    title: str = ""
    bot_id: str = field(default="", metadata=_OMIT_EMPTY)
    api_app_id: str = field(default="", metadata=_OMIT_EMPTY)
    status_text: str = field(default="", metadata=_OMIT_EMPTY)
    status_emoji: str = field(default="", metadata=_OMIT_EMPTY)
    status_expiration: int = 0
    team: str = ""
    fields: UserProfileCustomFields = field(default_factory=UserProfileCustomFields)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> UserProfile:
        profile = _load_flat(cls, data, skip=("fields",))
        profile.fields = UserProfileCustomFields._from_value((data or {}).get("fields"))
        return profile

    def to_dict(self) -> dict[str, Any]:
        out = _dump_flat(self, skip=("fields",))
        out["fields"] = self.fields._to_value()
        return out

    def fields_map(self) -> dict[str, UserProfileCustomField]:
        """Return the custom fields keyed by field id."""
        return self.fields.to_map()

    def set_fields_map(self, mapping: Mapping[str, UserProfileCustomField]) -> None:
        """Replace the custom fields."""
        self.fields.set_map(mapping)


@dataclass
class EnterpriseUser:
    """Enterprise Grid details of a user."""

    id: str = ""
    enterprise_id: str = ""
    enterprise_name: str = ""
    is_admin: bool = False
    is_owner: bool = False
    teams: list[str] = field(default_factory=list)


@dataclass
class User:
    """All the information of a user."""

    id: str = ""
    team_id: str = ""
    name: str = ""
    deleted: bool = False
    color: str = ""
    real_name: str = ""
    tz: str = field(default="", metadata=_OMIT_EMPTY)
    tz_label: str = ""
    tz_offset: int = 0
    profile: UserProfile = field(default_factory=UserProfile)
    is_bot: bool = False
    is_admin: bool = False
    is_owner: bool = False
    is_primary_owner: bool = False
    is_restricted: bool = False
    is_ultra_restricted: bool = False
    is_stranger: bool = False
    is_app_user: bool = False
    is_invited_user: bool = False
    has_2fa: bool = False
    has_files: bool = False
    presence: str = ""
    locale: str = ""
    updated: int = 0
    enterprise: EnterpriseUser = field(
        default_factory=EnterpriseUser, metadata={"json": "enterprise_user"}
    )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> User:
        data = data or {}
        user = _load_flat(cls, data, skip=("profile", "enterprise"))
        user.profile = UserProfile.from_dict(data.get("profile"))
        user.enterprise = _load_flat(EnterpriseUser, data.get("enterprise_user"))
        return user

    def to_dict(self) -> dict[str, Any]:
        out = _dump_flat(self, skip=("profile", "enterprise"))
        out["profile"] = self.profile.to_dict()
        out["enterprise_user"] = _dump_flat(self.enterprise)
        return out


@dataclass
class UserPresence:
    """The online status of a user."""

    presence: str = ""
    online: bool = False
    auto_away: bool = False
    manual_away: bool = False
    connection_count: int = 0
    last_activity: int = 0


@dataclass
class UserIdentity:
    """User details available through identity scopes."""

    id: str = ""
    name: str = ""
    email: str = ""
    image_24: str = ""
    image_32: str = ""
    image_48: str = ""
    image_72: str = ""
    image_192: str = ""
    image_512: str = ""


@dataclass
class TeamIdentity:
    """Team details available through identity scopes."""

    id: str = ""
    name: str = ""
    domain: str = ""
    image_34: str = ""
    image_44: str = ""
    image_68: str = ""
    image_88: str = ""
    image_102: str = ""
    image_132: str = ""
    image_230: str = ""
    image_default: bool = False
    image_original: str = ""


@dataclass
class UserIdentityResponse:
    """The user and team returned by users.identity."""

    user: UserIdentity = field(default_factory=UserIdentity)
    team: TeamIdentity = field(default_factory=TeamIdentity)


@dataclass
class UserSetPhotoParams:
    """Crop options for a profile photo; -1 leaves a value to the server."""

    crop_x: int = DEFAULT_USER_PHOTO_CROP_X
    crop_y: int = DEFAULT_USER_PHOTO_CROP_Y
    crop_w: int = DEFAULT_USER_PHOTO_CROP_W


class UserMethods:
    """User related API methods; mixed into a client that provides post_method and post_file."""

    post_method: Callable[..., dict[str, Any]]
    post_file: Callable[..., dict[str, Any]]

    def get_user_presence(self, user: str) -> UserPresence:
        """Return the current presence status of a user."""
        data = self.post_method("users.getPresence", {"user": user})
        return _load_flat(UserPresence, data)

    def get_user_info(self, user: str) -> User:
        """Return the complete information of a user."""
        data = self.post_method("users.info", {"user": user, "include_locale": "true"})
        return User.from_dict(data.get("user"))

    def _user_page(self, cursor: str, limit: int, presence: bool) -> tuple[list[User], str]:
        data = self.post_method(
            "users.list",
            {
                "limit": str(limit),
                "presence": "true" if presence else "false",
                "cursor": cursor,
                "include_locale": "true",
            },
        )
        users = [User.from_dict(entry) for entry in data.get("members") or []]
        next_cursor = ResponseMetadata.from_dict(data.get("response_metadata")).cursor
        log.debug("users.list: got %d users; next cursor %r", len(users), next_cursor)
        return users, next_cursor

    def iter_user_pages(
        self, limit: int = USERS_PAGE_LIMIT, presence: bool = False
    ) -> Iterator[list[User]]:
        """Yield users page by page, following the response cursor."""
        cursor = ""
        while True:
            users, cursor = self._user_page(cursor, limit, presence)
            yield users
            if not cursor:
                return

    def get_users(self) -> list[User]:
        """Return every user, waiting out rate limits between pages."""
        results: list[User] = []
        cursor = ""
        while True:
            try:
                users, cursor = self._user_page(cursor, USERS_PAGE_LIMIT, False)
            except RateLimitedError as exc:
                time.sleep(exc.retry_after)
                continue
            results.extend(users)
            if not cursor:
                return results

    def get_user_by_email(self, email: str) -> User:
        """Return the complete information of the user with this e-mail address."""
        data = self.post_method("users.lookupByEmail", {"email": email})
        return User.from_dict(data.get("user"))

    def set_user_as_active(self) -> None:
        """Mark the authenticated user as active."""
        self.post_method("users.setActive", {})

    def set_user_presence(self, presence: str) -> None:
        """Change the authenticated user's presence."""
        self.post_method("users.setPresence", {"presence": presence})

    def get_user_identity(self) -> UserIdentityResponse:
        """Return the user and team available through identity scopes."""
        data = self.post_method("users.identity", {})
        return UserIdentityResponse(
            user=_load_flat(UserIdentity, data.get("user")),
            team=_load_flat(TeamIdentity, data.get("team")),
        )

    def set_user_photo(self, image: str | Path, params: UserSetPhotoParams | None = None) -> None:
        """Upload a local image as the authenticated user's profile photo."""
        params = params or UserSetPhotoParams()
        values: dict[str, str] = {}
        if params.crop_x != DEFAULT_USER_PHOTO_CROP_X:
            values["crop_x"] = str(params.crop_x)
        if params.crop_y != DEFAULT_USER_PHOTO_CROP_Y:
            values["crop_y"] = str(params.crop_y)
        if params.crop_w != DEFAULT_USER_PHOTO_CROP_W:
            values["crop_w"] = str(params.crop_w)
        self.post_file("users.setPhoto", image, "image", values)

    def delete_user_photo(self) -> None:
        """Delete the authenticated user's profile photo."""
        self.post_method("users.deletePhoto", {})

    def set_user_custom_status(
        self,
        status_text: str,
        status_emoji: str,
        status_expiration: int = 0,
        user: str = "",
    ) -> None:
        """Set a custom status; empty text and emoji unset it, expiration 0 never expires."""
        profile = json.dumps(
            {
                "status_text": status_text,
                "status_emoji": status_emoji,
                "status_expiration": status_expiration,
            },
            separators=(",", ":"),
        )
        self.post_method("users.profile.set", {"user": user, "profile": profile})

    def unset_user_custom_status(self) -> None:
        """Remove the authenticated user's custom status."""
        self.set_user_custom_status("", "", 0)

    def get_user_profile(self, user_id: str, include_labels: bool = False) -> UserProfile | None:
        """Return a user's profile, or None when the reply holds none."""
        values = {"user": user_id}
        if include_labels:
            values["include_labels"] = "true"
        data = self.post_method("users.profile.get", values)
        profile = data.get("profile")
        return None if profile is None else UserProfile.from_dict(profile)