"""Team information, access logs and billing status."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Mapping

from .transport import Paging

DEFAULT_LOGINS_COUNT = 100
DEFAULT_LOGINS_PAGE = 1


@dataclass
class TeamInfo:
    """Basic information about a team."""

    id: str = ""
    name: str = ""
    domain: str = ""
    email_domain: str = ""
    icon: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> TeamInfo:
        return cls(
            id=data.get("id") or "",
            name=data.get("name") or "",
            domain=data.get("domain") or "",
            email_domain=data.get("email_domain") or "",
            icon=dict(data.get("icon") or {}),
        )


@dataclass
class Login:
    """One entry of the team access log."""

    user_id: str = ""
    username: str = ""
    date_first: int = 0
    date_last: int = 0
    count: int = 0
    ip: str = ""
    user_agent: str = ""
    isp: str = ""
    country: str = ""
    region: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Login:
        return cls(
            user_id=data.get("user_id") or "",
            username=data.get("username") or "",
            date_first=data.get("date_first") or 0,
            date_last=data.get("date_last") or 0,
            count=data.get("count") or 0,
            ip=data.get("ip") or "",
            user_agent=data.get("user_agent") or "",
            isp=data.get("isp") or "",
            country=data.get("country") or "",
            region=data.get("region") or "",
        )


@dataclass
class BillingActive:
    """Whether a user is billed as active."""

    billing_active: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> BillingActive:
        return cls(billing_active=bool((data or {}).get("billing_active")))


@dataclass
class AccessLogParameters:
    """Paging options for the access log."""

    count: int = DEFAULT_LOGINS_COUNT
    page: int = DEFAULT_LOGINS_PAGE


class TeamMethods:
    """Team related API methods; mixed into a client that provides post_method."""

    post_method: Callable[..., dict[str, Any]]

    def get_team_info(self) -> TeamInfo:
        """Return the information of the caller's team."""
        data = self.post_method("team.info", {})
        return TeamInfo.from_dict(data.get("team") or {})

    def get_access_logs(self, params: AccessLogParameters | None = None) -> tuple[list[Login], Paging]:
        """Return one page of logins with its paging data."""
        params = params or AccessLogParameters()
        values: dict[str, str] = {}
        if params.count != DEFAULT_LOGINS_COUNT:
            values["count"] = str(params.count)
        if params.page != DEFAULT_LOGINS_PAGE:
            values["page"] = str(params.page)
        data = self.post_method("team.accessLogs", values)
        logins = [Login.from_dict(entry) for entry in data.get("logins") or []]
        return logins, Paging.from_dict(data.get("paging"))

    def _billable_info(self, values: dict[str, str]) -> dict[str, BillingActive]:
        data = self.post_method("team.billableInfo", values)
        return {
            user_id: BillingActive.from_dict(entry)
            for user_id, entry in (data.get("billable_info") or {}).items()
        }

    def get_billable_info(self, user: str) -> dict[str, BillingActive]:
        """Return the billing status of one user, keyed by user id."""
        return self._billable_info({"user": user})

    def get_billable_info_for_team(self) -> dict[str, BillingActive]:
        """Return the billing status of every user on the team."""
        return self._billable_info({})