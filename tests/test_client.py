from datetime import timedelta
from urllib.parse import parse_qs

import pytest
import responses

from slackkit.client import Client, deadman_duration
from slackkit.transport import RateLimitedError

API = "http://localhost/api/"


@pytest.fixture
def rsps():
    with responses.RequestsMock(assert_all_requests_are_fired=False) as mock:
        yield mock


def test_deadman_duration_scales_interval():
    assert deadman_duration(timedelta(seconds=30)) == timedelta(minutes=2)
    assert deadman_duration(0) == 0
    assert deadman_duration(2.5) > 2.5


def test_client_team_info_sends_token(rsps):
    rsps.add(
        responses.POST,
        API + "team.info",
        json={"ok": True, "team": {"id": "F0UWHUX", "name": "notalar", "domain": "notalar"}},
    )
    client = Client("token", api_url=API)
    info = client.get_team_info()
    assert info.id == "F0UWHUX"
    assert parse_qs(rsps.calls[0].request.body)["token"] == ["token"]


def test_client_user_groups(rsps):
    rsps.add(
        responses.POST,
        API + "usergroups.users.list",
        json={"ok": True, "users": ["user1", "user2"]},
    )
    client = Client("token", api_url=API)
    assert client.get_user_group_members("S0614TZR7") == ["user1", "user2"]


def test_client_rate_limited(rsps):
    rsps.add(
        responses.POST,
        API + "users.info",
        status=429,
        headers={"Retry-After": "1"},
    )
    client = Client("token", api_url=API)
    with pytest.raises(RateLimitedError) as excinfo:
        client.get_user_info("U1")
    assert excinfo.value.retry_after == 1.0


def test_client_list_all_stars_follows_cursor(rsps):
    rsps.add(
        responses.POST,
        API + "stars.list",
        json={
            "ok": True,
            "items": [{"type": "file", "file": {"name": "toy"}}],
            "response_metadata": {"next_cursor": "next"},
        },
    )
    rsps.add(
        responses.POST,
        API + "stars.list",
        json={"ok": True, "items": [{"type": "message", "channel": "C1"}]},
    )
    client = Client("token", api_url=API)
    items = client.list_all_stars()
    assert [item.type for item in items] == ["file", "message"]
    assert parse_qs(rsps.calls[1].request.body)["cursor"] == ["next"]