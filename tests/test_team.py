from urllib.parse import parse_qs

import pytest
import responses

from slackkit.team import AccessLogParameters, BillingActive, Login, TeamInfo, TeamMethods
from slackkit.transport import BaseClient, Paging, SlackError

API_URL = "https://api.example.com/"


class _Client(TeamMethods, BaseClient):
    pass


@pytest.fixture
def mocked():
    with responses.RequestsMock() as rsps:
        yield rsps


@pytest.fixture
def client():
    return _Client("token", api_url=API_URL)


def _form(request):
    body = request.body
    if isinstance(body, bytes):
        body = body.decode()
    return {key: values[0] for key, values in parse_qs(body).items()}


TEAM_RESPONSE = {
    "ok": True,
    "team": {
        "id": "F0UWHUX",
        "name": "notalar",
        "domain": "notalar",
        "icon": {
            "image_34": "https://img.example.com/ava_0002-34.png",
            "image_44": "https://img.example.com/ava_0002-44.png",
            "image_55": "https://img.example.com/ava_0002-55.png",
            "image_default": True,
        },
    },
}


def test_get_team_info(mocked, client):
    mocked.add(responses.POST, API_URL + "team.info", json=TEAM_RESPONSE)
    info = TeamMethods.get_team_info(client)
    assert info == TeamInfo(
        id="F0UWHUX",
        name="notalar",
        domain="notalar",
        icon=TEAM_RESPONSE["team"]["icon"],
    )
    assert info.icon["image_default"] is True
    assert len(info.icon) == 4


ACCESS_LOGS_RESPONSE = {
    "ok": True,
    "logins": [
        {
            "user_id": "F0UWHUX",
            "username": "notalar",
            "date_first": 1475684477,
            "date_last": 1475684645,
            "count": 8,
            "ip": "127.0.0.1",
            "user_agent": "SlackWeb/3abb0ae2380d48a9ae20c58cc624ebcd Mozilla/5.0 Slack_SSB/1.2.6",
            "isp": "AT&T U-verse",
            "country": "US",
            "region": "IN",
        },
        {
            "user_id": "XUHWU0F",
            "username": "ralaton",
            "date_first": 1447395893,
            "date_last": 1447395965,
            "count": 5,
            "ip": "192.168.0.1",
            "user_agent": "com.tinyspeck.chatlyio/2.60 (iPhone; iOS 9.1; Scale/3.00)",
            "isp": None,
            "country": None,
            "region": None,
        },
    ],
    "paging": {"count": 2, "total": 2, "page": 1, "pages": 1},
}


def test_get_access_logs(mocked, client):
    mocked.add(responses.POST, API_URL + "team.accessLogs", json=ACCESS_LOGS_RESPONSE)
    logins, paging = client.get_access_logs(AccessLogParameters())
    assert len(logins) == 2
    first, second = logins
    assert first.user_id == "F0UWHUX"
    assert first.username == "notalar"
    assert first.date_first == 1475684477
    assert first.date_last == 1475684645
    assert first.count == 8
    assert first.ip == "127.0.0.1"
    assert first.user_agent.startswith("SlackWeb")
    assert first.isp == "AT&T U-verse"
    assert first.country == "US"
    assert first.region == "IN"
    assert (second.isp, second.country, second.region) == ("", "", "")
    assert paging == Paging(count=2, total=2, page=1, pages=1)
    assert _form(mocked.calls[0].request) == {"token": "token"}


def test_get_access_logs_sends_non_default_params(mocked, client):
    mocked.add(responses.POST, API_URL + "team.accessLogs", json={"ok": True, "logins": []})
    logins, _ = client.get_access_logs(AccessLogParameters(count=10, page=3))
    assert logins == []
    assert _form(mocked.calls[0].request) == {"count": "10", "page": "3", "token": "token"}


def test_get_billable_info(mocked, client):
    mocked.add(
        responses.POST,
        API_URL + "team.billableInfo",
        json={"ok": True, "billable_info": {"U1": {"billing_active": True}}},
    )
    info = client.get_billable_info("U1")
    assert info == {"U1": BillingActive(billing_active=True)}
    assert _form(mocked.calls[0].request) == {"token": "token", "user": "U1"}


def test_get_billable_info_for_team(mocked, client):
    mocked.add(
        responses.POST,
        API_URL + "team.billableInfo",
        json={
            "ok": True,
            "billable_info": {"U1": {"billing_active": True}, "U2": {"billing_active": False}},
        },
    )
    info = client.get_billable_info_for_team()
    assert info == {"U1": BillingActive(True), "U2": BillingActive(False)}
    assert _form(mocked.calls[0].request) == {"token": "token"}


def test_team_error_raises(mocked, client):
    mocked.add(responses.POST, API_URL + "team.info", json={"ok": False, "error": "invalid_auth"})
    with pytest.raises(SlackError, match="invalid_auth"):
        TeamMethods.get_team_info(client)


def test_from_dict_defaults():
    assert TeamInfo.from_dict({}) == TeamInfo()
    assert Login.from_dict({"count": None}) == Login()