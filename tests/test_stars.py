from urllib.parse import parse_qs

import pytest
import responses

from slackkit.stars import Item, ItemRef, StarsMethods, StarsParameters
from slackkit.transport import BaseClient, Paging, SlackError

API_URL = "https://api.example.com/"


class _Client(StarsMethods, BaseClient):
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


REF_CASES = [
    ("message", {"channel": "ChannelID", "timestamp": "123"}),
    ("file", {"channel": "ChannelID", "file": "FileID"}),
    ("comment", {"channel": "ChannelID", "file_comment": "FileCommentID"}),
]


@pytest.mark.parametrize("kind,want", REF_CASES)
def test_add_star(mocked, client, kind, want):
    mocked.add(responses.POST, API_URL + "stars.add", json={"ok": True})
    ref = {
        "message": ItemRef.to_message("ChannelID", "123"),
        "file": ItemRef.to_file("FileID"),
        "comment": ItemRef.to_comment("FileCommentID"),
    }[kind]
    assert client.add_star("ChannelID", ref) is None
    assert _form(mocked.calls[0].request) == {**want, "token": "token"}


@pytest.mark.parametrize("kind,want", REF_CASES)
def test_remove_star(mocked, client, kind, want):
    mocked.add(responses.POST, API_URL + "stars.remove", json={"ok": True})
    ref = {
        "message": ItemRef.to_message("ChannelID", "123"),
        "file": ItemRef.to_file("FileID"),
        "comment": ItemRef.to_comment("FileCommentID"),
    }[kind]
    assert client.remove_star("ChannelID", ref) is None
    assert _form(mocked.calls[0].request) == {**want, "token": "token"}


LIST_RESPONSE = {
    "ok": True,
    "items": [
        {
            "type": "message",
            "channel": "C1",
            "message": {
                "text": "hello",
                "reactions": [
                    {"name": "astonished", "count": 3, "users": ["U1", "U2", "U3"]},
                    {"name": "clock1", "count": 3, "users": ["U1", "U2"]},
                ],
            },
        },
        {
            "type": "file",
            "file": {
                "name": "toy",
                "reactions": [{"name": "clock1", "count": 3, "users": ["U1", "U2"]}],
            },
        },
        {
            "type": "file_comment",
            "file": {"name": "toy"},
            "comment": {
                "comment": "cool toy",
                "reactions": [{"name": "astonished", "count": 3, "users": ["U1", "U2", "U3"]}],
            },
        },
    ],
    "paging": {"count": 100, "total": 4, "page": 1, "pages": 1},
}


def _check_items(items):
    assert [item.type for item in items] == ["message", "file", "file_comment"]
    assert items[0].channel == "C1"
    assert items[0].message["text"] == "hello"
    assert [r["name"] for r in items[0].message["reactions"]] == ["astonished", "clock1"]
    assert items[0].message["reactions"][1]["users"] == ["U1", "U2"]
    assert items[1].file["name"] == "toy"
    assert items[1].message is None
    assert items[2].file == {"name": "toy"}
    assert items[2].comment["comment"] == "cool toy"


def test_list_stars(mocked, client):
    mocked.add(responses.POST, API_URL + "stars.list", json=LIST_RESPONSE)
    params = StarsParameters(count=200, page=2)
    items, paging = client.list_stars(params)
    _check_items(items)
    assert _form(mocked.calls[0].request) == {"count": "200", "page": "2", "token": "token"}
    assert paging == Paging(count=100, total=4, page=1, pages=1)


def test_get_starred(mocked, client):
    mocked.add(responses.POST, API_URL + "stars.list", json=LIST_RESPONSE)
    items, paging = client.get_starred(StarsParameters(count=200, page=2))
    _check_items(items)
    assert _form(mocked.calls[0].request) == {"count": "200", "page": "2", "token": "token"}
    assert paging.total == 4


def test_list_stars_defaults_send_only_token(mocked, client):
    mocked.add(responses.POST, API_URL + "stars.list", json={"ok": True, "items": []})
    items, paging = client.list_stars()
    assert items == []
    assert paging == Paging()
    assert _form(mocked.calls[0].request) == {"token": "token"}


def test_list_stars_error(mocked, client):
    mocked.add(responses.POST, API_URL + "stars.list", json={"ok": False, "error": "not_authed"})
    with pytest.raises(SlackError, match="not_authed"):
        client.list_stars(StarsParameters())


def test_iter_star_pages_follows_cursor(mocked, client):
    mocked.add(
        responses.POST,
        API_URL + "stars.list",
        json={"ok": True, "items": [{"type": "file"}], "response_metadata": {"next_cursor": "c1"}},
    )
    mocked.add(
        responses.POST,
        API_URL + "stars.list",
        json={"ok": True, "items": [{"type": "message"}], "response_metadata": {"next_cursor": ""}},
    )
    pages = list(client.iter_star_pages(limit=5))
    assert pages == [
        [Item.from_dict({"type": "file"})],
        [Item.from_dict({"type": "message"})],
    ]
    assert [[item.type for item in page] for page in pages] == [["file"], ["message"]]
    assert _form(mocked.calls[0].request) == {"limit": "5", "token": "token"}
    assert _form(mocked.calls[1].request)["cursor"] == "c1"


def test_list_all_stars_waits_out_rate_limit(mocked, client):
    mocked.add(
        responses.POST,
        API_URL + "stars.list",
        json={"ok": True, "items": [{"type": "file"}], "response_metadata": {"next_cursor": "c1"}},
    )
    mocked.add(responses.POST, API_URL + "stars.list", status=429, headers={"Retry-After": "0"})
    mocked.add(
        responses.POST,
        API_URL + "stars.list",
        json={"ok": True, "items": [{"type": "message"}]},
    )
    items = client.list_all_stars()
    assert items == [Item.from_dict({"type": "file"}), Item.from_dict({"type": "message"})]
    assert [item.type for item in items] == ["file", "message"]
    assert len(mocked.calls) == 3
    assert _form(mocked.calls[0].request)["limit"] == "200"


def test_item_from_dict_defaults():
    assert Item.from_dict({}) == Item()