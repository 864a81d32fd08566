# slackkit

A Python client for the Slack Web API. It covers users and their profiles,
user groups, starred items, team information and access logs, and incoming
webhooks. It also provides data classes for the events that Slack delivers
over its real-time messaging connection.

## Installation

```
pip install slackkit
```

To run the tests, install the test extra and run pytest:

```
pip install "slackkit[test]"
pytest
```

## Posting to an incoming webhook

```python
from slackkit.transport import WebhookMessage, post_webhook

msg = WebhookMessage(text="Deployment finished")
post_webhook("https://hooks.example.com/services/placeholder", msg)
```

`WebhookMessage.to_dict()` leaves empty fields out of the JSON payload.
`post_webhook` accepts an optional `requests.Session`.

Errors:

- `RateLimitedError` is raised for a `429 Too Many Requests` response. Its
  `retry_after` attribute gives the wait in seconds, taken from the
  `Retry-After` header.
- `StatusCodeError` is raised for any other status except 200, with a message
  such as `slack server error: 500 Internal Server Error`.
- `SlackError` is raised for network failures.

All of these derive from `SlackError`.

## Calling the Web API

`slackkit.client.Client` combines these method groups:

- `UserMethods`
- `UserGroupMethods`
- `StarsMethods`
- `TeamMethods`

They sit on top of `slackkit.transport.BaseClient`. `BaseClient` holds the
token, the API URL and a `requests.Session`, and it sends every call as a
form POST.

```python
from slackkit.client import Client
from slackkit.stars import ItemRef, StarsParameters
from slackkit.team import AccessLogParameters

client = Client(token="token")

# Users
user = client.get_user_info("U123")
print(user.name, user.profile.display_name)
everyone = client.get_users()          # follows cursors, waits out rate limits
for page in client.iter_user_pages(limit=100, presence=True):
    print(len(page))
client.set_user_custom_status("In a meeting", ":calendar:", 0)
client.unset_user_custom_status()
client.set_user_photo("avatar.png")    # multipart upload of a local file

# User groups
groups = client.get_user_groups(include_users=True)
members = client.get_user_group_members(groups[0].id)

# Stars
client.add_star("C123", ItemRef.to_message("C123", "1500000000.000100"))
items, paging = client.list_stars(StarsParameters(count=200, page=2))
all_items = client.list_all_stars()

# Team
team = client.get_team_info()
logins, paging = client.get_access_logs(AccessLogParameters())
billing = client.get_billable_info_for_team()
```

Parameters that are left at their defaults are not sent to the server. This
applies to the `StarsParameters` count and page, the `AccessLogParameters`
count and page, and the `UserSetPhotoParams` crops of -1.

A reply with `"ok": false` raises `SlackError`, carrying the error string
that Slack sent back. `get_users` and `list_all_stars` sleep for the
server's `Retry-After` delay when they hit a rate limit, then continue.

## Profile custom fields

Slack sends a user's custom profile fields either as an object or as an
empty list. `UserProfileCustomFields` accepts both forms and writes `[]`
when it is empty:

```python
from slackkit.users import UserProfileCustomFields

fields = UserProfileCustomFields.from_json("[]")
assert len(fields) == 0
assert fields.to_json() == "[]"
```

`UserProfile.fields_map()` and `UserProfile.set_fields_map()` read and
replace the fields. `User.from_dict` and `User.to_dict` convert a user to
and from the JSON shape the API uses.

## Real-time event types

There are two modules of event data classes:

- `slackkit.rtm_events` holds:
  - the connection life-cycle events: `ConnectingEvent`, `ConnectedEvent`,
    `ConnectionErrorEvent`, `DisconnectedEvent`, `LatencyReport`,
    `InvalidAuthEvent` and the error events;
  - `AckMessage` and `RTMError`;
  - `RTMEvent`, the wrapper that holds an event's type name and its data;
  - miscellaneous events such as `PresenceChangeEvent` and
    `UserChangeEvent`.
- `slackkit.events` holds the channel, group, direct message, file, pin,
  reaction, star, user group and team events.

Events with a `from_dict` class method build themselves from a decoded JSON
object:

```python
from slackkit.events import ChannelCreatedEvent

event = ChannelCreatedEvent.from_dict({
    "type": "channel_created",
    "channel": {"id": "C1", "name": "general", "created": 1500000000, "creator": "U1"},
    "event_ts": "1500000000.000100",
})
print(event.channel.name)
```

`slackkit.client` also defines two helpers:

- `MAX_MESSAGE_TEXT_LENGTH` (4000), the message length limit for the
  real-time connection.
- `deadman_duration(interval)`, which returns four times a ping interval.

## What this package does not do

- It does not open or manage a real-time messaging connection. There is no
  websocket client, no reconnect loop, no ping handling and no code that
  reads incoming frames and turns them into the event classes. The event
  types are data classes only.
- Its Web API coverage is limited to the user, user group, star and team
  methods listed above. It does not post chat messages through the API, and
  it has no channel, file or reaction methods.
- It has no command-line interface.