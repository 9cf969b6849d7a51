# meetsched

A small meeting scheduler. Users are registered, events are created with the
time slots they may take place in, participants record when they are
available, and the scheduler suggests the meeting windows that suit the most
participants. Everything is held in memory and served as a JSON HTTP API
built on Flask.

## Installation

```
pip install .
```

## Running the server

```
meetsched
```

By default the server binds to `0.0.0.0` on port 8080. Both can be changed:

```
meetsched --host 127.0.0.1 --port 9000
```

The command starts Flask's built-in server.

## HTTP API

| Method | Path                                    | Purpose                                  |
|--------|-----------------------------------------|------------------------------------------|
| GET    | `/ping`                                 | Health check, returns `{"status": "ok"}` |
| GET    | `/user/<id>`                            | Fetch one user                           |
| GET    | `/users`                                | List all users                           |
| POST   | `/user`                                 | Create a user                            |
| GET    | `/event/<id>`                           | Fetch one event                          |
| POST   | `/event`                                | Create an event                          |
| PUT    | `/event`                                | Replace an existing event                |
| DELETE | `/event/<id>`                           | Delete an event                          |
| GET    | `/event/<id>/availability/<user_id>`    | Fetch a user's availability for an event |
| POST   | `/event/availability`                   | Record a user's availability             |
| PUT    | `/event/availability`                   | Replace a user's availability            |
| DELETE | `/event/<id>/availability/<user_id>`    | Remove a user's availability             |
| GET    | `/event/<id>/suggestions`               | Suggested meeting windows                |

Times are RFC 3339 strings with a `Z` or `±HH:MM` offset and optional
fractional seconds, for example `2025-05-20T10:00:00Z`. UTC times are written
back with `Z`.

Example bodies:

```json
{"id": "u1", "name": "Alice"}
```

```json
{
  "id": "e1",
  "title": "Planning",
  "duration_min": 60,
  "slots": [{"start": "2025-05-20T09:00:00Z", "end": "2025-05-20T12:00:00Z"}],
  "participants": ["u1", "u2"]
}
```

```json
{
  "event_id": "e1",
  "user_id": "u1",
  "slots": [{"start": "2025-05-20T10:00:00Z", "end": "2025-05-20T11:30:00Z"}]
}
```

Successful creates answer `201`, other successes `200`. Failures answer with
`{"error": "<message>"}`:

- a body that is not valid JSON or has fields of the wrong type gives `400`;
- an unknown user or event on a `GET` gives `404` (for availability the
  message is always `availability not found`);
- a rejected event create, update or delete gives `400`;
- a rejected user create or availability change gives `500`.

An event needs at least one participant, and every participant must already
be a registered user. Event and user ids must be unique. Availability can only
be recorded for an existing user and event, once per user and event; updating
it requires that it was recorded first.

## Suggestions

For each of an event's slots, candidate windows of the event's duration are
tried at 15-minute steps, as long as the window ends within the slot. A user
counts as available for a window when one of their availability slots covers
it entirely. The windows that the largest number of users can attend are
returned in slot order, each with the participants who cannot make it:

```json
{"suggested_slots": [
  {"slot": {"start": "2025-05-20T10:00:00Z", "end": "2025-05-20T11:00:00Z"},
   "unavailable_users": ["u2"]}
]}
```

When the event does not exist, nobody has recorded availability, or no window
suits anyone, the answer is `{"suggested_slots": null}`.

## Using it as a library

```python
from meetsched.repository import (
    InMemoryAvailabilityRepository,
    InMemoryEventRepository,
    InMemoryUserRepository,
)
from meetsched.service import SchedulerService
from meetsched.handler import create_app

service = SchedulerService(
    InMemoryUserRepository(),
    InMemoryEventRepository(),
    InMemoryAvailabilityRepository(),
)
app = create_app(service)
```

`meetsched.server.build_app()` returns an application wired up in the same way.

- `meetsched.models` holds the dataclasses `User`, `Event`, `Slot`,
  `Availability` and `SlotSuggestion`, each with `to_dict()` (and, except
  `SlotSuggestion`, `from_dict()`), plus `parse_time()` and `format_time()`.
  Malformed input raises `ModelError`.
- `meetsched.repository` defines the abstract `UserRepository`,
  `EventRepository` and `AvailabilityRepository` and their thread-safe
  in-memory implementations. Missing records raise `NotFoundError`, duplicate
  availability raises `AlreadyExistsError`; both derive from
  `RepositoryError`.
- `meetsched.service.SchedulerService` validates and coordinates the stores
  and raises `ServiceError` when an operation is refused. Its
  `suggest_slots()` works as described above and returns a list. The helpers
  `is_available_for_window()` and `missing_users()` are public too.

## What it does not do

Data lives only in the memory of the running process: nothing is saved to
disk, and everything is lost when the server stops. There is no
authentication, and no endpoints to list events or to delete users.

## Running the tests

```
pip install .[test]
pytest
```