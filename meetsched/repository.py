"""Storage interfaces and their thread-safe in-memory implementations."""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from dataclasses import replace

from .models import Availability, Event, User


class RepositoryError(Exception):
    """Base class for storage errors."""


class NotFoundError(RepositoryError, LookupError):
    """Raised when a requested record does not exist."""


class AlreadyExistsError(RepositoryError):
    """Raised when a record would be stored twice."""


class UserRepository(ABC):
    """Storage for users."""

    @abstractmethod
    def get(self, user_id: str) -> User | None:
        """Return the user with this id, or None."""

    @abstractmethod
    def get_all(self) -> dict[str, User]:
        """Return every user keyed by id."""

    @abstractmethod
    def create(self, user: User) -> None:
        """Store a user."""


class EventRepository(ABC):
    """Storage for events."""

    @abstractmethod
    def create(self, event: Event) -> None:
        """Store an event."""

    @abstractmethod
    def get(self, event_id: str) -> Event:
        """Return the event with this id."""

    @abstractmethod
    def update(self, event: Event) -> None:
        """Replace a stored event."""

    @abstractmethod
    def delete(self, event_id: str) -> None:
        """Remove a stored event."""

    @abstractmethod
    def list(self) -> list[Event]:
        """Return every stored event."""

    @abstractmethod
    def all_event_ids(self) -> set[str]:
        """Return the ids of every stored event."""


class AvailabilityRepository(ABC):
    """Storage for per-user, per-event availability."""

    @abstractmethod
    def get(self, event_id: str, user_id: str) -> Availability:
        """Return one user's availability for one event."""

    @abstractmethod
    def create(self, availability: Availability) -> None:
        """Store a new availability."""

    @abstractmethod
    def update(self, availability: Availability) -> None:
        """Replace an existing availability."""

    @abstractmethod
    def get_by_event(self, event_id: str) -> dict[str, Availability]:
        """Return every availability of an event keyed by user id."""

    @abstractmethod
    def delete(self, event_id: str, user_id: str) -> None:
        """Remove one user's availability for one event."""


class InMemoryUserRepository(UserRepository):
    """Users kept in a dictionary."""

    def __init__(self) -> None:
        self._users: dict[str, User] = {}
        self._lock = threading.Lock()

    def get(self, user_id: str) -> User | None:
        with self._lock:
            return self._users.get(user_id)

    def get_all(self) -> dict[str, User]:
        with self._lock:
            return dict(self._users)

    def create(self, user: User) -> None:
        with self._lock:
            self._users[user.id] = user


class InMemoryEventRepository(EventRepository):
    """Events kept in a dictionary."""

    def __init__(self) -> None:
        self._events: dict[str, Event] = {}
        self._lock = threading.Lock()

    def create(self, event: Event) -> None:
        with self._lock:
            self._events[event.id] = event

    def get(self, event_id: str) -> Event:
        with self._lock:
            try:
                return self._events[event_id]
            except KeyError:
                raise NotFoundError("event not found") from None

    def update(self, event: Event) -> None:
        with self._lock:
            if event.id not in self._events:
                raise NotFoundError("event not found")
            self._events[event.id] = event

    def delete(self, event_id: str) -> None:
        with self._lock:
            if event_id not in self._events:
                raise NotFoundError("event not found")
            del self._events[event_id]

    def list(self) -> list[Event]:
        with self._lock:
            return list(self._events.values())

    def all_event_ids(self) -> set[str]:
        with self._lock:
            return set(self._events)


def _copy_availability(availability: Availability) -> Availability:
    return replace(availability, slots=list(availability.slots))


class InMemoryAvailabilityRepository(AvailabilityRepository):
    """Availability kept as event id -> user id -> record."""

    def __init__(self) -> None:
        self._data: dict[str, dict[str, Availability]] = {}
        self._lock = threading.Lock()

    def get(self, event_id: str, user_id: str) -> Availability:
        with self._lock:
            by_user = self._data.get(event_id)
            if by_user is None:
                raise NotFoundError(f"event not found: {event_id}")
            availability = by_user.get(user_id)
            if availability is None:
                raise NotFoundError(
                    f"availability not found for user {user_id} in event {event_id}"
                )
            return _copy_availability(availability)

    def create(self, availability: Availability) -> None:
        with self._lock:
            by_user = self._data.setdefault(availability.event_id, {})
            if availability.user_id in by_user:
                raise AlreadyExistsError(
                    f"availability already exists for user {availability.user_id} "
                    f"in event {availability.event_id}"
                )
            by_user[availability.user_id] = _copy_availability(availability)

    def update(self, availability: Availability) -> None:
        with self._lock:
            by_user = self._data.get(availability.event_id)
            if by_user is None:
                raise NotFoundError(f"event not found: {availability.event_id}")
            if availability.user_id not in by_user:
                raise NotFoundError(
                    f"availability not found in event: {availability.event_id} "
                    f"for user : {availability.user_id}"
                )
            by_user[availability.user_id] = _copy_availability(availability)

    def get_by_event(self, event_id: str) -> dict[str, Availability]:
        with self._lock:
            by_user = self._data.get(event_id, {})
            return {uid: _copy_availability(av) for uid, av in by_user.items()}

    def delete(self, event_id: str, user_id: str) -> None:
        with self._lock:
            by_user = self._data.get(event_id)
            if by_user is None:
                raise NotFoundError(f"event not found: {event_id}")
            if user_id not in by_user:
                raise NotFoundError(
                    f"availability not found for user {user_id} in event {event_id}"
                )
            del by_user[user_id]