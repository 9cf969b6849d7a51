"""Scheduling logic: users, events, availability and slot suggestions."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from datetime import timedelta

from .models import Availability, Event, Slot, SlotSuggestion, User
from .repository import (
    AvailabilityRepository,
    EventRepository,
    RepositoryError,
    UserRepository,
)

_STEP = timedelta(minutes=15)


class ServiceError(Exception):
    """Raised when a scheduling operation cannot be carried out."""


def is_available_for_window(target: Slot, slots: Iterable[Slot]) -> bool:
    """Return True if any slot covers the whole target window."""
    return any(s.start <= target.start and s.end >= target.end for s in slots)


def missing_users(all_users: Iterable[str], present: Iterable[str]) -> list[str]:
    """Return the users of all_users not in present, keeping their order."""
    present_set = set(present)
    return [user for user in all_users if user not in present_set]


def _windows(slot: Slot, length: timedelta) -> Iterator[Slot]:
    start = slot.start
    while start + length <= slot.end:
        yield Slot(start=start, end=start + length)
        start += _STEP


class SchedulerService:
    """Coordinates the user, event and availability stores."""

    def __init__(
        self,
        user_repo: UserRepository,
        event_repo: EventRepository | None,
        availability_repo: AvailabilityRepository | None,
    ) -> None:
        self._user_repo = user_repo
        self._event_repo = event_repo
        self._availability_repo = availability_repo

    # ----- users -----

    def get_user(self, user_id: str) -> User:
        try:
            user = self._user_repo.get(user_id)
        except RepositoryError:
            user = None
        if user is None:
            raise ServiceError(f"user with ID {user_id} not found")
        return user

    def get_all_users(self) -> list[User]:
        try:
            return list(self._user_repo.get_all().values())
        except RepositoryError as exc:
            raise ServiceError(str(exc)) from exc

    def create_user(self, user: User) -> None:
        try:
            existing = self._user_repo.get(user.id)
        except RepositoryError:
            existing = None
        if existing is not None:
            raise ServiceError(f"user with ID {user.id} already exists")
        try:
            self._user_repo.create(user)
        except RepositoryError as exc:
            raise ServiceError(str(exc)) from exc

    # ----- events -----

    def get_event(self, event_id: str) -> Event:
        event = self._find_event(event_id)
        if event is None:
            raise ServiceError(f"event with ID {event_id} not found")
        return event

    def create_event(self, event: Event) -> None:
        self._validate_participants(event)
        if self._find_event(event.id) is not None:
            raise ServiceError(f"event with ID {event.id} already exists")
        try:
            self._event_repo.create(event)
        except RepositoryError as exc:
            raise ServiceError(str(exc)) from exc

    def update_event(self, event: Event) -> None:
        self._validate_participants(event)
        self._ensure_event_exists(event.id)
        try:
            self._event_repo.update(event)
        except RepositoryError as exc:
            raise ServiceError(str(exc)) from exc

    def delete_event(self, event_id: str) -> None:
        if not event_id:
            raise ServiceError("event ID cannot be empty")
        self._ensure_event_exists(event_id)
        try:
            self._event_repo.delete(event_id)
        except RepositoryError as exc:
            raise ServiceError(str(exc)) from exc

    # ----- availability -----

    def get_availability(self, event_id: str, user_id: str) -> Availability:
        self.get_event(event_id)
        self.get_user(user_id)
        try:
            return self._availability_repo.get(event_id, user_id)
        except RepositoryError as exc:
            raise ServiceError(str(exc)) from exc

    def add_availability(self, availability: Availability) -> None:
        self._validate_user_and_event(availability)
        try:
            self._availability_repo.create(availability)
        except RepositoryError as exc:
            raise ServiceError(str(exc)) from exc

    def update_availability(self, availability: Availability) -> None:
        self._validate_user_and_event(availability)
        try:
            self._availability_repo.update(availability)
        except RepositoryError as exc:
            raise ServiceError(str(exc)) from exc

    def delete_availability(self, event_id: str, user_id: str) -> None:
        try:
            self._availability_repo.delete(event_id, user_id)
        except RepositoryError as exc:
            raise ServiceError(str(exc)) from exc

    # ----- suggestions -----

    def suggest_slots(self, event_id: str) -> list[SlotSuggestion]:
        """Return the windows that the most users can attend, in slot order."""
        event = self._ensure_event_exists(event_id)
        by_user = self._availability_repo.get_by_event(event_id)
        if not by_user:
            return []

        length = timedelta(minutes=event.duration_min)
        best: list[SlotSuggestion] = []
        best_count = 0
        for slot in event.slots:
            for window in _windows(slot, length):
                available = [
                    user_id
                    for user_id, av in by_user.items()
                    if is_available_for_window(window, av.slots)
                ]
                count = len(available)
                if count < best_count or count == 0:
                    continue
                suggestion = SlotSuggestion(
                    slot=window,
                    unavailable_users=missing_users(event.participants, available),
                )
                if count > best_count:
                    best_count = count
                    best = [suggestion]
                else:
                    best.append(suggestion)
        return best

    # ----- helpers -----

    def _find_event(self, event_id: str) -> Event | None:
        try:
            return self._event_repo.get(event_id)
        except RepositoryError:
            return None

    def _ensure_event_exists(self, event_id: str) -> Event:
        event = self._find_event(event_id)
        if event is None:
            raise ServiceError(f"event with ID {event_id} does not exist")
        return event

    def _ensure_users_exist(self, *user_ids: str) -> None:
        try:
            known = self._user_repo.get_all()
        except RepositoryError:
            raise ServiceError("missing users: []") from None
        missing = [user_id for user_id in user_ids if user_id not in known]
        if missing:
            raise ServiceError(f"missing users: [{' '.join(missing)}]")

    def _validate_participants(self, event: Event) -> None:
        if not event.participants:
            raise ServiceError("event must have at least one participant")
        self._ensure_users_exist(*event.participants)

    def _validate_user_and_event(self, availability: Availability) -> None:
        self._ensure_users_exist(availability.user_id)
        self._ensure_event_exists(availability.event_id)