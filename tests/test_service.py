from datetime import datetime, timedelta, timezone
from unittest.mock import Mock, call

import pytest

from meetsched.models import Availability, Event, Slot, SlotSuggestion, User
from meetsched.repository import (
    InMemoryAvailabilityRepository,
    InMemoryEventRepository,
    InMemoryUserRepository,
    NotFoundError,
    UserRepository,
)
from meetsched.service import (
    SchedulerService,
    ServiceError,
    is_available_for_window,
    missing_users,
)

UTC = timezone.utc


def _t(hour, minute=0):
    return datetime(2025, 5, 20, hour, minute, tzinfo=UTC)


def _mock_setup():
    repo = Mock(spec=UserRepository)
    return SchedulerService(repo, None, None), repo


@pytest.fixture
def svc():
    service = SchedulerService(
        InMemoryUserRepository(),
        InMemoryEventRepository(),
        InMemoryAvailabilityRepository(),
    )
    for uid, name in (("u1", "Alice"), ("u2", "Bob"), ("u3", "Carol")):
        service.create_user(User(id=uid, name=name))
    return service


def _event(event_id="e1", participants=("u1", "u2"), duration=30):
    return Event(
        id=event_id,
        title="Meeting",
        duration_min=duration,
        slots=[Slot(start=_t(10), end=_t(11))],
        participants=list(participants),
    )


# ----- carried over from the user service cases -----


def test_get_user_success():
    service, repo = _mock_setup()
    user = User(id="123", name="Alice")
    repo.get.return_value = user
    assert service.get_user("123") == user
    assert repo.get.call_args_list == [call("123")]


def test_get_user_not_found():
    service, repo = _mock_setup()
    repo.get.side_effect = NotFoundError("not found")
    with pytest.raises(ServiceError) as info:
        service.get_user("999")
    assert "user with ID 999 not found" in str(info.value)
    assert repo.get.call_args_list == [call("999")]


def test_get_all_users_success():
    service, repo = _mock_setup()
    repo.get_all.return_value = {
        "1": User(id="1", name="Alice"),
        "2": User(id="2", name="Bob"),
    }
    assert len(service.get_all_users()) == 2
    assert repo.get_all.call_count == 1


def test_create_user_success():
    service, repo = _mock_setup()
    new_user = User(id="100", name="Charlie")
    repo.get.return_value = None
    service.create_user(new_user)
    assert repo.get.call_args_list == [call("100")]
    assert repo.create.call_args_list == [call(new_user)]


def test_create_user_already_exists():
    service, repo = _mock_setup()
    existing = User(id="1", name="Alice")
    repo.get.return_value = existing
    with pytest.raises(ServiceError) as info:
        service.create_user(existing)
    assert "user with ID 1 already exists" in str(info.value)
    assert repo.create.call_count == 0


# ----- events -----


def test_create_and_get_event(svc):
    event = _event()
    svc.create_event(event)
    assert svc.get_event("e1") == event


def test_get_event_missing(svc):
    with pytest.raises(ServiceError, match="^event with ID e9 not found$"):
        svc.get_event("e9")


def test_create_event_requires_participants(svc):
    with pytest.raises(ServiceError, match="^event must have at least one participant$"):
        svc.create_event(_event(participants=()))


def test_create_event_missing_users(svc):
    with pytest.raises(ServiceError) as info:
        svc.create_event(_event(participants=("u1", "u8", "u9")))
    assert str(info.value) == "missing users: [u8 u9]"


def test_create_event_duplicate(svc):
    svc.create_event(_event())
    with pytest.raises(ServiceError, match="^event with ID e1 already exists$"):
        svc.create_event(_event())


def test_update_event(svc):
    svc.create_event(_event())
    updated = _event(participants=("u3",))
    updated.title = "Renamed"
    svc.update_event(updated)
    assert svc.get_event("e1").title == "Renamed"


def test_update_event_missing(svc):
    with pytest.raises(ServiceError, match="^event with ID e1 does not exist$"):
        svc.update_event(_event())


def test_delete_event(svc):
    svc.create_event(_event())
    svc.delete_event("e1")
    with pytest.raises(ServiceError):
        svc.get_event("e1")


def test_delete_event_empty_id(svc):
    with pytest.raises(ServiceError, match="^event ID cannot be empty$"):
        svc.delete_event("")


def test_delete_event_missing(svc):
    with pytest.raises(ServiceError, match="^event with ID nope does not exist$"):
        svc.delete_event("nope")


# ----- availability -----


def test_add_and_get_availability(svc):
    svc.create_event(_event())
    av = Availability(event_id="e1", user_id="u1", slots=[Slot(start=_t(10), end=_t(11))])
    svc.add_availability(av)
    assert svc.get_availability("e1", "u1") == av


def test_add_availability_unknown_user(svc):
    svc.create_event(_event())
    with pytest.raises(ServiceError) as info:
        svc.add_availability(Availability(event_id="e1", user_id="u9"))
    assert str(info.value) == "missing users: [u9]"


def test_add_availability_unknown_event(svc):
    with pytest.raises(ServiceError, match="^event with ID e9 does not exist$"):
        svc.add_availability(Availability(event_id="e9", user_id="u1"))


def test_add_availability_duplicate(svc):
    svc.create_event(_event())
    svc.add_availability(Availability(event_id="e1", user_id="u1"))
    with pytest.raises(ServiceError) as info:
        svc.add_availability(Availability(event_id="e1", user_id="u1"))
    assert str(info.value) == "availability already exists for user u1 in event e1"


def test_update_availability(svc):
    svc.create_event(_event())
    svc.add_availability(Availability(event_id="e1", user_id="u1"))
    new_slots = [Slot(start=_t(12), end=_t(13))]
    svc.update_availability(Availability(event_id="e1", user_id="u1", slots=new_slots))
    assert svc.get_availability("e1", "u1").slots == new_slots


def test_update_availability_missing(svc):
    svc.create_event(_event())
    with pytest.raises(ServiceError, match="^event not found: e1$"):
        svc.update_availability(Availability(event_id="e1", user_id="u1"))


def test_get_availability_errors(svc):
    svc.create_event(_event())
    with pytest.raises(ServiceError, match="^event with ID e9 not found$"):
        svc.get_availability("e9", "u1")
    with pytest.raises(ServiceError, match="^user with ID u9 not found$"):
        svc.get_availability("e1", "u9")
    with pytest.raises(ServiceError, match="^event not found: e1$"):
        svc.get_availability("e1", "u1")


def test_delete_availability(svc):
    svc.create_event(_event())
    svc.add_availability(Availability(event_id="e1", user_id="u1"))
    svc.delete_availability("e1", "u1")
    with pytest.raises(ServiceError, match="availability not found for user u1 in event e1"):
        svc.get_availability("e1", "u1")


def test_delete_availability_missing(svc):
    with pytest.raises(ServiceError, match="^event not found: e1$"):
        svc.delete_availability("e1", "u1")


# ----- suggestions -----


def test_suggest_slots_picks_best_window(svc):
    svc.create_event(_event())
    svc.add_availability(Availability(event_id="e1", user_id="u1", slots=[Slot(_t(10), _t(11))]))
    svc.add_availability(Availability(event_id="e1", user_id="u2", slots=[Slot(_t(10), _t(10, 30))]))
    assert svc.suggest_slots("e1") == [
        SlotSuggestion(slot=Slot(_t(10), _t(10, 30)), unavailable_users=[])
    ]


def test_suggest_slots_ties_keep_order(svc):
    svc.create_event(_event(participants=("u1", "u2", "u3")))
    for uid in ("u1", "u2"):
        svc.add_availability(Availability(event_id="e1", user_id=uid, slots=[Slot(_t(10), _t(11))]))
    result = svc.suggest_slots("e1")
    assert [s.slot.start for s in result] == [_t(10), _t(10, 15), _t(10, 30)]
    assert all(s.slot.end - s.slot.start == timedelta(minutes=30) for s in result)
    assert all(s.unavailable_users == ["u3"] for s in result)


def test_suggest_slots_nobody_available(svc):
    svc.create_event(_event())
    svc.add_availability(Availability(event_id="e1", user_id="u1", slots=[Slot(_t(14), _t(15))]))
    assert svc.suggest_slots("e1") == []


def test_suggest_slots_without_availability(svc):
    svc.create_event(_event())
    assert svc.suggest_slots("e1") == []


def test_suggest_slots_unknown_event(svc):
    with pytest.raises(ServiceError, match="^event with ID e9 does not exist$"):
        svc.suggest_slots("e9")


def test_suggest_slots_duration_longer_than_slot(svc):
    svc.create_event(_event(duration=90))
    svc.add_availability(Availability(event_id="e1", user_id="u1", slots=[Slot(_t(9), _t(12))]))
    assert svc.suggest_slots("e1") == []


# ----- helpers -----


def test_is_available_for_window():
    target = Slot(_t(10), _t(10, 30))
    assert is_available_for_window(target, [Slot(_t(10), _t(10, 30))])
    assert is_available_for_window(target, [Slot(_t(12), _t(13)), Slot(_t(9), _t(11))])
    assert not is_available_for_window(target, [Slot(_t(10, 15), _t(11))])
    assert not is_available_for_window(target, [])


def test_missing_users_keeps_order():
    assert missing_users(["a", "b", "c", "d"], ["c", "a"]) == ["b", "d"]
    assert missing_users(["a"], ["a", "z"]) == []