import pytest
from datetime import date, time

from menza.domain.errors import FormatError, NotFoundError, QueryRejected, RejectionReason
from menza.domain.models import Canteen, Reservation, WorkingHour
from menza.dto.status_dto import StatusQueryDTO
from menza.repository.repo import MemoryRepository
from menza.services.availability_service import AvailabilityService, compute_slots

DAY = date(2025, 12, 5)


@pytest.fixture
def repo():
    return MemoryRepository()


@pytest.fixture
def service(repo):
    return AvailabilityService(repo)


@pytest.fixture
def canteen(repo):
    wh = [
        WorkingHour(meal="breakfast", **{"from": time(7, 0), "to": time(10, 0)}),
        WorkingHour(meal="lunch", **{"from": time(11, 0), "to": time(15, 0)}),
    ]
    return repo.add_canteen(Canteen(name="Status Menza", location="Loc", capacity=20, workingHours=wh))


def query(**overrides):
    params = {
        "startDate": "2025-12-05",
        "endDate": "2025-12-05",
        "startTime": "11:00",
        "endTime": "12:00",
        "duration": "30",
    }
    params.update(overrides)
    return StatusQueryDTO(**params)


def book(repo, canteen, at, duration=30, status="Active", on=DAY):
    return repo.add_reservation(Reservation(
        studentId="s", canteenId=canteen.id, date=on, time=at, duration=duration, status=status,
    ))


def test_thirty_minute_slots(canteen):
    slots = list(compute_slots(canteen, [], DAY, DAY, "11:00", "12:00", 30))
    assert [s.startTime for s in slots] == ["11:00", "11:30"]
    assert all(s.meal == "lunch" for s in slots)
    assert all(s.remainingCapacity == 20 for s in slots)


def test_sixty_minute_slots(canteen):
    slots = list(compute_slots(canteen, [], DAY, DAY, "11:00", "14:00", 60))
    assert [s.startTime for s in slots] == ["11:00", "12:00", "13:00"]


def test_slots_outside_working_hours_are_dropped(canteen):
    slots = list(compute_slots(canteen, [], DAY, DAY, "09:00", "12:00", 30))
    assert [(s.meal, s.startTime) for s in slots] == [
        ("breakfast", "09:00"),
        ("breakfast", "09:30"),
        ("lunch", "11:00"),
        ("lunch", "11:30"),
    ]


def test_slot_crossing_block_end_is_dropped(canteen):
    slots = list(compute_slots(canteen, [], DAY, DAY, "09:30", "10:30", 60))
    assert slots == []


def test_remaining_capacity(repo, canteen):
    book(repo, canteen, "11:00")
    book(repo, canteen, "11:00", status="Cancelled")
    book(repo, canteen, "11:30", duration=60)

    slots = list(compute_slots(canteen, repo.reservations, DAY, DAY, "11:00", "13:00", 30))
    by_time = {s.startTime: s.remainingCapacity for s in slots}
    assert by_time == {"11:00": 19, "11:30": 19, "12:00": 19, "12:30": 20}


def test_remaining_capacity_never_negative(repo, canteen):
    canteen.capacity = 1
    book(repo, canteen, "11:00")
    book(repo, canteen, "11:00")
    slots = list(compute_slots(canteen, repo.reservations, DAY, DAY, "11:00", "11:30", 30))
    assert slots[0].remainingCapacity == 0


def test_other_canteens_and_days_not_counted(repo, canteen):
    other = repo.add_canteen(canteen.model_copy(update={"id": None}))
    book(repo, other, "11:00")
    book(repo, canteen, "11:00", on=date(2025, 12, 6))
    slots = list(compute_slots(canteen, repo.reservations, DAY, DAY, "11:00", "11:30", 30))
    assert slots[0].remainingCapacity == 20


def test_multiple_days_in_order(canteen):
    slots = list(compute_slots(canteen, [], date(2025, 12, 1), date(2025, 12, 3), "11:00", "12:00", 30))
    assert [(s.date.isoformat(), s.startTime) for s in slots] == [
        ("2025-12-01", "11:00"), ("2025-12-01", "11:30"),
        ("2025-12-02", "11:00"), ("2025-12-02", "11:30"),
        ("2025-12-03", "11:00"), ("2025-12-03", "11:30"),
    ]


def test_reversed_date_range_yields_nothing(canteen):
    assert list(compute_slots(canteen, [], date(2025, 12, 3), date(2025, 12, 1), "11:00", "12:00", 30)) == []


def test_sequence_is_restartable_and_fresh(repo, canteen):
    slots = compute_slots(canteen, repo.reservations, DAY, DAY, "11:00", "11:30", 30)
    assert [s.remainingCapacity for s in slots] == [20]

    book(repo, canteen, "11:00")
    assert [s.remainingCapacity for s in slots] == [19]


def test_slot_serialization(canteen):
    slot = next(iter(compute_slots(canteen, [], DAY, DAY, "11:00", "11:30", 30)))
    assert slot.model_dump(mode="json") == {
        "date": "2025-12-05",
        "meal": "lunch",
        "startTime": "11:00",
        "remainingCapacity": 20,
    }


def test_canteen_status(service, canteen):
    status = service.canteen_status(canteen.id, query())
    assert status.canteenId == canteen.id
    assert [s.startTime for s in status.slots] == ["11:00", "11:30"]


def test_canteen_status_unknown_canteen(service):
    with pytest.raises(NotFoundError):
        service.canteen_status("nepostojeca", query(duration=None))


@pytest.mark.parametrize("field", ["startDate", "endDate", "startTime", "endTime", "duration"])
def test_missing_query_parameter(service, canteen, field):
    with pytest.raises(QueryRejected) as info:
        service.canteen_status(canteen.id, query(**{field: None}))
    assert info.value.reason == RejectionReason.MISSING_QUERY_PARAMETERS
    assert str(info.value) == "Missing query parameters"


@pytest.mark.parametrize("duration", ["45", "15", "0", "abc"])
def test_invalid_query_duration(service, canteen, duration):
    with pytest.raises(QueryRejected) as info:
        service.canteen_status(canteen.id, query(duration=duration))
    assert str(info.value) == "Duration must be 30 or 60 minutes"


def test_malformed_query_time(service, canteen):
    with pytest.raises(FormatError):
        service.canteen_status(canteen.id, query(startTime="25:00"))


def test_global_status_keeps_canteen_order(repo, service, canteen):
    second = repo.add_canteen(Canteen(
        name="Druga", location="Loc", capacity=3,
        workingHours=[WorkingHour(meal="dinner", **{"from": "18:00", "to": "20:00"})],
    ))
    result = service.global_status(query())
    assert [group.canteenId for group in result] == [canteen.id, second.id]
    assert len(result[0].slots) == 2
    assert result[1].slots == []


def test_global_status_validates_query(service):
    with pytest.raises(QueryRejected):
        service.global_status(query(endDate=""))


def test_slots_on_last_calendar_day(repo, canteen):
    book(repo, canteen, "14:00", duration=60, on=date.max)
    slots = list(compute_slots(canteen, repo.reservations, date(9999, 12, 30), date.max, "14:00", "16:00", 60))
    assert [(s.date, s.startTime, s.remainingCapacity) for s in slots] == [
        (date(9999, 12, 30), "14:00", 20),
        (date.max, "14:00", 19),
    ]
