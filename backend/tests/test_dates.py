import pytest

from gestion_alquiler.core.exceptions import ValidationException
from gestion_alquiler.utils.dates import (
    QuarterWindow, day_range, end_of_day_ms, nights_between, now_ms, quarter_bounds,
    quarter_of, start_of_day_ms
)

DAY_MS = 24 * 60 * 60 * 1000


@pytest.mark.parametrize("quarter,start,end", [
    (1, 1704067200000, 1711929599000),
    (2, 1711929600000, 1719791999000),
    (3, 1719792000000, 1727740799000),
    (4, 1727740800000, 1735689599000),
])
def test_quarter_bounds_2024(quarter, start, end):
    assert quarter_bounds(2024, quarter) == QuarterWindow(start=start, end=end)


def test_consecutive_quarters_are_one_second_apart():
    for quarter in (1, 2, 3):
        assert quarter_bounds(2023, quarter + 1).start == quarter_bounds(2023, quarter).end + 1000
    assert quarter_bounds(2024, 1).start == quarter_bounds(2023, 4).end + 1000


@pytest.mark.parametrize("quarter", [0, 5, -1, True, 2.0])
def test_quarter_bounds_rejects_invalid_quarter(quarter):
    with pytest.raises(ValidationException) as exc_info:
        quarter_bounds(2024, quarter)
    assert exc_info.value.error_code == "INVALID_QUARTER"


def test_quarter_bounds_defaults_to_current_year(mocker):
    mocker.patch("gestion_alquiler.utils.dates.current_year", return_value=2024)
    assert quarter_bounds(None, 1).start == 1704067200000


@pytest.mark.parametrize("timestamp,quarter", [
    (1708615590000, 1),
    (1713799590000, 2),
    (1727018790000, 3),
    (1732289190000, 4),
])
def test_quarter_of(timestamp, quarter):
    assert quarter_of(timestamp) == quarter


def test_quarter_of_uses_madrid_calendar():
    # 2023-12-31 23:30 UTC is already January in Madrid
    assert quarter_of(1704065400000) == 1


def test_window_contains_is_inclusive():
    window = quarter_bounds(2024, 2)
    assert window.contains(window.start)
    assert window.contains(window.end)
    assert not window.contains(window.start - 1)
    assert not window.contains(window.end + 1)


def test_nights_between_reference_stay():
    assert nights_between(1718920414000, 1719356014000) == 6


def test_nights_between_same_and_adjacent_day():
    check_in = 1718956800000  # 2024-06-21 10:00 Madrid
    assert nights_between(check_in, check_in + 60 * 60 * 1000) == 0
    assert nights_between(check_in, check_in + DAY_MS) == 1


def test_nights_between_is_monotonic():
    check_in = 1718920414000
    nights = [nights_between(check_in, check_in + hours * 60 * 60 * 1000) for hours in range(0, 24 * 10, 5)]
    assert nights == sorted(nights)


def test_nights_between_across_dst_change():
    # 2024-03-30 12:00 to 2024-04-01 12:00 Madrid, clocks go forward on the 31st
    assert nights_between(1711796400000, 1711965600000) == 2


def test_day_bounds():
    timestamp = 1718956800000
    assert start_of_day_ms(timestamp) == 1718920800000
    assert end_of_day_ms(timestamp) == 1718920800000 + DAY_MS - 1


def test_day_range_widens_to_whole_days():
    start, end = day_range(1718956800000, 1718956800000)
    assert start == 1718920800000
    assert end == 1718920800000 + DAY_MS - 1


def test_day_range_rejects_inverted_range():
    with pytest.raises(ValidationException, match="before than end"):
        day_range(1718956800000 + 2 * DAY_MS, 1718956800000)


def test_day_range_rejects_future_start():
    future = now_ms() + 3 * DAY_MS
    with pytest.raises(ValidationException, match="before or equal than today"):
        day_range(future, future + DAY_MS)
