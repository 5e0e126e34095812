import pytest

from site_scheduler.common.time_utils import format_minutes, parse_hhmm
from site_scheduler.common.validators import require_day_of_week, require_int
from site_scheduler.core.exceptions import ValidationError


def test_format_and_parse():
    assert format_minutes(0) == "00:00"
    assert format_minutes(11 * 60 + 30) == "11:30"
    assert format_minutes(1440) == "24:00"
    assert parse_hhmm("08:30") == 510
    assert parse_hhmm("24:00") == 1440


@pytest.mark.parametrize("value", ["", "8h30", "25:00", "10:75", "24:01", "ab:cd"])
def test_parse_rejects_bad_values(value):
    with pytest.raises(ValidationError):
        parse_hhmm(value)


def test_day_of_week_bounds():
    assert require_day_of_week("7") == 7
    for bad in (0, 8, "x", None):
        with pytest.raises(ValidationError):
            require_day_of_week(bad)


def test_require_int_rejects_bool():
    with pytest.raises(ValidationError):
        require_int(True, "userId")
