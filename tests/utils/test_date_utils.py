# tests/utils/test_date_utils.py
from datetime import timedelta

import pytest

from kubeperf.utils.date_utils import format_duration, parse_duration


@pytest.mark.parametrize(
    "value,expected",
    [
        ("30s", timedelta(seconds=30)),
        ("5m", timedelta(minutes=5)),
        ("1h30m", timedelta(hours=1, minutes=30)),
        ("1.5h", timedelta(minutes=90)),
        ("500ms", timedelta(milliseconds=500)),
        (" 2M ", timedelta(minutes=2)),
        ("0s", timedelta(0)),
    ],
)
def test_parse_duration(value, expected):
    assert parse_duration(value) == expected


@pytest.mark.parametrize("value", ["", None, "5", "five minutes", "5d", "m5", "1h 30m"])
def test_parse_duration_rejects_malformed(value):
    with pytest.raises(ValueError):
        parse_duration(value)


def test_format_duration():
    assert format_duration(timedelta(minutes=5)) == "5m0s"
    assert format_duration(timedelta(hours=1, minutes=30)) == "1h30m0s"
    assert format_duration(timedelta(seconds=45)) == "45s"
    assert format_duration(timedelta(0)) == "0s"
