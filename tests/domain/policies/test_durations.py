import pytest

from hexmux.domain.policies.durations import duration_to_seconds


@pytest.mark.parametrize(
    "value,expected",
    [
        ("00:00:30.04", 30),
        ("01:02:03", 3723),
        (" 00:10:00 ", 600),
        (42, 42),
        (0, 0),
        (12.0, 12),
        ("90", 90),
    ],
)
def test_duration_to_seconds_accepts_clock_and_integers(value, expected):
    assert duration_to_seconds(value) == expected


@pytest.mark.parametrize("value", [None, -5, 1.5, "1m30s", "", True, [10]])
def test_duration_to_seconds_falls_back_to_default(value):
    assert duration_to_seconds(value) == 0
    assert duration_to_seconds(value, None) is None
