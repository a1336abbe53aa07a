import pytest

from derbysim.output.formatting import format_elapsed


@pytest.mark.parametrize(
    ("elapsed_ms", "expected"),
    [
        (0, "0.000s"),
        (1, "0.001s"),
        (2800, "2.800s"),
        (59999, "59.999s"),
        (60000, "1:00.000"),
        (65432, "1:05.432"),
        (599999, "9:59.999"),
        (3600000, "60:00.000"),
    ],
)
def test_format_elapsed(elapsed_ms, expected):
    assert format_elapsed(elapsed_ms) == expected


def test_fractional_milliseconds_round_half_up():
    assert format_elapsed(1234.5) == "1.235s"
    assert format_elapsed(1234.4) == "1.234s"


def test_rounding_into_next_minute_switches_format():
    assert format_elapsed(59999.6) == "1:00.000"


def test_float_input_has_no_binary_surprises():
    assert format_elapsed(0.1 + 0.2) == "0.000s"
    assert format_elapsed(1000.0 * 1.1) == "1.100s"


def test_negative_elapsed_rejected():
    with pytest.raises(ValueError):
        format_elapsed(-1)
