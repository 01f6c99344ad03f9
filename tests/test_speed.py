import pytest

from portmap.screens.speed import parse_speed


def test_parse_speed():
    assert parse_speed("120") == 120.0


@pytest.mark.parametrize("value", ["", "fast", "5", "1000"])
def test_parse_speed_rejects(value):
    with pytest.raises(ValueError):
        parse_speed(value)
