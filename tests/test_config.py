from portmap import config
from portmap.state.state import DrawKind


def test_defaults_without_config_file(data_home):
    assert config.get_animation_speed() == config.DEFAULT_SPEED
    assert config.get_draw_kind() is DrawKind.LINE_STRING
    assert config.get_show_segments() is False
    assert config.get_clear_previous() is False


def test_preferences_round_trip(data_home):
    config.set_animation_speed(250.0)
    config.set_draw_kind(DrawKind.POLYGON)
    config.set_show_segments(True)
    config.set_clear_previous(True)

    assert (data_home / "config.json").exists()
    assert config.get_animation_speed() == 250.0
    assert config.get_draw_kind() is DrawKind.POLYGON
    assert config.get_show_segments() is True
    assert config.get_clear_previous() is True


def test_unreadable_config_gives_defaults(data_home):
    data_home.mkdir(parents=True)
    (data_home / "config.json").write_text("{not json")

    assert config.load_config() == {}
    assert config.get_animation_speed() == config.DEFAULT_SPEED


def test_invalid_values_fall_back(data_home):
    config.save_config({"animation_speed": "fast", "draw_kind": "Circle"})

    assert config.get_animation_speed() == config.DEFAULT_SPEED
    assert config.get_draw_kind() is DrawKind.LINE_STRING


def test_speed_is_clamped(data_home):
    config.set_animation_speed(5000.0)

    assert config.get_animation_speed() == config.MAX_SPEED


def test_draw_kind_cycle():
    assert DrawKind.POINT.next() is DrawKind.LINE_STRING
    assert DrawKind.LINE_STRING.next() is DrawKind.POLYGON
    assert DrawKind.POLYGON.next() is DrawKind.POINT
