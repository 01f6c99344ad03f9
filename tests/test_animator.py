import pytest

from portmap.errors import EmptyRouteSetError
from portmap.routes.route import Route, RouteSet
from portmap.simulation.animator import RouteAnimator


@pytest.fixture
def routes():
    return RouteSet([
        Route("east", ((0.0, 0.0), (100.0, 0.0))),
        Route("north", ((0.0, 0.0), (0.0, 100.0))),
        Route("west", ((0.0, 0.0), (-100.0, 0.0))),
    ])


@pytest.fixture
def animator(routes):
    animator = RouteAnimator(routes, speed=100.0)
    animator.start(now=0.0)
    return animator


def test_starts_at_first_route_origin(routes):
    animator = RouteAnimator(routes)

    assert animator.position == (0.0, 0.0)
    assert not animator.running


def test_tick_advances_distance(animator):
    # 100 * 1000 ms / 1e6 = 0.1
    coordinate = animator.tick(1000.0)

    assert animator.state.distance == pytest.approx(0.1)
    assert coordinate == pytest.approx((10.0, 0.0))
    assert animator.position == coordinate


def test_zero_elapsed_leaves_distance_unchanged(animator):
    animator.tick(2500.0)
    before = animator.state.distance

    animator.tick(2500.0)

    assert animator.state.distance == before
    assert animator.state.route_index == 0


def test_split_ticks_match_single_tick(routes):
    split = RouteAnimator(routes, speed=120.0)
    split.start(now=0.0)
    for now in (500.0, 1200.0, 3000.0, 4000.0):
        split.tick(now)

    single = RouteAnimator(routes, speed=120.0)
    single.start(now=0.0)
    single.tick(4000.0)

    assert split.state.distance == pytest.approx(single.state.distance)
    assert split.state.route_index == single.state.route_index


def test_passing_one_resets_distance_and_moves_to_next_route(animator):
    animator.tick(9000.0)  # 0.9
    coordinate = animator.tick(11000.0)  # 1.1 -> next route

    assert animator.state.distance == 0.0
    assert animator.state.route_index == 1
    assert coordinate == (0.0, 0.0)


def test_large_step_wraps_modulo_two_without_changing_route(animator):
    # 100 * 25000 / 1e6 = 2.5, modulo 2 is 0.5, which is not past 1
    animator.tick(25000.0)

    assert animator.state.distance == pytest.approx(0.5)
    assert animator.state.route_index == 0


def test_route_index_cycles(routes):
    animator = RouteAnimator(routes, speed=1000.0)
    animator.start(now=0.0)
    now = 0.0
    visited = []
    for _ in range(4):
        now += 1100.0  # 1.1 per tick, always past 1
        animator.tick(now)
        visited.append(animator.state.route_index)

    assert visited == [1, 2, 0, 1]


def test_tick_when_stopped_does_nothing(routes):
    animator = RouteAnimator(routes, speed=100.0)

    assert animator.tick(1000.0) is None
    assert animator.state.distance == 0.0


def test_stop_freezes_and_start_resumes(animator):
    animator.tick(3000.0)
    animator.stop()
    frozen = animator.position

    assert animator.tick(9000.0) is None
    assert animator.position == frozen

    # Time spent stopped does not count
    animator.start(now=20000.0)
    animator.tick(21000.0)
    assert animator.state.distance == pytest.approx(0.4)


def test_toggle(animator):
    assert animator.toggle(100.0) is False
    assert animator.toggle(200.0) is True
    assert animator.state.last_frame_timestamp == 200.0


def test_speed_change_does_not_jump(animator):
    animator.tick(2000.0)
    distance = animator.state.distance

    animator.on_speed_changed(500.0, now=8000.0)

    assert animator.state.distance == distance
    assert animator.state.last_frame_timestamp == 8000.0
    animator.tick(9000.0)
    assert animator.state.distance == pytest.approx(distance + 0.5)


def test_speed_change_rejects_negative(animator):
    with pytest.raises(ValueError):
        animator.on_speed_changed(-1.0, now=0.0)


def test_speed_argument_overrides_configured_speed(animator):
    animator.tick(1000.0, speed=300.0)

    assert animator.state.distance == pytest.approx(0.3)


def test_start_with_no_routes_raises():
    animator = RouteAnimator(RouteSet())

    assert animator.position is None
    with pytest.raises(EmptyRouteSetError):
        animator.start(now=0.0)
    assert not animator.running


def test_failed_frame_is_dropped_without_corrupting_state(animator, monkeypatch):
    animator.tick(1000.0)
    before = (animator.state.distance, animator.state.route_index, animator.state.last_frame_timestamp)

    def broken(route_index, fraction):
        raise RuntimeError("boom")

    monkeypatch.setattr(animator.routes, "coordinate_at_fraction", broken)

    assert animator.tick(2000.0) is None
    assert (animator.state.distance, animator.state.route_index, animator.state.last_frame_timestamp) == before


def test_on_frame_callback_receives_position(routes):
    frames = []
    animator = RouteAnimator(routes, speed=100.0, on_frame=frames.append)
    animator.start(now=0.0)

    animator.tick(5000.0)

    assert frames == [pytest.approx((50.0, 0.0))]


def test_failing_on_frame_callback_does_not_escape(routes):
    def broken(coordinate):
        raise RuntimeError("render failed")

    animator = RouteAnimator(routes, speed=100.0, on_frame=broken)
    animator.start(now=0.0)

    assert animator.tick(5000.0) == pytest.approx((50.0, 0.0))
    assert animator.state.last_frame_timestamp == 5000.0
    assert animator.tick(6000.0) == pytest.approx((60.0, 0.0))
