from portmap.measure.features import Feature, FeatureStore
from portmap.measure.sketch import DrawInteraction, ModifyInteraction
from portmap.state.state import DrawKind


class Recorder:
    def __init__(self):
        self.started = []
        self.ended = []

    def start(self, feature):
        self.started.append(feature)

    def end(self, feature):
        self.ended.append(feature)


def make_draw(kind, store=None):
    recorder = Recorder()
    store = store if store is not None else FeatureStore()
    draw = DrawInteraction(kind, store, recorder.start, recorder.end)
    return draw, store, recorder


def test_first_click_starts_sketch():
    draw, store, recorder = make_draw(DrawKind.LINE_STRING)

    draw.click((0.0, 0.0))

    assert draw.drawing
    assert recorder.started == [draw.sketch]
    assert len(store) == 0


def test_sketch_line_follows_cursor():
    draw, _, _ = make_draw(DrawKind.LINE_STRING)
    draw.click((0.0, 0.0))
    draw.click((10.0, 0.0))

    draw.pointer_move((10.0, 5.0))

    assert draw.sketch.coordinates == [(0.0, 0.0), (10.0, 0.0), (10.0, 5.0)]


def test_sketch_polygon_ring_is_closed():
    draw, _, _ = make_draw(DrawKind.POLYGON)
    draw.click((0.0, 0.0))
    draw.click((10.0, 0.0))
    draw.pointer_move((10.0, 10.0))

    assert draw.sketch.coordinates == [(0.0, 0.0), (10.0, 0.0), (10.0, 10.0), (0.0, 0.0)]


def test_point_is_committed_on_first_click():
    draw, store, recorder = make_draw(DrawKind.POINT)

    draw.click((3.0, 4.0))

    assert len(recorder.started) == 1
    assert len(recorder.ended) == 1
    assert [f.coordinates for f in store] == [[(3.0, 4.0)]]
    assert not draw.drawing


def test_finish_requires_enough_vertices():
    draw, store, recorder = make_draw(DrawKind.POLYGON)
    draw.click((0.0, 0.0))
    draw.click((10.0, 0.0))

    assert draw.finish() is None
    assert len(store) == 0

    draw.click((10.0, 10.0))
    feature = draw.finish()

    assert feature.coordinates == [(0.0, 0.0), (10.0, 0.0), (10.0, 10.0), (0.0, 0.0)]
    assert recorder.ended == [feature]
    assert list(store) == [feature]


def test_committed_line_excludes_cursor():
    draw, store, _ = make_draw(DrawKind.LINE_STRING)
    draw.click((0.0, 0.0))
    draw.click((5.0, 0.0))
    draw.pointer_move((9.0, 9.0))

    feature = draw.finish()

    assert feature.coordinates == [(0.0, 0.0), (5.0, 0.0)]


def test_undo_and_abort():
    draw, store, recorder = make_draw(DrawKind.LINE_STRING)
    draw.click((0.0, 0.0))
    draw.click((5.0, 0.0))

    assert draw.undo() is True
    assert draw.vertices == [(0.0, 0.0)]
    assert draw.undo() is False
    assert not draw.drawing

    draw.click((1.0, 1.0))
    draw.click((2.0, 2.0))
    draw.abort()

    assert not draw.drawing
    assert len(store) == 0
    assert recorder.ended == []


def test_modify_drags_vertex():
    store = FeatureStore()
    feature = Feature(DrawKind.LINE_STRING, [(0.0, 0.0), (10.0, 0.0)])
    store.add(feature)
    modify = ModifyInteraction(store)

    assert modify.press((9.5, 0.5), tolerance=1.0)
    modify.pointer_move((12.0, 3.0), tolerance=1.0)
    modify.release()

    assert feature.coordinates == [(0.0, 0.0), (12.0, 3.0)]
    assert not modify.dragging


def test_modify_keeps_ring_closed():
    store = FeatureStore()
    ring = Feature(DrawKind.POLYGON, [(0.0, 0.0), (10.0, 0.0), (10.0, 10.0), (0.0, 0.0)])
    store.add(ring)
    modify = ModifyInteraction(store)

    modify.press((0.2, 0.1), tolerance=1.0)
    modify.pointer_move((-5.0, -5.0), tolerance=1.0)

    assert ring.coordinates[0] == (-5.0, -5.0)
    assert ring.coordinates[-1] == (-5.0, -5.0)


def test_inactive_modify_ignores_input():
    store = FeatureStore()
    store.add(Feature(DrawKind.POINT, [(0.0, 0.0)]))
    modify = ModifyInteraction(store)
    modify.set_active(False)

    assert not modify.press((0.0, 0.0), tolerance=1.0)
    modify.pointer_move((0.0, 0.0), tolerance=1.0)
    assert not modify.has_overlay


def test_hover_gives_overlay():
    store = FeatureStore()
    store.add(Feature(DrawKind.POINT, [(0.0, 0.0)]))
    modify = ModifyInteraction(store)

    modify.pointer_move((0.5, 0.0), tolerance=1.0)
    assert modify.has_overlay

    modify.pointer_move((50.0, 0.0), tolerance=1.0)
    assert not modify.has_overlay


def test_deactivating_modify_drops_hint():
    modify = ModifyInteraction(FeatureStore())
    modify.hint = (10.0, 0.0)

    modify.set_active(False)

    assert modify.hint is None
    assert not modify.has_overlay
