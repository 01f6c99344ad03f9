from portmap.measure.labels import LabelKind, SegmentLabelPool


def test_acquire_grows_pool():
    pool = SegmentLabelPool()

    label = pool.acquire(2, (5.0, 0.0), "10 m")

    assert len(pool) == 3
    assert label.kind is LabelKind.SEGMENT
    assert label.anchor == (5.0, 0.0)
    assert label.text == "10 m"


def test_acquire_reuses_unchanged_slot_and_never_shrinks():
    pool = SegmentLabelPool()
    first = pool.acquire(0, (5.0, 0.0), "10 m")
    pool.acquire(3, (1.0, 1.0), "2 m")

    assert pool.acquire(0, (5.0, 0.0), "10 m") is first
    assert len(pool) == 4

    moved = pool.acquire(0, (6.0, 0.0), "12 m")
    assert moved is not first
    assert moved.text == "12 m"
    assert len(pool) == 4
