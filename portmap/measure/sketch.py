"""Drawing and vertex-editing interactions for the measurement tool."""

from typing import Callable

from portmap.measure.features import Feature, FeatureStore
from portmap.routes.curve import Coordinate
from portmap.state.state import DrawKind

# Vertices needed before a sketch can be committed
MIN_VERTICES = {
    DrawKind.POINT: 1,
    DrawKind.LINE_STRING: 2,
    DrawKind.POLYGON: 3,
}


class DrawInteraction:
    """Builds one geometry from clicks.

    The first click fires `on_draw_start` with the live sketch feature. The
    sketch is committed to the store and `on_draw_end` fires on `finish`,
    or straight away for points.
    """

    def __init__(
        self,
        kind: DrawKind,
        store: FeatureStore,
        on_draw_start: Callable[[Feature], None],
        on_draw_end: Callable[[Feature], None],
    ):
        self.kind = kind
        self.store = store
        self.on_draw_start = on_draw_start
        self.on_draw_end = on_draw_end
        self.vertices: list[Coordinate] = []
        self.cursor: Coordinate | None = None
        self.sketch: Feature | None = None

    @property
    def drawing(self) -> bool:
        return bool(self.vertices)

    def sketch_point(self) -> Feature | None:
        """Get the point feature following the cursor."""
        if self.cursor is None:
            return None
        return Feature(DrawKind.POINT, [self.cursor])

    def sketch_features(self) -> list[Feature]:
        """Get the features to render for the sketch, geometry first."""
        features = []
        if self.sketch is not None:
            features.append(self.sketch)
        point = self.sketch_point()
        if point is not None:
            features.append(point)
        return features

    def pointer_move(self, coordinate: Coordinate) -> None:
        self.cursor = coordinate
        self._update_sketch()

    def click(self, coordinate: Coordinate) -> None:
        """Add a vertex; the first one starts the sketch."""
        self.cursor = coordinate
        self.vertices.append(coordinate)

        if len(self.vertices) == 1:
            self.sketch = Feature(self.kind)
            self._update_sketch()
            self.on_draw_start(self.sketch)
            if self.kind is DrawKind.POINT:
                self.finish()
            return

        self._update_sketch()

    def finish(self) -> Feature | None:
        """Commit the sketch if it has enough vertices.

        Returns:
            The committed feature, or None if the sketch is too short
        """
        if len(self.vertices) < MIN_VERTICES[self.kind]:
            return None

        feature = Feature(self.kind, self._geometry(self.vertices))
        self.store.add(feature)
        self._reset()
        self.on_draw_end(feature)
        return feature

    def undo(self) -> bool:
        """Remove the last vertex.

        Returns:
            True if the sketch is still in progress afterwards
        """
        if not self.vertices:
            return False

        self.vertices.pop()
        if not self.vertices:
            self._reset()
            return False

        self._update_sketch()
        return True

    def abort(self) -> None:
        """Drop the sketch without committing anything."""
        self._reset()

    def _reset(self) -> None:
        self.vertices = []
        self.sketch = None

    def _geometry(self, vertices: list[Coordinate]) -> list[Coordinate]:
        if self.kind is DrawKind.POINT:
            return [vertices[0]]
        if self.kind is DrawKind.POLYGON:
            return vertices + [vertices[0]]
        return list(vertices)

    def _update_sketch(self) -> None:
        if self.sketch is None:
            return

        # The floating last vertex follows the cursor
        vertices = list(self.vertices)
        if self.kind is not DrawKind.POINT and self.cursor is not None:
            vertices.append(self.cursor)
        self.sketch.coordinates = self._geometry(vertices)


class ModifyInteraction:
    """Drags vertices of committed features.

    While a vertex is hovered or grabbed, or the "Drag to modify" hint is
    shown, the interaction has overlay geometry.
    """

    def __init__(self, store: FeatureStore):
        self.store = store
        self.active = True
        self.hint: Coordinate | None = None
        self.hovered: tuple[Feature, int] | None = None
        self.grabbed: tuple[Feature, int] | None = None

    @property
    def has_overlay(self) -> bool:
        return self.hint is not None or self.hovered is not None or self.grabbed is not None

    @property
    def dragging(self) -> bool:
        return self.grabbed is not None

    def set_active(self, active: bool) -> None:
        self.active = active
        if not active:
            self.hint = None
            self.hovered = None
            self.grabbed = None

    def pointer_move(self, coordinate: Coordinate, tolerance: float) -> None:
        if not self.active:
            return

        if self.grabbed is not None:
            feature, index = self.grabbed
            self.store.move_vertex(feature, index, coordinate)
            return

        self.hovered = self.store.nearest_vertex(coordinate, tolerance)

    def press(self, coordinate: Coordinate, tolerance: float) -> bool:
        """Grab the vertex under the pointer.

        Returns:
            True if a vertex was grabbed
        """
        if not self.active:
            return False

        self.grabbed = self.store.nearest_vertex(coordinate, tolerance)
        return self.grabbed is not None

    def release(self) -> None:
        self.grabbed = None

    def clear(self) -> None:
        """Forget hint and vertex references, e.g. after the store is cleared."""
        self.hint = None
        self.hovered = None
        self.grabbed = None
