"""Measurement tool: draw, edit and label lines and polygons."""

from portmap.debug import debug_log
from portmap.measure.features import Feature, FeatureStore
from portmap.measure.format import format_area, format_length
from portmap.measure.geometry import interior_point, line_length, midpoint, polygon_area, segments
from portmap.measure.labels import Label, LabelKind, SegmentLabelPool
from portmap.measure.sketch import DrawInteraction, ModifyInteraction
from portmap.routes.curve import Coordinate
from portmap.state.state import DrawKind, DrawSession, MeasureMode

IDLE_TIP = "Click to start measuring"
MODIFY_HINT = "Drag to modify"


def active_tip(kind: DrawKind) -> str:
    """Get the tip shown while a sketch is in progress."""
    return "Click to continue drawing the " + ("polygon" if kind is DrawKind.POLYGON else "line")


class DrawMeasureController:
    """
    State machine behind the measurement tool.

    Idle: a draw kind is selected and nothing has been drawn with it.
    Drawing: a sketch is in progress; vertex editing is suspended.
    Editing: the last draw completed; committed vertices can be dragged.

    Input adapters call the `on_*` transition methods; the renderer calls
    `frame_labels` once per frame.
    """

    def __init__(
        self,
        kind: DrawKind = DrawKind.LINE_STRING,
        segments: bool = False,
        clear_on_start: bool = False,
        store: FeatureStore | None = None,
    ):
        self.store = store if store is not None else FeatureStore()
        self.modify = ModifyInteraction(self.store)
        self.segment_pool = SegmentLabelPool()
        self.mode = MeasureMode.IDLE
        self.session = DrawSession(kind=kind, tip=IDLE_TIP, segments=segments, clear_on_start=clear_on_start)
        self.draw: DrawInteraction | None = None
        self._clear_hint_on_move = False
        self._suppress_click = False
        self.on_draw_kind_changed(kind)

    # Transitions

    def on_draw_kind_changed(self, kind: DrawKind) -> None:
        """Select a draw kind, cancelling any sketch in progress."""
        if self.draw is not None:
            if self.draw.drawing:
                debug_log(f"Cancelled {self.session.kind.value} sketch")
            self.draw.abort()

        self.session = DrawSession(
            kind=kind,
            tip=IDLE_TIP,
            segments=self.session.segments,
            clear_on_start=self.session.clear_on_start,
        )
        self.draw = DrawInteraction(kind, self.store, self._handle_draw_start, self._handle_draw_end)
        self.modify.set_active(True)
        self.mode = MeasureMode.IDLE

    def on_segments_toggled(self, enabled: bool) -> None:
        self.session.segments = enabled

    def on_clear_previous_toggled(self, enabled: bool) -> None:
        self.session.clear_on_start = enabled

    def on_pointer_move(self, coordinate: Coordinate, tolerance: float = 0.0) -> None:
        """Track the pointer; drags a grabbed vertex if there is one."""
        if self._clear_hint_on_move:
            self.modify.hint = None
            self._clear_hint_on_move = False

        self.modify.pointer_move(coordinate, tolerance)
        if not self.modify.dragging:
            self.draw.pointer_move(coordinate)

    def on_pointer_down(self, coordinate: Coordinate, tolerance: float) -> bool:
        """Try to grab a committed vertex.

        Returns:
            True if a vertex was grabbed and the press starts a drag
        """
        grabbed = self.modify.press(coordinate, tolerance)
        self._suppress_click = grabbed
        return grabbed

    def on_pointer_up(self) -> None:
        self.modify.release()

    def on_click(self, coordinate: Coordinate) -> None:
        """Add a vertex, unless the press was the end of a vertex drag."""
        if self._suppress_click:
            self._suppress_click = False
            return
        self.draw.click(coordinate)

    def on_double_click(self, coordinate: Coordinate) -> None:
        """Finish the sketch; the preceding click already added the vertex."""
        self.draw.finish()

    def on_finish(self) -> Feature | None:
        return self.draw.finish()

    def on_undo(self) -> None:
        """Remove the last sketch vertex; removing the only one cancels."""
        if not self.draw.drawing:
            return
        if not self.draw.undo():
            self._handle_draw_abort()

    def on_abort(self) -> None:
        """Cancel the sketch in progress without committing it."""
        if not self.draw.drawing:
            return
        self.draw.abort()
        self._handle_draw_abort()

    def on_clear(self) -> None:
        """Remove all committed measurements."""
        self.store.clear()
        self.modify.clear()

    # Draw interaction events

    def _handle_draw_start(self, feature: Feature) -> None:
        if self.session.clear_on_start:
            self.store.clear()
            self.modify.clear()
        self.modify.set_active(False)
        self._clear_hint_on_move = False
        self.session.tip = active_tip(self.session.kind)
        self.session.in_progress = feature
        self.mode = MeasureMode.DRAWING
        debug_log(f"Started {self.session.kind.value} sketch")

    def _handle_draw_end(self, feature: Feature) -> None:
        # The hint takes the place of the tip until the pointer moves
        self.modify.hint = self.draw.cursor
        self.modify.set_active(True)
        self._clear_hint_on_move = True
        self.session.tip = IDLE_TIP
        self.session.in_progress = None
        self.mode = MeasureMode.EDITING
        debug_log(f"Committed {feature.kind.value} with {len(feature.coordinates)} coordinates")

    def _handle_draw_abort(self) -> None:
        self.modify.set_active(True)
        self.session.tip = IDLE_TIP
        self.session.in_progress = None
        self.mode = MeasureMode.EDITING if len(self.store) else MeasureMode.IDLE

    # Labels

    def style_function(
        self,
        feature: Feature,
        segments_enabled: bool,
        draw_kind: DrawKind | None = None,
        tip: str | None = None,
    ) -> list[Label]:
        """
        Build the labels for one feature.

        Args:
            feature: Committed feature or part of the sketch
            segments_enabled: Whether to label each edge with its length
            draw_kind: Kind being drawn, None for committed features
            tip: Tip text to attach to the sketch point, if any

        Returns:
            Segment labels, then the total label, then the tip
        """
        labels = []
        kind = feature.kind
        anchor = text = line = None

        if draw_kind is None or draw_kind is kind or kind is DrawKind.POINT:
            if kind is DrawKind.POLYGON:
                ring = feature.coordinates
                anchor = interior_point(ring)
                text = format_area(polygon_area(ring))
                line = ring
            elif kind is DrawKind.LINE_STRING:
                anchor = feature.coordinates[-1]
                text = format_length(line_length(feature.coordinates))
                line = feature.coordinates

        if segments_enabled and line:
            for index, (a, b) in enumerate(segments(line)):
                segment_text = format_length(line_length([a, b]))
                labels.append(self.segment_pool.acquire(index, midpoint(a, b), segment_text))

        if text is not None:
            labels.append(Label(LabelKind.MEASURE, anchor, text))

        if tip and kind is DrawKind.POINT and not self.modify.has_overlay:
            labels.append(Label(LabelKind.TIP, feature.coordinates[0], tip))

        return labels

    def frame_labels(self) -> tuple[Label, ...]:
        """Build every label for the current frame."""
        labels = []
        for feature in self.store:
            labels.extend(self.style_function(feature, self.session.segments))
        for feature in self.draw.sketch_features():
            labels.extend(
                self.style_function(feature, self.session.segments, self.session.kind, self.session.tip)
            )
        if self.modify.hint is not None:
            labels.append(Label(LabelKind.HINT, self.modify.hint, MODIFY_HINT))
        return tuple(labels)

    def sketch_features(self) -> list[Feature]:
        return self.draw.sketch_features()
