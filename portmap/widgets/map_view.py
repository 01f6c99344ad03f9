"""Map widget showing routes, the animated marker and measurements."""

import time
from itertools import pairwise

from rich.console import RenderableType
from rich.text import Text
from textual import events
from textual.widget import Widget

from portmap.measure.controller import DrawMeasureController
from portmap.measure.features import Feature
from portmap.measure.labels import LabelKind
from portmap.routes.curve import Coordinate
from portmap.routes.route import RouteSet
from portmap.routes.route_loader import PortLink
from portmap.simulation.animator import RouteAnimator
from portmap.state.state import DrawKind
from portmap.widgets.viewport import ZOOM_STEP, Viewport

# Vertex pick distance, in cell widths
PICK_TOLERANCE_CELLS = 1.5


def now_ms() -> float:
    """Get a monotonic frame timestamp in milliseconds."""
    return time.monotonic() * 1000


def _clip_line(x0: float, y0: float, x1: float, y1: float, width: int, height: int):
    """Clip a segment to the canvas (Liang-Barsky).

    Returns:
        Clipped (x0, y0, x1, y1) or None if the segment is outside
    """
    dx, dy = x1 - x0, y1 - y0
    t0, t1 = 0.0, 1.0
    for p, q in ((-dx, x0), (dx, width - x0), (-dy, y0), (dy, height - y0)):
        if p == 0:
            if q < 0:
                return None
            continue
        r = q / p
        if p < 0:
            t0 = max(t0, r)
        else:
            t1 = min(t1, r)
        if t0 > t1:
            return None
    return (x0 + t0 * dx, y0 + t0 * dy, x0 + t1 * dx, y0 + t1 * dy)


class MapCanvas:
    """Character grid with one style per cell."""

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self.chars = [[" "] * width for _ in range(height)]
        self.styles = [[""] * width for _ in range(height)]

    def put(self, col: int, row: int, char: str, style: str) -> None:
        if 0 <= col < self.width and 0 <= row < self.height:
            self.chars[row][col] = char
            self.styles[row][col] = style

    def line(self, start: tuple[float, float], end: tuple[float, float], char: str, style: str) -> None:
        clipped = _clip_line(start[0], start[1], end[0], end[1], self.width, self.height)
        if clipped is None:
            return

        x0, y0, x1, y1 = clipped
        steps = int(max(abs(x1 - x0), abs(y1 - y0))) + 1
        for i in range(steps + 1):
            t = i / steps
            self.put(int(x0 + t * (x1 - x0)), int(y0 + t * (y1 - y0)), char, style)

    def text(self, col: int, row: int, text: str, style: str) -> None:
        for i, char in enumerate(text):
            self.put(col + i, row, char, style)

    def to_text(self) -> Text:
        """Render the grid, merging runs of equal style."""
        result = Text()
        for row in range(self.height):
            run, run_style = "", None
            for char, style in zip(self.chars[row], self.styles[row]):
                if style != run_style and run:
                    result.append(run, style=run_style or None)
                    run = ""
                run_style = style
                run += char
            if run:
                result.append(run, style=run_style or None)
            if row < self.height - 1:
                result.append("\n")
        return result


class MapView(Widget, can_focus=True):
    """Widget that renders the map plane and forwards pointer input."""

    FRAME_INTERVAL = 1 / 30

    ROUTE_DOT = "·"
    PORT = "●"
    STATION = "▼"
    MARKER = "●"
    LINE = "•"
    VERTEX = "○"
    HOVERED_VERTEX = "◉"
    SKETCH_POINT = "+"

    def __init__(
        self,
        routes: RouteSet,
        links: list[PortLink],
        animator: RouteAnimator,
        controller: DrawMeasureController,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.routes = routes
        self.links = links
        self.animator = animator
        self.controller = controller
        self.viewport = Viewport()
        self._fitted = False

    def on_mount(self) -> None:
        """Handle mount - start the frame timer."""
        self.animator.on_frame = self._marker_moved
        self.set_interval(self.FRAME_INTERVAL, self.advance_frame)

    def advance_frame(self) -> None:
        """Render tick: advance the marker while the animation runs."""
        self.animator.tick(now_ms())

    def _marker_moved(self, coordinate: Coordinate) -> None:
        self.refresh()

    def on_resize(self, event: events.Resize) -> None:
        if not self._fitted:
            self.fit_view()

    # View control

    def fit_view(self) -> None:
        """Zoom to show every port, station and route."""
        width, height = self.size.width, self.size.height
        if width == 0 or height == 0:
            return

        coordinates = [c for route in self.routes for c in route.coordinates]
        for link in self.links:
            coordinates.extend((link.port.coordinate, link.station_a.coordinate, link.station_b.coordinate))
        if not coordinates:
            return

        xs = [x for x, _ in coordinates]
        ys = [y for _, y in coordinates]
        self.viewport.fit((min(xs), min(ys), max(xs), max(ys)), width, height)
        self._fitted = True
        self.refresh()

    def focus_current_route(self) -> None:
        """Zoom to the route the marker is on."""
        if len(self.routes) == 0:
            return

        route = self.routes[self.animator.state.route_index]
        xs = [x for x, _ in route.coordinates]
        ys = [y for _, y in route.coordinates]
        self.viewport.fit((min(xs), min(ys), max(xs), max(ys)), self.size.width, self.size.height, margin=4)
        self.refresh()

    def zoom(self, zoom_in: bool) -> None:
        self.viewport.zoom(ZOOM_STEP if zoom_in else 1 / ZOOM_STEP)
        self.refresh()

    def pan(self, cols: float, rows: float) -> None:
        self.viewport.pan(cols, rows)
        self.refresh()

    # Pointer input

    def _map_coordinate(self, event: events.MouseEvent) -> Coordinate | None:
        offset = event.get_content_offset(self)
        if offset is None:
            return None
        return self.viewport.to_map(offset.x, offset.y, self.size.width, self.size.height)

    @property
    def pick_tolerance(self) -> float:
        return self.viewport.resolution * PICK_TOLERANCE_CELLS

    def on_mouse_move(self, event: events.MouseMove) -> None:
        coordinate = self._map_coordinate(event)
        if coordinate is None:
            return
        self.controller.on_pointer_move(coordinate, self.pick_tolerance)
        self.refresh()

    def on_mouse_down(self, event: events.MouseDown) -> None:
        coordinate = self._map_coordinate(event)
        if coordinate is None or event.button != 1:
            return
        if self.controller.on_pointer_down(coordinate, self.pick_tolerance):
            self.capture_mouse()

    def on_mouse_up(self, event: events.MouseUp) -> None:
        self.controller.on_pointer_up()
        self.release_mouse()
        self.refresh()

    def on_click(self, event: events.Click) -> None:
        coordinate = self._map_coordinate(event)
        if coordinate is None or event.button != 1:
            return

        if event.chain >= 2:
            self.controller.on_double_click(coordinate)
        else:
            self.controller.on_click(coordinate)
        self.refresh()

    # Rendering

    def render(self) -> RenderableType:
        """Render the map."""
        width = self.size.width
        height = self.size.height

        if width == 0 or height == 0:
            return Text("")

        if len(self.routes) == 0 and not self.links:
            return Text("No routes loaded", style="dim")

        canvas = MapCanvas(width, height)

        def screen(coordinate: Coordinate) -> tuple[float, float]:
            return self.viewport.to_screen(coordinate, width, height)

        def cell(coordinate: Coordinate) -> tuple[int, int]:
            return self.viewport.to_cell(coordinate, width, height)

        for route in self.routes:
            for a, b in pairwise(route.coordinates):
                canvas.line(screen(a), screen(b), self.ROUTE_DOT, "rgb(0,127,255)")

        for link in self.links:
            canvas.put(*cell(link.station_a.coordinate), self.STATION, "white")
            canvas.put(*cell(link.station_b.coordinate), self.STATION, "white")
            canvas.put(*cell(link.port.coordinate), self.PORT, "bold blue")

        for feature in self.controller.store:
            self._draw_feature(canvas, feature, "white", screen, cell)

        for feature in self.controller.sketch_features():
            if feature.kind is DrawKind.POINT and feature is not self.controller.session.in_progress:
                canvas.put(*cell(feature.coordinates[0]), self.SKETCH_POINT, "bold white")
            else:
                self._draw_feature(canvas, feature, "grey62", screen, cell)

        hovered = self.controller.modify.grabbed or self.controller.modify.hovered
        if hovered is not None:
            feature, index = hovered
            canvas.put(*cell(feature.coordinates[index]), self.HOVERED_VERTEX, "bold yellow")

        if self.animator.position is not None:
            canvas.put(*cell(self.animator.position), self.MARKER, "bold red")

        for label in self.controller.frame_labels():
            col, row = cell(label.anchor)
            if label.kind in (LabelKind.MEASURE, LabelKind.SEGMENT):
                style = "bold white on grey19" if label.kind is LabelKind.MEASURE else "white on grey30"
                canvas.text(col - len(label.text) // 2, row - 1, label.text, style)
            else:
                canvas.text(col + 2, row, label.text, "white on grey23")

        return canvas.to_text()

    def _draw_feature(self, canvas: MapCanvas, feature: Feature, style: str, screen, cell) -> None:
        for a, b in pairwise(feature.coordinates):
            canvas.line(screen(a), screen(b), self.LINE, style)
        for coordinate in feature.coordinates:
            canvas.put(*cell(coordinate), self.VERTEX, style)
