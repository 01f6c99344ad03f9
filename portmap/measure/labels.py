"""Text labels placed on the map each frame."""

from dataclasses import dataclass
from enum import Enum

from portmap.routes.curve import Coordinate


class LabelKind(Enum):
    MEASURE = "measure"  # Total length or area
    SEGMENT = "segment"  # Length of one edge
    TIP = "tip"  # Drawing instructions next to the cursor
    HINT = "hint"  # "Drag to modify" after a draw completes


@dataclass(frozen=True)
class Label:
    kind: LabelKind
    anchor: Coordinate
    text: str


class SegmentLabelPool:
    """Segment labels indexed by segment order.

    The pool grows to the largest segment count seen and never shrinks.
    A slot is only replaced when its anchor or text changes.
    """

    def __init__(self):
        self._slots: list[Label] = []

    def __len__(self) -> int:
        return len(self._slots)

    def acquire(self, index: int, anchor: Coordinate, text: str) -> Label:
        """Get the label for segment `index`, growing the pool if needed."""
        if index < len(self._slots):
            slot = self._slots[index]
            if slot.anchor != anchor or slot.text != text:
                slot = Label(LabelKind.SEGMENT, anchor, text)
                self._slots[index] = slot
            return slot

        while len(self._slots) <= index:
            self._slots.append(Label(LabelKind.SEGMENT, anchor, text))
        return self._slots[index]
