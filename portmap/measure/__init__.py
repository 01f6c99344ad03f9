"""Measurement tool for drawing lines and polygons with live labels."""

from portmap.measure.controller import DrawMeasureController
from portmap.measure.format import format_area, format_length

__all__ = ["DrawMeasureController", "format_area", "format_length"]
