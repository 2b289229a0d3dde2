"""UI package."""

from .calendar_heatmap import CalendarHeatmap
from .heatmap_view import HeatmapView

__all__ = ["CalendarHeatmap", "HeatmapView"]
