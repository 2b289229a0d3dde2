"""ScoreMap — a calendar heatmap of daily journal scores."""

__version__ = "0.1.0"
