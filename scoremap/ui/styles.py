"""QSS stylesheet and heatmap colours for ScoreMap."""

from __future__ import annotations

from ..heatmap.buckets import OUT_OF_SCALE

# ── bucket colours (GitHub greens, 1000 = out-of-scale highlight) ─────────

BUCKET_COLORS: dict[int, str] = {
    0: "#EBEDF0",
    1: "#D6E685",
    2: "#B7DD8B",
    3: "#8CC665",
    4: "#5DAE4B",
    5: "#44A340",
    6: "#1E6823",
    OUT_OF_SCALE: "#F38BA8",
}

# ── default palette ───────────────────────────────────────────────────────

_DEFAULT_PALETTE: dict[str, str] = {
    "bg":           "#FFFFFF",
    "text":         "#24292F",
    "text_muted":   "#6E7781",
    "today":        "#FB8C00",   # outline of the real current day
    "active":       "#0969DA",   # outline of the open journal day
    "out_of_range": "#F6F8FA",
    "danger":       "#CF222E",
    "tag_bg":       "#EEF1F4",
}


def get_palette() -> dict[str, str]:
    return dict(_DEFAULT_PALETTE)


def color_for_bucket(bucket: int) -> str:
    return BUCKET_COLORS.get(bucket, BUCKET_COLORS[0])


def build_stylesheet(palette: dict[str, str]) -> str:
    """Application-wide QSS."""
    return f"""
    QWidget {{
        background-color: {palette['bg']};
        color: {palette['text']};
    }}
    QPushButton#dateRangeTag {{
        background-color: {palette['tag_bg']};
        border: none;
        border-radius: 4px;
        padding: 1px 6px;
        margin: 0 4px;
        font-size: 11px;
    }}
    QPushButton#dateRangeTag:hover {{
        color: {palette['active']};
    }}
    QLabel#averageLabel {{
        color: {palette['text_muted']};
        font-size: 11px;
    }}
    QLabel#fallbackLabel {{
        color: {palette['danger']};
        font-weight: 600;
    }}
    QLabel#pageTitle {{
        font-size: 18px;
        font-weight: 700;
    }}
    """
