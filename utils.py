# utils.py

from typing import Dict, List, Optional, Sequence, Tuple

import plotly.graph_objects as go


def get_color(occupied: bool, page_no: Optional[int] = None) -> str:
    """Return a color for an occupied/free frame."""
    if not occupied:
        return "lightgray"
    # stable pastel color per page so a page keeps its color across frames
    return f"hsl({(page_no or 0) * 47 % 360}, 70%, 75%)"


def parse_segment_names(text: str) -> List[str]:
    """
    Split a comma separated list of segment names.

    Blank names become Segment<i>; an entirely empty input yields no names.
    """
    if not text.strip():
        return []
    names = [part.strip() for part in text.split(",")]
    return [name if name else f"Segment{i}" for i, name in enumerate(names)]


def parse_access_sequence(text: str) -> List[Tuple[int, int]]:
    """
    Parse an access sequence like "0:0, 1:10, 2:5" into (segment, offset) pairs.

    Raises:
        ValueError: If an item is not of the form <int>:<int>
    """
    pairs = []
    for item in text.split(","):
        item = item.strip()
        if not item:
            continue
        seg, sep, off = item.partition(":")
        if not sep:
            raise ValueError(f"Expected segment:offset, got {item!r}")
        try:
            pairs.append((int(seg), int(off)))
        except ValueError:
            raise ValueError(f"Segment and offset must be integers: {item!r}") from None
    return pairs


def format_fault_rate(fault_rate: Optional[float]) -> str:
    if fault_rate is None:
        return "n/a"
    return f"{fault_rate:.2f}%"


# -----------------------------
# Plotly figures
# -----------------------------

def frame_figure(frames: Sequence[Dict[str, Optional[int]]]) -> go.Figure:
    """Bar chart with one uniform bar per frame, labelled with its page."""
    x, y, text, colors = [], [], [], []
    for f in frames:
        page = f["page"]
        label = f"F{f['frame']}: " + (f"P{page}" if page is not None else "Free")
        x.append(f["frame"])
        y.append(1)
        text.append(label)
        colors.append(get_color(page is not None, page))

    fig = go.Figure()
    fig.add_trace(go.Bar(
        x=x,
        y=y,
        text=text,
        marker_color=colors,
        hovertext=text,
        hoverinfo="text",
    ))
    fig.update_layout(
        height=150,
        showlegend=False,
        yaxis=dict(showticklabels=False),
    )
    return fig


def stats_figure(stats: Dict[str, Optional[float]]) -> go.Figure:
    fig = go.Figure()
    fig.add_trace(go.Bar(
        x=["Hits", "Faults"],
        y=[stats["hits"], stats["page_faults"]],
    ))
    fig.update_layout(height=300, title="Hits vs Faults")
    return fig
