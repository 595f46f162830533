"""PNG scatter plot of catch clusters."""

from __future__ import annotations

import io
from collections.abc import Sequence

from matplotlib.figure import Figure

from .groups import PointGroup

NOISE_COLOR = "black"


def render_png(
    groups: Sequence[PointGroup],
    title: str = "Catches",
    xlabel: str = "Lat",
    ylabel: str = "Long",
    fig_size: tuple[float, float] = (8, 6),
    dpi: int = 100,
) -> bytes:
    """Draw *groups* as a scatter plot and return the PNG bytes.

    Each cluster gets its own colour from the default cycle; noise is
    drawn in black.  The standalone ``Figure`` is never registered
    with ``pyplot``.

    Args:
        groups: Output of :func:`point_groups`.
        title: Plot title.
        xlabel: X axis label (latitude).
        ylabel: Y axis label (longitude).
        fig_size: Figure size (width, height) in inches.
        dpi: Output resolution.

    Returns:
        bytes: The encoded PNG image.
    """
    fig = Figure(figsize=fig_size)
    ax = fig.add_subplot()

    for group in groups:
        if not group.xs:
            continue
        if group.is_noise:
            ax.scatter(group.xs, group.ys, s=12, c=NOISE_COLOR, marker="x", label=group.label)
        else:
            ax.scatter(group.xs, group.ys, s=20, label=group.label)

    ax.set_title(title)
    ax.set_xlabel(xlabel)
    ax.set_ylabel(ylabel)
    if ax.collections:
        ax.legend(loc="best", fontsize="small")

    buffer = io.BytesIO()
    fig.savefig(buffer, format="png", dpi=dpi)
    return buffer.getvalue()
