"""
River network rendering.

Draws a grown network over its contour with matplotlib and exposes the
rendering as an API endpoint returning SVG.
"""

import io
from pathlib import Path
from typing import Optional, Sequence, Union

import numpy as np
import structlog
from fastapi import APIRouter, HTTPException
from fastapi.responses import Response
from matplotlib.collections import LineCollection
from matplotlib.figure import Figure
from matplotlib.patches import Polygon

from ..core.river_graph import RiverGraph
from .models import GenerateRiversRequest, build_network

logger = structlog.get_logger()

router = APIRouter(prefix="/rivers", tags=["Rendering"])

CONTOUR_FILL = "#fcfcf0"
CONTOUR_STROKE = "#6c6c4f"
RIVER_STROKE = "#0a9fff"


def render_network(
    graph: RiverGraph,
    contour: Sequence[Sequence[float]],
    path: Optional[Union[str, Path]] = None,
    figsize=(10, 8),
) -> Figure:
    """
    Render a river network.

    Edge width grows with the priority of the child node, so long main
    branches read thicker than short tributaries.

    Args:
        graph: Grown river network
        contour: Closed (x, y) boundary drawn underneath
        path: Output file, the format follows its extension
        figsize: Figure size in inches

    Returns:
        The matplotlib figure
    """
    fig = Figure(figsize=figsize)
    ax = fig.add_subplot(111)

    verts = np.asarray(contour, dtype=np.float64)
    ax.add_patch(Polygon(verts, closed=True, facecolor=CONTOUR_FILL, edgecolor=CONTOUR_STROKE, linewidth=1.5))

    segments = list(graph.edge_segments())
    if segments:
        max_priority = max(node.priority for node in graph.nodes) or 1
        widths = [
            0.4 + 2.6 * graph[child].priority / max_priority
            for _, child in graph.edges
        ]
        ax.add_collection(LineCollection(segments, colors=RIVER_STROKE, linewidths=widths, capstyle="round"))

    roots = graph.roots()
    if roots:
        mouths = np.array([graph[i].position[:2] for i in roots])
        ax.scatter(mouths[:, 0], mouths[:, 1], s=12, color=CONTOUR_STROKE, zorder=3)

    ax.set_xlim(verts[:, 0].min(), verts[:, 0].max())
    ax.set_ylim(verts[:, 1].max(), verts[:, 1].min())  # y grows downwards like the source outlines
    ax.set_aspect("equal")
    ax.axis("off")

    if path is not None:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(path, bbox_inches="tight")
        logger.info("River network rendered", path=str(path), edges=graph.edge_count)

    return fig


def render_svg(graph: RiverGraph, contour: Sequence[Sequence[float]]) -> str:
    """Render a network to an SVG document string."""
    fig = render_network(graph, contour)
    buffer = io.StringIO()
    fig.savefig(buffer, format="svg", bbox_inches="tight")
    return buffer.getvalue()


@router.post("/render", response_class=Response)
async def render_rivers(request: GenerateRiversRequest):
    """Generate a network and return it drawn as SVG."""
    try:
        graph, contour = build_network(request)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return Response(content=render_svg(graph, contour), media_type="image/svg+xml")
