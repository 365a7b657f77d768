"""FastAPI main application."""

from typing import List

import structlog
from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware

from ..config.river_presets import get_preset, list_presets
from ..config.settings import settings
from ..utils.logging import configure_logging
from .models import GenerateRiversRequest, GenerateRiversResponse, build_network
from .visualizer import router as visualizer_router

configure_logging()

logger = structlog.get_logger()

app = FastAPI(
    title="River Network Generator API",
    description="Procedural river networks grown inside terrain contours",
    version="0.1.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(visualizer_router)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "River Network Generator API",
        "version": "0.1.0",
        "docs": "/docs"
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "presets": len(list_presets())}


@app.get("/presets")
async def get_presets():
    """List available contour presets."""
    return [
        {"name": name, "description": get_preset(name).description}
        for name in list_presets()
    ]


@app.get("/contour", response_model=List[float])
async def get_contour(preset: str = Query(default=settings.default_preset)):
    """Contour of a preset as a flat [x0, y0, x1, y1, ...] list."""
    try:
        return get_preset(preset).flat_contour()
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))


@app.post("/rivers/generate", response_model=GenerateRiversResponse)
async def generate_rivers(request: GenerateRiversRequest):
    """Grow a river network and return its edges."""
    try:
        graph, _ = build_network(request)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return GenerateRiversResponse(
        seed=request.seed or settings.default_seed,
        preset=request.preset,
        node_count=len(graph),
        edge_count=graph.edge_count,
        edges=graph.flatten_edges(),
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.api_host, port=settings.api_port)
