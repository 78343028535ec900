"""FastAPI application for the flow library, simulation and AI collaborators."""

import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from procflow.config import FLOW_DB_PATH, configure_logging
from server.ai_routes import router as ai_router
from server.db import init_all
from server.flow_routes import router as flow_router
from server.simulation_routes import router as simulation_router

# CORS origins - configurable via environment variable
# Use comma-separated values for multiple origins, or "*" for all (development only)
CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*").split(",")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging and initialize storage on startup."""
    configure_logging()
    init_all()
    yield


app = FastAPI(
    title="procflow API",
    description="API server for process-flow documents, what-if simulation and AI analysis",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(flow_router, prefix="/api")
app.include_router(simulation_router, prefix="/api")
app.include_router(ai_router, prefix="/api")


@app.get("/")
def root():
    """Health check endpoint."""
    return {
        "status": "ok",
        "version": "0.1.0",
        "flow_db": str(FLOW_DB_PATH),
        "endpoints": {
            "flows": "/api/flows",
            "settings": "/api/settings",
            "simulate": "/api/simulate",
            "generate_flow": "/api/generate-flow",
            "analyze": "/api/analyze",
        },
    }


def main() -> None:
    import uvicorn

    uvicorn.run(app, host=os.getenv("HOST", "0.0.0.0"), port=int(os.getenv("PORT", "8000")))


if __name__ == "__main__":
    main()
