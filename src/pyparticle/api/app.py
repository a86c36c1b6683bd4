"""
FastAPI application exposing a single pyparticle session.

Renderers poll ``GET /api/snapshot`` once per frame and drive the engine
with ``POST /api/step``; ``GET /health`` reports the session size so a
renderer can tell whether a scenario is loaded.

Usage::

    python -m pyparticle.api --scenario examples/water.yaml
    uvicorn pyparticle.api.app:app
"""
import logging
from typing import Sequence

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import pyparticle
from pyparticle.api.models import HealthResponse
from pyparticle.api.routes import get_service, router

logger = logging.getLogger(__name__)


def create_app(allowed_origins: Sequence[str] = ("*",)) -> FastAPI:
    """
    Build the application around the process-wide ParticleService.

    Args:
        allowed_origins: Origins a browser renderer may call from.
    """
    application = FastAPI(
        title="pyparticle engine",
        version=pyparticle.__version__,
        description=(
            "Step a particle-interaction simulation (Coulomb, Lennard-Jones, "
            "bond springs, gravity) and read per-frame snapshots."
        ),
    )
    application.add_middleware(
        CORSMiddleware,
        allow_origins=list(allowed_origins),
        allow_methods=["GET", "POST", "PUT"],
        allow_headers=["*"],
    )

    @application.get("/health", response_model=HealthResponse)
    def health():
        summary = get_service().summary()
        return HealthResponse(
            version=pyparticle.__version__,
            n_particles=summary.n_particles,
            n_bonds=summary.n_bonds,
            step=summary.step,
            forces=summary.forces,
        )

    application.include_router(router, prefix="/api")
    logger.debug("Created API app (origins=%s)", ", ".join(allowed_origins))
    return application


app = create_app()
