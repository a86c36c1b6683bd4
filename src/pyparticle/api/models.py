"""
Pydantic request / response models for the pyparticle REST API.

All validation, field constraints, and serialisation logic lives here.
Routes import these models and never define their own.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator


# ------------------------------------------------------------------ #
#  Request models
# ------------------------------------------------------------------ #


class BuildRequest(BaseModel):
    """Payload for ``POST /build``."""

    simulation: Dict[str, Any] = Field(
        default_factory=dict,
        description="Engine parameters, optionally with a 'preset' (molecular, gravity)",
    )
    particles: List[Dict[str, Any]] = Field(
        default_factory=list,
        description="Initial particles (kind, position, velocity, mass, charge, radius)",
    )
    bonds: List[List[int]] = Field(
        default_factory=list,
        description="Bonds as pairs of indices into 'particles'",
    )


class ParticleRequest(BaseModel):
    """Payload for ``POST /particles``."""

    kind: str = Field(..., description="Kind symbol or name (H, C, N, O, Na, Cl, body)")
    position: List[float] = Field(..., min_length=2, max_length=3)
    velocity: Optional[List[float]] = Field(None, min_length=2, max_length=3)
    mass: Optional[float] = Field(None, gt=0)
    charge: Optional[float] = None
    radius: Optional[float] = Field(None, gt=0)


class BondRequest(BaseModel):
    """Payload for ``POST /bonds``."""

    a: int = Field(..., ge=0)
    b: int = Field(..., ge=0)


class StepRequest(BaseModel):
    """Payload for ``POST /step``."""

    frames: int = Field(1, gt=0, le=10000, description="Frames to advance")
    frame_dt: float = Field(1.0 / 60.0, gt=0, description="Duration of one frame")
    sub_steps: Optional[int] = Field(None, gt=0, description="Integration steps per frame")


class DampingRequest(BaseModel):
    """Payload for ``PUT /damping``."""

    damping: float = Field(..., description="Velocity damping factor in (0, 1]")

    @field_validator("damping")
    @classmethod
    def damping_in_range(cls, v: float) -> float:
        if not (0.0 < v <= 1.0):
            raise ValueError("damping must be in (0, 1]")
        return v


# ------------------------------------------------------------------ #
#  Response models
# ------------------------------------------------------------------ #


class SummaryPayload(BaseModel):
    """Aggregate simulation state."""

    n_particles: int
    n_bonds: int
    step: int
    time: float
    damping: float
    kinetic_energy: float
    potential_energy: float
    temperature: float
    forces: List[str]
    boundary: str


class BuildResponse(BaseModel):
    """Response for ``POST /build``."""

    ok: bool = True
    summary: SummaryPayload


class ParticleResponse(BaseModel):
    """Response for ``POST /particles``."""

    ok: bool = True
    id: int


class BondResponse(BaseModel):
    """Response for ``POST /bonds``."""

    ok: bool = True
    created: bool


class StepResponse(BaseModel):
    """Response for ``POST /step``."""

    ok: bool = True
    frames: int
    new_bonds: List[List[int]]
    summary: SummaryPayload


class DampingResponse(BaseModel):
    """Response for ``PUT /damping``."""

    ok: bool = True
    damping: float


class ClearResponse(BaseModel):
    """Response for ``POST /clear``."""

    ok: bool = True


class ParticlePayload(BaseModel):
    """One particle in a snapshot."""

    id: int
    kind: str
    symbol: str
    position: List[float]
    velocity: List[float]
    mass: float
    charge: float
    radius: float
    color: List[float]
    bonds: List[int]


class BondPayload(BaseModel):
    """One bond in a snapshot."""

    a: int
    b: int
    order: int


class SnapshotResponse(BaseModel):
    """Response for ``GET /snapshot``."""

    step: int
    time: float
    particles: List[ParticlePayload]
    bonds: List[BondPayload]


class HealthResponse(BaseModel):
    """Response for ``GET /health``."""

    status: str = "ok"
    version: str
    n_particles: int
    n_bonds: int
    step: int
    forces: List[str]
