"""
API routes: thin adapters that delegate to :class:`ParticleService`.
"""
from __future__ import annotations

from fastapi import APIRouter, HTTPException

from pyparticle.api.models import (
    BondRequest,
    BondResponse,
    BuildRequest,
    BuildResponse,
    ClearResponse,
    DampingRequest,
    DampingResponse,
    ParticleRequest,
    ParticleResponse,
    SnapshotResponse,
    StepRequest,
    StepResponse,
)
from pyparticle.core.errors import ParticleNotFoundError, ParticleSimError
from pyparticle.core.schemas import BuildConfig, ParticleSpec, StepParams
from pyparticle.core.service import ParticleService

router = APIRouter()

# One service instance per process (single renderer session).
_service = ParticleService()


def get_service() -> ParticleService:
    return _service


def reset_service() -> ParticleService:
    """Replace the process-wide session with a fresh one."""
    global _service
    _service = ParticleService()
    return _service


# ------------------------------------------------------------------ #
#  Endpoints
# ------------------------------------------------------------------ #


@router.post("/build", response_model=BuildResponse)
def build_simulation(req: BuildRequest):
    try:
        cfg = BuildConfig(simulation=req.simulation, particles=req.particles, bonds=req.bonds)
        summary = get_service().build(cfg)
        return {"ok": True, "summary": summary.to_dict()}
    except (ParticleSimError, ValueError) as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/particles", response_model=ParticleResponse)
def create_particle(req: ParticleRequest):
    try:
        spec = ParticleSpec(
            kind=req.kind,
            position=req.position,
            velocity=req.velocity,
            mass=req.mass,
            charge=req.charge,
            radius=req.radius,
        )
        particle_id = get_service().create_particle(spec)
        return {"ok": True, "id": particle_id}
    except (ParticleSimError, ValueError) as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/bonds", response_model=BondResponse)
def create_bond(req: BondRequest):
    try:
        created = get_service().create_bond(req.a, req.b)
        return {"ok": True, "created": created}
    except ParticleNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/step", response_model=StepResponse)
def step_simulation(req: StepRequest):
    try:
        params = StepParams(frames=req.frames, frame_dt=req.frame_dt, sub_steps=req.sub_steps)
        result = get_service().advance(params)
        return {"ok": True, **result.to_dict()}
    except (ParticleSimError, ValueError) as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.put("/damping", response_model=DampingResponse)
def set_damping(req: DampingRequest):
    try:
        damping = get_service().set_damping(req.damping)
        return {"ok": True, "damping": damping}
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/clear", response_model=ClearResponse)
def clear_simulation():
    get_service().clear()
    return {"ok": True}


@router.get("/snapshot", response_model=SnapshotResponse)
def get_snapshot():
    return get_service().snapshot_dict()
