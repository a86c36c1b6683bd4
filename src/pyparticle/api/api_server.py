"""
Launch the pyparticle REST API, optionally preloading a YAML scenario.

Usage::

    python -m pyparticle.api
    python -m pyparticle.api --scenario examples/water.yaml --port 9000
    python -m pyparticle.api --origin http://localhost:5173
"""
from __future__ import annotations

import argparse
import importlib.util
import logging
import sys
from typing import Optional, Sequence

from pyparticle.core.errors import ParticleSimError

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m pyparticle.api",
        description="Serve a pyparticle session to external renderers over HTTP.",
    )
    parser.add_argument("--host", default="127.0.0.1", help="Bind host (default: 127.0.0.1)")
    parser.add_argument("--port", type=int, default=8000, help="Bind port (default: 8000)")
    parser.add_argument(
        "--scenario",
        metavar="YAML",
        help="Scenario file loaded into the session before serving",
    )
    parser.add_argument(
        "--origin",
        action="append",
        dest="origins",
        metavar="URL",
        help="Allowed browser origin; repeat for several (default: any)",
    )
    parser.add_argument(
        "--log-level",
        default="info",
        choices=["debug", "info", "warning", "error"],
        help="Log level (default: info)",
    )
    return parser


def preload_scenario(path: str) -> None:
    """Build the process-wide session from a YAML scenario file."""
    from pyparticle.api.routes import get_service
    from pyparticle.builder import load_yaml
    from pyparticle.core.schemas import BuildConfig

    summary = get_service().build(BuildConfig.from_dict(load_yaml(path)))
    logger.info(
        "Preloaded %s: %d particle(s), %d bond(s)",
        path,
        summary.n_particles,
        summary.n_bonds,
    )


def run_server(
    host: str,
    port: int,
    log_level: str = "info",
    scenario: Optional[str] = None,
    origins: Optional[Sequence[str]] = None,
) -> None:
    """Check the API extra is installed, prepare the session and serve it."""
    missing = [m for m in ("fastapi", "uvicorn") if importlib.util.find_spec(m) is None]
    if missing:
        raise RuntimeError(
            f"Missing API dependencies: {', '.join(missing)}. "
            "Install with: pip install -e '.[api]'"
        )
    import uvicorn

    from pyparticle.api.app import create_app

    if scenario is not None:
        preload_scenario(scenario)
    application = create_app(origins or ("*",))
    uvicorn.run(application, host=host, port=port, log_level=log_level)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper()))
    try:
        run_server(
            host=args.host,
            port=args.port,
            log_level=args.log_level,
            scenario=args.scenario,
            origins=args.origins,
        )
    except (RuntimeError, OSError, ParticleSimError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
