"""FastAPI transport layer for pyparticle.

Models, service adapters, and routes; no engine logic.

The ``create_app()`` factory is lazily imported so that
``import pyparticle.api`` never forces a FastAPI dependency.
"""


def create_app():
    """Deferred import of the FastAPI application factory."""
    from pyparticle.api.app import create_app as _create_app

    return _create_app()
