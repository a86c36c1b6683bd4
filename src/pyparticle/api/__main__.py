"""Allow running with: python -m pyparticle.api"""
from pyparticle.api.api_server import main

raise SystemExit(main())
