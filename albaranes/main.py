"""
Name: Backend ASGI Entrypoint (albaranes.main)

Responsibilities:
  - Re-export the FastAPI app for ASGI servers and tooling
  - Keep this module side-effect free beyond importing albaranes.api.main

Notes/Constraints:
  - uvicorn albaranes.main:app
"""

from albaranes.api.main import app

__all__ = ["app"]
