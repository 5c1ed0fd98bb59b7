"""Capa API: app FastAPI, lifespan y exception handlers."""
