"""Routers, schemas y helpers HTTP."""
