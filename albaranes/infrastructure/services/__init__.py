"""Servicios de infraestructura (resiliencia)."""
