"""Infraestructura: DB, repositorios, storage, PDF, notificaciones y retry."""
