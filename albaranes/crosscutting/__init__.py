"""Crosscutting: config, logging, errores y middleware."""
