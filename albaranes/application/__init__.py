"""Capa de aplicación: casos de uso."""
