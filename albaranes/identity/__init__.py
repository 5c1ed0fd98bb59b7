"""Identidad: passwords, tokens y dependencias de autenticación."""
