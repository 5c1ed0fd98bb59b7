"""DTOs Pydantic de la API HTTP."""
