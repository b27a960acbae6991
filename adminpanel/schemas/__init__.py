"""Pydantic schemas: API responses and remote payload validation."""
