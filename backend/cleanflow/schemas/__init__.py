"""Schemas Layer — pydantic-backed view model bases."""
