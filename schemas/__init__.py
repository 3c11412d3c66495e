"""Pydantic models for decoded navigation updates."""
