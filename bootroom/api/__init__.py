"""Bootroom API package - FastAPI backend for the lineup editor."""

from bootroom.api.main import app, create_app

__all__ = ["app", "create_app"]
