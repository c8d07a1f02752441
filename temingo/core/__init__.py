"""Shared models, settings and errors."""
