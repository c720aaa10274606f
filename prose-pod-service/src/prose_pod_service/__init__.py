"""Prose Pod Service - Domain models and network diagnostics for the Prose Pod API."""

__version__ = "0.1.0"
