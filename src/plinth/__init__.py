"""Typed async client for the Responses API."""

__version__ = "0.1.0"
