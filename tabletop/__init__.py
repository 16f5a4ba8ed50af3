"""Hanabi game engine and an aiohttp server for hosting game rooms."""

__version__ = "0.1.0"

__all__ = ["__version__"]