"""Configuration module."""

from toon_response.config.settings import HandlerSettings

__all__ = ["HandlerSettings"]
