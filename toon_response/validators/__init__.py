"""Structural validators for decoded responses."""

from toon_response.validators.envelope_validator import validate

__all__ = ["validate"]
