"""
Shared error handling for the Pokedex translation service.
"""

from typing import Dict, Any, Optional
from pydantic import BaseModel

from shared.logging import request_id_var


class ErrorResponse(BaseModel):
    """Standard error response format."""

    trace_id: Optional[str] = None
    code: str
    message: str
    details: Dict[str, Any] = {}


class PokedexException(Exception):
    """Base exception for Pokedex services."""

    status_code: int = 500

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        """Convert to error response."""
        return ErrorResponse(
            trace_id=request_id_var.get(),
            code=self.code,
            message=self.message,
            details=self.details
        )


class InvalidInputError(PokedexException, LookupError):
    """Malformed lookup key; never reaches an upstream provider."""

    status_code = 400

    def __init__(self, message: str = "Invalid input", details: Optional[Dict[str, Any]] = None):
        super().__init__("INVALID_INPUT", message, details)


class SpeciesNotFoundError(PokedexException, LookupError):
    """The entity provider has no record for the requested species."""

    status_code = 404

    def __init__(self, name: str, details: Optional[Dict[str, Any]] = None):
        self.name = name
        super().__init__("SPECIES_NOT_FOUND", f"Species '{name}' not found", details)


class UpstreamUnavailableError(PokedexException, LookupError):
    """An upstream stage failed in a way that is fatal to the request."""

    status_code = 503

    def __init__(self, stage: str, message: str = "Upstream service unavailable",
                 details: Optional[Dict[str, Any]] = None):
        self.stage = stage
        merged = {"stage": stage}
        merged.update(details or {})
        super().__init__("UPSTREAM_UNAVAILABLE", f"{stage}: {message}", merged)
