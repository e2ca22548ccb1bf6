"""
Domain layer for the Pokemon Service.

Value types for lookups and upstream outcomes, plus the orchestrator that
composes the cache and the upstream clients into a single resolution.
"""

from .models import Description, LookupKey, Provenance
from .orchestrator import LookupOrchestrator

__all__ = [
    "Description",
    "LookupKey",
    "LookupOrchestrator",
    "Provenance",
]
