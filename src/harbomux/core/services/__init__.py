"""Service layer for harbomux commands."""

from harbomux.core.services.harbour import HarbourOutcome, HarbourResult, HarbourService

__all__ = ["HarbourOutcome", "HarbourResult", "HarbourService"]
