"""Business logic services."""

from app.services.strain_service import StrainService

__all__ = [
    "StrainService",
]
