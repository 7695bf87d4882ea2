"""
Business logic services for the registry.
Services handle core operations separate from API endpoints.
"""

from app.services.registry_service import RegistryMetrics, RegistryService

__all__ = [
    "RegistryMetrics",
    "RegistryService",
]
