"""
Services Package - Infrastructure Layer

Concrete implementations of domain ports backed by external systems.
"""

from .health_check_service import HealthCheckService

__all__ = ["HealthCheckService"]
