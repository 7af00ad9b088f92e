"""
Domain Layer Package

This package contains the dense time-series rules of the application:
entities, the decoder, the aggregator and the chart layout. It has no
dependencies on external frameworks or infrastructure concerns.
"""

# Re-export submodules
from src.domain import entities, gateways, ports, services

__all__ = ["entities", "gateways", "services", "ports"]
