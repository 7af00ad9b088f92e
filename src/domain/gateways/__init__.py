"""
Gateways Package - Domain Layer

This package contains interfaces defining gateway contracts
for external service communications. Specific implementations
are provided by the infrastructure layer.
"""

from .timeseries_gateway import ITimeseriesGateway

__all__ = ["ITimeseriesGateway"]
