"""
Application Layer Package

This package contains the application-specific use cases. It
orchestrates fetching dense series through the gateways and hands them
to the domain services for decoding, aggregation and layout.
"""

# Re-export submodules
from src.application import dtos, models, use_cases

__all__ = ["dtos", "use_cases", "models"]
