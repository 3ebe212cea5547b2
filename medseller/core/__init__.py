"""Core models and utilities for the MedSeller assistant.

This package contains the shared building blocks:
- models: the Product contract
- fallbacks: static degradation texts
- logging: structured logging configuration
"""

from medseller.core.fallbacks import FallbackType, get_fallback_text
from medseller.core.models import TEXT_FIELDS, Product

__all__ = [
    "FallbackType",
    "Product",
    "TEXT_FIELDS",
    "get_fallback_text",
]
