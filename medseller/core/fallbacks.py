"""
Fallbacks - graceful degradation responses.
============================================
Static texts returned when the assistant cannot produce an answer.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any


logger = logging.getLogger(__name__)


class FallbackType(Enum):
    """Fallback scenario types."""

    MEDICAL_ADVISORY = "medical_advisory"
    CATALOG_EMPTY = "catalog_empty"


FALLBACK_MESSAGES: dict[FallbackType, str] = {
    FallbackType.MEDICAL_ADVISORY: "I recommend consulting a healthcare professional for medical advice.",
    FallbackType.CATALOG_EMPTY: "Our product catalog is temporarily unavailable. Please try again later.",
}


def get_fallback_text(
    fallback_type: FallbackType,
    context: dict[str, Any] | None = None,
) -> str:
    """Get fallback text for a scenario, logging why it was used."""
    logger.warning(
        "Fallback triggered: type=%s, context=%s",
        fallback_type.value,
        context,
    )
    return FALLBACK_MESSAGES[fallback_type]
