"""Confidence banding for reconciliation results.

Maps a numeric match confidence to a display label:
- >= 0.9 Very High
- >= 0.7 High
- >= 0.5 Medium
- >= 0.3 Low
- otherwise Very Low
"""

from src.identity.schemas import ConfidenceBand

_BANDS: tuple[tuple[float, ConfidenceBand], ...] = (
    (0.9, ConfidenceBand.VERY_HIGH),
    (0.7, ConfidenceBand.HIGH),
    (0.5, ConfidenceBand.MEDIUM),
    (0.3, ConfidenceBand.LOW),
)


def confidence_band(confidence: float) -> ConfidenceBand:
    """Label a confidence score.

    Args:
        confidence: Match confidence (0-1)

    Returns:
        ConfidenceBand for display
    """
    for floor, band in _BANDS:
        if confidence >= floor:
            return band
    return ConfidenceBand.VERY_LOW
