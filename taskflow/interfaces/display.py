"""Display helpers shared by the API and the CLI."""

import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up (12.5 -> 13)."""
    return math.floor(value + 0.5)
