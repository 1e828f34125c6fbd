from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

# Website Carbon rating bands, upper bound in grams CO2 per page view.
_RATING_BANDS: Tuple[Tuple[float, str, str], ...] = (
    (0.095, "A+", "Extremely clean"),
    (0.186, "A", "Very clean"),
    (0.341, "B", "Cleaner than average"),
    (0.493, "C", "Average"),
    (0.656, "D", "Dirtier than average"),
    (0.846, "E", "Very dirty"),
)
_WORST = ("F", "Extremely dirty")


@dataclass(frozen=True)
class EmissionRating:
    grade: str
    label: str


def emission_rating(grams: float) -> EmissionRating:
    """Qualitative rating for an emissions value in grams CO2."""
    if grams < 0:
        raise ValueError("grams must be >= 0")
    for upper, grade, label in _RATING_BANDS:
        if grams <= upper:
            return EmissionRating(grade=grade, label=label)
    return EmissionRating(grade=_WORST[0], label=_WORST[1])
