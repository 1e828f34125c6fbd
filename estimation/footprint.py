"""Page-weight carbon footprint model.

Converts a PageSpeed total byte weight into megabytes and applies a fixed
linear emissions model (grams CO2 per MB). Values are carried as 2-decimal
strings, the same way they are displayed and sent to the save endpoint.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import List, Literal

Strategy = Literal["desktop", "mobile"]

STRATEGIES = ("desktop", "mobile")

_BYTES_PER_MB = 1024 * 1024
_CARBON_PER_MB_G = 0.6 / 1.8  # grams CO2 per MB transferred

# Public constants
BYTES_PER_MB = _BYTES_PER_MB
CARBON_PER_MB_G = _CARBON_PER_MB_G

__all__ = [
    "AuditResult",
    "BYTES_PER_MB",
    "CARBON_PER_MB_G",
    "STRATEGIES",
    "Strategy",
    "audit_result_from_bytes",
    "bytes_to_mb",
    "carbon_footprint_grams",
    "to_fixed",
]


@dataclass(frozen=True)
class AuditResult:
    device: Strategy
    MB: str
    grams: str

    @property
    def grams_value(self) -> float:
        return float(self.grams)

    def display_lines(self) -> List[str]:
        return [
            f"Device: {self.device}",
            f"Page Size: {self.MB} MB",
            f"CO2 Emissions: {self.grams} g",
        ]


def to_fixed(value: float, digits: int = 2) -> str:
    """Format like JavaScript's Number.toFixed: half-up on the exact binary value."""
    quantum = Decimal(1).scaleb(-digits)
    return str(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def bytes_to_mb(byte_weight: float) -> str:
    if not math.isfinite(byte_weight):
        raise ValueError("byte_weight must be a finite number")
    if byte_weight < 0:
        raise ValueError("byte_weight must be >= 0")
    return to_fixed(byte_weight / _BYTES_PER_MB)


def carbon_footprint_grams(size_mb: str) -> str:
    """Emissions for a page of `size_mb` megabytes (already rounded)."""
    return to_fixed(float(size_mb) * _CARBON_PER_MB_G)


def audit_result_from_bytes(byte_weight: float, device: Strategy) -> AuditResult:
    """Derive MB and grams together from one byte-weight sample."""
    if device not in STRATEGIES:
        raise ValueError(f"Unknown strategy '{device}'. Expected one of {STRATEGIES}.")
    size_mb = bytes_to_mb(byte_weight)
    return AuditResult(device=device, MB=size_mb, grams=carbon_footprint_grams(size_mb))
