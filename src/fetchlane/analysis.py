from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass
from typing import NamedTuple

Payload = str | bytes | bytearray | memoryview


class AnalysisResult(NamedTuple):
    """Set and clear bit counts over a whole payload."""

    ones: int
    zeros: int


def analyze(payload: Payload) -> AnalysisResult:
    """Count set and clear bits across every byte of *payload*.

    Text is measured through its UTF-8 encoding. The routine deliberately
    walks the bytes twice, once per counter, so it spends a meaningful amount
    of CPU time per payload.

    >>> analyze("A")
    AnalysisResult(ones=2, zeros=6)
    >>> analyze(b"")
    AnalysisResult(ones=0, zeros=0)
    """

    data = payload.encode("utf-8") if isinstance(payload, str) else bytes(payload)
    ones = sum(byte.bit_count() for byte in data)
    zeros = sum(8 - byte.bit_count() for byte in data)
    return AnalysisResult(ones, zeros)


@dataclass(frozen=True, slots=True)
class Aggregate:
    total_ones: int = 0
    total_zeros: int = 0

    @property
    def ratio(self) -> float:
        """``total_ones / total_zeros`` as a float.

        A zero denominator is not guarded: it yields ``inf`` when ones were
        counted and ``nan`` when both totals are zero.
        """

        if self.total_zeros == 0:
            return math.inf if self.total_ones else math.nan
        return self.total_ones / self.total_zeros


def aggregate(results: Iterable[AnalysisResult]) -> Aggregate:
    total_ones = 0
    total_zeros = 0
    for ones, zeros in results:
        total_ones += ones
        total_zeros += zeros
    return Aggregate(total_ones=total_ones, total_zeros=total_zeros)


__all__ = ["Aggregate", "AnalysisResult", "Payload", "aggregate", "analyze"]
