"""Typed failures raised by the K-map helpers."""

from __future__ import annotations

from typing import Iterable, Sequence


class KMapError(ValueError):
    """Base class for K-map failures (still a ValueError for callers)."""


class UnsupportedVariableCount(KMapError):
    def __init__(self, nvars: int, allowed: Sequence[int]):
        self.nvars = nvars
        self.allowed = tuple(allowed)
        span = f"{self.allowed[0]}-{self.allowed[-1]}"
        super().__init__(f"Unsupported variable count {nvars}; expected {span}.")


class InvalidGroupShape(KMapError):
    """A group of minterms does not form a legal (toroidal) rectangle."""

    def __init__(self, minterms: Iterable[int], reason: str):
        self.minterms = tuple(sorted(set(minterms)))
        self.reason = reason
        super().__init__(f"Invalid group {list(self.minterms)}: {reason}")


class MalformedExpression(KMapError):
    def __init__(self, expression: str, reason: str):
        self.expression = expression
        self.reason = reason
        super().__init__(f"Could not parse {expression!r}: {reason}")
