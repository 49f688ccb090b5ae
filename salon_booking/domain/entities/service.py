from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Service:
    id: int
    name: str
    duration_minutes: int
    description: str | None = None
    price: int | None = None  # cents
