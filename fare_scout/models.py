"""Data models used throughout the project."""

from __future__ import annotations

import enum
import itertools
import uuid
from collections import Counter
from dataclasses import dataclass, field
from typing import Callable, List, Optional

CURRENCY = "USD"

UNKNOWN_DESTINATION = "Unknown"
DEFAULT_AIRLINE = "Airline"
DEFAULT_DATE = "Date to be confirmed"
DEFAULT_DURATION = "N/A"
DEFAULT_STOPS = "N/A"
DEFAULT_LINK = "#"

IdFactory = Callable[[], str]


class RankingKind(str, enum.Enum):
    BY_DATE = "DATE"
    BY_AIRLINE = "AIRLINE"


class LineKind(str, enum.Enum):
    """Classification of a single line of model output."""

    FLIGHT = "FLIGHT_DATA:"
    RANKING = "RANKING_DATA:"
    CHART = "CHART_DATA:"
    UNRECOGNIZED = ""


@dataclass(frozen=True, slots=True)
class FlightOffer:
    id: str
    destination: str
    airline: str
    price: float
    date: str
    return_date: Optional[str]
    duration: str
    stops: str
    link: str
    origin: str = ""
    currency: str = CURRENCY


@dataclass(frozen=True, slots=True)
class RankingItem:
    kind: RankingKind
    label: str
    price: float
    currency: str = CURRENCY


@dataclass(frozen=True, slots=True)
class ChartPoint:
    label: str
    value: float


@dataclass(slots=True)
class ParseResult:
    """Records extracted from one model reply, in source order.

    ``dropped`` counts tagged lines that failed validation, per kind.
    """

    flights: List[FlightOffer] = field(default_factory=list)
    rankings: List[RankingItem] = field(default_factory=list)
    chart_data: List[ChartPoint] = field(default_factory=list)
    dropped: Counter = field(default_factory=Counter)

    def is_empty(self) -> bool:
        return not (self.flights or self.rankings or self.chart_data)


def uuid_id() -> str:
    """Default identifier factory."""
    return uuid.uuid4().hex


def sequential_ids(prefix: str = "flight-", start: int = 1) -> IdFactory:
    """Return a factory yielding ``prefix1``, ``prefix2``, ... on each call."""
    counter = itertools.count(start)
    return lambda: f"{prefix}{next(counter)}"


__all__ = [
    "CURRENCY",
    "UNKNOWN_DESTINATION",
    "ChartPoint",
    "FlightOffer",
    "IdFactory",
    "LineKind",
    "ParseResult",
    "RankingItem",
    "RankingKind",
    "sequential_ids",
    "uuid_id",
]
