from __future__ import annotations

import dataclasses
import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import List, Optional, Protocol

from .models import (
    UNKNOWN_DESTINATION,
    ChartPoint,
    FlightOffer,
    IdFactory,
    RankingItem,
)
from .response_parser import parse_flight_response, split_summary

logger = logging.getLogger(__name__)

VARIOUS_DESTINATIONS = "Various destinations"


class TextGenerator(Protocol):
    def generate(self, prompt: str) -> str: ...


@dataclass(slots=True)
class SearchParams:
    origin: str
    destination: Optional[str] = None


@dataclass(slots=True)
class SearchResult:
    flights: List[FlightOffer] = field(default_factory=list)
    rankings: List[RankingItem] = field(default_factory=list)
    chart_data: List[ChartPoint] = field(default_factory=list)
    raw_text: str = ""
    summary: str = ""
    dropped: Counter = field(default_factory=Counter)


# ────────────────────────────────────────────────────────────────
# Helper
# ────────────────────────────────────────────────────────────────


def enrich_flights(
    flights: List[FlightOffer], params: SearchParams
) -> List[FlightOffer]:
    """Fill in query data the reply does not carry.

    ``origin`` always comes from the query; the unknown-destination sentinel
    is replaced with the queried destination, or a generic label.
    """
    fallback = params.destination or VARIOUS_DESTINATIONS
    return [
        dataclasses.replace(
            off,
            origin=params.origin,
            destination=(
                off.destination
                if off.destination != UNKNOWN_DESTINATION
                else fallback
            ),
        )
        for off in flights
    ]


# ────────────────────────────────────────────────────────────────
# Main logic
# ────────────────────────────────────────────────────────────────


def search_flights(
    params: SearchParams,
    prompt: str,
    client: TextGenerator,
    *,
    id_factory: IdFactory | None = None,
) -> SearchResult:
    """Query the model once and turn its reply into records."""
    logger.info(
        "Searching: %s ➔ %s", params.origin, params.destination or "*"
    )
    try:
        text = client.generate(prompt)
    except Exception as exc:
        logger.error("Error searching flights: %s", exc)
        raise

    parsed = parse_flight_response(text, id_factory)
    for kind, count in parsed.dropped.items():
        logger.debug("  Dropped %d malformed %s line(s)", count, kind.name)
    logger.info(
        "Parsed %d flights, %d rankings, %d chart points (%d lines dropped)",
        len(parsed.flights),
        len(parsed.rankings),
        len(parsed.chart_data),
        sum(parsed.dropped.values()),
    )

    return SearchResult(
        flights=enrich_flights(parsed.flights, params),
        rankings=parsed.rankings,
        chart_data=parsed.chart_data,
        raw_text=text,
        summary=split_summary(text),
        dropped=parsed.dropped,
    )


__all__ = [
    "SearchParams",
    "SearchResult",
    "TextGenerator",
    "enrich_flights",
    "search_flights",
]
