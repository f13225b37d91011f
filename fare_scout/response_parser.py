"""Best-effort parser for free-text flight search replies.

A reply is narrative prose interleaved with tagged, pipe-separated lines::

    FLIGHT_DATA: Madrid | Iberia | 890 | USD | 2024-12-05 | 2024-12-20 | 12h | 1 Escala | https://...
    RANKING_DATA: AIRLINE | Latam | 400 | USD
    CHART_DATA: Jan 15 | 400

Every line is handled on its own: a malformed tagged line is dropped (and
counted in ``ParseResult.dropped``) without affecting its siblings.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .models import (
    DEFAULT_AIRLINE,
    DEFAULT_DATE,
    DEFAULT_DURATION,
    DEFAULT_LINK,
    DEFAULT_STOPS,
    ChartPoint,
    FlightOffer,
    IdFactory,
    LineKind,
    ParseResult,
    RankingItem,
    RankingKind,
    uuid_id,
)

# Checked in this order; the first marker found wins.
MARKERS: Tuple[LineKind, ...] = (
    LineKind.FLIGHT,
    LineKind.RANKING,
    LineKind.CHART,
)

FLIGHT_MIN_FIELDS = 8
RANKING_MIN_FIELDS = 3
CHART_MIN_FIELDS = 2

NOT_APPLICABLE = "N/A"

_NON_NUMERIC = re.compile(r"[^0-9.]")
_LEADING_NUMBER = re.compile(r"\d+(?:\.\d*)?|\.\d+")
_NEGATIVE = re.compile(r"^[^0-9]*?-(?=\.?\d)")


@dataclass(frozen=True, slots=True)
class ClassifiedLine:
    kind: LineKind
    content: str = ""

    @property
    def fields(self) -> List[str]:
        return [part.strip() for part in self.content.split("|")]


# ────────────────────────────────────────────────────────────────
# Helpers
# ────────────────────────────────────────────────────────────────


def parse_price(raw: Optional[str]) -> float:
    """Return the number in *raw*, ignoring currency symbols and separators.

    ``"$1,234.50"`` -> ``1234.5``; ``"USD"`` -> ``0.0``. A minus sign before
    the first digit makes the result negative.
    """
    if not raw:
        return 0.0
    match = _LEADING_NUMBER.match(_NON_NUMERIC.sub("", raw))
    if not match:
        return 0.0
    value = float(match.group())
    if _NEGATIVE.match(raw):
        return -value
    return value


def classify_line(line: str) -> ClassifiedLine:
    """Tag *line* by the first marker it contains.

    The marker may appear anywhere (bullets or prose may precede it); only the
    text after its first occurrence is kept.
    """
    trimmed = line.strip()
    for kind in MARKERS:
        _, found, content = trimmed.partition(kind.value)
        if found:
            return ClassifiedLine(kind, content)
    return ClassifiedLine(LineKind.UNRECOGNIZED)


def _return_date(raw: str) -> Optional[str]:
    if not raw or raw == NOT_APPLICABLE:
        return None
    return raw


# ────────────────────────────────────────────────────────────────
# Per-kind extraction
# ────────────────────────────────────────────────────────────────


def extract_flight(
    fields: List[str], id_factory: IdFactory = uuid_id
) -> FlightOffer | None:
    if len(fields) < FLIGHT_MIN_FIELDS:
        return None
    price = parse_price(fields[2])
    if not fields[0] or price <= 0:
        return None
    return FlightOffer(
        id=id_factory(),
        destination=fields[0],
        airline=fields[1] or DEFAULT_AIRLINE,
        price=price,
        date=fields[4] or DEFAULT_DATE,
        return_date=_return_date(fields[5]),
        duration=fields[6] or DEFAULT_DURATION,
        stops=fields[7] or DEFAULT_STOPS,
        link=(fields[8] if len(fields) > 8 else "") or DEFAULT_LINK,
    )


def extract_ranking(fields: List[str]) -> RankingItem | None:
    if len(fields) < RANKING_MIN_FIELDS:
        return None
    try:
        kind = RankingKind(fields[0].upper())
    except ValueError:
        return None
    price = parse_price(fields[2])
    if price <= 0:
        return None
    return RankingItem(kind=kind, label=fields[1], price=price)


def extract_chart_point(fields: List[str]) -> ChartPoint | None:
    if len(fields) < CHART_MIN_FIELDS:
        return None
    value = parse_price(fields[1])
    if value <= 0:
        return None
    return ChartPoint(label=fields[0], value=value)


# ────────────────────────────────────────────────────────────────
# Entry point
# ────────────────────────────────────────────────────────────────


def parse_flight_response(
    text: str, id_factory: IdFactory | None = None
) -> ParseResult:
    """Extract flights, rankings and chart points from a model reply.

    Parameters
    ----------
    text:
        The complete reply. Must be a ``str``; ``None`` raises ``TypeError``.
    id_factory:
        Called once per accepted flight to assign its ``id``. Defaults to
        random UUID4 hex strings.
    """
    if not isinstance(text, str):
        raise TypeError(
            f"expected reply text as str, got {type(text).__name__}"
        )
    make_id = id_factory or uuid_id
    result = ParseResult()

    for line in text.split("\n"):
        classified = classify_line(line)
        if classified.kind is LineKind.UNRECOGNIZED:
            continue

        fields = classified.fields
        if classified.kind is LineKind.FLIGHT:
            flight = extract_flight(fields, make_id)
            if flight is not None:
                result.flights.append(flight)
                continue
        elif classified.kind is LineKind.RANKING:
            ranking = extract_ranking(fields)
            if ranking is not None:
                result.rankings.append(ranking)
                continue
        else:
            point = extract_chart_point(fields)
            if point is not None:
                result.chart_data.append(point)
                continue
        result.dropped[classified.kind] += 1

    return result


def split_summary(text: str) -> str:
    """Return the prose before the first tagged line, tidied for display.

    The boundary is the earliest occurrence of any marker. Blank lines are
    removed and Markdown ``*`` emphasis is stripped.
    """
    positions = [
        pos for pos in (text.find(kind.value) for kind in MARKERS) if pos >= 0
    ]
    head = text[: min(positions)] if positions else text
    lines = [line.replace("*", "").strip() for line in head.split("\n")]
    return "\n".join(line for line in lines if line)


__all__ = [
    "ClassifiedLine",
    "MARKERS",
    "classify_line",
    "extract_chart_point",
    "extract_flight",
    "extract_ranking",
    "parse_flight_response",
    "parse_price",
    "split_summary",
]
