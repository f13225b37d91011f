import pandas as pd

from fare_scout.export import records_frame, write_csv
from fare_scout.models import FlightOffer, RankingItem
from fare_scout.response_parser import parse_flight_response

REPLY = """
FLIGHT_DATA: Madrid | Iberia | 890 | USD | 2024-12-05 | 2024-12-20 | 12h | 1 Escala | https://x
FLIGHT_DATA: Miami | American Airlines | 450 | USD | 2024-11-10 | N/A | 8h 30m | Directo | #
RANKING_DATA: DATE | Noviembre | 380 | USD
"""


def test_records_frame():
    result = parse_flight_response(REPLY)
    df = records_frame(result.flights)
    assert list(df["destination"]) == ["Madrid", "Miami"]
    assert df["price"].sum() == 1340

    rankings = records_frame(result.rankings)
    assert list(rankings["kind"]) == ["DATE"]


def test_records_frame_empty():
    df = records_frame([], RankingItem)
    assert df.empty
    assert list(df.columns) == ["kind", "label", "price", "currency"]


def test_write_csv(tmp_path):
    result = parse_flight_response(REPLY)
    path = write_csv(result.flights, str(tmp_path / "flights.csv"), FlightOffer)

    df = pd.read_csv(path)
    assert len(df) == 2
    assert list(df["airline"]) == ["Iberia", "American Airlines"]
    assert (df["currency"] == "USD").all()
