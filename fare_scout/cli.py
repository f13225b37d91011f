from __future__ import annotations

import logging
import sys
from typing import Optional

import click
import requests

from .config import get_settings
from .export import write_csv
from .gemini_client import GeminiClient, GeminiClientError
from .models import FlightOffer
from .response_parser import parse_flight_response, split_summary
from .search_service import SearchParams, search_flights

logger = logging.getLogger(__name__)

RETRY_MESSAGE = (
    "There was an error searching for flights. Please try again."
)


def _echo_records(flights, rankings, chart_data) -> None:
    if not flights:
        click.echo("No flights found")
    for off in flights:
        ret = f" ↩ {off.return_date}" if off.return_date else ""
        click.echo(
            f"{off.destination:<20} {off.airline:<20} "
            f"{off.price:>10.2f} {off.currency}  {off.date}{ret}  "
            f"{off.duration}  {off.stops}  {off.link}"
        )
    for item in rankings:
        click.echo(
            f"[{item.kind.value}] {item.label}: "
            f"{item.price:.2f} {item.currency}"
        )
    for point in chart_data:
        click.echo(f"{point.label}: {point.value:g}")


@click.group()
def cli() -> None:
    """Command line interface."""
    logging.basicConfig(
        level=get_settings().log_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@cli.command()
@click.argument("reply", type=click.File("r", encoding="utf-8"), default="-")
@click.option("--csv", "csv_path", help="Write parsed flights to this CSV")
def parse(reply, csv_path: Optional[str]) -> None:
    """Parse a saved model reply and print the records."""
    text = reply.read()
    result = parse_flight_response(text)

    summary = split_summary(text)
    if summary:
        click.echo(summary)
        click.echo()
    _echo_records(result.flights, result.rankings, result.chart_data)
    for kind, count in result.dropped.items():
        click.echo(f"Dropped {count} malformed {kind.name} line(s)")

    if csv_path:
        write_csv(result.flights, csv_path, FlightOffer)
        logger.info("Flights written to %s", csv_path)


@cli.command()
@click.argument("origin")
@click.argument("destination", required=False)
@click.option(
    "--prompt-file",
    type=click.File("r", encoding="utf-8"),
    required=True,
    help="Prompt sent to the model",
)
def search(
    origin: str,
    destination: Optional[str],
    prompt_file,
) -> None:
    """Ask the model for flights and print the parsed records."""
    params = SearchParams(origin=origin, destination=destination)
    try:
        result = search_flights(params, prompt_file.read(), GeminiClient())
    except (GeminiClientError, requests.RequestException):
        click.echo(RETRY_MESSAGE, err=True)
        sys.exit(1)

    if result.summary:
        click.echo(result.summary)
        click.echo()
    _echo_records(result.flights, result.rankings, result.chart_data)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
