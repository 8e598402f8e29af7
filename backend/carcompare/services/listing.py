from __future__ import annotations

from dataclasses import replace
from typing import Any, Dict, Mapping, Optional
from urllib.parse import ParseResult, urlparse

from backend.carcompare.core.exceptions import MalformedInputError
from backend.carcompare.core.logging import get_logger
from backend.carcompare.parsers.url_heuristic import guess_make_model
from backend.carcompare.services.records import VehicleRecord

logger = get_logger(__name__)

# Placeholders for attributes that cannot be read from the listing itself.
DEFAULT_YEAR = 2017
DEFAULT_KM = 85000
DEFAULT_FUEL = "Benzin"
DEFAULT_TRANSMISSION = "Automatik"
DEFAULT_POWER_HP = 150
DEFAULT_PRICE = 15990

OVERRIDE_FIELDS = {
    "year": "year",
    "km": "km",
    "fuel": "fuel",
    "transmission": "transmission",
    "price": "price",
    "powerHp": "power_hp",
}


def parse_listing_url(url: str) -> ParseResult:
    try:
        parsed = urlparse(url)
        hostname = parsed.hostname
    except ValueError as exc:
        raise MalformedInputError(f"Invalid URL: {url}") from exc
    if not parsed.scheme or not hostname:
        raise MalformedInputError(f"Invalid URL: {url}")
    return parsed


def extract_car_from_listing(url: str, overrides: Optional[Mapping[str, Any]] = None) -> VehicleRecord:
    """Build the base vehicle for a listing URL.

    Args:
        url: Absolute listing URL; its host becomes ``source`` and its path
            feeds the make/model heuristic.
        overrides: Optional values keyed by wire name (``year``, ``km``,
            ``fuel``, ``transmission``, ``price``, ``powerHp``). Each one
            replaces the placeholder default outright.

    Raises:
        MalformedInputError: when ``url`` is not an absolute URL with a host.
    """
    parsed = parse_listing_url(url)
    guessed = guess_make_model(parsed)

    record = VehicleRecord(
        url=url,
        source=parsed.hostname or "",
        make=guessed["make"],
        model=guessed["model"],
        year=DEFAULT_YEAR,
        km=DEFAULT_KM,
        fuel=DEFAULT_FUEL,
        transmission=DEFAULT_TRANSMISSION,
        power_hp=DEFAULT_POWER_HP,
        price=DEFAULT_PRICE,
    )

    changes: Dict[str, Any] = {}
    for key, value in (overrides or {}).items():
        field_name = OVERRIDE_FIELDS.get(key)
        if field_name is None or value is None:
            continue
        changes[field_name] = value
    if changes:
        record = replace(record, **changes)

    logger.debug(
        "Base vehicle built",
        extra={"listing_source": record.source, "make": record.make, "model": record.model, "overrides": sorted(changes)},
    )
    return record


__all__ = ["extract_car_from_listing", "parse_listing_url"]
