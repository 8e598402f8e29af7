from __future__ import annotations

import re
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query

from backend.carcompare.core.exceptions import CompareError, MalformedInputError, MissingParameterError
from backend.carcompare.core.logging import get_logger
from backend.carcompare.services.comparables import ComparableGenerator
from backend.carcompare.services.listing import extract_car_from_listing

LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")
MAX_OVERRIDE_DIGITS = 12

logger = get_logger(__name__)

router = APIRouter()


def get_comparable_generator() -> ComparableGenerator:
    return ComparableGenerator()


def _parse_int(name: str, raw: str) -> Optional[int]:
    """Leading-integer parse; ``None`` when ``raw`` does not start with one."""
    match = LEADING_INT_RE.match(raw)
    if not match:
        return None
    digits = match.group(1).lstrip("+-")
    if len(digits) > MAX_OVERRIDE_DIGITS:
        raise MalformedInputError(f'Parameter "{name}" is out of range: {raw!r}')
    return int(match.group(1))


def collect_overrides(
    *,
    year: Optional[str] = None,
    km: Optional[str] = None,
    fuel: Optional[str] = None,
    transmission: Optional[str] = None,
    price: Optional[str] = None,
    power_hp: Optional[str] = None,
) -> Dict[str, Any]:
    """Coerce the optional query values into listing overrides.

    Empty values are treated as absent. Numeric values keep their leading
    integer (``"2018.5"`` becomes 2018); values without one are dropped so
    the default applies.
    """
    overrides: Dict[str, Any] = {}
    for name, raw in (("year", year), ("km", km), ("price", price), ("powerHp", power_hp)):
        if not raw:
            continue
        value = _parse_int(name, raw)
        if value is not None:
            overrides[name] = value
    if fuel:
        overrides["fuel"] = fuel
    if transmission:
        overrides["transmission"] = transmission
    return overrides


@router.get("/compare")
def compare(
    url: Optional[str] = None,
    year: Optional[str] = None,
    km: Optional[str] = None,
    fuel: Optional[str] = None,
    transmission: Optional[str] = None,
    price: Optional[str] = None,
    power_hp: Optional[str] = Query(default=None, alias="powerHp"),
    generator: ComparableGenerator = Depends(get_comparable_generator),
):
    """Return the base vehicle for ``url`` and ten synthetic comparables."""
    if not url:
        raise MissingParameterError("url")

    try:
        overrides = collect_overrides(
            year=year,
            km=km,
            fuel=fuel,
            transmission=transmission,
            price=price,
            power_hp=power_hp,
        )
        base_car = extract_car_from_listing(url, overrides)
        comparables = generator.generate(base_car)
    except CompareError:
        raise
    except Exception as exc:
        raise MalformedInputError(str(exc)) from exc

    logger.info(
        "Comparables generated",
        extra={"listing_source": base_car.source, "make": base_car.make, "model": base_car.model},
    )
    return {
        "baseCar": base_car.as_payload(),
        "comparables": [item.as_payload() for item in comparables],
    }
