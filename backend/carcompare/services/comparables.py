"""Synthetic comparable listings sampled around a base vehicle."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass
from typing import List, Optional, Protocol, Sequence

from backend.carcompare.core.logging import get_logger
from backend.carcompare.services.records import ComparableRecord, VehicleRecord

logger = get_logger(__name__)

PLATFORMS: Sequence[str] = ("mobile.de", "autoscout24.de", "kleinanzeigen.de")
COMPARABLE_COUNT = 10

FALLBACK_PRICE = 10000
FALLBACK_KM = 100000
FALLBACK_YEAR = 2015
FALLBACK_POWER_HP = 120

YEAR_SPREAD = 1
KM_HEADROOM = 25000
POWER_HP_HEADROOM = 80
PRICE_FACTOR_MIN = 0.85
PRICE_FACTOR_SPAN = 0.30


class RandomSource(Protocol):
    def random(self) -> float: ...

    def randint(self, a: int, b: int) -> int: ...


@dataclass(frozen=True)
class ComparableBounds:
    base_price: int
    min_year: int
    max_year: int
    min_km: int
    max_km: int
    min_power_hp: int
    max_power_hp: int

    @property
    def min_price(self) -> float:
        return self.base_price * PRICE_FACTOR_MIN

    @property
    def max_price(self) -> float:
        return self.base_price * (PRICE_FACTOR_MIN + PRICE_FACTOR_SPAN)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _platform_source(platform: str) -> str:
    return platform.removesuffix(".de")


def price_diff_percent(price: int, base_price: int) -> float:
    return (price - base_price) / base_price * 100


class ComparableGenerator:
    """Draws comparable listings within ranges derived from a base vehicle.

    ``rng`` only needs ``random()`` and ``randint(a, b)``; pass a seeded
    ``random.Random`` for reproducible output.
    """

    def __init__(self, rng: Optional[RandomSource] = None, *, count: int = COMPARABLE_COUNT):
        self.rng = rng or random.Random()
        self.count = count

    @staticmethod
    def bounds_for(base: VehicleRecord) -> ComparableBounds:
        base_price = base.price or FALLBACK_PRICE
        base_km = base.km or FALLBACK_KM
        base_year = base.year or FALLBACK_YEAR
        base_hp = base.power_hp or FALLBACK_POWER_HP
        return ComparableBounds(
            base_price=base_price,
            min_year=base_year - YEAR_SPREAD,
            max_year=base_year + YEAR_SPREAD,
            min_km=0,
            max_km=max(0, base_km + KM_HEADROOM),
            min_power_hp=base_hp,
            max_power_hp=base_hp + POWER_HP_HEADROOM,
        )

    def _draw_price(self, base_price: int) -> int:
        factor = PRICE_FACTOR_MIN + self.rng.random() * PRICE_FACTOR_SPAN
        return _round_half_up(base_price * factor)

    def generate(self, base: VehicleRecord) -> List[ComparableRecord]:
        bounds = self.bounds_for(base)
        comparables: List[ComparableRecord] = []

        for index in range(self.count):
            year = self.rng.randint(bounds.min_year, bounds.max_year)
            km = self.rng.randint(bounds.min_km, bounds.max_km)
            power_hp = self.rng.randint(bounds.min_power_hp, bounds.max_power_hp)
            price = self._draw_price(bounds.base_price)

            platform = PLATFORMS[index % len(PLATFORMS)]
            comparables.append(
                ComparableRecord(
                    source=_platform_source(platform),
                    url=f"https://www.{platform}/fiktives-inserat-{index + 1}",
                    title=f"{base.make} {base.model} {year}",
                    make=base.make,
                    model=base.model,
                    year=year,
                    km=km,
                    fuel=base.fuel,
                    transmission=base.transmission,
                    power_hp=power_hp,
                    price=price,
                    price_diff_percent=price_diff_percent(price, bounds.base_price),
                )
            )

        logger.debug(
            "Generated comparables",
            extra={"count": len(comparables), "base_price": bounds.base_price, "max_km": bounds.max_km},
        )
        return comparables


__all__ = [
    "ComparableBounds",
    "ComparableGenerator",
    "PLATFORMS",
    "price_diff_percent",
]
