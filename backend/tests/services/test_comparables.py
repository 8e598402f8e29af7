import random

import pytest

from backend.carcompare.services.comparables import PLATFORMS, ComparableGenerator
from backend.carcompare.services.records import VehicleRecord


def _base(**changes) -> VehicleRecord:
    fields = {
        "url": "https://www.autoscout24.de/angebote/vw-passat-variant/123",
        "source": "www.autoscout24.de",
        "make": "Volkswagen",
        "model": "PASSAT",
        "year": 2019,
        "km": 60000,
        "fuel": "Diesel",
        "transmission": "Automatik",
        "power_hp": 150,
        "price": 21990,
    }
    fields.update(changes)
    return VehicleRecord(**fields)


class EdgeRandom:
    """Always returns either the lowest or the highest possible draw."""

    def __init__(self, high: bool):
        self.high = high

    def random(self) -> float:
        return 0.9999999999 if self.high else 0.0

    def randint(self, a: int, b: int) -> int:
        return b if self.high else a


def _assert_within_bounds(base: VehicleRecord, comparables) -> None:
    bounds = ComparableGenerator.bounds_for(base)
    for item in comparables:
        assert bounds.min_year <= item.year <= bounds.max_year
        assert 0 <= item.km <= bounds.max_km
        assert bounds.min_power_hp <= item.power_hp <= bounds.max_power_hp
        assert bounds.min_price - 1 <= item.price <= bounds.max_price + 1


def test_generates_ten_records_within_bounds():
    base = _base()
    comparables = ComparableGenerator(random.Random(1234)).generate(base)
    assert len(comparables) == 10
    _assert_within_bounds(base, comparables)


@pytest.mark.parametrize("seed", range(20))
def test_bounds_hold_across_seeds(seed):
    base = _base(year=2012, km=180000, power_hp=90, price=4500)
    _assert_within_bounds(base, ComparableGenerator(random.Random(seed)).generate(base))


def test_bounds_derivation():
    bounds = ComparableGenerator.bounds_for(_base())
    assert (bounds.min_year, bounds.max_year) == (2018, 2020)
    assert (bounds.min_km, bounds.max_km) == (0, 85000)
    assert (bounds.min_power_hp, bounds.max_power_hp) == (150, 230)
    assert bounds.base_price == 21990


def test_lowest_draws_hit_lower_bounds():
    comparables = ComparableGenerator(EdgeRandom(high=False)).generate(_base())
    for item in comparables:
        assert item.year == 2018
        assert item.km == 0
        assert item.power_hp == 150
        assert abs(item.price - 21990 * 0.85) <= 0.5


def test_highest_draws_hit_upper_bounds():
    comparables = ComparableGenerator(EdgeRandom(high=True)).generate(_base())
    for item in comparables:
        assert item.year == 2020
        assert item.km == 85000
        assert item.power_hp == 230
        assert 25288 <= item.price <= 25289


def test_price_diff_percent_matches_price_exactly():
    base = _base()
    for item in ComparableGenerator(random.Random(7)).generate(base):
        assert item.price_diff_percent == (item.price - base.price) / base.price * 100


def test_base_attributes_copied_verbatim():
    base = _base(fuel="Elektro", transmission="Schaltgetriebe")
    for item in ComparableGenerator(random.Random(3)).generate(base):
        assert (item.make, item.model, item.fuel, item.transmission) == (
            "Volkswagen",
            "PASSAT",
            "Elektro",
            "Schaltgetriebe",
        )
        assert item.title == f"Volkswagen PASSAT {item.year}"


def test_platform_rotation_and_urls():
    comparables = ComparableGenerator(random.Random(0)).generate(_base())
    for index, item in enumerate(comparables):
        platform = PLATFORMS[index % 3]
        assert item.source == platform[: -len(".de")]
        assert item.url == f"https://www.{platform}/fiktives-inserat-{index + 1}"
    assert [item.source for item in comparables[:3]] == ["mobile", "autoscout24", "kleinanzeigen"]


def test_falsy_fields_use_fallbacks_independently():
    base = _base(price=0, km=0, year=0, power_hp=0)
    bounds = ComparableGenerator.bounds_for(base)
    assert bounds.base_price == 10000
    assert bounds.max_km == 125000
    assert (bounds.min_year, bounds.max_year) == (2014, 2016)
    assert (bounds.min_power_hp, bounds.max_power_hp) == (120, 200)

    comparables = ComparableGenerator(random.Random(5)).generate(base)
    assert len(comparables) == 10
    for item in comparables:
        assert item.price_diff_percent == (item.price - 10000) / 10000 * 100


def test_only_missing_field_falls_back():
    bounds = ComparableGenerator.bounds_for(_base(km=0))
    assert bounds.max_km == 125000
    assert bounds.base_price == 21990
    assert bounds.min_year == 2018


def test_negative_mileage_never_inverts_range():
    base = _base(km=-40000)
    comparables = ComparableGenerator(random.Random(11)).generate(base)
    assert all(item.km == 0 for item in comparables)


def test_seeded_sources_are_reproducible():
    first = ComparableGenerator(random.Random(42)).generate(_base())
    second = ComparableGenerator(random.Random(42)).generate(_base())
    assert first == second


def test_payload_contains_comparable_fields():
    item = ComparableGenerator(random.Random(1)).generate(_base())[0]
    payload = item.as_payload()
    assert payload["source"] == "mobile"
    assert payload["title"].startswith("Volkswagen PASSAT ")
    assert isinstance(payload["priceDiffPercent"], float)
    assert "powerHp" in payload
