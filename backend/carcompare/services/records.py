from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional


def _camel(value: str) -> str:
    components = value.split("_")
    if not components:
        return value
    return components[0] + "".join(c.title() for c in components[1:])


@dataclass(frozen=True)
class VehicleRecord:
    source: str
    make: str
    model: str
    year: int
    km: int
    fuel: str
    transmission: str
    power_hp: int
    price: int
    url: Optional[str] = None

    def as_payload(self) -> Dict[str, Any]:
        """Serialize with the camelCase keys used on the wire."""
        return {_camel(key): value for key, value in asdict(self).items()}


@dataclass(frozen=True)
class ComparableRecord(VehicleRecord):
    title: str = ""
    price_diff_percent: float = 0.0


__all__ = ["VehicleRecord", "ComparableRecord"]
