"""Best-effort make/model inference from a listing URL slug."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Dict, List, Tuple
from urllib.parse import ParseResult

import yaml

EXTENSION_RE = re.compile(r"\.[a-z0-9]+$")


def _load_make_registry() -> Tuple[frozenset[str], Dict[str, str]]:
    registry_path = Path(__file__).resolve().parent / "makes.yaml"
    data = yaml.safe_load(registry_path.read_text(encoding="utf-8"))
    tokens: List[str] = []
    display_names: Dict[str, str] = {}
    for entry in data.get("makes", []):
        token = str(entry["token"]).strip().lower()
        tokens.append(token)
        display_name = entry.get("display_name")
        if display_name:
            display_names[token] = display_name
    return frozenset(tokens), display_names


KNOWN_MAKES, MAKE_DISPLAY_NAMES = _load_make_registry()


def _capitalize(value: str) -> str:
    if not value:
        return ""
    return value[0].upper() + value[1:]


def _path_segments(path: str) -> List[str]:
    segments: List[str] = []
    for segment in path.lower().split("/"):
        if segment == "..":
            if segments:
                segments.pop()
        elif segment and segment != ".":
            segments.append(segment)
    return segments


def _pick_slug(path: str) -> str:
    segments = _path_segments(path)
    if not segments:
        return ""
    # the last segment is usually the listing id, the slug sits right before it
    slug = segments[-2] if len(segments) >= 2 else segments[-1]
    return EXTENSION_RE.sub("", slug)


def normalize_make(token: str) -> str:
    if token in MAKE_DISPLAY_NAMES:
        return MAKE_DISPLAY_NAMES[token]
    return _capitalize(token)


def guess_make_model(parsed_url: ParseResult) -> Dict[str, str]:
    """Guess ``make`` and ``model`` from the path of a listing URL.

    The slug is the second-to-last path segment (or the only one), stripped of
    a file extension and split on hyphens. The first token found in the known
    make registry is the make, the token after it the model. Without a known
    make, the first token is assumed to be the make.

    Never raises; unusable paths yield empty strings.
    """
    parts = [part for part in _pick_slug(parsed_url.path or "").split("-") if part]
    if not parts:
        return {"make": "", "model": ""}

    make_index = next((index for index, part in enumerate(parts) if part in KNOWN_MAKES), 0)
    make = parts[make_index]
    model = parts[make_index + 1] if make_index + 1 < len(parts) else ""

    return {"make": normalize_make(make), "model": model.upper()}


__all__ = ["guess_make_model", "normalize_make", "KNOWN_MAKES"]
