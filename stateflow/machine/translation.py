"""Translation boundary for state and trigger labels."""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Protocol


def translation_key(type_name: str, name: str) -> str:
    return f"{type_name}:{name}"


class Translator(Protocol):
    def translate(self, key: str) -> str: ...


class CatalogTranslator:
    """Looks labels up in a flat catalog and falls back to the key itself."""

    def __init__(self, catalog: Mapping[str, str] | None = None) -> None:
        self._catalog = dict(catalog or {})

    def translate(self, key: str) -> str:
        return self._catalog.get(key, key)

    @classmethod
    def from_json(cls, path: str | Path) -> "CatalogTranslator":
        data = json.loads(Path(path).read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError(f"translation catalog {path} must be a JSON object")
        return cls({str(k): str(v) for k, v in data.items()})
