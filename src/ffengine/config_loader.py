"""Persist and load stat-alias profiles."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping

from ffengine.ingest.stats import CANONICAL_FIELDS


@dataclass
class AliasProfile:
    stat_aliases: Dict[str, List[str]] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AliasProfile":
        raw = data.get("stat_aliases", {})
        if not isinstance(raw, Mapping):
            raise ValueError("stat_aliases must be an object")
        aliases: Dict[str, List[str]] = {}
        for canonical, names in raw.items():
            if canonical not in CANONICAL_FIELDS:
                raise ValueError(f"Unknown stat field '{canonical}' in alias profile")
            if isinstance(names, str):
                names = [names]
            if not isinstance(names, list) or not all(isinstance(name, str) for name in names):
                raise ValueError(f"Aliases for '{canonical}' must be a list of strings")
            aliases[canonical] = list(names)
        return cls(stat_aliases=aliases)

    @classmethod
    def load(cls, path: Path) -> "AliasProfile":
        data = json.loads(path.read_text(encoding="utf-8"))
        if not isinstance(data, Mapping):
            raise ValueError(f"{path} must contain a JSON object")
        return cls.from_dict(data)

    def save(self, path: Path) -> None:
        payload = {"stat_aliases": self.stat_aliases}
        path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
