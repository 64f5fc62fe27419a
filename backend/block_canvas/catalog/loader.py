from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import List

import yaml

from block_canvas.ir.diagram import BLOCK_TYPES
from block_canvas.ir.errors import ConfigurationError


CATALOG_PATH = Path(__file__).resolve().parent / "block_types.yaml"


@dataclass
class BlockTypeInfo:
    type: str
    label: str
    guideline: str
    icon: str = ""
    css_class: str = ""


@dataclass
class BlockCatalog:
    version: str = "1.0"
    block_types: List[BlockTypeInfo] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "version": self.version,
            "block_types": [
                {
                    "type": i.type,
                    "label": i.label,
                    "icon": i.icon,
                    "css_class": i.css_class,
                    "guideline": i.guideline,
                }
                for i in self.block_types
            ],
        }


def parse_block_catalog(text: str) -> BlockCatalog:
    data = yaml.safe_load(text) or {}

    entries = []
    for raw in data.get("block_types", []):
        if not isinstance(raw, dict) or raw.get("type") not in BLOCK_TYPES:
            raise ConfigurationError(f"Invalid block catalog entry: {raw!r}")
        entries.append(
            BlockTypeInfo(
                type=raw["type"],
                label=raw.get("label", raw["type"].title()),
                guideline=raw.get("guideline", ""),
                icon=raw.get("icon", ""),
                css_class=raw.get("css_class", ""),
            )
        )

    missing = set(BLOCK_TYPES) - {e.type for e in entries}
    if missing:
        raise ConfigurationError(
            f"Block catalog is missing types: {', '.join(sorted(missing))}"
        )

    return BlockCatalog(version=str(data.get("version", "1.0")), block_types=entries)


@lru_cache(maxsize=1)
def load_block_catalog(path: Path = CATALOG_PATH) -> BlockCatalog:
    return parse_block_catalog(path.read_text(encoding="utf-8"))
