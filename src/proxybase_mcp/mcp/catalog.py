from __future__ import annotations

import copy
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Tuple

import yaml

CATALOG_PATH = Path(__file__).with_name("tools.yaml")


@dataclass(frozen=True)
class ToolDef:
    name: str
    description: str
    input_schema: Dict[str, Any]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": copy.deepcopy(self.input_schema),
        }


def _load(path: Path) -> Tuple[ToolDef, ...]:
    with open(path, encoding="utf-8") as f:
        cfg = yaml.safe_load(f) or {}
    tools: List[ToolDef] = []
    for item in cfg.get("tools", []):
        tools.append(
            ToolDef(
                name=item["name"],
                description=item["description"],
                input_schema=item.get("inputSchema") or {},
            )
        )
    return tuple(tools)


# Read once at import; callers only ever get copies.
TOOLS: Tuple[ToolDef, ...] = _load(CATALOG_PATH)


def list_tools() -> List[Dict[str, Any]]:
    return [t.to_dict() for t in TOOLS]


def tool_names() -> List[str]:
    return [t.name for t in TOOLS]