from __future__ import annotations

from typing import Any, Dict, Optional

from proxybase_mcp.app.core.errors import ToolError


def require_str(args: Dict[str, Any], key: str) -> str:
    """Return a required string argument; a non-string value counts as missing."""
    value = args.get(key)
    if not isinstance(value, str):
        raise ToolError(f"Missing required argument: {key}")
    return value


def optional_str(args: Dict[str, Any], key: str) -> Optional[str]:
    value = args.get(key)
    return value if isinstance(value, str) else None
