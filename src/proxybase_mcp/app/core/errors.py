from __future__ import annotations


class ToolError(Exception):
    """A tool call failed in a way the calling agent should read.

    Surfaced as an ``isError`` text block inside a successful JSON-RPC
    response, never as a protocol error.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class BackendError(ToolError):
    """The ProxyBase API call failed (transport, body parse, or non-2xx)."""
