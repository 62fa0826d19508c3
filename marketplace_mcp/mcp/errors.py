"""
JSON-RPC error codes used by the MCP server.

The standard JSON-RPC 2.0 codes are followed by server-specific codes in
the -32000 range, one per failure category a client may want to act on
(e.g. prompting for ``up login`` on ``auth_required``).
"""

from typing import Any, Dict

ERROR_CODES: Dict[str, int] = {
    'parse_error': -32700,
    'invalid_request': -32600,
    'method_not_found': -32601,
    'invalid_params': -32602,
    'internal_error': -32603,
    'unknown_tool': -32000,
    'auth_required': -32001,
    'auth_failed': -32002,
    'search_failed': -32003,
    'metadata_failed': -32004,
    'assets_failed': -32005,
    'repositories_failed': -32006,
    'unknown_resource': -32007,
    'resources_failed': -32008,
}

AUTH_REQUIRED_MESSAGE = (
    "Authentication required for this endpoint. "
    "Please run 'up login' to authenticate with UP CLI."
)


def get_error_code(code: str) -> int:
    """Map a symbolic error code to its number; unknown names are internal errors."""
    return ERROR_CODES.get(code, ERROR_CODES['internal_error'])


class ToolError(Exception):
    """
    A failure reported to the client as a JSON-RPC error object.

    Args:
        code: Symbolic code from ERROR_CODES
        message: Human-readable message
    """

    def __init__(self, code: str, message: str):
        super().__init__(message)
        self.code = code
        self.message = message

    @property
    def numeric_code(self) -> int:
        return get_error_code(self.code)

    def to_dict(self) -> Dict[str, Any]:
        return {"code": self.numeric_code, "message": self.message}
