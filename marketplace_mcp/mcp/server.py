"""
MCP Server implementation for marketplace-mcp-server.

Implements the Model Context Protocol (MCP) to expose the Upbound
Marketplace to LLM tools like Claude Code.

Architecture:
    MCPServer is a registry of tools and resources. One JSON-RPC handler
    (_handle_jsonrpc_request) serves both transports; stdio and HTTP only
    differ in how requests are framed.
"""

import json
import logging
import re
import sys
from dataclasses import dataclass, field
from typing import Dict, Any, List, Optional, Callable, IO

from .. import __version__
from ..config import load_config
from ..domain.query import SearchQuery, RepositoryQuery, DEFAULT_PAGE_SIZE, DEFAULT_PAGE
from ..exceptions import (
    AuthenticationRequiredError,
    CredentialError,
    MarketplaceError,
    ResponseDecodeError,
)
from ..infra import MarketplaceClient, CredentialManager, DEFAULT_API_URL
from . import formatters
from .errors import ToolError, AUTH_REQUIRED_MESSAGE, get_error_code

logger = logging.getLogger(__name__)

PROTOCOL_VERSION = "2024-11-05"
SERVER_NAME = "marketplace-mcp-server"

ASSET_TYPES = ["docs", "icon", "readme", "releaseNotes", "sbom"]


@dataclass
class Resource:
    """Represents an MCP resource (read-only data)."""
    uri: str
    name: str
    description: str
    mime_type: str = "text/markdown"
    failure_code: str = "internal_error"


@dataclass
class Tool:
    """Represents an MCP tool (action)."""
    name: str
    description: str
    input_schema: Dict[str, Any]
    handler: Callable
    failure_code: str = "internal_error"


@dataclass
class MCPContext:
    """
    Shared context for MCP handlers.

    Holds the marketplace client and the credential source so every
    handler talks to the same, reloadable connection settings.
    """
    config: Dict[str, Any]
    client: MarketplaceClient
    credentials: CredentialManager

    @classmethod
    def create(cls, config: Optional[Dict[str, Any]] = None) -> 'MCPContext':
        """Create context from config and the up CLI profile."""
        config = config or load_config()
        client = MarketplaceClient(timeout=config['client']['timeout'])
        ctx = cls(config=config, client=client, credentials=CredentialManager())
        ctx.load_credentials()
        return ctx

    @property
    def api_url_override(self) -> str:
        return self.config.get('client', {}).get('api_url') or ''

    def load_credentials(self) -> None:
        """
        Best-effort credential load at startup.

        A missing or incomplete profile is not fatal: public endpoints still
        work without a session, and ``reload_auth`` can pick it up later.
        """
        base_url = self.api_url_override or DEFAULT_API_URL
        token = ''

        if not self.api_url_override:
            try:
                base_url = self.credentials.current_server_url()
            except CredentialError as e:
                logger.warning(f"Could not load server URL, using {base_url}: {e}")

        try:
            token = self.credentials.current_token().access_token
            logger.info("Loaded authentication token from UP CLI profile")
        except CredentialError as e:
            logger.warning(f"Could not load authentication token: {e}")
            logger.warning("Some operations may require authentication. Please run 'up login' if needed.")

        self.client.configure(base_url=base_url, token=token)

    def reload_credentials(self):
        """
        Re-read the default profile and swap client settings in one step.

        Returns:
            Tuple of (profile, server_url)

        Raises:
            ToolError: auth_failed if any part of the profile is unusable
        """
        try:
            server_url = self.api_url_override or self.credentials.current_server_url()
        except CredentialError as e:
            raise ToolError('auth_failed', f"Failed to load server URL from UP CLI profile: {e}")

        try:
            token = self.credentials.current_token()
        except CredentialError as e:
            raise ToolError('auth_failed', f"Failed to load authentication from UP CLI: {e}")

        try:
            profile = self.credentials.current_profile()
        except CredentialError as e:
            raise ToolError('auth_failed', f"Failed to get current profile: {e}")

        self.client.configure(base_url=server_url, token=token.access_token)
        logger.info(f"Reloaded credentials for profile '{profile.id}' ({server_url})")
        return profile, server_url


# === ARGUMENT EXTRACTION ===

def _arg_str(args: Dict[str, Any], name: str, default: str = "") -> str:
    value = args.get(name)
    if value is None:
        return default
    if isinstance(value, str):
        return value
    raise ToolError('invalid_params', f"Invalid parameter {name}: expected string")


def _arg_int(args: Dict[str, Any], name: str, default: int) -> int:
    value = args.get(name)
    if value is None:
        return default
    if isinstance(value, bool):
        raise ToolError('invalid_params', f"Invalid parameter {name}: expected integer")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and re.fullmatch(r'-?\d+', value.strip()):
        return int(value)
    raise ToolError('invalid_params', f"Invalid parameter {name}: expected integer")


def _arg_bool(args: Dict[str, Any], name: str, default: Optional[bool]) -> Optional[bool]:
    value = args.get(name)
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.lower() in ('true', 'false'):
        return value.lower() == 'true'
    raise ToolError('invalid_params', f"Invalid parameter {name}: expected boolean")


def _schema(properties: Dict[str, Any], required: Optional[List[str]] = None) -> Dict[str, Any]:
    schema: Dict[str, Any] = {"type": "object", "properties": properties}
    if required:
        schema["required"] = required
    return schema


@dataclass
class MCPServer:
    """
    Marketplace MCP Server.

    Exposes marketplace operations as MCP resources and tools.
    """
    resources: Dict[str, Resource] = field(default_factory=dict)
    tools: Dict[str, Tool] = field(default_factory=dict)
    resource_handlers: Dict[str, Callable] = field(default_factory=dict)

    def register_resource(self, uri_pattern: str, name: str, description: str,
                          handler: Callable, mime_type: str = "text/markdown",
                          failure_code: str = "internal_error"):
        """Register a resource with its handler."""
        resource = Resource(
            uri=uri_pattern,
            name=name,
            description=description,
            mime_type=mime_type,
            failure_code=failure_code,
        )
        self.resources[uri_pattern] = resource
        self.resource_handlers[uri_pattern] = handler
        logger.debug(f"Registered resource: {uri_pattern}")

    def register_tool(self, name: str, description: str,
                      input_schema: Dict[str, Any], handler: Callable,
                      failure_code: str = "internal_error"):
        """Register a tool with its handler."""
        tool = Tool(
            name=name,
            description=description,
            input_schema=input_schema,
            handler=handler,
            failure_code=failure_code,
        )
        self.tools[name] = tool
        logger.debug(f"Registered tool: {name}")

    def list_resources(self) -> List[Dict[str, Any]]:
        """List all available resources."""
        return [
            {
                "uri": r.uri,
                "name": r.name,
                "description": r.description,
                "mimeType": r.mime_type
            }
            for r in self.resources.values()
        ]

    def list_tools(self) -> List[Dict[str, Any]]:
        """List all available tools."""
        return [
            {
                "name": t.name,
                "description": t.description,
                "inputSchema": t.input_schema
            }
            for t in self.tools.values()
        ]

    def read_resource(self, uri: str) -> str:
        """Read a resource by URI."""
        if uri in self.resource_handlers:
            return self._invoke(self.resources[uri].failure_code, self.resource_handlers[uri])

        for pattern, handler in self.resource_handlers.items():
            if self._match_uri_pattern(pattern, uri):
                params = self._extract_uri_params(pattern, uri)
                return self._invoke(self.resources[pattern].failure_code, handler, **params)

        raise ToolError('unknown_resource', f"Unknown resource: {uri}")

    def call_tool(self, name: str, arguments: Dict[str, Any]) -> str:
        """Call a tool by name with arguments."""
        if name not in self.tools:
            raise ToolError('unknown_tool', f"Unknown tool: {name}")

        tool = self.tools[name]
        for param in tool.input_schema.get("required", []):
            if arguments.get(param) in (None, ""):
                raise ToolError('invalid_params', f"Missing required parameter: {param}")

        return self._invoke(tool.failure_code, tool.handler, arguments)

    @staticmethod
    def _invoke(failure_code: str, handler: Callable, *args, **kwargs) -> str:
        """Run a handler, mapping marketplace errors onto JSON-RPC error codes."""
        try:
            return handler(*args, **kwargs)
        except AuthenticationRequiredError:
            raise ToolError('auth_required', AUTH_REQUIRED_MESSAGE)
        except CredentialError as e:
            raise ToolError('auth_failed', str(e))
        except ResponseDecodeError as e:
            raise ToolError('internal_error', str(e))
        except MarketplaceError as e:
            raise ToolError(failure_code, str(e))

    def _match_uri_pattern(self, pattern: str, uri: str) -> bool:
        """Check if a URI matches a pattern with {param} placeholders."""
        regex_pattern = re.sub(r'\{(\w+)\}', r'([^/]+)', pattern)
        regex_pattern = f"^{regex_pattern}$"
        return bool(re.match(regex_pattern, uri))

    def _extract_uri_params(self, pattern: str, uri: str) -> Dict[str, str]:
        """Extract parameters from a URI given a pattern."""
        param_names = re.findall(r'\{(\w+)\}', pattern)

        regex_pattern = re.sub(r'\{(\w+)\}', r'([^/]+)', pattern)
        regex_pattern = f"^{regex_pattern}$"

        match = re.match(regex_pattern, uri)
        if not match:
            return {}

        return dict(zip(param_names, match.groups()))


def create_mcp_server(ctx: Optional[MCPContext] = None) -> MCPServer:
    """
    Create and configure the marketplace MCP server.

    Args:
        ctx: Handler context (created from config and the up CLI profile
            when omitted)

    Returns:
        Configured MCPServer instance
    """
    server = MCPServer()
    if ctx is None:
        ctx = MCPContext.create()
    client = ctx.client

    # === RESOURCE HANDLERS ===

    def read_packages():
        """Popular public, official packages."""
        result = client.search_packages(SearchQuery(
            size=DEFAULT_PAGE_SIZE,
            public=True,
            tier='official',
        ))
        return formatters.format_search_results(result)

    def read_repositories():
        return "To read repositories, use the get_repositories tool with a specific account name."

    def read_account_repositories(account: str):
        result = client.get_repositories(RepositoryQuery(account=account, size=DEFAULT_PAGE_SIZE))
        return formatters.format_repositories(result)

    # === REGISTER RESOURCES ===

    server.register_resource(
        "marketplace://packages",
        "Marketplace Packages",
        "Search and browse packages in the Upbound Marketplace",
        read_packages,
        failure_code='search_failed'
    )

    server.register_resource(
        "marketplace://repositories",
        "Marketplace Repositories",
        "Browse repositories in the Upbound Marketplace",
        read_repositories
    )

    server.register_resource(
        "marketplace://repositories/{account}",
        "Account Repositories",
        "Repositories owned by one account",
        read_account_repositories,
        failure_code='repositories_failed'
    )

    # === TOOL HANDLERS ===

    def tool_search_packages(args: Dict[str, Any]) -> str:
        query = SearchQuery(
            query=_arg_str(args, 'query'),
            family=_arg_str(args, 'family'),
            package_type=_arg_str(args, 'package_type'),
            account_name=_arg_str(args, 'account_name'),
            tier=_arg_str(args, 'tier'),
            public=_arg_bool(args, 'public', None),
            starred=_arg_bool(args, 'starred', None),
            type=_arg_str(args, 'type'),
            size=_arg_int(args, 'size', DEFAULT_PAGE_SIZE),
            page=_arg_int(args, 'page', DEFAULT_PAGE),
            use_v1=bool(_arg_bool(args, 'use_v1', False)),
        )
        return formatters.format_search_results(client.search_packages(query))

    def tool_get_package_metadata(args: Dict[str, Any]) -> str:
        result = client.get_package_metadata(
            _arg_str(args, 'account'),
            _arg_str(args, 'repository'),
            version=_arg_str(args, 'version'),
            use_v1=bool(_arg_bool(args, 'use_v1', False)),
        )
        return formatters.format_package_metadata(result)

    def tool_get_package_assets(args: Dict[str, Any]) -> str:
        asset_type = _arg_str(args, 'asset_type')
        result = client.get_package_assets(
            _arg_str(args, 'account'),
            _arg_str(args, 'repository'),
            _arg_str(args, 'version'),
            asset_type,
        )
        return formatters.format_asset(result, asset_type)

    def tool_get_repositories(args: Dict[str, Any]) -> str:
        query = RepositoryQuery(
            account=_arg_str(args, 'account'),
            filter=_arg_str(args, 'filter'),
            size=_arg_int(args, 'size', DEFAULT_PAGE_SIZE),
            page=_arg_int(args, 'page', DEFAULT_PAGE),
            use_v1=bool(_arg_bool(args, 'use_v1', False)),
        )
        return formatters.format_repositories(client.get_repositories(query))

    def tool_reload_auth(args: Dict[str, Any]) -> str:
        profile, server_url = ctx.reload_credentials()
        return (
            "Authentication and server configuration reloaded successfully!\n"
            f"Profile: '{profile.id}' ({profile.organization})\n"
            f"Server: {server_url}"
        )

    def _package_coordinates(args: Dict[str, Any]):
        return (
            _arg_str(args, 'account'),
            _arg_str(args, 'repository'),
            _arg_str(args, 'version'),
        )

    def tool_get_package_resources(args: Dict[str, Any]) -> str:
        result = client.get_package_resources(*_package_coordinates(args))
        return formatters.format_package_resources(result)

    def tool_get_package_resource(args: Dict[str, Any]) -> str:
        return client.get_package_resource(
            *_package_coordinates(args),
            _arg_str(args, 'resource_group'),
            _arg_str(args, 'resource_kind'),
        )

    def tool_get_package_resource_examples(args: Dict[str, Any]) -> str:
        resource_kind = _arg_str(args, 'resource_kind')
        result = client.get_package_resource_examples(
            *_package_coordinates(args),
            _arg_str(args, 'resource_group'),
            resource_kind,
        )
        return formatters.format_examples(result, resource_kind)

    def tool_get_package_composition(args: Dict[str, Any]) -> str:
        return client.get_package_composition(
            *_package_coordinates(args),
            _arg_str(args, 'resource_group'),
            _arg_str(args, 'resource_kind'),
            _arg_str(args, 'composition_name'),
        )

    # === REGISTER TOOLS ===

    account_prop = {"type": "string", "description": "Account/organization name"}
    repository_prop = {"type": "string", "description": "Repository name"}
    version_prop = {"type": "string", "description": "Package version"}
    use_v1_prop = {"type": "boolean", "description": "Use v1 API instead of v2", "default": False}
    page_prop = {"type": "integer", "description": "Page number (0-indexed)", "default": DEFAULT_PAGE}
    group_prop = {"type": "string", "description": "API group of the resource (e.g. 's3.aws.upbound.io')"}
    kind_prop = {"type": "string", "description": "Kind of the resource (e.g. 'Bucket')"}

    server.register_tool(
        "search_packages",
        "Search for packages in the Upbound Marketplace",
        _schema({
            "query": {"type": "string", "description": "Search query for packages"},
            "family": {"type": "string", "description": "Family repository key to filter by"},
            "package_type": {
                "type": "string",
                "description": "Type of package (provider, configuration, function)"
            },
            "account_name": {"type": "string", "description": "Account/organization name to filter by"},
            "tier": {"type": "string", "description": "Package tier (official, community, etc.)"},
            "public": {"type": "boolean", "description": "Filter by public/private packages"},
            "starred": {"type": "boolean", "description": "Only return packages you starred"},
            "type": {"type": "string", "description": "Result type filter, passed through as-is"},
            "size": {
                "type": "integer",
                "description": "Number of results to return (max 500)",
                "default": DEFAULT_PAGE_SIZE
            },
            "page": page_prop,
            "use_v1": use_v1_prop,
        }),
        tool_search_packages,
        failure_code='search_failed'
    )

    server.register_tool(
        "get_package_metadata",
        "Get detailed metadata for a specific package",
        _schema({
            "account": account_prop,
            "repository": repository_prop,
            "version": {
                "type": "string",
                "description": "Package version (optional, gets latest if not specified)"
            },
            "use_v1": use_v1_prop,
        }, required=["account", "repository"]),
        tool_get_package_metadata,
        failure_code='metadata_failed'
    )

    server.register_tool(
        "get_package_assets",
        "Get assets (documentation, icons, release notes, etc.) for a specific package version",
        _schema({
            "account": account_prop,
            "repository": repository_prop,
            "version": {"type": "string", "description": "Package version or 'latest'"},
            "asset_type": {
                "type": "string",
                "description": "Type of asset to retrieve",
                "enum": ASSET_TYPES
            },
        }, required=["account", "repository", "version", "asset_type"]),
        tool_get_package_assets,
        failure_code='assets_failed'
    )

    server.register_tool(
        "get_repositories",
        "Get repositories for an account",
        _schema({
            "account": account_prop,
            "filter": {"type": "string", "description": "AIP-160 formatted filter (v2 only)"},
            "size": {
                "type": "integer",
                "description": "Number of results to return (max 100)",
                "default": DEFAULT_PAGE_SIZE
            },
            "page": page_prop,
            "use_v1": use_v1_prop,
        }, required=["account"]),
        tool_get_repositories,
        failure_code='repositories_failed'
    )

    server.register_tool(
        "reload_auth",
        "Reload authentication from UP CLI configuration (useful if you switched profiles)",
        _schema({}),
        tool_reload_auth,
        failure_code='auth_failed'
    )

    server.register_tool(
        "get_package_resources",
        "List the CRDs, XRDs and compositions shipped in a package version",
        _schema({
            "account": account_prop,
            "repository": repository_prop,
            "version": version_prop,
        }, required=["account", "repository", "version"]),
        tool_get_package_resources,
        failure_code='resources_failed'
    )

    server.register_tool(
        "get_package_resource",
        "Get the definition of one resource kind in a package version",
        _schema({
            "account": account_prop,
            "repository": repository_prop,
            "version": version_prop,
            "resource_group": group_prop,
            "resource_kind": kind_prop,
        }, required=["account", "repository", "version", "resource_group", "resource_kind"]),
        tool_get_package_resource,
        failure_code='resources_failed'
    )

    server.register_tool(
        "get_package_resource_examples",
        "Get example manifests for one resource kind in a package version",
        _schema({
            "account": account_prop,
            "repository": repository_prop,
            "version": version_prop,
            "resource_group": group_prop,
            "resource_kind": kind_prop,
        }, required=["account", "repository", "version", "resource_group", "resource_kind"]),
        tool_get_package_resource_examples,
        failure_code='resources_failed'
    )

    server.register_tool(
        "get_package_composition",
        "Get one composition for a resource kind in a package version",
        _schema({
            "account": account_prop,
            "repository": repository_prop,
            "version": version_prop,
            "resource_group": group_prop,
            "resource_kind": kind_prop,
            "composition_name": {"type": "string", "description": "Composition name"},
        }, required=[
            "account", "repository", "version",
            "resource_group", "resource_kind", "composition_name",
        ]),
        tool_get_package_composition,
        failure_code='resources_failed'
    )

    return server


def run_mcp_server(transport: str = "stdio", host: Optional[str] = None,
                   port: Optional[int] = None, config: Optional[Dict[str, Any]] = None):
    """
    Run the MCP server.

    Args:
        transport: Transport type ("stdio" or "http")
        host: Interface to bind for HTTP (defaults to config)
        port: Port to bind for HTTP (defaults to config)
        config: Loaded configuration (loaded when omitted)
    """
    config = config or load_config()
    server = create_mcp_server(MCPContext.create(config))

    if transport == "stdio":
        _run_stdio_server(server)
    elif transport == "http":
        _run_http_server(
            server,
            host=host or config['server']['host'],
            port=port or config['server']['port'],
        )
    else:
        raise ValueError(f"Unknown transport: {transport}")


def _error_response(code: str, message: str, request_id: Any = None) -> Dict[str, Any]:
    return {
        "jsonrpc": "2.0",
        "error": {"code": get_error_code(code), "message": message},
        "id": request_id
    }


def _run_stdio_server(server: MCPServer, stdin: Optional[IO[str]] = None,
                      stdout: Optional[IO[str]] = None):
    """Run MCP server over stdio (JSON-RPC, one message per line)."""
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout

    logger.info("Starting marketplace MCP server (stdio)")

    for line in stdin:
        line = line.strip()
        if not line:
            continue

        try:
            request = json.loads(line)
        except json.JSONDecodeError as e:
            logger.warning(f"Failed to parse JSON request: {e}")
            print(json.dumps(_error_response('parse_error', "Parse error")), file=stdout, flush=True)
            continue

        response = _handle_jsonrpc_request(server, request)
        if response is not None:
            print(json.dumps(response), file=stdout, flush=True)

    logger.info("EOF received, stopping")


def _handle_jsonrpc_request(server: MCPServer, request: Any) -> Optional[Dict[str, Any]]:
    """
    Handle a JSON-RPC request.

    Returns:
        The response object, or None for notifications (requests without
        an ``id``), which never get a reply.
    """
    if not isinstance(request, dict) or not isinstance(request.get("method"), str):
        request_id = request.get("id") if isinstance(request, dict) else None
        return _error_response('invalid_request', "Invalid request", request_id)

    method = request["method"]
    params = request.get("params") or {}
    is_notification = "id" not in request
    request_id = request.get("id")

    result = None
    error = None

    try:
        if not isinstance(params, dict):
            raise ToolError('invalid_params', "Params must be an object")

        if method == "initialize":
            result = {
                "protocolVersion": PROTOCOL_VERSION,
                "capabilities": {
                    "resources": {"subscribe": False, "listChanged": False},
                    "tools": {"listChanged": False}
                },
                "serverInfo": {
                    "name": SERVER_NAME,
                    "version": __version__
                }
            }

        elif method == "ping":
            result = {}

        elif method.startswith("notifications/"):
            result = {}

        elif method == "resources/list":
            result = {"resources": server.list_resources()}

        elif method == "resources/read":
            uri = params.get("uri")
            if not isinstance(uri, str) or not uri:
                raise ToolError('invalid_params', "Invalid resource read parameters")
            text = server.read_resource(uri)
            resource = next(
                (r for p, r in server.resources.items()
                 if p == uri or server._match_uri_pattern(p, uri)),
                None
            )
            result = {
                "contents": [{
                    "uri": uri,
                    "mimeType": resource.mime_type if resource else "text/markdown",
                    "text": text
                }]
            }

        elif method == "tools/list":
            result = {"tools": server.list_tools()}

        elif method == "tools/call":
            tool_name = params.get("name")
            arguments = params.get("arguments") or {}
            if not isinstance(tool_name, str) or not isinstance(arguments, dict):
                raise ToolError('invalid_params', "Invalid tool call parameters")
            text = server.call_tool(tool_name, arguments)
            result = {
                "content": [{
                    "type": "text",
                    "text": text
                }]
            }

        else:
            error = {"code": get_error_code('method_not_found'), "message": f"Method not found: {method}"}

    except ToolError as e:
        logger.info(f"{method} failed: {e.message}")
        error = e.to_dict()
    except Exception as e:
        logger.exception(f"Error handling {method}")
        error = {"code": get_error_code('internal_error'), "message": str(e)}

    if is_notification:
        return None

    response: Dict[str, Any] = {"jsonrpc": "2.0", "id": request_id}
    if error:
        response["error"] = error
    else:
        response["result"] = result

    return response


def _make_http_handler(server: MCPServer):
    from http.server import BaseHTTPRequestHandler

    class MCPHandler(BaseHTTPRequestHandler):
        def _write_json(self, status: int, payload: Dict[str, Any]):
            body = json.dumps(payload).encode()
            self.send_response(status)
            self.send_header('Content-Type', 'application/json')
            self.send_header('Content-Length', str(len(body)))
            self.end_headers()
            self.wfile.write(body)

        def do_POST(self):
            try:
                content_length = int(self.headers.get('Content-Length') or 0)
            except ValueError:
                self._write_json(400, _error_response('invalid_request', "Invalid Content-Length header"))
                return

            body = self.rfile.read(content_length)

            try:
                request = json.loads(body)
            except (json.JSONDecodeError, UnicodeDecodeError):
                self._write_json(400, _error_response('parse_error', "Parse error"))
                return

            response = _handle_jsonrpc_request(server, request)
            if response is None:
                self.send_response(202)
                self.send_header('Content-Length', '0')
                self.end_headers()
                return

            self._write_json(200, response)

        def log_message(self, format, *args):
            logger.debug(format % args)

    return MCPHandler


def _run_http_server(server: MCPServer, host: str = "localhost", port: int = 8765):
    """Run MCP server over HTTP; each POST body is one JSON-RPC request."""
    from http.server import ThreadingHTTPServer

    httpd = ThreadingHTTPServer((host, port), _make_http_handler(server))
    logger.info(f"Starting marketplace MCP server (HTTP) on {host}:{port}")
    try:
        httpd.serve_forever()
    except KeyboardInterrupt:
        logger.info("Received shutdown signal")
    finally:
        httpd.server_close()
        logger.info("Server stopped")
