"""
Marketplace API client infrastructure for marketplace-mcp-server.

Executes the requests built by request_translator:
- Session-cookie authentication (``SID``), the same way the up CLI does
- One bounded timeout per call, no retries
- Status codes mapped onto the exceptions in ``exceptions``

Base URL and token are held together in one immutable snapshot so a
``reload_auth`` running next to an in-flight call never mixes the old URL
with the new token.
"""

import logging
import threading
from dataclasses import dataclass, replace
from typing import Optional, Dict, Any

import requests

from ..domain.query import SearchQuery, RepositoryQuery
from ..domain.package import (
    Asset,
    Examples,
    PackageMetadata,
    PackageResources,
    RepositoryResponse,
    SearchResponse,
)
from ..exceptions import (
    AuthenticationRequiredError,
    RequestFailedError,
    ResponseDecodeError,
)
from . import request_translator as rt

logger = logging.getLogger(__name__)

USER_AGENT = "marketplace-mcp-server/1.0"
SESSION_COOKIE = "SID"
DEFAULT_TIMEOUT = 30


@dataclass(frozen=True)
class ClientSettings:
    """Connection settings read by every outgoing call."""
    base_url: str = ""
    token: str = ""


class MarketplaceClient:
    """
    Client for the marketplace REST API.

    Example:
        client = MarketplaceClient(base_url="https://api.upbound.io")
        result = client.search_packages(SearchQuery(query="aws", size=20))
        for pkg in result.packages:
            print(pkg.account, pkg.repository)
    """

    def __init__(self, base_url: str = "", token: str = "", timeout: int = DEFAULT_TIMEOUT):
        """
        Initialize MarketplaceClient.

        Args:
            base_url: API base URL (usually derived from the up CLI profile)
            token: Session token sent as the SID cookie
            timeout: HTTP request timeout in seconds
        """
        self.timeout = timeout
        self._lock = threading.Lock()
        self._settings = ClientSettings(base_url=base_url, token=token)
        self.session = requests.Session()
        self.session.headers.update({
            'User-Agent': USER_AGENT,
            'Accept': 'application/json',
        })

    @property
    def settings(self) -> ClientSettings:
        with self._lock:
            return self._settings

    def configure(self, base_url: Optional[str] = None, token: Optional[str] = None) -> ClientSettings:
        """
        Swap in new connection settings in one step.

        Fields left as None keep their current value.
        """
        changes: Dict[str, str] = {}
        if base_url is not None:
            changes['base_url'] = base_url
        if token is not None:
            changes['token'] = token

        with self._lock:
            self._settings = replace(self._settings, **changes)
            return self._settings

    def set_token(self, token: str) -> None:
        self.configure(token=token)

    def set_base_url(self, base_url: str) -> None:
        self.configure(base_url=base_url)

    # === TRANSPORT ===

    def _get(self, request: rt.OutboundRequest, allow_redirects: bool = True,
             stream: bool = False) -> requests.Response:
        settings = self.settings
        # Raises InvalidBaseURLError before anything goes on the wire
        url = request.url(settings.base_url)

        cookies = {SESSION_COOKIE: settings.token} if settings.token else None
        logger.debug(f"GET {url}")

        try:
            return self.session.get(
                url,
                cookies=cookies,
                timeout=self.timeout,
                allow_redirects=allow_redirects,
                stream=stream,
            )
        except requests.RequestException as e:
            raise RequestFailedError(f"failed to execute request: {e}") from e

    @staticmethod
    def _check_status(response: requests.Response) -> None:
        if response.status_code in (401, 403):
            raise AuthenticationRequiredError(response.status_code)
        if response.status_code != 200:
            raise RequestFailedError.from_status(response.status_code, response.text)

    @staticmethod
    def _json(response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise ResponseDecodeError(f"failed to decode response: {e}") from e

    def _json_object(self, response: requests.Response) -> Dict[str, Any]:
        data = self._json(response)
        if not isinstance(data, dict):
            raise ResponseDecodeError(
                f"failed to decode response: expected object, got {type(data).__name__}"
            )
        return data

    def _fetch_object(self, request: rt.OutboundRequest) -> Dict[str, Any]:
        response = self._get(request)
        self._check_status(response)
        return self._json_object(response)

    def _fetch_text(self, request: rt.OutboundRequest) -> str:
        response = self._get(request)
        self._check_status(response)
        return response.text

    # === ENDPOINTS ===

    def search_packages(self, query: SearchQuery) -> SearchResponse:
        """Search packages with the v1 or v2 API, depending on ``query.use_v1``."""
        data = self._fetch_object(rt.translate_search(query))
        return SearchResponse.from_api_response(data)

    def get_package_metadata(self, account: str, repository: str,
                             version: Optional[str] = None,
                             use_v1: bool = False) -> PackageMetadata:
        """Get metadata for a package, optionally pinned to one version."""
        request = rt.translate_package_metadata(account, repository, version, use_v1)
        return PackageMetadata.from_api_response(self._fetch_object(request))

    def get_package_assets(self, account: str, repository: str, version: str,
                           asset_type: str) -> Asset:
        """
        Get one asset of a package version.

        A 307 answer is not followed: its Location becomes the asset URL
        and the body is never read. A 200 body may hold one asset object or
        an array of them, in which case the first one wins.
        """
        request = rt.translate_package_assets(account, repository, version, asset_type)
        response = self._get(request, allow_redirects=False, stream=True)
        try:
            if response.status_code == 307:
                return Asset(url=response.headers.get('Location', ''))

            self._check_status(response)
            data = self._json(response)
        finally:
            response.close()

        if isinstance(data, dict):
            return Asset.from_api_response(data)
        if isinstance(data, list):
            if data and isinstance(data[0], dict):
                return Asset.from_api_response(data[0])
            return Asset()
        raise ResponseDecodeError("failed to decode response as object or array")

    def get_repositories(self, query: RepositoryQuery) -> RepositoryResponse:
        """List repositories of ``query.account``."""
        data = self._fetch_object(rt.translate_repositories(query))
        return RepositoryResponse.from_api_response(data, account=query.account)

    def get_package_resources(self, account: str, repository: str,
                              version: str) -> PackageResources:
        """List the CRDs, XRDs and compositions a package version ships."""
        request = rt.translate_package_resources(account, repository, version)
        return PackageResources.from_api_response(self._fetch_object(request))

    def get_package_resource(self, account: str, repository: str, version: str,
                             resource_group: str, resource_kind: str) -> str:
        """Raw JSON describing one resource kind, passed through unmodified."""
        request = rt.translate_package_resources(
            account, repository, version, resource_group, resource_kind
        )
        return self._fetch_text(request)

    def get_package_resource_examples(self, account: str, repository: str, version: str,
                                      resource_group: str, resource_kind: str) -> Examples:
        request = rt.translate_package_resources(
            account, repository, version, resource_group, resource_kind,
            suffix=('examples',),
        )
        return Examples.from_api_response(self._fetch_object(request))

    def get_package_composition(self, account: str, repository: str, version: str,
                                resource_group: str, resource_kind: str,
                                composition_name: str) -> str:
        """Raw JSON of one composition, passed through unmodified."""
        request = rt.translate_package_resources(
            account, repository, version, resource_group, resource_kind,
            suffix=('compositions', composition_name),
        )
        return self._fetch_text(request)
