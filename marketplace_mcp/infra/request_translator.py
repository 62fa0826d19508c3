"""
Request translation for the marketplace API.

Turns a logical query into the path and query parameters of one outbound
GET request. The marketplace exposes two API revisions with different
filtering conventions:

- v1 takes every filter as its own named parameter
  (``/v1/search?query=aws&tier=official``)
- v2 folds equality filters into one AIP-160 expression
  (``/v2/search?filter=query = 'aws' AND tier = 'official'``)

Everything here is pure: no network, no credentials.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple
from urllib.parse import quote, urlencode, urlparse

from ..domain.query import SearchQuery, RepositoryQuery
from ..exceptions import InvalidBaseURLError

# (query field name, SearchQuery attribute), in the order clauses are emitted
SEARCH_FILTER_FIELDS: Tuple[Tuple[str, str], ...] = (
    ('query', 'query'),
    ('family', 'family'),
    ('packageType', 'package_type'),
    ('accountName', 'account_name'),
    ('tier', 'tier'),
)


@dataclass(frozen=True)
class OutboundRequest:
    """Path plus ordered query parameters of one GET request."""
    path: str
    params: Dict[str, str] = field(default_factory=dict)

    def query_string(self) -> str:
        """Encoded query string, keys sorted for a stable rendering."""
        return urlencode(sorted(self.params.items()))

    def url(self, base_url: str) -> str:
        """
        Full URL against ``base_url``.

        Raises:
            InvalidBaseURLError: if ``base_url`` is not an absolute http(s) URL
        """
        base = validate_base_url(base_url)
        query = self.query_string()
        return f"{base}{self.path}?{query}" if query else f"{base}{self.path}"


def validate_base_url(base_url: str) -> str:
    """Return ``base_url`` without a trailing slash, or raise if unusable."""
    try:
        parsed = urlparse(base_url or '')
    except ValueError:
        raise InvalidBaseURLError(base_url)
    if parsed.scheme not in ('http', 'https') or not parsed.netloc:
        raise InvalidBaseURLError(base_url)
    return base_url.rstrip('/')


def escape_filter_value(value: str) -> str:
    """Escape a value for use inside a single-quoted AIP-160 string literal."""
    return value.replace('\\', '\\\\').replace("'", "\\'")


def build_filter_expression(clauses: List[Tuple[str, str]]) -> str:
    """
    Conjoin equality clauses into one AIP-160 expression.

    Args:
        clauses: (field, value) pairs; empty values are skipped

    Returns:
        ``field = 'value' AND ...``, or an empty string when nothing is set
    """
    return ' AND '.join(
        f"{name} = '{escape_filter_value(value)}'"
        for name, value in clauses
        if value
    )


def _segment(value: str) -> str:
    return quote(value, safe='')


def _paging(params: Dict[str, str], size: int, page: int) -> None:
    if size > 0:
        params['size'] = str(size)
    if page > 0:
        params['page'] = str(page)


def _bool(value: bool) -> str:
    return 'true' if value else 'false'


def translate_search(query: SearchQuery) -> OutboundRequest:
    """Build the ``/v{1,2}/search`` request for ``query``."""
    params: Dict[str, str] = {}

    if query.use_v1:
        path = '/v1/search'
        for name, attr in SEARCH_FILTER_FIELDS:
            value = getattr(query, attr)
            if value:
                params[name] = value
    else:
        path = '/v2/search'
        expression = build_filter_expression(
            [(name, getattr(query, attr)) for name, attr in SEARCH_FILTER_FIELDS]
        )
        if expression:
            params['filter'] = expression

    _paging(params, query.size, query.page)

    if query.public is not None:
        params['public'] = _bool(query.public)
    if query.starred is True:
        params['starred'] = 'true'
    # type stays a plain parameter on both revisions
    if query.type:
        params['type'] = query.type

    return OutboundRequest(path=path, params=params)


def translate_repositories(query: RepositoryQuery) -> OutboundRequest:
    """Build the ``/v{1,2}/repositories/{account}`` request for ``query``."""
    version = 'v1' if query.use_v1 else 'v2'
    params: Dict[str, str] = {}

    _paging(params, query.size, query.page)
    if query.filter and not query.use_v1:
        params['filter'] = query.filter

    return OutboundRequest(
        path=f"/{version}/repositories/{_segment(query.account)}",
        params=params,
    )


def translate_package_metadata(account: str, repository: str,
                               version: Optional[str] = None,
                               use_v1: bool = False) -> OutboundRequest:
    """
    Build the package metadata request.

    A specific version is only served by v1, so passing one forces the
    legacy path regardless of ``use_v1``.
    """
    path = f"/{_segment(account)}/{_segment(repository)}"
    if version:
        return OutboundRequest(path=f"/v1/packageMetadata{path}/{_segment(version)}")
    if use_v1:
        return OutboundRequest(path=f"/v1/packageMetadata{path}")
    return OutboundRequest(path=f"/v2/packageMetadata{path}")


def translate_package_assets(account: str, repository: str, version: str,
                             asset_type: str) -> OutboundRequest:
    """Build the v2 asset request; ``redirect=false`` asks for a URL instead of a redirect."""
    return OutboundRequest(
        path=f"/v2/packages/{_segment(account)}/{_segment(repository)}/{_segment(version)}/assets",
        params={'type': asset_type, 'redirect': 'false'},
    )


def translate_package_resources(account: str, repository: str, version: str,
                                resource_group: Optional[str] = None,
                                resource_kind: Optional[str] = None,
                                suffix: Tuple[str, ...] = ()) -> OutboundRequest:
    """
    Build a ``/v1/packages/.../resources`` drill-down request.

    Args:
        account: Account name
        repository: Repository name
        version: Package version
        resource_group: API group of the resource (e.g. ``aws.upbound.io``)
        resource_kind: Kind of the resource (e.g. ``Bucket``)
        suffix: Extra path segments below the kind, such as
            ``('examples',)`` or ``('compositions', name)``
    """
    segments = [account, repository, version, 'resources']
    if resource_group and resource_kind:
        segments.extend([resource_group, resource_kind])
        segments.extend(suffix)
    return OutboundRequest(path='/v1/packages/' + '/'.join(_segment(s) for s in segments))
