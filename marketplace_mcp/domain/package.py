"""
Marketplace response objects.

Each object mirrors one JSON shape returned by the marketplace API and is
built with ``from_api_response()``. Missing fields fall back to empty
values; unknown fields are ignored. Timestamps are kept as the ISO-8601
strings the API sends.
"""

from dataclasses import dataclass
from typing import Optional, Dict, Any, Tuple, List


def _str_tuple(values: Optional[List[Any]]) -> Tuple[str, ...]:
    if not isinstance(values, list):
        return ()
    return tuple(str(v) for v in values)


def _timestamp(value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    return str(value)


def _dicts(values: Any) -> List[Dict[str, Any]]:
    if not isinstance(values, list):
        return []
    return [v for v in values if isinstance(v, dict)]


@dataclass(frozen=True)
class Package:
    """A package entry in search results."""
    account: str = ""
    repository: str = ""
    name: str = ""
    version: str = ""
    description: str = ""
    type: str = ""
    public: bool = False
    tier: str = ""
    stars: int = 0
    downloads: int = 0
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    tags: Tuple[str, ...] = ()
    keywords: Tuple[str, ...] = ()

    @classmethod
    def from_api_response(cls, data: Dict[str, Any]) -> 'Package':
        return cls(
            account=data.get('account') or '',
            repository=data.get('repository') or '',
            name=data.get('name') or '',
            version=data.get('version') or '',
            description=data.get('description') or '',
            type=data.get('type') or '',
            public=bool(data.get('public', False)),
            tier=data.get('tier') or '',
            stars=data.get('stars') or 0,
            downloads=data.get('downloads') or 0,
            created_at=_timestamp(data.get('createdAt')),
            updated_at=_timestamp(data.get('updatedAt')),
            tags=_str_tuple(data.get('tags')),
            keywords=_str_tuple(data.get('keywords')),
        )


@dataclass(frozen=True)
class SearchResponse:
    """Response of ``/v{1,2}/search``."""
    packages: Tuple[Package, ...] = ()
    total: int = 0
    page: int = 0
    size: int = 0

    @classmethod
    def from_api_response(cls, data: Dict[str, Any]) -> 'SearchResponse':
        return cls(
            packages=tuple(Package.from_api_response(p) for p in _dicts(data.get('packages'))),
            total=data.get('total') or 0,
            page=data.get('page') or 0,
            size=data.get('size') or 0,
        )


@dataclass(frozen=True)
class Dependency:
    name: str = ""
    version: str = ""
    constraints: str = ""


@dataclass(frozen=True)
class CRD:
    """A Custom Resource Definition shipped by a package."""
    name: str = ""
    group: str = ""
    version: str = ""
    kind: str = ""
    plural: str = ""
    singular: str = ""
    description: str = ""


@dataclass(frozen=True)
class Example:
    name: str = ""
    description: str = ""
    content: str = ""
    type: str = ""  # yaml, json, etc.


@dataclass(frozen=True)
class CompositionResource:
    name: str = ""
    type: str = ""


@dataclass(frozen=True)
class Composition:
    name: str = ""
    description: str = ""
    content: str = ""
    resources: Tuple[CompositionResource, ...] = ()


@dataclass(frozen=True)
class Function:
    name: str = ""
    description: str = ""
    version: str = ""
    image: str = ""


@dataclass(frozen=True)
class PackageMetadata:
    """Detailed metadata of one package (``/v{1,2}/packageMetadata``)."""
    account: str = ""
    repository: str = ""
    name: str = ""
    version: str = ""
    description: str = ""
    type: str = ""
    public: bool = False
    tier: str = ""
    license: str = ""
    latest_version: str = ""
    versions: Tuple[str, ...] = ()
    homepage: str = ""
    documentation: str = ""
    tags: Tuple[str, ...] = ()
    keywords: Tuple[str, ...] = ()
    dependencies: Tuple[Dependency, ...] = ()
    crds: Tuple[CRD, ...] = ()
    examples: Tuple[Example, ...] = ()
    compositions: Tuple[Composition, ...] = ()
    functions: Tuple[Function, ...] = ()

    @classmethod
    def from_api_response(cls, data: Dict[str, Any]) -> 'PackageMetadata':
        return cls(
            account=data.get('account') or '',
            repository=data.get('repository') or '',
            name=data.get('name') or '',
            version=data.get('version') or '',
            description=data.get('description') or '',
            type=data.get('type') or '',
            public=bool(data.get('public', False)),
            tier=data.get('tier') or '',
            license=data.get('license') or '',
            latest_version=data.get('latestVersion') or '',
            versions=_str_tuple(data.get('versions')),
            homepage=data.get('homepage') or '',
            documentation=data.get('documentation') or '',
            tags=_str_tuple(data.get('tags')),
            keywords=_str_tuple(data.get('keywords')),
            dependencies=tuple(
                Dependency(
                    name=d.get('name') or '',
                    version=d.get('version') or '',
                    constraints=d.get('constraints') or '',
                )
                for d in _dicts(data.get('dependencies'))
            ),
            crds=tuple(
                CRD(
                    name=c.get('name') or '',
                    group=c.get('group') or '',
                    version=c.get('version') or '',
                    kind=c.get('kind') or '',
                    plural=c.get('plural') or '',
                    singular=c.get('singular') or '',
                    description=c.get('description') or '',
                )
                for c in _dicts(data.get('crds'))
            ),
            examples=tuple(
                Example(
                    name=e.get('name') or '',
                    description=e.get('description') or '',
                    content=e.get('content') or '',
                    type=e.get('type') or '',
                )
                for e in _dicts(data.get('examples'))
            ),
            compositions=tuple(
                Composition(
                    name=c.get('name') or '',
                    description=c.get('description') or '',
                    content=c.get('content') or '',
                    resources=tuple(
                        CompositionResource(name=r.get('name') or '', type=r.get('type') or '')
                        for r in _dicts(c.get('resources'))
                    ),
                )
                for c in _dicts(data.get('compositions'))
            ),
            functions=tuple(
                Function(
                    name=f.get('name') or '',
                    description=f.get('description') or '',
                    version=f.get('version') or '',
                    image=f.get('image') or '',
                )
                for f in _dicts(data.get('functions'))
            ),
        )


@dataclass(frozen=True)
class Asset:
    """
    A package asset: either inline ``content`` or a download ``url``.
    """
    url: str = ""
    content: str = ""
    type: str = ""

    @classmethod
    def from_api_response(cls, data: Dict[str, Any]) -> 'Asset':
        return cls(
            url=data.get('url') or '',
            content=data.get('content') or '',
            type=data.get('type') or '',
        )


@dataclass(frozen=True)
class Repository:
    """A repository owned by an account."""
    account: str = ""
    name: str = ""
    description: str = ""
    type: str = ""
    public: bool = False
    policy: str = ""
    package_count: int = 0
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_api_response(cls, data: Dict[str, Any], default_account: str = "") -> 'Repository':
        return cls(
            account=data.get('account') or default_account,
            name=data.get('name') or '',
            description=data.get('description') or '',
            type=data.get('type') or '',
            public=bool(data.get('public', False)),
            policy=data.get('policy') or '',
            package_count=data.get('packageCount') or 0,
            created_at=_timestamp(data.get('createdAt')),
            updated_at=_timestamp(data.get('updatedAt')),
        )


@dataclass(frozen=True)
class RepositoryResponse:
    """Response of ``/v{1,2}/repositories/{account}``."""
    repositories: Tuple[Repository, ...] = ()
    count: int = 0
    page: int = 0
    size: int = 0

    @classmethod
    def from_api_response(cls, data: Dict[str, Any], account: str = "") -> 'RepositoryResponse':
        """
        Build from the API payload.

        Args:
            data: Decoded JSON body
            account: Account the listing was requested for; fills in
                repositories whose ``account`` field is empty
        """
        return cls(
            repositories=tuple(
                Repository.from_api_response(r, default_account=account)
                for r in _dicts(data.get('repositories'))
            ),
            count=data.get('count') or 0,
            page=data.get('page') or 0,
            size=data.get('size') or 0,
        )


@dataclass(frozen=True)
class CRDMeta:
    group: str = ""
    kind: str = ""
    versions: Tuple[str, ...] = ()
    storage_version: str = ""
    scope: str = ""


@dataclass(frozen=True)
class XRDMeta:
    group: str = ""
    kind: str = ""
    versions: Tuple[str, ...] = ()
    referenceable_version: str = ""


@dataclass(frozen=True)
class CompositionMeta:
    name: str = ""
    resource_count: int = 0
    xrd_api_version: str = ""
    xrd_kind: str = ""


@dataclass(frozen=True)
class PackageResources:
    """
    Package summary plus the resources (CRDs, XRDs, compositions) it ships.
    """
    account: str = ""
    repository: str = ""
    name: str = ""
    package_type: str = ""
    public: bool = False
    tier: str = ""
    digest: str = ""
    crds: Tuple[CRDMeta, ...] = ()
    xrds: Tuple[XRDMeta, ...] = ()
    compositions: Tuple[CompositionMeta, ...] = ()

    @classmethod
    def from_api_response(cls, data: Dict[str, Any]) -> 'PackageResources':
        return cls(
            account=data.get('account') or '',
            repository=data.get('repository') or '',
            name=data.get('name') or '',
            package_type=data.get('packageType') or '',
            public=bool(data.get('public', False)),
            tier=data.get('tier') or '',
            digest=data.get('pkgDigest') or '',
            crds=tuple(
                CRDMeta(
                    group=c.get('group') or '',
                    kind=c.get('kind') or '',
                    versions=_str_tuple(c.get('versions')),
                    storage_version=c.get('storageVersion') or '',
                    scope=c.get('scope') or '',
                )
                for c in _dicts(data.get('customResourceDefinitions'))
            ),
            xrds=tuple(
                XRDMeta(
                    group=x.get('group') or '',
                    kind=x.get('kind') or '',
                    versions=_str_tuple(x.get('versions')),
                    referenceable_version=x.get('referenceableVersion') or '',
                )
                for x in _dicts(data.get('compositeResourceDefinitions'))
            ),
            compositions=tuple(
                CompositionMeta(
                    name=c.get('name') or '',
                    resource_count=c.get('resourceCount') or 0,
                    xrd_api_version=c.get('xrdApiVersion') or '',
                    xrd_kind=c.get('xrdKind') or '',
                )
                for c in _dicts(data.get('compositions'))
            ),
        )


@dataclass(frozen=True)
class Examples:
    """Example manifests for one resource kind."""
    examples: Tuple[str, ...] = ()

    @classmethod
    def from_api_response(cls, data: Dict[str, Any]) -> 'Examples':
        return cls(examples=_str_tuple(data.get('examples')))
