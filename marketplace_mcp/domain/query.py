"""
Query domain objects for marketplace-mcp-server.

A query describes one logical marketplace lookup. It is immutable and lives
for a single tool call: built from the tool arguments, translated into an
outbound request, then discarded.
"""

from dataclasses import dataclass
from typing import Optional

DEFAULT_PAGE_SIZE = 20
DEFAULT_PAGE = 0


@dataclass(frozen=True)
class SearchQuery:
    """
    Package search across the marketplace.

    Empty strings mean "no filter". ``public`` and ``starred`` are
    tri-state: ``None`` leaves the filter off, ``True``/``False`` are
    explicit. Page defaults are the caller's job; a ``size`` or ``page`` of
    zero is simply omitted from the request.
    """
    query: str = ""
    family: str = ""
    package_type: str = ""
    account_name: str = ""
    tier: str = ""
    public: Optional[bool] = None
    starred: Optional[bool] = None
    type: str = ""
    size: int = 0
    page: int = 0
    use_v1: bool = False


@dataclass(frozen=True)
class RepositoryQuery:
    """Repository listing for one account."""
    account: str
    filter: str = ""  # AIP-160 expression, honoured by v2 only
    size: int = 0
    page: int = 0
    use_v1: bool = False
