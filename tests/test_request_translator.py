"""
Tests for marketplace request translation.

Tests cover:
- v1 search: named query parameters
- v2 search: AIP-160 filter expression, conjoined clauses, escaping
- Tri-state public/starred flags and paging
- Repository, metadata, asset and resource paths
- Base URL validation
"""

from urllib.parse import parse_qs, urlparse

import pytest

from marketplace_mcp.domain.query import SearchQuery, RepositoryQuery
from marketplace_mcp.exceptions import InvalidBaseURLError
from marketplace_mcp.infra import request_translator as rt


class TestSearchV1:
    """Tests for /v1/search translation."""

    def test_named_parameters(self):
        req = rt.translate_search(SearchQuery(
            query="aws", family="provider-family-aws", package_type="provider",
            account_name="upbound", tier="official", use_v1=True,
        ))

        assert req.path == "/v1/search"
        assert req.params == {
            "query": "aws",
            "family": "provider-family-aws",
            "packageType": "provider",
            "accountName": "upbound",
            "tier": "official",
        }
        assert "filter" not in req.params

    def test_values_are_not_escaped(self):
        req = rt.translate_search(SearchQuery(query="it's a\\b", tier="official", use_v1=True))
        assert req.params["query"] == "it's a\\b"
        assert req.params["tier"] == "official"

    def test_empty_fields_omitted(self):
        req = rt.translate_search(SearchQuery(query="aws", use_v1=True))
        assert req.params == {"query": "aws"}

    def test_empty_query_has_no_parameters(self):
        req = rt.translate_search(SearchQuery(use_v1=True))
        assert req.params == {}


class TestSearchV2:
    """Tests for /v2/search translation."""

    def test_single_clause(self):
        req = rt.translate_search(SearchQuery(query="aws"))

        assert req.path == "/v2/search"
        assert req.params == {"filter": "query = 'aws'"}

    def test_clauses_are_conjoined(self):
        req = rt.translate_search(SearchQuery(query="aws", tier="official"))
        assert req.params["filter"] == "query = 'aws' AND tier = 'official'"

    def test_all_clauses_in_order(self):
        req = rt.translate_search(SearchQuery(
            query="q", family="f", package_type="p", account_name="a", tier="t",
        ))
        assert req.params["filter"] == (
            "query = 'q' AND family = 'f' AND packageType = 'p' "
            "AND accountName = 'a' AND tier = 't'"
        )

    def test_no_named_filter_parameters(self):
        req = rt.translate_search(SearchQuery(query="aws", account_name="upbound"))
        for name in ("query", "family", "packageType", "accountName", "tier"):
            assert name not in req.params

    def test_no_filter_when_nothing_set(self):
        req = rt.translate_search(SearchQuery(size=5))
        assert "filter" not in req.params

    def test_quote_is_escaped(self):
        req = rt.translate_search(SearchQuery(query="it's"))
        assert req.params["filter"] == "query = 'it\\'s'"

    def test_backslash_is_escaped(self):
        req = rt.translate_search(SearchQuery(query="a\\b"))
        assert req.params["filter"] == "query = 'a\\\\b'"

    def test_type_stays_plain_parameter(self):
        req = rt.translate_search(SearchQuery(type="provider"))
        assert req.params == {"type": "provider"}


class TestSearchCommon:
    """Flags and paging shared by both revisions."""

    @pytest.mark.parametrize("use_v1", [True, False])
    def test_public_tri_state(self, use_v1):
        assert "public" not in rt.translate_search(SearchQuery(use_v1=use_v1)).params
        assert rt.translate_search(SearchQuery(public=True, use_v1=use_v1)).params["public"] == "true"
        assert rt.translate_search(SearchQuery(public=False, use_v1=use_v1)).params["public"] == "false"

    @pytest.mark.parametrize("use_v1", [True, False])
    def test_starred_only_when_true(self, use_v1):
        assert "starred" not in rt.translate_search(SearchQuery(use_v1=use_v1)).params
        assert "starred" not in rt.translate_search(SearchQuery(starred=False, use_v1=use_v1)).params
        assert rt.translate_search(SearchQuery(starred=True, use_v1=use_v1)).params["starred"] == "true"

    def test_paging_only_when_positive(self):
        assert rt.translate_search(SearchQuery()).params == {}
        params = rt.translate_search(SearchQuery(size=20, page=2)).params
        assert params["size"] == "20"
        assert params["page"] == "2"

    def test_page_zero_omitted(self):
        params = rt.translate_search(SearchQuery(size=20, page=0)).params
        assert params == {"size": "20"}

    def test_negative_paging_omitted(self):
        params = rt.translate_search(SearchQuery(size=-1, page=-3)).params
        assert params == {}


class TestRepositories:
    """Tests for repository listing translation."""

    def test_v2_path_and_filter(self):
        req = rt.translate_repositories(RepositoryQuery(
            account="upbound", filter="name = 'x'", size=10, page=1,
        ))
        assert req.path == "/v2/repositories/upbound"
        assert req.params == {"filter": "name = 'x'", "size": "10", "page": "1"}

    def test_v1_ignores_filter(self):
        req = rt.translate_repositories(RepositoryQuery(
            account="upbound", filter="name = 'x'", use_v1=True,
        ))
        assert req.path == "/v1/repositories/upbound"
        assert req.params == {}

    def test_account_is_path_escaped(self):
        req = rt.translate_repositories(RepositoryQuery(account="a/b c"))
        assert req.path == "/v2/repositories/a%2Fb%20c"


class TestPackagePaths:
    """Tests for metadata, asset and resource paths."""

    def test_metadata_default_is_v2(self):
        req = rt.translate_package_metadata("upbound", "provider-aws")
        assert req.path == "/v2/packageMetadata/upbound/provider-aws"
        assert req.params == {}

    def test_metadata_use_v1(self):
        req = rt.translate_package_metadata("upbound", "provider-aws", use_v1=True)
        assert req.path == "/v1/packageMetadata/upbound/provider-aws"

    def test_metadata_version_forces_v1(self):
        req = rt.translate_package_metadata("upbound", "provider-aws", version="v1.2.0")
        assert req.path == "/v1/packageMetadata/upbound/provider-aws/v1.2.0"

    def test_metadata_empty_version_is_latest(self):
        req = rt.translate_package_metadata("upbound", "provider-aws", version="")
        assert req.path == "/v2/packageMetadata/upbound/provider-aws"

    def test_assets(self):
        req = rt.translate_package_assets("upbound", "provider-aws", "v1.0.0", "readme")
        assert req.path == "/v2/packages/upbound/provider-aws/v1.0.0/assets"
        assert req.params == {"type": "readme", "redirect": "false"}

    def test_resources_listing(self):
        req = rt.translate_package_resources("upbound", "provider-aws", "v1.0.0")
        assert req.path == "/v1/packages/upbound/provider-aws/v1.0.0/resources"

    def test_single_resource(self):
        req = rt.translate_package_resources(
            "upbound", "provider-aws", "v1.0.0", "s3.aws.upbound.io", "Bucket",
        )
        assert req.path == "/v1/packages/upbound/provider-aws/v1.0.0/resources/s3.aws.upbound.io/Bucket"

    def test_resource_suffix(self):
        req = rt.translate_package_resources(
            "upbound", "cfg", "v1", "g.io", "XNet", suffix=("compositions", "net-aws"),
        )
        assert req.path == "/v1/packages/upbound/cfg/v1/resources/g.io/XNet/compositions/net-aws"


class TestOutboundRequestURL:
    """Tests for URL rendering and base URL validation."""

    def test_url_with_query(self):
        req = rt.translate_search(SearchQuery(query="aws", size=5))
        url = req.url("https://api.upbound.io")

        parsed = urlparse(url)
        assert parsed.scheme == "https"
        assert parsed.netloc == "api.upbound.io"
        assert parsed.path == "/v2/search"
        assert parse_qs(parsed.query) == {"filter": ["query = 'aws'"], "size": ["5"]}

    def test_url_without_query(self):
        req = rt.translate_package_metadata("a", "r")
        assert req.url("https://api.upbound.io/") == "https://api.upbound.io/v2/packageMetadata/a/r"

    def test_query_string_is_sorted(self):
        req = rt.OutboundRequest(path="/x", params={"b": "2", "a": "1"})
        assert req.query_string() == "a=1&b=2"

    @pytest.mark.parametrize("base_url", ["", "api.upbound.io", "ftp://host", "https://"])
    def test_invalid_base_url(self, base_url):
        req = rt.OutboundRequest(path="/v2/search")
        with pytest.raises(InvalidBaseURLError):
            req.url(base_url)
