"""
Tests for the marketplace HTTP client.

Tests cover:
- Request construction (URL, SID cookie, timeout, User-Agent)
- Status mapping (401/403, other non-200, transport failures)
- Asset responses: 307 redirect, object body, array body, empty array
- Repository account fill-in
- Atomic settings replacement
"""

import threading
from unittest.mock import patch, Mock

import pytest
import requests

from marketplace_mcp.domain.query import SearchQuery, RepositoryQuery
from marketplace_mcp.domain.package import Asset
from marketplace_mcp.exceptions import (
    AuthenticationRequiredError,
    InvalidBaseURLError,
    RequestFailedError,
    ResponseDecodeError,
)
from marketplace_mcp.infra.marketplace_client import (
    MarketplaceClient,
    ClientSettings,
    SESSION_COOKIE,
    USER_AGENT,
)

BASE_URL = "https://api.upbound.io"


def _response(status_code=200, json_data=None, text="", headers=None):
    response = Mock()
    response.status_code = status_code
    response.text = text
    response.headers = headers or {}
    if isinstance(json_data, Exception):
        response.json = Mock(side_effect=json_data)
    else:
        response.json = Mock(return_value=json_data)
    return response


SAMPLE_SEARCH = {
    "packages": [
        {
            "account": "upbound",
            "repository": "provider-aws-s3",
            "name": "provider-aws-s3",
            "version": "v1.2.0",
            "description": "AWS S3 provider",
            "type": "provider",
            "public": True,
            "tier": "official",
            "stars": 12,
            "tags": ["aws", "s3"],
        }
    ],
    "total": 1,
    "page": 0,
    "size": 20,
}


class TestClientRequests:
    """Tests for outbound request construction."""

    def test_user_agent_header(self):
        client = MarketplaceClient(base_url=BASE_URL)
        assert client.session.headers['User-Agent'] == USER_AGENT

    def test_search_url_and_cookie(self):
        client = MarketplaceClient(base_url=BASE_URL, token="tok-123", timeout=7)

        with patch.object(client.session, 'get', return_value=_response(json_data=SAMPLE_SEARCH)) as mock_get:
            result = client.search_packages(SearchQuery(query="aws", size=20))

        url = mock_get.call_args[0][0]
        kwargs = mock_get.call_args[1]
        assert url.startswith(f"{BASE_URL}/v2/search?")
        assert "filter=" in url
        assert kwargs['cookies'] == {SESSION_COOKIE: "tok-123"}
        assert kwargs['timeout'] == 7

        assert result.total == 1
        assert result.packages[0].repository == "provider-aws-s3"
        assert result.packages[0].tags == ("aws", "s3")

    def test_no_cookie_without_token(self):
        client = MarketplaceClient(base_url=BASE_URL)

        with patch.object(client.session, 'get', return_value=_response(json_data=SAMPLE_SEARCH)) as mock_get:
            client.search_packages(SearchQuery())

        assert mock_get.call_args[1]['cookies'] is None

    def test_invalid_base_url_sends_nothing(self):
        client = MarketplaceClient(base_url="not a url")

        with patch.object(client.session, 'get') as mock_get:
            with pytest.raises(InvalidBaseURLError):
                client.search_packages(SearchQuery(query="aws"))

        mock_get.assert_not_called()

    def test_empty_base_url_rejected(self):
        client = MarketplaceClient()

        with patch.object(client.session, 'get') as mock_get:
            with pytest.raises(InvalidBaseURLError):
                client.get_package_metadata("upbound", "provider-aws")

        mock_get.assert_not_called()


class TestClientStatusMapping:
    """Tests for status code handling."""

    @pytest.mark.parametrize("status", [401, 403])
    def test_auth_required(self, status):
        client = MarketplaceClient(base_url=BASE_URL)

        with patch.object(client.session, 'get', return_value=_response(status, text="denied")):
            with pytest.raises(AuthenticationRequiredError):
                client.get_repositories(RepositoryQuery(account="upbound"))

    def test_other_status_carries_body(self):
        client = MarketplaceClient(base_url=BASE_URL)

        with patch.object(client.session, 'get', return_value=_response(500, text="boom")):
            with pytest.raises(RequestFailedError) as exc_info:
                client.search_packages(SearchQuery())

        assert exc_info.value.status_code == 500
        assert exc_info.value.body == "boom"
        assert "500" in str(exc_info.value)
        assert "boom" in str(exc_info.value)

    def test_not_found(self):
        client = MarketplaceClient(base_url=BASE_URL)

        with patch.object(client.session, 'get', return_value=_response(404, text="not found")):
            with pytest.raises(RequestFailedError) as exc_info:
                client.get_package_metadata("upbound", "missing")

        assert exc_info.value.status_code == 404

    def test_network_error(self):
        client = MarketplaceClient(base_url=BASE_URL)

        with patch.object(client.session, 'get', side_effect=requests.ConnectionError("refused")):
            with pytest.raises(RequestFailedError) as exc_info:
                client.search_packages(SearchQuery())

        assert exc_info.value.status_code is None
        assert "failed to execute request" in str(exc_info.value)

    def test_invalid_json(self):
        client = MarketplaceClient(base_url=BASE_URL)

        with patch.object(client.session, 'get', return_value=_response(json_data=ValueError("bad"))):
            with pytest.raises(ResponseDecodeError):
                client.search_packages(SearchQuery())

    def test_non_object_json(self):
        client = MarketplaceClient(base_url=BASE_URL)

        with patch.object(client.session, 'get', return_value=_response(json_data=[1, 2])):
            with pytest.raises(ResponseDecodeError):
                client.get_package_metadata("upbound", "provider-aws")

    def test_forbidden_on_resources(self):
        client = MarketplaceClient(base_url=BASE_URL)

        with patch.object(client.session, 'get', return_value=_response(403, text="forbidden")):
            with pytest.raises(AuthenticationRequiredError):
                client.get_package_resources("upbound", "private", "v1.0.0")


class TestClientAssets:
    """Tests for get_package_assets()."""

    def test_redirect_uses_location(self):
        client = MarketplaceClient(base_url=BASE_URL)
        response = _response(307, headers={'Location': "https://cdn.example.com/readme.md"})

        with patch.object(client.session, 'get', return_value=response) as mock_get:
            asset = client.get_package_assets("upbound", "provider-aws", "v1.0.0", "readme")

        assert asset == Asset(url="https://cdn.example.com/readme.md")
        response.json.assert_not_called()
        assert mock_get.call_args[1]['allow_redirects'] is False
        assert "redirect=false" in mock_get.call_args[0][0]
        assert "type=readme" in mock_get.call_args[0][0]

    def test_object_body(self):
        client = MarketplaceClient(base_url=BASE_URL)
        body = {"url": "https://cdn/x", "content": "# Hi", "type": "markdown"}

        with patch.object(client.session, 'get', return_value=_response(json_data=body)):
            asset = client.get_package_assets("upbound", "provider-aws", "v1.0.0", "readme")

        assert asset == Asset(url="https://cdn/x", content="# Hi", type="markdown")

    def test_array_body_first_wins(self):
        client = MarketplaceClient(base_url=BASE_URL)
        body = [{"url": "https://cdn/first"}, {"url": "https://cdn/second"}]

        with patch.object(client.session, 'get', return_value=_response(json_data=body)):
            asset = client.get_package_assets("upbound", "provider-aws", "v1.0.0", "docs")

        assert asset.url == "https://cdn/first"

    def test_empty_array_is_empty_asset(self):
        client = MarketplaceClient(base_url=BASE_URL)

        with patch.object(client.session, 'get', return_value=_response(json_data=[])):
            asset = client.get_package_assets("upbound", "provider-aws", "v1.0.0", "sbom")

        assert asset == Asset()

    def test_scalar_body_rejected(self):
        client = MarketplaceClient(base_url=BASE_URL)

        with patch.object(client.session, 'get', return_value=_response(json_data="nope")):
            with pytest.raises(ResponseDecodeError):
                client.get_package_assets("upbound", "provider-aws", "v1.0.0", "icon")

    def test_auth_required(self):
        client = MarketplaceClient(base_url=BASE_URL)

        with patch.object(client.session, 'get', return_value=_response(401)):
            with pytest.raises(AuthenticationRequiredError):
                client.get_package_assets("upbound", "private", "v1.0.0", "readme")

    def test_response_closed(self):
        client = MarketplaceClient(base_url=BASE_URL)
        response = _response(json_data={"url": "x"})

        with patch.object(client.session, 'get', return_value=response):
            client.get_package_assets("upbound", "provider-aws", "v1.0.0", "readme")

        response.close.assert_called_once()


class TestClientRepositories:
    """Tests for get_repositories()."""

    def test_account_filled_in(self):
        client = MarketplaceClient(base_url=BASE_URL)
        body = {
            "repositories": [
                {"name": "provider-aws", "public": True},
                {"name": "other", "account": "someone-else"},
            ],
            "count": 2,
        }

        with patch.object(client.session, 'get', return_value=_response(json_data=body)) as mock_get:
            result = client.get_repositories(RepositoryQuery(account="upbound", size=20))

        assert mock_get.call_args[0][0] == f"{BASE_URL}/v2/repositories/upbound?size=20"
        assert result.count == 2
        assert result.repositories[0].account == "upbound"
        assert result.repositories[1].account == "someone-else"


class TestClientResources:
    """Tests for the package resource endpoints."""

    def test_resources_listing(self):
        client = MarketplaceClient(base_url=BASE_URL)
        body = {
            "account": "upbound",
            "repository": "provider-aws-s3",
            "packageType": "provider",
            "pkgDigest": "sha256:abc",
            "customResourceDefinitions": [
                {"group": "s3.aws.upbound.io", "kind": "Bucket", "versions": ["v1beta1"]}
            ],
        }

        with patch.object(client.session, 'get', return_value=_response(json_data=body)):
            result = client.get_package_resources("upbound", "provider-aws-s3", "v1.0.0")

        assert result.digest == "sha256:abc"
        assert result.crds[0].kind == "Bucket"
        assert result.crds[0].versions == ("v1beta1",)

    def test_resource_is_passed_through(self):
        client = MarketplaceClient(base_url=BASE_URL)
        raw = '{"kind": "CustomResourceDefinition",  "spec": {}}'

        with patch.object(client.session, 'get', return_value=_response(text=raw)) as mock_get:
            text = client.get_package_resource("upbound", "p", "v1", "s3.aws.upbound.io", "Bucket")

        assert text == raw
        assert mock_get.call_args[0][0].endswith("/resources/s3.aws.upbound.io/Bucket")

    def test_examples(self):
        client = MarketplaceClient(base_url=BASE_URL)

        with patch.object(client.session, 'get', return_value=_response(json_data={"examples": ["a: 1"]})) as mock_get:
            result = client.get_package_resource_examples("upbound", "p", "v1", "g.io", "Kind")

        assert result.examples == ("a: 1",)
        assert mock_get.call_args[0][0].endswith("/resources/g.io/Kind/examples")

    def test_composition_is_passed_through(self):
        client = MarketplaceClient(base_url=BASE_URL)

        with patch.object(client.session, 'get', return_value=_response(text="{}")) as mock_get:
            text = client.get_package_composition("upbound", "p", "v1", "g.io", "XNet", "net-aws")

        assert text == "{}"
        assert mock_get.call_args[0][0].endswith("/resources/g.io/XNet/compositions/net-aws")


class TestClientSettings:
    """Tests for the connection settings snapshot."""

    def test_configure_partial(self):
        client = MarketplaceClient(base_url=BASE_URL, token="old")

        client.configure(token="new")

        assert client.settings == ClientSettings(base_url=BASE_URL, token="new")

    def test_configure_both(self):
        client = MarketplaceClient(base_url=BASE_URL, token="old")

        client.configure(base_url="https://api.example.com", token="new")

        assert client.settings == ClientSettings(base_url="https://api.example.com", token="new")

    def test_setters(self):
        client = MarketplaceClient()
        client.set_base_url(BASE_URL)
        client.set_token("t")
        assert client.settings == ClientSettings(base_url=BASE_URL, token="t")

    def test_concurrent_readers_see_consistent_pairs(self):
        client = MarketplaceClient(base_url="https://api.a.io", token="a")
        pairs = {("https://api.a.io", "a"), ("https://api.b.io", "b")}
        seen = []

        def writer():
            for i in range(500):
                name = "a" if i % 2 else "b"
                client.configure(base_url=f"https://api.{name}.io", token=name)

        def reader():
            for _ in range(500):
                s = client.settings
                seen.append((s.base_url, s.token))

        threads = [threading.Thread(target=writer), threading.Thread(target=reader)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert set(seen) <= pairs
