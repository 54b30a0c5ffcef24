"""Unit tests for GitHubClient."""

import httpx
import pytest

from core.exceptions import GitHubReposNotFoundError
from infrastructure.github.client import GitHubClient


def _client(handler, **kwargs) -> GitHubClient:
    return GitHubClient(
        base_url="https://api.github.test",
        client_id=kwargs.pop("client_id", ""),
        client_secret=kwargs.pop("client_secret", ""),
        timeout=1.0,
        repo_limit=5,
        transport=httpx.MockTransport(handler),
    )


class TestListRepositories:
    @pytest.mark.asyncio
    async def test_passes_through_repositories(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=[{"name": "linux"}, {"name": "git"}])

        result = await _client(handler).list_repositories("torvalds")

        assert result == [{"name": "linux"}, {"name": "git"}]
        request = seen[0]
        assert request.url.path == "/users/torvalds/repos"
        assert request.url.params["per_page"] == "5"
        assert request.url.params["sort"] == "created"
        assert request.url.params["direction"] == "asc"
        assert "client_id" not in request.url.params

    @pytest.mark.asyncio
    async def test_sends_client_credentials_when_configured(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=[])

        await _client(handler, client_id="id", client_secret="secret").list_repositories("ada")

        assert seen[0].url.params["client_id"] == "id"
        assert seen[0].url.params["client_secret"] == "secret"

    @pytest.mark.asyncio
    async def test_upstream_404(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(404, json={"message": "Not Found"})

        with pytest.raises(GitHubReposNotFoundError) as exc_info:
            await _client(handler).list_repositories("nobody-here")

        assert exc_info.value.status_code == 404
        assert exc_info.value.details == {"username": "nobody-here"}

    @pytest.mark.asyncio
    async def test_transport_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectTimeout("timed out", request=request)

        with pytest.raises(GitHubReposNotFoundError):
            await _client(handler).list_repositories("ada")

    @pytest.mark.asyncio
    async def test_non_json_body(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="<html>rate limited</html>")

        with pytest.raises(GitHubReposNotFoundError) as exc_info:
            await _client(handler).list_repositories("ada")

        assert exc_info.value.status_code == 404
