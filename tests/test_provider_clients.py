"""Integration tests for the GitLab, Bitbucket and Gitea adapters using respx."""

import httpx
import pytest
import respx
from payloads import bitbucket_repo, gitea_repo, gitlab_project

from repo_roundup.config import ProviderConfig
from repo_roundup.scm.bitbucket import BitbucketClient
from repo_roundup.scm.errors import EndpointConfigurationError, UpstreamAPIError
from repo_roundup.scm.gitea import GiteaClient
from repo_roundup.scm.gitlab import GitLabClient

GITLAB_API = "https://gitlab.com/api/v4"
BITBUCKET_API = "https://api.bitbucket.org/2.0"
GITEA_API = "https://gitea.example.com/api/v1"


class TestGitLabClient:
    """Tests for the GitLab adapter."""

    def test_endpoints(self, gitlab_config: ProviderConfig) -> None:
        """Test public and self-managed API roots."""
        assert GitLabClient.new_client(gitlab_config).api_url == GITLAB_API

        config = gitlab_config.model_copy(update={"base_url": "https://gitlab.example.com/"})
        client = GitLabClient.new_client(config)

        assert client.api_url == "https://gitlab.example.com/api/v4"
        assert client.upload_url == client.api_url

    def test_unparseable_base_url(self, gitlab_config: ProviderConfig) -> None:
        """Test a base URL without a scheme is rejected."""
        config = gitlab_config.model_copy(update={"base_url": "gitlab.example.com"})
        with pytest.raises(EndpointConfigurationError):
            GitLabClient.new_client(config)

    def test_clone_credentials(self, gitlab_config: ProviderConfig) -> None:
        """Test GitLab clone credentials use the oauth2 user."""
        client = GitLabClient.new_client(gitlab_config)
        assert client.clone_credentials() == f"oauth2:{gitlab_config.token}"

    @pytest.mark.asyncio
    @respx.mock
    async def test_group_pagination(self, gitlab_config: ProviderConfig) -> None:
        """Test X-Next-Page drives pagination over a group and its subgroups."""
        route = respx.get(f"{GITLAB_API}/groups/acme/platform/projects").mock(
            side_effect=[
                httpx.Response(
                    200,
                    json=[gitlab_project("api"), gitlab_project("web")],
                    headers={"x-next-page": "2"},
                ),
                httpx.Response(
                    200,
                    json=[gitlab_project("infra", forked_from_project={"id": 1})],
                    headers={"x-next-page": ""},
                ),
            ]
        )

        async with GitLabClient.new_client(gitlab_config) as client:
            repos = await client.get_org_repos("acme/platform")

        assert route.call_count == 2
        first = route.calls[0].request
        assert b"/groups/acme%2Fplatform/projects" in first.url.raw_path
        assert first.url.params["include_subgroups"] == "true"
        assert first.headers["private-token"] == gitlab_config.token
        assert route.calls[1].request.url.params["page"] == "2"
        assert [r.name for r in repos] == ["api", "web", "infra"]
        assert repos[0].owner_type == "Organization"
        assert repos[0].has_wiki is True
        assert repos[2].fork is True

    @pytest.mark.asyncio
    @respx.mock
    async def test_authenticated_user(self, gitlab_config: ProviderConfig) -> None:
        """Test the membership listing keeps only user namespaces."""
        respx.get(f"{GITLAB_API}/user").mock(
            return_value=httpx.Response(200, json={"username": "jdoe"})
        )
        route = respx.get(f"{GITLAB_API}/projects").mock(
            return_value=httpx.Response(
                200,
                json=[
                    gitlab_project("dotfiles", namespace={"kind": "user", "path": "jdoe"}),
                    gitlab_project("platform"),
                ],
            )
        )

        async with GitLabClient.new_client(gitlab_config) as client:
            repos = await client.get_user_repos("jdoe")

        assert route.calls[0].request.url.params["membership"] == "true"
        assert [r.name for r in repos] == ["dotfiles"]

    @pytest.mark.asyncio
    @respx.mock
    async def test_non_numeric_next_page_header(self, gitlab_config: ProviderConfig) -> None:
        """Test a garbled X-Next-Page header fails as an upstream error."""
        respx.get(f"{GITLAB_API}/groups/acme/projects").mock(
            return_value=httpx.Response(
                200, json=[gitlab_project("api")], headers={"x-next-page": "two"}
            )
        )

        async with GitLabClient.new_client(gitlab_config) as client:
            with pytest.raises(UpstreamAPIError, match="Non-numeric X-Next-Page"):
                await client.get_org_repos("acme")

    def test_tag_list_fallback(self, gitlab_config: ProviderConfig) -> None:
        """Test older instances reporting tag_list instead of topics."""
        project = gitlab_project("api", tag_list=["infra"])
        del project["topics"]

        repo = GitLabClient.new_client(gitlab_config).to_raw_repo(project)

        assert repo.topics == ("infra",)


class TestBitbucketClient:
    """Tests for the Bitbucket adapter."""

    def test_clone_credentials(self, bitbucket_config: ProviderConfig) -> None:
        """Test Bitbucket clone credentials use the x-token-auth user."""
        client = BitbucketClient.new_client(bitbucket_config)
        assert client.clone_credentials() == f"x-token-auth:{bitbucket_config.token}"

    @pytest.mark.asyncio
    @respx.mock
    async def test_workspace_pagination(self, bitbucket_config: ProviderConfig) -> None:
        """Test the body's next link drives pagination."""
        route = respx.get(f"{BITBUCKET_API}/repositories/acme").mock(
            side_effect=[
                httpx.Response(
                    200,
                    json={
                        "values": [bitbucket_repo("api")],
                        "next": f"{BITBUCKET_API}/repositories/acme?pagelen=100&page=2",
                    },
                ),
                httpx.Response(200, json={"values": [bitbucket_repo("web", parent={})]}),
            ]
        )

        async with BitbucketClient.new_client(bitbucket_config) as client:
            repos = await client.get_org_repos("acme")

        assert route.call_count == 2
        assert route.calls[0].request.headers["authorization"] == "Bearer bb-access-token-123"
        assert route.calls[0].request.url.params["pagelen"] == "100"
        assert route.calls[1].request.url.params["page"] == "2"
        assert [r.name for r in repos] == ["api", "web"]
        assert repos[0].https_url == "https://bitbucket.org/acme/api.git"
        assert repos[0].ssh_url == "git@bitbucket.org:acme/api.git"
        assert repos[0].default_branch == "main"
        assert repos[0].owner_type == "Organization"
        assert repos[1].fork is True

    @pytest.mark.asyncio
    @respx.mock
    async def test_missing_values(self, bitbucket_config: ProviderConfig) -> None:
        """Test a body without values is rejected."""
        respx.get(f"{BITBUCKET_API}/repositories/acme").mock(
            return_value=httpx.Response(200, json={"type": "error"})
        )

        async with BitbucketClient.new_client(bitbucket_config) as client:
            with pytest.raises(UpstreamAPIError, match="values"):
                await client.get_org_repos("acme")

    def test_missing_clone_link(self, bitbucket_config: ProviderConfig) -> None:
        """Test a repository without an SSH link cannot be converted."""
        repo = bitbucket_repo("api")
        repo["links"]["clone"] = repo["links"]["clone"][:1]

        with pytest.raises(KeyError):
            BitbucketClient.new_client(bitbucket_config).to_raw_repo(repo)


class TestGiteaClient:
    """Tests for the Gitea adapter."""

    def test_endpoints(self, gitea_config: ProviderConfig) -> None:
        """Test the API root below a self-hosted instance."""
        client = GiteaClient.new_client(gitea_config)

        assert client.api_url == GITEA_API
        assert client.upload_url == GITEA_API

    def test_page_size_limit(self, gitea_config: ProviderConfig) -> None:
        """Test Gitea's lower page size maximum."""
        assert GiteaClient.new_client(gitea_config).page_size == 50

    @pytest.mark.asyncio
    @respx.mock
    async def test_org_pagination(self, gitea_config: ProviderConfig) -> None:
        """Test Link header pagination with the limit parameter."""
        route = respx.get(f"{GITEA_API}/orgs/acme/repos").mock(
            side_effect=[
                httpx.Response(
                    200,
                    json=[gitea_repo("api")],
                    headers={"link": f'<{GITEA_API}/orgs/acme/repos?limit=50&page=2>; rel="next"'},
                ),
                httpx.Response(200, json=[gitea_repo("web")]),
            ]
        )

        async with GiteaClient.new_client(gitea_config) as client:
            repos = await client.get_org_repos("acme")

        first = route.calls[0].request
        assert first.url.params["limit"] == "50"
        assert first.headers["authorization"] == f"token {gitea_config.token}"
        assert [r.name for r in repos] == ["api", "web"]
        assert repos[0].owner_type is None

    @pytest.mark.asyncio
    @respx.mock
    async def test_authenticated_user(self, gitea_config: ProviderConfig) -> None:
        """Test owner type is inferred from the authenticated login."""
        respx.get(f"{GITEA_API}/user").mock(
            return_value=httpx.Response(200, json={"login": "jdoe"})
        )
        respx.get(f"{GITEA_API}/user/repos").mock(
            return_value=httpx.Response(
                200,
                json=[
                    gitea_repo("notes", owner="JDoe"),
                    gitea_repo("platform", owner="acme"),
                ],
            )
        )

        async with GiteaClient.new_client(gitea_config) as client:
            repos = await client.get_user_repos("jdoe")

        assert [r.name for r in repos] == ["notes"]
        assert repos[0].owner_type == "User"
