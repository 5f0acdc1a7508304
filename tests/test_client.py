"""Tests for BangumiClient."""

import os
from unittest.mock import patch

import httpx
import pytest
import respx

from bangumi_sdk import (
    BangumiClient,
    BangumiConfigError,
    CollectionType,
    EpisodeType,
    InvalidParameterError,
    RequestBuildError,
    SubjectType,
    UnexpectedStatusError,
)
from bangumi_sdk._internal.endpoints import catalogue
from bangumi_sdk._internal.http import DEFAULT_BASE_URL, DEFAULT_USER_AGENT

API = "https://api.bgm.tv"
BODY = b'{"keyword": "test"}'


def make_client(**kwargs) -> BangumiClient:
    return BangumiClient(token="token", user_agent="tester/1.0", **kwargs)


class TestBangumiClientFromEnv:
    """Tests for BangumiClient.from_env()."""

    def test_from_env_with_all_vars(self):
        """Should read credentials and settings from env."""
        env = {
            "BANGUMI_TOKEN": "env-token",
            "BANGUMI_USER_AGENT": "me/app",
            "BANGUMI_BASE_URL": "http://localhost:8000",
            "BANGUMI_TIMEOUT_MS": "5000",
            "BANGUMI_DEBUG": "1",
        }
        with patch.dict(os.environ, env, clear=True):
            client = BangumiClient.from_env()
        assert client.credentials.token == "env-token"
        assert client.credentials.user_agent == "me/app"
        assert client.base_url == "http://localhost:8000"
        assert client._timeout_ms == 5000
        assert client._debug is True
        client.close()

    def test_from_env_defaults(self):
        """Should fall back to anonymous access against the public API."""
        with patch.dict(os.environ, {}, clear=True):
            client = BangumiClient.from_env()
        assert client.credentials.token == ""
        assert client.credentials.user_agent == DEFAULT_USER_AGENT
        assert client.base_url == DEFAULT_BASE_URL
        assert client._debug is False
        client.close()

    def test_from_env_fallback_to_bgm_token(self):
        """Should accept BGM_TOKEN when BANGUMI_TOKEN is missing."""
        with patch.dict(os.environ, {"BGM_TOKEN": "fallback-token"}, clear=True):
            client = BangumiClient.from_env()
        assert client.credentials.token == "fallback-token"
        client.close()

    def test_from_env_prefers_bangumi_token(self):
        """Should prefer BANGUMI_TOKEN over BGM_TOKEN."""
        env = {"BANGUMI_TOKEN": "preferred", "BGM_TOKEN": "fallback"}
        with patch.dict(os.environ, env, clear=True):
            client = BangumiClient.from_env()
        assert client.credentials.token == "preferred"
        client.close()

    def test_from_env_malformed_timeout_raises(self):
        """Should raise BangumiConfigError when BANGUMI_TIMEOUT_MS is not an integer."""
        env = {"BANGUMI_TIMEOUT_MS": "not_a_number"}
        with patch.dict(os.environ, env, clear=True), pytest.raises(BangumiConfigError):
            BangumiClient.from_env()


class TestBangumiClientLifecycle:
    """Tests for credential snapshots and HTTP client ownership."""

    def test_with_credentials_returns_new_client(self):
        """Should leave the original credentials untouched."""
        client = make_client()
        other = client.with_credentials(token="other")
        assert client.credentials.token == "token"
        assert other.credentials.token == "other"
        assert other.credentials.user_agent == "tester/1.0"
        assert other._http_client is client._http_client
        client.close()

    def test_injected_client_is_not_closed(self):
        """Should never close an injected httpx client."""
        http_client = httpx.Client()
        with make_client(http_client=http_client):
            pass
        assert http_client.is_closed is False
        http_client.close()

    def test_owned_client_is_closed(self):
        """Should close the httpx client it created."""
        with make_client() as client:
            pass
        assert client._http_client.is_closed is True

    @respx.mock
    def test_with_credentials_sends_new_token(self):
        """Should send the derived client's token."""
        route = respx.get(f"{API}/v0/me").mock(return_value=httpx.Response(200))
        client = make_client().with_credentials(token="fresh")

        client.get_me()

        assert route.calls.last.request.headers["authorization"] == "Bearer fresh"

    @respx.mock
    def test_empty_user_agent_is_accepted(self):
        """Should construct with an empty user agent and send it as is."""
        route = respx.get(f"{API}/v0/me").mock(return_value=httpx.Response(200))
        client = make_client().with_credentials(user_agent="")

        client.get_me()

        assert client.credentials.user_agent == ""
        assert route.calls.last.request.headers["user-agent"] == ""

    def test_non_string_token_raises_config_error(self):
        """Should raise BangumiConfigError for credentials that are not strings."""
        with pytest.raises(BangumiConfigError):
            BangumiClient(token=12345)  # type: ignore[arg-type]

    def test_non_ascii_user_agent_raises_build_error(self):
        """Should raise RequestBuildError before sending a non-ASCII user agent."""
        with respx.mock(assert_all_called=False) as router:
            route = router.route(host="api.bgm.tv").mock(return_value=httpx.Response(200))
            with pytest.raises(RequestBuildError):
                BangumiClient(token="t", user_agent="番组计划助手/1.0").get_me()

        assert route.called is False


class TestScenarios:
    """End-to-end request shaping scenarios."""

    @respx.mock
    def test_get_subject_returns_body(self):
        """Should GET the subject with the auth header and return the body."""
        route = respx.get(f"{API}/v0/subjects/300").mock(
            return_value=httpx.Response(200, content=b'{"id": 300}')
        )

        assert make_client().get_subject("300") == b'{"id": 300}'
        assert route.calls.last.request.headers["authorization"] == "Bearer token"

    @respx.mock
    def test_get_subject_not_found(self):
        """Should raise UnexpectedStatusError on 404."""
        respx.get(f"{API}/v0/subjects/300").mock(
            return_value=httpx.Response(404, json={"title": "Not Found"})
        )

        with pytest.raises(UnexpectedStatusError) as exc_info:
            make_client().get_subject("300")
        assert exc_info.value.status_code == 404

    @pytest.mark.parametrize("status", [200, 204])
    @respx.mock
    def test_collect_character_succeeds(self, status):
        """Should POST to the collect path and return True."""
        route = respx.post(f"{API}/v0/characters/123/collect").mock(
            return_value=httpx.Response(status)
        )

        assert make_client().collect_character("123") is True
        assert route.called

    @respx.mock
    def test_collect_character_unauthorized(self):
        """Should raise on 401 instead of returning False."""
        respx.post(f"{API}/v0/characters/123/collect").mock(return_value=httpx.Response(401))

        with pytest.raises(UnexpectedStatusError) as exc_info:
            make_client().collect_character("123")
        assert exc_info.value.status_code == 401

    def test_user_collections_url(self):
        """Should translate labels and keep query order."""
        with respx.mock() as router:
            route = router.route(host="api.bgm.tv").mock(return_value=httpx.Response(200))
            make_client().get_user_collections("alice", "书籍", "想看", "10", "0")

        assert str(route.calls.last.request.url) == (
            f"{API}/v0/users/alice/collections?subject_type=1&type=1&limit=10&offset=0"
        )

    def test_user_collections_empty_offset(self):
        """Should still serialize an empty offset."""
        with respx.mock() as router:
            route = router.route(host="api.bgm.tv").mock(return_value=httpx.Response(200))
            make_client().get_user_collections("alice", "书籍", "想看", "10", "")

        assert str(route.calls.last.request.url).endswith("&limit=10&offset=")

    def test_user_collections_unknown_subject_type(self):
        """Should raise InvalidParameterError without sending anything."""
        with respx.mock(assert_all_called=False) as router:
            route = router.route(host="api.bgm.tv").mock(return_value=httpx.Response(200))
            with pytest.raises(InvalidParameterError):
                make_client().get_user_collections("alice", "不存在", "想看", "10", "0")

        assert not route.called

    def test_repeated_calls_shape_identical_requests(self):
        """Should send the same URL and headers for the same inputs."""
        with respx.mock() as router:
            route = router.route(host="api.bgm.tv").mock(return_value=httpx.Response(200))
            client = make_client()
            client.get_episodes(8, "OP", 20, 0)
            client.get_episodes(8, "OP", 20, 0)

        first, second = (call.request for call in route.calls)
        assert first.url == second.url
        assert first.method == second.method == "GET"
        assert dict(first.headers) == dict(second.headers)


CASES = [
    # (method name, args, kwargs, HTTP method, URL after API, response status, expected result)
    ("search_characters", (BODY,), {"limit": 5, "offset": 10}, "POST", "/v0/search/characters?limit=5&offset=10", 200, b"ok"),
    ("get_character", (1,), {}, "GET", "/v0/characters/1", 200, b"ok"),
    ("collect_character", (1,), {}, "POST", "/v0/characters/1/collect", 204, True),
    ("uncollect_character", (1,), {}, "DELETE", "/v0/characters/1/collect", 204, True),
    ("search_persons", (BODY,), {}, "POST", "/v0/search/persons?limit=30&offset=0", 200, b"ok"),
    ("get_person", (2,), {}, "GET", "/v0/persons/2", 200, b"ok"),
    ("collect_person", (2,), {}, "POST", "/v0/persons/2/collect", 204, True),
    ("uncollect_person", (2,), {}, "DELETE", "/v0/persons/2/collect", 204, True),
    ("search_subjects", (BODY, "", ""), {}, "POST", "/v0/search/subjects?limit=&offset=", 200, b"ok"),
    ("get_subject", (3,), {}, "GET", "/v0/subjects/3", 200, b"ok"),
    ("search_subjects_legacy", ("EVA", SubjectType.ANIME, "large", 0, 10), {}, "GET", "/search/subject/EVA?type=2&responseGroup=large&start=0&max_results=10", 200, b"ok"),
    ("search_subjects_legacy", ("EVA", "未知"), {}, "GET", "/search/subject/EVA?type=0&responseGroup=small&start=0&max_results=25", 200, b"ok"),
    ("get_calendar", (), {}, "GET", "/calendar", 200, b"ok"),
    ("get_episodes", (8, "特别篇", 20, 40), {}, "GET", "/v0/episodes?subject_id=8&type=1&limit=20&offset=40", 200, b"ok"),
    ("get_episodes", (8, "未知"), {}, "GET", "/v0/episodes?subject_id=8&type=0&limit=30&offset=0", 200, b"ok"),
    ("get_episodes", (8, 2), {}, "GET", "/v0/episodes?subject_id=8&type=2&limit=30&offset=0", 200, b"ok"),
    ("get_episode", (9,), {}, "GET", "/v0/episodes/9", 200, b"ok"),
    ("create_index", (), {}, "POST", "/v0/indices", 200, b"ok"),
    ("get_index", (4,), {}, "GET", "/v0/indices/4", 200, b"ok"),
    ("edit_index", (4, BODY), {}, "PUT", "/v0/indices/4", 200, b"ok"),
    ("get_index_subjects", (4, "音乐", 5, 0), {}, "GET", "/v0/indices/4/subjects?type=3&limit=5&offset=0", 200, b"ok"),
    ("get_index_subjects", (4,), {}, "GET", "/v0/indices/4/subjects?type=0&limit=30&offset=0", 200, b"ok"),
    ("add_index_subject", (4, BODY), {}, "POST", "/v0/indices/4/subjects", 200, True),
    ("edit_index_subject", (4, 3, BODY), {}, "PUT", "/v0/indices/4/subjects/3", 204, True),
    ("delete_index_subject", (4, 3), {}, "DELETE", "/v0/indices/4/subjects/3", 204, True),
    ("collect_index", (4,), {}, "POST", "/v0/indices/4/collect", 200, True),
    ("uncollect_index", (4,), {}, "DELETE", "/v0/indices/4/collect", 204, True),
    ("get_user", ("alice",), {}, "GET", "/v0/users/alice", 200, b"ok"),
    ("get_me", (), {}, "GET", "/v0/me", 200, b"ok"),
    ("get_user_collections", ("alice", SubjectType.REAL, CollectionType.DROPPED, 1, 2), {}, "GET", "/v0/users/alice/collections?subject_type=6&type=5&limit=1&offset=2", 200, b"ok"),
    ("get_user_collections", ("alice", "游戏"), {}, "GET", "/v0/users/alice/collections?subject_type=4&type=0&limit=30&offset=0", 200, b"ok"),
    ("get_user_collection", ("alice", 3), {}, "GET", "/v0/users/alice/collections/3", 200, b"ok"),
    ("create_or_edit_collection", (3, BODY), {}, "POST", "/v0/users/-/collections/3", 204, True),
    ("edit_collection", (3, BODY), {}, "PATCH", "/v0/users/-/collections/3", 204, True),
    ("get_episode_collections", (3, EpisodeType.ED, 10, 0), {}, "GET", "/v0/users/-/collections/3/episodes?episode_type=3&limit=10&offset=0", 200, b"ok"),
    ("edit_episode_collections", (3, BODY), {}, "PATCH", "/v0/users/-/collections/3/episodes", 204, True),
    ("get_episode_collection", (9,), {}, "GET", "/v0/users/-/collections/-/episodes/9", 200, b"ok"),
    ("edit_episode_collection", (9, BODY), {}, "PUT", "/v0/users/-/collections/-/episodes/9", 204, True),
    ("get_user_character_collections", ("alice",), {}, "GET", "/v0/users/alice/collections/-/characters", 200, b"ok"),
    ("get_user_character_collection", ("alice", 1), {}, "GET", "/v0/users/alice/collections/-/characters/1", 200, b"ok"),
    ("get_user_person_collections", ("alice",), {}, "GET", "/v0/users/alice/collections/-/persons", 200, b"ok"),
    ("get_user_person_collection", ("alice", 2), {}, "GET", "/v0/users/alice/collections/-/persons/2", 200, b"ok"),
    ("get_person_revisions", (2, 10, 0), {}, "GET", "/v0/revisions/persons?person_id=2&limit=10&offset=0", 200, b"ok"),
    ("get_person_revision", (7,), {}, "GET", "/v0/revisions/persons/7", 200, b"ok"),
    ("get_character_revisions", (1, 10, 0), {}, "GET", "/v0/revisions/characters?character_id=1&limit=10&offset=0", 200, b"ok"),
    ("get_character_revision", (7,), {}, "GET", "/v0/revisions/characters/7", 200, b"ok"),
    ("get_subject_revisions", (3, 10, 0), {}, "GET", "/v0/revisions/subjects?subject_id=3&limit=10&offset=0", 200, b"ok"),
    ("get_subject_revision", (7,), {}, "GET", "/v0/revisions/subjects/7", 200, b"ok"),
    ("get_episode_revisions", (9, 10, 0), {}, "GET", "/v0/revisions/episodes?episode_id=9&limit=10&offset=0", 200, b"ok"),
    ("get_episode_revision", (7,), {}, "GET", "/v0/revisions/episodes/7", 200, b"ok"),
]


class TestEndpointMethods:
    """Tests for every typed endpoint method."""

    @pytest.mark.parametrize(
        ("name", "args", "kwargs", "http_method", "path", "status", "expected"),
        CASES,
        ids=[f"{case[0]}-{index}" for index, case in enumerate(CASES)],
    )
    def test_request_shape(self, name, args, kwargs, http_method, path, status, expected):
        """Should send the expected method and URL and return the expected result."""
        with respx.mock() as router:
            route = router.route(host="api.bgm.tv").mock(
                return_value=httpx.Response(status, content=b"ok" if status == 200 else b"")
            )
            result = getattr(make_client(), name)(*args, **kwargs)

        request = route.calls.last.request
        assert request.method == http_method
        assert str(request.url) == f"{API}{path}"
        assert result == expected

    @pytest.mark.parametrize(
        ("name", "args"),
        [
            ("edit_index", (4, BODY)),
            ("add_index_subject", (4, BODY)),
            ("create_or_edit_collection", (3, BODY)),
            ("edit_episode_collection", (9, BODY)),
            ("search_subjects", (BODY,)),
        ],
    )
    def test_body_forwarded(self, name, args):
        """Should forward request bodies unmodified."""
        with respx.mock() as router:
            route = router.route(host="api.bgm.tv").mock(return_value=httpx.Response(200))
            getattr(make_client(), name)(*args)

        assert route.calls.last.request.content == BODY

    def test_success_endpoint_rejects_body_status(self):
        """Should reject 201 on a success-shaped endpoint."""
        with respx.mock() as router:
            router.route(host="api.bgm.tv").mock(return_value=httpx.Response(201))
            with pytest.raises(UnexpectedStatusError):
                make_client().add_index_subject(4, BODY)


class TestGenericCall:
    """Tests for BangumiClient.call()."""

    def test_call_by_name(self):
        """Should resolve endpoints by name."""
        with respx.mock() as router:
            route = router.route(host="api.bgm.tv").mock(
                return_value=httpx.Response(200, content=b"[]")
            )
            result = make_client().call("get_calendar")

        assert result == b"[]"
        assert str(route.calls.last.request.url) == f"{API}/calendar"

    def test_call_by_descriptor(self):
        """Should accept a descriptor from the catalogue."""
        with respx.mock() as router:
            router.route(host="api.bgm.tv").mock(return_value=httpx.Response(204))
            assert make_client().call(catalogue.COLLECT_INDEX, index_id=4) is True

    def test_unknown_endpoint(self):
        """Should raise for an unknown endpoint name."""
        with pytest.raises(InvalidParameterError):
            make_client().call("get_everything")

    def test_missing_parameter(self):
        """Should raise for a missing template parameter."""
        with pytest.raises(InvalidParameterError) as exc_info:
            make_client().call("get_subject")
        assert exc_info.value.parameter == "subject_id"

    def test_body_on_bodiless_endpoint(self):
        """Should refuse a body for endpoints that take none."""
        with pytest.raises(InvalidParameterError):
            make_client().call("get_subject", BODY, subject_id=3)

    def test_custom_base_url(self):
        """Should send requests to the configured host."""
        with respx.mock() as router:
            route = router.route(host="localhost").mock(return_value=httpx.Response(200))
            make_client(base_url="http://localhost:8000/").get_me()

        assert str(route.calls.last.request.url) == "http://localhost:8000/v0/me"

    def test_build_url_sends_nothing(self):
        """Should build the URL without a request."""
        url = make_client().build_url("get_user_collections", username="bob", subject_type="动漫", type="在看", limit=1, offset=0)
        assert url == f"{API}/v0/users/bob/collections?subject_type=2&type=3&limit=1&offset=0"
