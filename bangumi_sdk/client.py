"""User-facing client for the Bangumi API.

Example usage:
    from bangumi_sdk import BangumiClient, CollectionType, SubjectType

    with BangumiClient(token="your-token", user_agent="me/my-app") as client:
        subject = client.get_subject(300)
        collections = client.get_user_collections(
            "alice", SubjectType.ANIME, CollectionType.DOING, limit=10, offset=0
        )
        client.collect_character(123)

Read endpoints return the raw response bytes; mutation endpoints return True.
Request bodies are passed through as pre-encoded JSON, and responses are not
parsed. Every failure raises a BangumiError subclass.
"""

import os
from types import TracebackType
from typing import Any

import httpx
from pydantic import ValidationError

from bangumi_sdk._internal.dispatch import Credentials, Dispatcher
from bangumi_sdk._internal.endpoints import ENDPOINTS, Endpoint
from bangumi_sdk._internal.endpoints import catalogue as ep
from bangumi_sdk._internal.http import (
    DEFAULT_BASE_URL,
    DEFAULT_USER_AGENT,
    create_http_client,
)
from bangumi_sdk.exceptions import BangumiConfigError, InvalidParameterError
from bangumi_sdk.models.enums import CollectionType, EpisodeType, SubjectType

DEFAULT_TIMEOUT_MS = 30_000
DEFAULT_LIMIT = 30
DEFAULT_LEGACY_MAX_RESULTS = 25

Param = str | int
Body = bytes | str | None


class BangumiClient:
    """Typed client for the Bangumi API.

    Credentials are an immutable snapshot: use `with_credentials()` to get a
    client with a different token rather than mutating this one. Concurrent
    calls on one client are safe as long as the underlying httpx client is.

    Use `BangumiClient.from_env()` to create a client from environment variables.
    """

    def __init__(
        self,
        *,
        token: str = "",
        user_agent: str = DEFAULT_USER_AGENT,
        base_url: str = DEFAULT_BASE_URL,
        timeout_ms: int = DEFAULT_TIMEOUT_MS,
        http_client: httpx.Client | None = None,
        debug: bool = False,
    ) -> None:
        """Initialize the client.

        Args:
            token: Bangumi access token. Empty for anonymous access.
            user_agent: User-Agent header value. Bangumi asks for one that
                identifies the application.
            base_url: API host, e.g. "https://api.bgm.tv".
            timeout_ms: Request timeout in milliseconds. Ignored when
                http_client is given.
            http_client: Optional httpx client to send requests with. It is
                not closed by this client.
            debug: Enable debug logging to stderr.

        Raises:
            BangumiConfigError: token or user_agent is not a string.
        """
        try:
            self._credentials = Credentials(token=token, user_agent=user_agent)
        except ValidationError as e:
            raise BangumiConfigError(f"Invalid credentials: {e}") from e
        self._base_url = base_url
        self._timeout_ms = timeout_ms
        self._debug = debug
        self._owns_http_client = http_client is None
        self._http_client = (
            create_http_client(timeout=timeout_ms / 1000) if http_client is None else http_client
        )
        self._dispatcher = Dispatcher(self._credentials, self._http_client, debug=debug)

    @classmethod
    def from_env(cls, *, http_client: httpx.Client | None = None) -> "BangumiClient":
        """Create a client from environment variables.

        Environment variables (all optional):
            BANGUMI_TOKEN: Access token (BGM_TOKEN is accepted as a fallback).
            BANGUMI_USER_AGENT: User-Agent header value.
            BANGUMI_BASE_URL: API host.
            BANGUMI_TIMEOUT_MS: Request timeout in milliseconds.
            BANGUMI_DEBUG: Set to "1" to enable debug logging.

        Returns:
            A configured BangumiClient.

        Raises:
            BangumiConfigError: If BANGUMI_TIMEOUT_MS is not a valid integer.
        """
        token = os.environ.get("BANGUMI_TOKEN") or os.environ.get("BGM_TOKEN", "")
        user_agent = os.environ.get("BANGUMI_USER_AGENT") or DEFAULT_USER_AGENT
        base_url = os.environ.get("BANGUMI_BASE_URL") or DEFAULT_BASE_URL
        debug = os.environ.get("BANGUMI_DEBUG", "") == "1"

        raw_timeout = os.environ.get("BANGUMI_TIMEOUT_MS", str(DEFAULT_TIMEOUT_MS))
        try:
            timeout_ms = int(raw_timeout)
        except ValueError as e:
            raise BangumiConfigError(
                f"BANGUMI_TIMEOUT_MS must be an integer, got {raw_timeout!r}"
            ) from e

        return cls(
            token=token,
            user_agent=user_agent,
            base_url=base_url,
            timeout_ms=timeout_ms,
            http_client=http_client,
            debug=debug,
        )

    def with_credentials(
        self,
        *,
        token: str | None = None,
        user_agent: str | None = None,
    ) -> "BangumiClient":
        """Return a client with different credentials sharing this HTTP client.

        The returned client never closes the shared httpx client.
        """
        return BangumiClient(
            token=self._credentials.token if token is None else token,
            user_agent=self._credentials.user_agent if user_agent is None else user_agent,
            base_url=self._base_url,
            timeout_ms=self._timeout_ms,
            http_client=self._http_client,
            debug=self._debug,
        )

    @property
    def credentials(self) -> Credentials:
        return self._credentials

    @property
    def base_url(self) -> str:
        return self._base_url

    def close(self) -> None:
        """Close the underlying httpx client if this client created it."""
        if self._owns_http_client:
            self._http_client.close()

    def __enter__(self) -> "BangumiClient":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    # =========================================================================
    # Generic Invocation
    # =========================================================================

    def build_url(self, endpoint: Endpoint | str, **params: Any) -> str:
        """Build the URL an endpoint would be called with, without sending."""
        return self._resolve(endpoint).build_url(self._base_url, params)

    def call(self, endpoint: Endpoint | str, body: Body = None, **params: Any) -> bytes | bool:
        """Invoke an endpoint by descriptor or name.

        Args:
            endpoint: An Endpoint from the catalogue, or its name.
            body: Pre-encoded request body, forwarded unmodified.
            **params: Values for the endpoint's path and query parameters.

        Returns:
            Response bytes for "body" endpoints, True for "success" endpoints.

        Raises:
            InvalidParameterError: Unknown endpoint, missing parameter, or an
                unrecognized label for a strict enum. Nothing is sent.
        """
        resolved = self._resolve(endpoint)
        if body and not resolved.has_body:
            raise InvalidParameterError(
                f"{resolved.name} does not take a request body", parameter="body"
            )
        url = resolved.build_url(self._base_url, params)
        if resolved.shape == "success":
            return self._dispatcher.fetch_success(resolved.method, url, body)
        return self._dispatcher.fetch_body(resolved.method, url, body)

    def _resolve(self, endpoint: Endpoint | str) -> Endpoint:
        if isinstance(endpoint, Endpoint):
            return endpoint
        try:
            return ENDPOINTS[endpoint]
        except KeyError:
            raise InvalidParameterError(
                f"Unknown endpoint: {endpoint!r}", parameter="endpoint", value=endpoint
            ) from None

    def _body(self, endpoint: Endpoint, body: Body = None, **params: Any) -> bytes:
        return self.call(endpoint, body, **params)  # type: ignore[return-value]

    def _success(self, endpoint: Endpoint, body: Body = None, **params: Any) -> bool:
        return self.call(endpoint, body, **params)  # type: ignore[return-value]

    # =========================================================================
    # Characters
    # =========================================================================

    def search_characters(self, body: Body, limit: Param = DEFAULT_LIMIT, offset: Param = 0) -> bytes:
        """Search characters.

        Args:
            body: Encoded search request, e.g. {"keyword": "...", "filter": {"nsfw": true}}.
            limit: Page size.
            offset: Start position.
        """
        return self._body(ep.SEARCH_CHARACTERS, body, limit=limit, offset=offset)

    def get_character(self, character_id: Param) -> bytes:
        return self._body(ep.GET_CHARACTER, character_id=character_id)

    def collect_character(self, character_id: Param) -> bool:
        """Add a character to the current user's collection."""
        return self._success(ep.COLLECT_CHARACTER, character_id=character_id)

    def uncollect_character(self, character_id: Param) -> bool:
        """Remove a character from the current user's collection."""
        return self._success(ep.UNCOLLECT_CHARACTER, character_id=character_id)

    # =========================================================================
    # Persons
    # =========================================================================

    def search_persons(self, body: Body, limit: Param = DEFAULT_LIMIT, offset: Param = 0) -> bytes:
        """Search persons.

        Args:
            body: Encoded search request, e.g. {"keyword": "...", "filter": {"career": ["artist"]}}.
            limit: Page size.
            offset: Start position.
        """
        return self._body(ep.SEARCH_PERSONS, body, limit=limit, offset=offset)

    def get_person(self, person_id: Param) -> bytes:
        return self._body(ep.GET_PERSON, person_id=person_id)

    def collect_person(self, person_id: Param) -> bool:
        """Add a person to the current user's collection."""
        return self._success(ep.COLLECT_PERSON, person_id=person_id)

    def uncollect_person(self, person_id: Param) -> bool:
        """Remove a person from the current user's collection."""
        return self._success(ep.UNCOLLECT_PERSON, person_id=person_id)

    # =========================================================================
    # Subjects
    # =========================================================================

    def search_subjects(self, body: Body, limit: Param = DEFAULT_LIMIT, offset: Param = 0) -> bytes:
        """Search subjects.

        Args:
            body: Encoded search request, e.g.
                {"keyword": "...", "sort": "rank", "filter": {"type": [2]}}.
            limit: Page size.
            offset: Start position.
        """
        return self._body(ep.SEARCH_SUBJECTS, body, limit=limit, offset=offset)

    def get_subject(self, subject_id: Param) -> bytes:
        return self._body(ep.GET_SUBJECT, subject_id=subject_id)

    def search_subjects_legacy(
        self,
        keyword: str,
        subject_type: SubjectType | str | int = "",
        response_group: str = "small",
        start: Param = 0,
        max_results: Param = DEFAULT_LEGACY_MAX_RESULTS,
    ) -> bytes:
        """Keyword search on the legacy /search/subject route.

        Args:
            keyword: Search keyword, placed in the path.
            subject_type: Subject type filter. An unrecognized label searches
                all types.
            response_group: "small", "medium" or "large".
            start: Start position.
            max_results: Page size.
        """
        return self._body(
            ep.SEARCH_SUBJECTS_LEGACY,
            keyword=keyword,
            type=subject_type,
            responseGroup=response_group,
            start=start,
            max_results=max_results,
        )

    def get_calendar(self) -> bytes:
        """Daily broadcast schedule."""
        return self._body(ep.GET_CALENDAR)

    # =========================================================================
    # Episodes
    # =========================================================================

    def get_episodes(
        self,
        subject_id: Param,
        episode_type: EpisodeType | str | int = EpisodeType.MAIN,
        limit: Param = DEFAULT_LIMIT,
        offset: Param = 0,
    ) -> bytes:
        """List episodes of a subject.

        An unrecognized episode type label falls back to EpisodeType.MAIN.
        """
        return self._body(
            ep.GET_EPISODES, subject_id=subject_id, type=episode_type, limit=limit, offset=offset
        )

    def get_episode(self, episode_id: Param) -> bytes:
        return self._body(ep.GET_EPISODE, episode_id=episode_id)

    # =========================================================================
    # Indices
    # =========================================================================

    def create_index(self, body: Body = None) -> bytes:
        """Create a new index. Returns the created index."""
        return self._body(ep.CREATE_INDEX, body)

    def get_index(self, index_id: Param) -> bytes:
        return self._body(ep.GET_INDEX, index_id=index_id)

    def edit_index(self, index_id: Param, body: Body) -> bytes:
        """Edit an index.

        Args:
            index_id: Index ID.
            body: Encoded update, e.g. {"title": "...", "description": "..."}.
        """
        return self._body(ep.EDIT_INDEX, body, index_id=index_id)

    def get_index_subjects(
        self,
        index_id: Param,
        subject_type: SubjectType | str | int = "",
        limit: Param = DEFAULT_LIMIT,
        offset: Param = 0,
    ) -> bytes:
        """List subjects in an index. An unrecognized type label lists all types."""
        return self._body(
            ep.GET_INDEX_SUBJECTS, index_id=index_id, type=subject_type, limit=limit, offset=offset
        )

    def add_index_subject(self, index_id: Param, body: Body) -> bool:
        """Add a subject to an index.

        Args:
            index_id: Index ID.
            body: Encoded entry, e.g. {"subject_id": 0, "sort": 0, "comment": "..."}.
        """
        return self._success(ep.ADD_INDEX_SUBJECT, body, index_id=index_id)

    def edit_index_subject(self, index_id: Param, subject_id: Param, body: Body) -> bool:
        """Edit a subject in an index, adding it if absent."""
        return self._success(ep.EDIT_INDEX_SUBJECT, body, index_id=index_id, subject_id=subject_id)

    def delete_index_subject(self, index_id: Param, subject_id: Param) -> bool:
        return self._success(ep.DELETE_INDEX_SUBJECT, index_id=index_id, subject_id=subject_id)

    def collect_index(self, index_id: Param) -> bool:
        return self._success(ep.COLLECT_INDEX, index_id=index_id)

    def uncollect_index(self, index_id: Param) -> bool:
        return self._success(ep.UNCOLLECT_INDEX, index_id=index_id)

    # =========================================================================
    # Users
    # =========================================================================

    def get_user(self, username: str) -> bytes:
        return self._body(ep.GET_USER, username=username)

    def get_me(self) -> bytes:
        """Profile of the user owning the token."""
        return self._body(ep.GET_ME)

    # =========================================================================
    # Collections
    # =========================================================================

    def get_user_collections(
        self,
        username: str,
        subject_type: SubjectType | str | int,
        collection_type: CollectionType | str | int = "",
        limit: Param = DEFAULT_LIMIT,
        offset: Param = 0,
    ) -> bytes:
        """List a user's subject collections.

        Args:
            username: User name or UID.
            subject_type: Subject type. Required: an unrecognized label raises
                InvalidParameterError and nothing is sent.
            collection_type: Collection status filter. An unrecognized label
                lists every status.
            limit: Page size.
            offset: Start position.
        """
        return self._body(
            ep.GET_USER_COLLECTIONS,
            username=username,
            subject_type=subject_type,
            type=collection_type,
            limit=limit,
            offset=offset,
        )

    def get_user_collection(self, username: str, subject_id: Param) -> bytes:
        """A user's collection of one subject. Private collections need a token."""
        return self._body(ep.GET_USER_COLLECTION, username=username, subject_id=subject_id)

    def create_or_edit_collection(self, subject_id: Param, body: Body) -> bool:
        """Create or update the current user's collection of a subject.

        Args:
            subject_id: Subject ID.
            body: Encoded collection, e.g. {"type": 3, "rate": 10, "comment": "...",
                "private": true, "tags": ["..."]}. All fields optional.
        """
        return self._success(ep.CREATE_OR_EDIT_COLLECTION, body, subject_id=subject_id)

    def edit_collection(self, subject_id: Param, body: Body) -> bool:
        """Update an existing collection of a subject. All body fields optional."""
        return self._success(ep.EDIT_COLLECTION, body, subject_id=subject_id)

    def get_episode_collections(
        self,
        subject_id: Param,
        episode_type: EpisodeType | str | int = EpisodeType.MAIN,
        limit: Param = DEFAULT_LIMIT,
        offset: Param = 0,
    ) -> bytes:
        """Episode collection status for a subject."""
        return self._body(
            ep.GET_EPISODE_COLLECTIONS,
            subject_id=subject_id,
            episode_type=episode_type,
            limit=limit,
            offset=offset,
        )

    def edit_episode_collections(self, subject_id: Param, body: Body) -> bool:
        """Update several episodes of a subject at once.

        Args:
            subject_id: Subject ID.
            body: Encoded update, e.g. {"episode_id": [1, 2, 8], "type": 2}.
        """
        return self._success(ep.EDIT_EPISODE_COLLECTIONS, body, subject_id=subject_id)

    def get_episode_collection(self, episode_id: Param) -> bytes:
        return self._body(ep.GET_EPISODE_COLLECTION, episode_id=episode_id)

    def edit_episode_collection(self, episode_id: Param, body: Body) -> bool:
        """Update one episode's collection status, e.g. body {"type": 2}."""
        return self._success(ep.EDIT_EPISODE_COLLECTION, body, episode_id=episode_id)

    def get_user_character_collections(self, username: str) -> bytes:
        return self._body(ep.GET_USER_CHARACTER_COLLECTIONS, username=username)

    def get_user_character_collection(self, username: str, character_id: Param) -> bytes:
        return self._body(
            ep.GET_USER_CHARACTER_COLLECTION, username=username, character_id=character_id
        )

    def get_user_person_collections(self, username: str) -> bytes:
        return self._body(ep.GET_USER_PERSON_COLLECTIONS, username=username)

    def get_user_person_collection(self, username: str, person_id: Param) -> bytes:
        return self._body(ep.GET_USER_PERSON_COLLECTION, username=username, person_id=person_id)

    # =========================================================================
    # Revisions
    # =========================================================================

    def get_person_revisions(
        self, person_id: Param, limit: Param = DEFAULT_LIMIT, offset: Param = 0
    ) -> bytes:
        return self._body(ep.GET_PERSON_REVISIONS, person_id=person_id, limit=limit, offset=offset)

    def get_person_revision(self, revision_id: Param) -> bytes:
        return self._body(ep.GET_PERSON_REVISION, revision_id=revision_id)

    def get_character_revisions(
        self, character_id: Param, limit: Param = DEFAULT_LIMIT, offset: Param = 0
    ) -> bytes:
        return self._body(
            ep.GET_CHARACTER_REVISIONS, character_id=character_id, limit=limit, offset=offset
        )

    def get_character_revision(self, revision_id: Param) -> bytes:
        return self._body(ep.GET_CHARACTER_REVISION, revision_id=revision_id)

    def get_subject_revisions(
        self, subject_id: Param, limit: Param = DEFAULT_LIMIT, offset: Param = 0
    ) -> bytes:
        return self._body(
            ep.GET_SUBJECT_REVISIONS, subject_id=subject_id, limit=limit, offset=offset
        )

    def get_subject_revision(self, revision_id: Param) -> bytes:
        return self._body(ep.GET_SUBJECT_REVISION, revision_id=revision_id)

    def get_episode_revisions(
        self, episode_id: Param, limit: Param = DEFAULT_LIMIT, offset: Param = 0
    ) -> bytes:
        return self._body(
            ep.GET_EPISODE_REVISIONS, episode_id=episode_id, limit=limit, offset=offset
        )

    def get_episode_revision(self, revision_id: Param) -> bytes:
        return self._body(ep.GET_EPISODE_REVISION, revision_id=revision_id)
