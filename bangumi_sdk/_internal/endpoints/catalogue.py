"""Catalogue of Bangumi API endpoints.

Paths under /v0 belong to the current API. /search/subject and /calendar
are legacy routes served from the same host.
"""

from bangumi_sdk._internal.dispatch.models import HttpMethod
from bangumi_sdk._internal.endpoints.models import Endpoint, EnumParam
from bangumi_sdk.models.enums import UNFILTERED, CollectionType, EpisodeType, SubjectType

GET = HttpMethod.GET
POST = HttpMethod.POST
PUT = HttpMethod.PUT
PATCH = HttpMethod.PATCH
DELETE = HttpMethod.DELETE

PAGE = ("limit", "offset")

SUBJECT_TYPE_STRICT = EnumParam(enum=SubjectType)
SUBJECT_TYPE_OPTIONAL = EnumParam(enum=SubjectType, default=UNFILTERED)
COLLECTION_TYPE = EnumParam(enum=CollectionType, default=UNFILTERED)
EPISODE_TYPE = EnumParam(enum=EpisodeType, default=int(EpisodeType.MAIN))

# =============================================================================
# Characters
# =============================================================================

SEARCH_CHARACTERS = Endpoint(
    name="search_characters", method=POST, path="/v0/search/characters", query=PAGE, has_body=True
)
GET_CHARACTER = Endpoint(name="get_character", method=GET, path="/v0/characters/{character_id}")
COLLECT_CHARACTER = Endpoint(
    name="collect_character",
    method=POST,
    path="/v0/characters/{character_id}/collect",
    shape="success",
)
UNCOLLECT_CHARACTER = Endpoint(
    name="uncollect_character",
    method=DELETE,
    path="/v0/characters/{character_id}/collect",
    shape="success",
)

# =============================================================================
# Persons
# =============================================================================

SEARCH_PERSONS = Endpoint(
    name="search_persons", method=POST, path="/v0/search/persons", query=PAGE, has_body=True
)
GET_PERSON = Endpoint(name="get_person", method=GET, path="/v0/persons/{person_id}")
COLLECT_PERSON = Endpoint(
    name="collect_person", method=POST, path="/v0/persons/{person_id}/collect", shape="success"
)
UNCOLLECT_PERSON = Endpoint(
    name="uncollect_person", method=DELETE, path="/v0/persons/{person_id}/collect", shape="success"
)

# =============================================================================
# Subjects
# =============================================================================

SEARCH_SUBJECTS = Endpoint(
    name="search_subjects", method=POST, path="/v0/search/subjects", query=PAGE, has_body=True
)
GET_SUBJECT = Endpoint(name="get_subject", method=GET, path="/v0/subjects/{subject_id}")
SEARCH_SUBJECTS_LEGACY = Endpoint(
    name="search_subjects_legacy",
    method=GET,
    path="/search/subject/{keyword}",
    query=("type", "responseGroup", "start", "max_results"),
    enums={"type": SUBJECT_TYPE_OPTIONAL},
)
GET_CALENDAR = Endpoint(name="get_calendar", method=GET, path="/calendar")

# =============================================================================
# Episodes
# =============================================================================

GET_EPISODES = Endpoint(
    name="get_episodes",
    method=GET,
    path="/v0/episodes",
    query=("subject_id", "type", *PAGE),
    enums={"type": EPISODE_TYPE},
)
GET_EPISODE = Endpoint(name="get_episode", method=GET, path="/v0/episodes/{episode_id}")

# =============================================================================
# Indices
# =============================================================================

CREATE_INDEX = Endpoint(name="create_index", method=POST, path="/v0/indices", has_body=True)
GET_INDEX = Endpoint(name="get_index", method=GET, path="/v0/indices/{index_id}")
EDIT_INDEX = Endpoint(name="edit_index", method=PUT, path="/v0/indices/{index_id}", has_body=True)
GET_INDEX_SUBJECTS = Endpoint(
    name="get_index_subjects",
    method=GET,
    path="/v0/indices/{index_id}/subjects",
    query=("type", *PAGE),
    enums={"type": SUBJECT_TYPE_OPTIONAL},
)
ADD_INDEX_SUBJECT = Endpoint(
    name="add_index_subject",
    method=POST,
    path="/v0/indices/{index_id}/subjects",
    has_body=True,
    shape="success",
)
EDIT_INDEX_SUBJECT = Endpoint(
    name="edit_index_subject",
    method=PUT,
    path="/v0/indices/{index_id}/subjects/{subject_id}",
    has_body=True,
    shape="success",
)
DELETE_INDEX_SUBJECT = Endpoint(
    name="delete_index_subject",
    method=DELETE,
    path="/v0/indices/{index_id}/subjects/{subject_id}",
    shape="success",
)
COLLECT_INDEX = Endpoint(
    name="collect_index", method=POST, path="/v0/indices/{index_id}/collect", shape="success"
)
UNCOLLECT_INDEX = Endpoint(
    name="uncollect_index", method=DELETE, path="/v0/indices/{index_id}/collect", shape="success"
)

# =============================================================================
# Users
# =============================================================================

GET_USER = Endpoint(name="get_user", method=GET, path="/v0/users/{username}")
GET_ME = Endpoint(name="get_me", method=GET, path="/v0/me")

# =============================================================================
# Collections
# =============================================================================

GET_USER_COLLECTIONS = Endpoint(
    name="get_user_collections",
    method=GET,
    path="/v0/users/{username}/collections",
    query=("subject_type", "type", *PAGE),
    enums={"subject_type": SUBJECT_TYPE_STRICT, "type": COLLECTION_TYPE},
)
GET_USER_COLLECTION = Endpoint(
    name="get_user_collection", method=GET, path="/v0/users/{username}/collections/{subject_id}"
)
CREATE_OR_EDIT_COLLECTION = Endpoint(
    name="create_or_edit_collection",
    method=POST,
    path="/v0/users/-/collections/{subject_id}",
    has_body=True,
    shape="success",
)
EDIT_COLLECTION = Endpoint(
    name="edit_collection",
    method=PATCH,
    path="/v0/users/-/collections/{subject_id}",
    has_body=True,
    shape="success",
)
GET_EPISODE_COLLECTIONS = Endpoint(
    name="get_episode_collections",
    method=GET,
    path="/v0/users/-/collections/{subject_id}/episodes",
    query=("episode_type", *PAGE),
    enums={"episode_type": EPISODE_TYPE},
)
EDIT_EPISODE_COLLECTIONS = Endpoint(
    name="edit_episode_collections",
    method=PATCH,
    path="/v0/users/-/collections/{subject_id}/episodes",
    has_body=True,
    shape="success",
)
GET_EPISODE_COLLECTION = Endpoint(
    name="get_episode_collection",
    method=GET,
    path="/v0/users/-/collections/-/episodes/{episode_id}",
)
EDIT_EPISODE_COLLECTION = Endpoint(
    name="edit_episode_collection",
    method=PUT,
    path="/v0/users/-/collections/-/episodes/{episode_id}",
    has_body=True,
    shape="success",
)
GET_USER_CHARACTER_COLLECTIONS = Endpoint(
    name="get_user_character_collections",
    method=GET,
    path="/v0/users/{username}/collections/-/characters",
)
GET_USER_CHARACTER_COLLECTION = Endpoint(
    name="get_user_character_collection",
    method=GET,
    path="/v0/users/{username}/collections/-/characters/{character_id}",
)
GET_USER_PERSON_COLLECTIONS = Endpoint(
    name="get_user_person_collections",
    method=GET,
    path="/v0/users/{username}/collections/-/persons",
)
GET_USER_PERSON_COLLECTION = Endpoint(
    name="get_user_person_collection",
    method=GET,
    path="/v0/users/{username}/collections/-/persons/{person_id}",
)

# =============================================================================
# Revisions
# =============================================================================

GET_PERSON_REVISIONS = Endpoint(
    name="get_person_revisions", method=GET, path="/v0/revisions/persons", query=("person_id", *PAGE)
)
GET_PERSON_REVISION = Endpoint(
    name="get_person_revision", method=GET, path="/v0/revisions/persons/{revision_id}"
)
GET_CHARACTER_REVISIONS = Endpoint(
    name="get_character_revisions",
    method=GET,
    path="/v0/revisions/characters",
    query=("character_id", *PAGE),
)
GET_CHARACTER_REVISION = Endpoint(
    name="get_character_revision", method=GET, path="/v0/revisions/characters/{revision_id}"
)
GET_SUBJECT_REVISIONS = Endpoint(
    name="get_subject_revisions",
    method=GET,
    path="/v0/revisions/subjects",
    query=("subject_id", *PAGE),
)
GET_SUBJECT_REVISION = Endpoint(
    name="get_subject_revision", method=GET, path="/v0/revisions/subjects/{revision_id}"
)
GET_EPISODE_REVISIONS = Endpoint(
    name="get_episode_revisions",
    method=GET,
    path="/v0/revisions/episodes",
    query=("episode_id", *PAGE),
)
GET_EPISODE_REVISION = Endpoint(
    name="get_episode_revision", method=GET, path="/v0/revisions/episodes/{revision_id}"
)

ENDPOINTS: dict[str, Endpoint] = {
    endpoint.name: endpoint
    for endpoint in (
        SEARCH_CHARACTERS,
        GET_CHARACTER,
        COLLECT_CHARACTER,
        UNCOLLECT_CHARACTER,
        SEARCH_PERSONS,
        GET_PERSON,
        COLLECT_PERSON,
        UNCOLLECT_PERSON,
        SEARCH_SUBJECTS,
        GET_SUBJECT,
        SEARCH_SUBJECTS_LEGACY,
        GET_CALENDAR,
        GET_EPISODES,
        GET_EPISODE,
        CREATE_INDEX,
        GET_INDEX,
        EDIT_INDEX,
        GET_INDEX_SUBJECTS,
        ADD_INDEX_SUBJECT,
        EDIT_INDEX_SUBJECT,
        DELETE_INDEX_SUBJECT,
        COLLECT_INDEX,
        UNCOLLECT_INDEX,
        GET_USER,
        GET_ME,
        GET_USER_COLLECTIONS,
        GET_USER_COLLECTION,
        CREATE_OR_EDIT_COLLECTION,
        EDIT_COLLECTION,
        GET_EPISODE_COLLECTIONS,
        EDIT_EPISODE_COLLECTIONS,
        GET_EPISODE_COLLECTION,
        EDIT_EPISODE_COLLECTION,
        GET_USER_CHARACTER_COLLECTIONS,
        GET_USER_CHARACTER_COLLECTION,
        GET_USER_PERSON_COLLECTIONS,
        GET_USER_PERSON_COLLECTION,
        GET_PERSON_REVISIONS,
        GET_PERSON_REVISION,
        GET_CHARACTER_REVISIONS,
        GET_CHARACTER_REVISION,
        GET_SUBJECT_REVISIONS,
        GET_SUBJECT_REVISION,
        GET_EPISODE_REVISIONS,
        GET_EPISODE_REVISION,
    )
}
