"""Bangumi SDK for Python.

This SDK provides a typed binding for the Bangumi API (https://api.bgm.tv).

Public API:
    BangumiClient - User-facing client, one method per endpoint
    SubjectType, CollectionType, EpisodeType - Category enumerations
    BangumiError and subclasses - Error taxonomy

Internal (not for direct use):
    _internal.dispatch - Transport dispatcher
    _internal.endpoints - Endpoint descriptors
"""

from bangumi_sdk._version import __version__
from bangumi_sdk.client import BangumiClient
from bangumi_sdk.exceptions import (
    BangumiAPIError,
    BangumiConfigError,
    BangumiError,
    BodyReadError,
    InvalidParameterError,
    RequestBuildError,
    TransportError,
    UnexpectedStatusError,
)
from bangumi_sdk.models import UNFILTERED, CollectionType, EpisodeType, SubjectType

__all__ = [
    "__version__",
    "BangumiClient",
    "SubjectType",
    "CollectionType",
    "EpisodeType",
    "UNFILTERED",
    "BangumiError",
    "BangumiAPIError",
    "BangumiConfigError",
    "BodyReadError",
    "InvalidParameterError",
    "RequestBuildError",
    "TransportError",
    "UnexpectedStatusError",
]
