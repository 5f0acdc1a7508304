"""Transport dispatcher for Bangumi API requests.

WARNING: This is an internal module used by BangumiClient.
Do not call directly from user code.
"""

from bangumi_sdk._internal.dispatch.client import Dispatcher
from bangumi_sdk._internal.dispatch.models import (
    BODY_STATUSES,
    SUCCESS_STATUSES,
    Credentials,
    HttpMethod,
    RequestDescriptor,
)

__all__ = [
    "Dispatcher",
    "Credentials",
    "HttpMethod",
    "RequestDescriptor",
    "BODY_STATUSES",
    "SUCCESS_STATUSES",
]
