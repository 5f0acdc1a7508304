"""Endpoint descriptors for the Bangumi API.

WARNING: This is an internal module used by BangumiClient.
Do not call directly from user code.
"""

from bangumi_sdk._internal.endpoints.catalogue import ENDPOINTS
from bangumi_sdk._internal.endpoints.models import Endpoint, EnumParam, Shape

__all__ = ["ENDPOINTS", "Endpoint", "EnumParam", "Shape"]
