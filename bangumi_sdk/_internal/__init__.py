"""Internal modules for Bangumi SDK.

WARNING: This package contains the request plumbing behind BangumiClient.
These are not intended for direct use in application code.

Modules:
    dispatch - Transport dispatcher (request building, status handling)
    endpoints - Endpoint descriptors and the endpoint catalogue
    http - Shared HTTP client configuration
"""
