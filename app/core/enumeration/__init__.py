from .adapters import ADAPTERS, HostOperatingSystemsAdapter, HostTagsAdapter
from .errors import (
    EnumerationError,
    InvalidArgument,
    MalformedKey,
    RequestWindowExceeded,
    SearchBackendError,
)
from .filters import FilterCompiler
from .models import EnumerationRequest, EnumerationResult
from .resolver import EnumerationResolver
from .schema import FieldSchema, load_host_schema
from .search_client import SearchClient, SearchClientError

__all__ = [
    "ADAPTERS",
    "EnumerationError",
    "EnumerationRequest",
    "EnumerationResolver",
    "EnumerationResult",
    "FieldSchema",
    "FilterCompiler",
    "HostOperatingSystemsAdapter",
    "HostTagsAdapter",
    "InvalidArgument",
    "MalformedKey",
    "RequestWindowExceeded",
    "SearchBackendError",
    "SearchClient",
    "SearchClientError",
    "load_host_schema",
]
