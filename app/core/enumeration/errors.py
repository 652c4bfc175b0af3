"""Errors raised by the enumeration core.

Every error is raised to the caller of the enumeration operation immediately.
None of them carry partial results.
"""

from __future__ import annotations

from typing import Optional


class EnumerationError(Exception):
    pass


class InvalidArgument(EnumerationError, ValueError):
    """A caller-supplied argument is out of bounds or not recognized.

    Always raised before any search request is issued.
    """


class MalformedKey(EnumerationError):
    def __init__(self, *, key: str, delimiter: str):
        self.key = key
        self.delimiter = delimiter
        super().__init__(f"tag {key} does not contain delimiter {delimiter}")


class RequestWindowExceeded(EnumerationError):
    """The engine refused the page and the data does reach the requested offset."""

    def __init__(self, *, offset: int, hits_total: int):
        self.offset = int(offset)
        self.hits_total = int(hits_total)
        super().__init__(
            f"requested window exceeds the search engine result window "
            f"(offset={offset}, matching hosts={hits_total}); narrow the host filter"
        )


class SearchBackendError(EnumerationError):
    def __init__(self, message: str, *, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)
