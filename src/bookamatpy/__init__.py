"""bookamatpy - Async Python library for the Bookamat bookkeeping API."""

import logging

from bookamatpy._version import __version__
from bookamatpy.client_async import AsyncBookamatClient
from bookamatpy.client_base import fetch_all_pages, sanitize_payload
from bookamatpy.exceptions import (
    BookamatAPIError,
    BookamatAuthError,
    BookamatError,
    BookamatNotFoundError,
    BookamatRateLimitError,
    BookamatServerError,
    BookamatValidationError,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "__version__",
    "AsyncBookamatClient",
    "fetch_all_pages",
    "sanitize_payload",
    "BookamatError",
    "BookamatAPIError",
    "BookamatAuthError",
    "BookamatNotFoundError",
    "BookamatRateLimitError",
    "BookamatServerError",
    "BookamatValidationError",
]
