"""
couchjson – a thin JSON-over-HTTP client for CouchDB
"""

import logging

__version__ = "0.1.0"

# Convenience imports
from .client import Client, DEFAULT_URI
from .config import Settings, load_settings
from .database import Database, validate_db_name
from .design import DesignDocument
from .document import Document
from .exceptions import (Error, InterfaceError, HTTPError, Redirection,
    ClientError, ServerError, BadRequest, Unauthorized, Forbidden, NotFound,
    MethodNotAllowed, Conflict, PreconditionFailed, UnsupportedMediaType,
    error_for_status)
from .http import curl, json_call, compile_query
from .views import fix_view_args

logging.getLogger(__name__).addHandler(logging.NullHandler())

# What users get when they do `from couchjson import *`:
__all__ = [
    "Client",
    "Database",
    "Document",
    "DesignDocument",
    "Settings",
    "load_settings",
    "validate_db_name",
    "curl",
    "json_call",
    "compile_query",
    "fix_view_args",
    "error_for_status",
    "Error",
    "InterfaceError",
    "HTTPError",
    "Redirection",
    "ClientError",
    "ServerError",
    "BadRequest",
    "Unauthorized",
    "Forbidden",
    "NotFound",
    "MethodNotAllowed",
    "Conflict",
    "PreconditionFailed",
    "UnsupportedMediaType",
    "DEFAULT_URI",
    "__version__",
]
