from typing import Dict, Optional, Type


class Error(Exception): ...


class InterfaceError(Error):
    """
    Exception raised for errors that are related to the client interface
    rather than the server, e.g. an invalid database name or updating a
    document that was never stored.
    """

    pass


class HTTPError(Error):
    """
    Exception raised when a request fails. Carries the HTTP status ``code``
    and the ``message`` (usually the response body sent by the server).
    """

    status_code: Optional[int] = None

    def __init__(self, code: int, message: str = ""):
        super().__init__(code, message)
        self.code = int(code)
        self.message = message

    def __str__(self) -> str:
        return f"{self.code} {self.message}".rstrip()


# Status ranges


class Redirection(HTTPError):
    """
    Exception raised for 3xx answers the HTTP library did not follow.
    """

    pass


class ClientError(HTTPError):
    """
    Exception raised for 4xx answers: the request itself was rejected.
    """

    pass


class ServerError(HTTPError):
    """
    Exception raised for 5xx answers, and for transport failures or
    unparsable responses detected on the client side.
    """

    pass


# Subclasses of ClientError


class BadRequest(ClientError):
    status_code = 400


class Unauthorized(ClientError):
    status_code = 401


class Forbidden(ClientError):
    status_code = 403


class NotFound(ClientError):
    """
    Exception raised when the database, document, attachment or view does
    not exist (or a document was deleted).
    """

    status_code = 404


class MethodNotAllowed(ClientError):
    status_code = 405


class Conflict(ClientError):
    """
    Exception raised when a document update conflicts with the stored
    revision, or a database being created already exists.
    """

    status_code = 409


class PreconditionFailed(ClientError):
    status_code = 412


class UnsupportedMediaType(ClientError):
    status_code = 415


_BY_STATUS: Dict[int, Type[HTTPError]] = {
    cls.status_code: cls
    for cls in (
        BadRequest,
        Unauthorized,
        Forbidden,
        NotFound,
        MethodNotAllowed,
        Conflict,
        PreconditionFailed,
        UnsupportedMediaType,
    )
}


def error_for_status(code: int, message: str = "") -> HTTPError:
    """
    Build the most specific exception for an HTTP status ``code``.
    Falls back to the range class, then to ``HTTPError``.
    """
    code = int(code)
    cls = _BY_STATUS.get(code)
    if cls is None:
        if 300 <= code < 400:
            cls = Redirection
        elif 400 <= code < 500:
            cls = ClientError
        elif code >= 500:
            cls = ServerError
        else:
            cls = HTTPError
    return cls(code, message)
