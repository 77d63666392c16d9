"""
Functional HTTP helpers: every wrapper object ends up here.

    data = json_call("GET", "http://localhost:5984/mydb/doc1")
    image = curl("GET", "http://localhost:5984/mydb/doc1/logo.png")
"""
import base64
import json
import logging
from typing import Any, Dict, List, Mapping, Optional, Union
from urllib.parse import quote, urlsplit, urlunsplit

import requests

from .exceptions import error_for_status

logger = logging.getLogger(__name__)

# characters encodeURIComponent leaves alone
_URI_COMPONENT_SAFE = "-_.!~*'()"


def basic_auth(user: str, password: Optional[str]) -> str:
    token = f"{user}:{password or ''}".encode("utf-8")
    return "Basic " + base64.b64encode(token).decode("ascii")


def encode_uri_component(value: str) -> str:
    return quote(value, safe=_URI_COMPONENT_SAFE)


def _query_value(value: Any) -> str:
    if isinstance(value, (dict, list, tuple)):
        return json.dumps(value)
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def compile_query(query: Union[None, str, Mapping[str, Any]]) -> Optional[str]:
    """
    Transform a mapping into a URL query (the part behind "?").

    A ``str`` is taken as an already compiled query. Keys are sorted so the
    same arguments always produce the same URL.
    """
    if not query:
        return None
    if isinstance(query, str):
        return query
    if isinstance(query, Mapping):
        params: List[str] = []
        for key in sorted(query):
            value = query[key]
            if value is None:
                continue
            params.append(f"{key}={encode_uri_component(_query_value(value))}")
        return "&".join(params) or None
    raise error_for_status(400, "Unsupported query param, use dict or str")


def _redact(url: str) -> str:
    """URL without the user:password@ part, for log records."""
    parts = urlsplit(url)
    if parts.username is None and parts.password is None:
        return url
    netloc = parts.hostname or ""
    if ":" in netloc:
        netloc = f"[{netloc}]"
    if parts.port is not None:
        netloc += f":{parts.port}"
    return urlunsplit(parts._replace(netloc=netloc))


def build_url(uri: str, query: Union[None, str, Mapping[str, Any]] = None) -> str:
    q = compile_query(query)
    if q:
        # some query may already be present in uri
        uri += f"&{q}" if "?" in uri else f"?{q}"
    return uri


def curl(
    method: str,
    uri: str,
    body: Union[None, str, bytes] = None,
    headers: Optional[Dict[str, str]] = None,
    query: Union[None, str, Mapping[str, Any]] = None,
    timeout: Optional[float] = None,
) -> bytes:
    """
    Make a raw HTTP call and return the response body.

    Raises:
      HTTPError subclass chosen from the status for any status >= 300,
      ServerError (500) for network failures.
    """
    method = method.upper()
    url = build_url(uri, query)
    if isinstance(body, str):
        body = body.encode("utf-8")

    logger.debug("%s %s", method, _redact(url))
    try:
        resp = requests.request(
            method,
            url,
            data=body,
            headers=headers or {},
            timeout=timeout,
            allow_redirects=False,
        )
    except requests.RequestException as e:
        raise error_for_status(500, f"An error happened: {e}") from e

    logger.debug("%s %s -> %s", method, _redact(url), resp.status_code)
    if resp.status_code >= 300:
        raise error_for_status(resp.status_code, resp.text)
    return resp.content


def json_call(
    method: str,
    uri: str,
    body: Any = None,
    query: Union[None, str, Mapping[str, Any]] = None,
    user: Optional[str] = None,
    password: Optional[str] = None,
    timeout: Optional[float] = None,
) -> Any:
    """
    Call a resource that both accepts and returns JSON.

    ``body`` is any JSON-serializable object. Basic authorisation is sent
    when ``user`` is given. Returns the decoded response, or None when the
    server answered with an empty body (HEAD requests).
    """
    headers = {
        "Accept": "application/json",
        "Content-Type": "application/json",
    }
    if user is not None:
        headers["Authorization"] = basic_auth(user, password)

    payload = None
    if body is not None:
        try:
            payload = json.dumps(body, allow_nan=False)
        except (TypeError, ValueError) as e:
            raise error_for_status(400, f"Error encoding data to JSON: {e}") from e

    data = curl(method, uri, payload, headers, query, timeout=timeout)
    if not data:
        return None
    return decode_json(data)


def decode_json(data: Union[str, bytes]) -> Any:
    try:
        return json.loads(data)
    except ValueError as e:
        raise error_for_status(500, f"Error parsing JSON input: {e}") from e
