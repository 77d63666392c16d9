import json
from typing import Any, Dict, Mapping

# view parameters the server parses as JSON documents
JSON_KEYS = frozenset(
    ("key", "keys", "startkey", "start_key", "endkey", "end_key")
)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def fix_view_args(args: Mapping[str, Any]) -> Dict[str, str]:
    """
    Serialize view query arguments the way the server expects them.

    - key/keys/startkey/endkey (and the underscore spellings) are always
      JSON documents, so ``"abc"`` is sent as ``'"abc"'``
    - booleans become the literals ``true`` / ``false``
    - plain numbers are stringified
    - plain strings on any other key (``stale``, ``startkey_docid``) are kept
    - anything else is JSON-encoded
    """
    fixed: Dict[str, str] = {}
    for name, value in args.items():
        if name in JSON_KEYS:
            fixed[name] = json.dumps(value)
        elif isinstance(value, bool):
            fixed[name] = "true" if value else "false"
        elif _is_number(value):
            fixed[name] = str(value)
        elif isinstance(value, str):
            fixed[name] = value
        else:
            fixed[name] = json.dumps(value)
    return fixed


def split_keys(args: Mapping[str, Any]):
    """
    Pull ``keys`` out of view arguments. Returns ``(query, body)``: a POST
    body carrying the keys when present, otherwise None.
    """
    args = dict(args)
    keys = args.pop("keys", None)
    body = {"keys": list(keys)} if keys is not None else None
    return fix_view_args(args), body
