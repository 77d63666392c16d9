from typing import Any, Dict, List, Optional, Union

from .exceptions import InterfaceError
from .http import decode_json, encode_uri_component

DESIGN_PREFIX = "_design/"


def document_path(id: str) -> str:
    """URL path segment for a document id; the design prefix keeps its slash."""
    if id.startswith(DESIGN_PREFIX):
        return DESIGN_PREFIX + encode_uri_component(id[len(DESIGN_PREFIX):])
    return encode_uri_component(id)


class Document:
    """
    A document of a Database. ``data`` holds the JSON body without the
    bookkeeping members (``_id``, ``_rev``, ``_attachments``), which live
    in ``id``, ``rev`` and ``attachments``.
    """

    def __init__(
        self,
        db,
        id: Optional[str] = None,
        rev: Optional[str] = None,
        data: Optional[Dict[str, Any]] = None,
        attachments: Optional[Dict[str, Any]] = None,
    ):
        self.db = db
        self.id = id
        self.rev = rev
        self.data: Dict[str, Any] = dict(data or {})
        self.attachments: Dict[str, Any] = dict(attachments or {})

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.id!r}@{self.rev!r}>"

    @property
    def path(self) -> str:
        self._require_id()
        return document_path(self.id)

    @property
    def uri(self) -> str:
        return self.db.uri + self.path

    def _require_id(self) -> None:
        if self.id is None:
            raise InterfaceError("Document has no id")

    def _require_rev(self) -> None:
        self._require_id()
        if self.rev is None:
            raise InterfaceError(f"Document {self.id!r} has no revision, retrieve it first")

    def load(self, body: Dict[str, Any]) -> "Document":
        """Fill the document from a JSON body as sent by the server."""
        body = dict(body)
        self.id = body.pop("_id", self.id)
        self.rev = body.pop("_rev", self.rev)
        self.attachments = body.pop("_attachments", {})
        self.data = body
        return self

    def to_dict(self) -> Dict[str, Any]:
        body = dict(self.data)
        if self.id is not None:
            body["_id"] = self.id
        if self.rev is not None:
            body["_rev"] = self.rev
        if self.attachments:
            body["_attachments"] = self.attachments
        return body

    # CRUD

    def create(self) -> "Document":
        """
        Store a new document. Without an id the server assigns one.
        """
        if self.rev is not None:
            raise InterfaceError(f"Document {self.id!r} already exists, use update()")
        if self.id is None:
            resp = self.db.req("POST", "", self.to_dict())
        else:
            resp = self.db.req("PUT", self.path, self.to_dict())
        self.id = resp["id"]
        self.rev = resp["rev"]
        return self

    def retrieve(self) -> "Document":
        return self.load(self.db.req("GET", self.path))

    def retrieve_from_rev(self, rev: str) -> "Document":
        body = self.db.req("GET", self.path, query={"rev": rev})
        return type(self)(self.db, self.id).load(body)

    def revisions_info(self) -> List[Dict[str, Any]]:
        body = self.db.req("GET", self.path, query={"revs_info": True})
        return body.get("_revs_info", [])

    def update(self) -> "Document":
        self._require_rev()
        resp = self.db.req("PUT", self.path, self.to_dict())
        self.rev = resp["rev"]
        return self

    def delete(self) -> Dict[str, Any]:
        self._require_rev()
        resp = self.db.req("DELETE", self.path, query={"rev": self.rev})
        self.rev = resp.get("rev", self.rev)
        return resp

    # Attachments

    def fetch_attachment(self, name: str) -> bytes:
        return self.db.raw("GET", f"{self.path}/{encode_uri_component(name)}")

    def add_attachment(
        self,
        name: str,
        content: Union[str, bytes],
        content_type: str = "application/octet-stream",
    ) -> "Document":
        """
        Upload an attachment. A document without a revision is created
        by the upload itself.
        """
        query = {"rev": self.rev} if self.rev is not None else None
        if isinstance(content, str):
            content = content.encode("utf-8")
        raw = self.db.raw(
            "PUT",
            f"{self.path}/{encode_uri_component(name)}",
            content,
            content_type,
            query,
        )
        resp = decode_json(raw)
        self.rev = resp["rev"]
        self.attachments[name] = {
            "content_type": content_type,
            "length": len(content),
            "stub": True,
        }
        return self

    def delete_attachment(self, name: str) -> "Document":
        self._require_rev()
        resp = self.db.req(
            "DELETE",
            f"{self.path}/{encode_uri_component(name)}",
            query={"rev": self.rev},
        )
        self.rev = resp["rev"]
        self.attachments.pop(name, None)
        return self
