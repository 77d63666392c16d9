import logging
import re
from typing import Any, Dict, Iterable, List, Optional

from .design import DesignDocument
from .document import Document, document_path
from .exceptions import InterfaceError, NotFound
from .http import encode_uri_component
from .views import fix_view_args, split_keys

logger = logging.getLogger(__name__)

VALID_DB_NAME = re.compile(r"^[a-z][a-z0-9_$()+/-]*$")
SYSTEM_DBS = ("_users", "_replicator", "_global_changes")


def validate_db_name(name: str) -> str:
    """
    Database names must start with a lowercase letter and may contain
    lowercase letters, digits and any of ``_$()+-/``. The system
    databases (``_users``, ``_replicator``, ``_global_changes``) are allowed.
    Throw InterfaceError if it does not.
    """
    if name in SYSTEM_DBS:
        return name
    if not isinstance(name, str) or not VALID_DB_NAME.match(name):
        raise InterfaceError(f"Invalid database name: {name!r}")
    return name


class Database:
    def __init__(self, client, name: str):
        self.client = client
        self.name = validate_db_name(name)
        self.path = encode_uri_component(name)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name!r}>"

    def __eq__(self, other) -> bool:
        return (
            isinstance(other, Database)
            and other.client is self.client
            and other.name == self.name
        )

    def __hash__(self) -> int:
        return hash((id(self.client), self.name))

    @property
    def uri(self) -> str:
        return self.client.uri + self.path + "/"

    def req(self, method: str, path: str = "", body: Any = None, query: Any = None) -> Any:
        """Request relative to this database."""
        full = f"{self.path}/{path}" if path else self.path
        return self.client.req(method, full, body, query)

    def raw(self, method: str, path: str, body=None, content_type=None, query=None) -> bytes:
        return self.client.raw(method, f"{self.path}/{path}", body, content_type, query)

    # Database level

    def create(self) -> "Database":
        self.req("PUT")
        logger.info("Created database %s", self.name)
        return self

    def delete(self) -> Dict[str, Any]:
        resp = self.req("DELETE")
        logger.info("Deleted database %s", self.name)
        return resp

    def info(self) -> Dict[str, Any]:
        return self.req("GET")

    def exists(self) -> bool:
        try:
            self.req("HEAD")
        except NotFound:
            return False
        return True

    def compact(self) -> Dict[str, Any]:
        return self.req("POST", "_compact", {})

    def changes(self, **args) -> Dict[str, Any]:
        return self.req("GET", "_changes", query=fix_view_args(args))

    def temp_view(
        self, map_fun: str, reduce_fun: Optional[str] = None, **view_args
    ) -> Dict[str, Any]:
        body = {"map": map_fun}
        if reduce_fun is not None:
            body["reduce"] = reduce_fun
        return self.req("POST", "_temp_view", body, fix_view_args(view_args))

    # Documents

    def new_doc(
        self,
        id: Optional[str] = None,
        rev: Optional[str] = None,
        data: Optional[Dict[str, Any]] = None,
        attachments: Optional[Dict[str, Any]] = None,
    ) -> Document:
        if id is not None and id.startswith(DesignDocument.PREFIX):
            return DesignDocument(self, id, rev, data, attachments)
        return Document(self, id, rev, data, attachments)

    def new_design_doc(
        self,
        id: str,
        rev: Optional[str] = None,
        data: Optional[Dict[str, Any]] = None,
        attachments: Optional[Dict[str, Any]] = None,
    ) -> DesignDocument:
        return DesignDocument(self, id, rev, data, attachments)

    def doc_exists(self, id: str) -> bool:
        try:
            self.req("HEAD", document_path(id))
        except NotFound:
            return False
        return True

    def list_docs(self, **view_args) -> List[Document]:
        """
        Read ``_all_docs``. Rows the server could not resolve (unknown
        ``keys``) are skipped. With ``include_docs=True`` the documents
        come back populated.
        """
        query, body = split_keys(view_args)
        method = "POST" if body is not None else "GET"
        resp = self.req(method, "_all_docs", body, query)
        docs = []
        for row in resp.get("rows", []):
            if "error" in row or not row.get("value"):
                continue
            value = row["value"]
            if value.get("deleted"):
                continue
            doc = self.new_doc(row["id"], value.get("rev"))
            if row.get("doc"):
                doc.load(row["doc"])
            docs.append(doc)
        return docs

    def list_design_docs(self) -> List[DesignDocument]:
        return [
            doc
            for doc in self.list_docs(startkey="_design/", endkey="_design0")
            if isinstance(doc, DesignDocument)
        ]

    def bulk_store(self, docs: Iterable[Document]) -> List[Dict[str, Any]]:
        """
        Store many documents in one request. Revisions of the documents that
        were saved are updated; failures come back in the result list.
        """
        docs = list(docs)
        resp = self.req("POST", "_bulk_docs", {"docs": [d.to_dict() for d in docs]})
        for doc, result in zip(docs, resp):
            if "error" not in result:
                doc.id = result.get("id", doc.id)
                doc.rev = result.get("rev", doc.rev)
        return resp

    def bulk_delete(self, docs: Iterable[Document]) -> List[Dict[str, Any]]:
        docs = list(docs)
        for doc in docs:
            if doc.id is None or doc.rev is None:
                raise InterfaceError("Only stored documents can be deleted")
        body = {
            "docs": [{"_id": d.id, "_rev": d.rev, "_deleted": True} for d in docs]
        }
        resp = self.req("POST", "_bulk_docs", body)
        for doc, result in zip(docs, resp):
            if "error" not in result:
                doc.rev = result.get("rev", doc.rev)
        return resp
