from typing import Any, Dict, List, Optional

from .document import DESIGN_PREFIX, Document
from .exceptions import InterfaceError
from .http import encode_uri_component
from .views import split_keys


class DesignDocument(Document):
    """
    A document holding views. The id is always ``_design/<name>``; a bare
    name is prefixed on construction.
    """

    PREFIX = DESIGN_PREFIX

    def __init__(
        self,
        db,
        id: str,
        rev: Optional[str] = None,
        data: Optional[Dict[str, Any]] = None,
        attachments: Optional[Dict[str, Any]] = None,
    ):
        if not id:
            raise InterfaceError("Design document needs an id")
        if not id.startswith(DESIGN_PREFIX):
            id = DESIGN_PREFIX + id
        super().__init__(db, id, rev, data, attachments)

    @property
    def name(self) -> str:
        return self.id[len(DESIGN_PREFIX):]

    @property
    def views(self) -> Dict[str, Any]:
        return self.data.get("views", {})

    def list_views(self) -> List[str]:
        return sorted(self.views)

    def query_view(self, view: str, **view_args) -> Dict[str, Any]:
        """
        Query a view of this design document. Arguments are encoded with
        fix_view_args; passing ``keys`` turns the request into a POST.
        """
        query, body = split_keys(view_args)
        method = "POST" if body is not None else "GET"
        return self.db.req(method, f"{self.path}/_view/{encode_uri_component(view)}", body, query)

    def view_info(self) -> Dict[str, Any]:
        return self.db.req("GET", f"{self.path}/_info")
