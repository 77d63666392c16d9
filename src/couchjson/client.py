from typing import Any, Dict, List, Optional, Union

from .database import Database
from .exceptions import Error
from .http import basic_auth, curl, json_call

DEFAULT_URI = "http://localhost:5984/"


class Client:
    """
    Entry point to a server. Holds the base URI and the credentials; every
    database, document and design document created from it goes through
    ``req`` / ``raw``.

    E.g. Client("http://localhost:5984/", username="admin", password="secret")
    """

    def __init__(
        self,
        uri: str = DEFAULT_URI,
        username: Optional[str] = None,
        password: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        if not uri.endswith("/"):
            uri += "/"
        self.uri = uri
        self._username = username
        self._password = password
        self._timeout = timeout

    @classmethod
    def from_settings(cls, settings) -> "Client":
        return cls(
            settings.url,
            username=settings.user,
            password=settings.password,
            timeout=settings.timeout,
        )

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.uri!r}>"

    def req(
        self,
        method: str,
        path: str = "",
        body: Any = None,
        query: Any = None,
    ) -> Any:
        """JSON request against ``path``, relative to the server URI."""
        return json_call(
            method,
            self.uri + path,
            body,
            query,
            user=self._username,
            password=self._password,
            timeout=self._timeout,
        )

    def raw(
        self,
        method: str,
        path: str,
        body: Union[None, str, bytes] = None,
        content_type: Optional[str] = None,
        query: Any = None,
    ) -> bytes:
        """Non-JSON request, used for attachments."""
        headers: Dict[str, str] = {}
        if content_type:
            headers["Content-Type"] = content_type
        if self._username is not None:
            headers["Authorization"] = basic_auth(self._username, self._password)
        return curl(method, self.uri + path, body, headers, query, timeout=self._timeout)

    # Server

    def server_info(self) -> Dict[str, Any]:
        return self.req("GET")

    def version(self) -> str:
        return self.server_info()["version"]

    def test_connection(self) -> bool:
        try:
            self.server_info()
        except Error:
            return False
        return True

    def uuids(self, count: int = 1) -> List[str]:
        return self.req("GET", "_uuids", query={"count": count})["uuids"]

    def active_tasks(self) -> List[Dict[str, Any]]:
        return self.req("GET", "_active_tasks")

    def replicate(
        self,
        source,
        target,
        continuous: bool = False,
        create_target: bool = False,
    ) -> Dict[str, Any]:
        """
        Start a replication. ``source`` and ``target`` may be database names,
        full URLs, or Database objects.
        """
        body: Dict[str, Any] = {
            "source": self._replication_endpoint(source),
            "target": self._replication_endpoint(target),
        }
        if continuous:
            body["continuous"] = True
        if create_target:
            body["create_target"] = True
        return self.req("POST", "_replicate", body)

    def _replication_endpoint(self, db) -> str:
        if isinstance(db, Database):
            return db.name if db.client is self else db.uri
        return db

    # Databases

    def list_dbs(self) -> List[Database]:
        return [self.new_db(name) for name in self.req("GET", "_all_dbs")]

    def db_exists(self, name: str) -> bool:
        return self.new_db(name).exists()

    def new_db(self, name: str) -> Database:
        return Database(self, name)
