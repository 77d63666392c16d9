import pytest

from conftest import answer, sent
from couchjson import DesignDocument
from couchjson.exceptions import InterfaceError

VIEWS = {
    "by_name": {"map": "function(doc) { emit(doc.name, null); }"},
    "count": {"map": "function(doc) { emit(null, 1); }", "reduce": "_sum"},
}


def test_id_is_prefixed(db):
    ddoc = DesignDocument(db, "app")
    assert ddoc.id == "_design/app"
    assert ddoc.name == "app"
    assert DesignDocument(db, "_design/app").id == "_design/app"


def test_views(db):
    ddoc = db.new_design_doc("app", data={"views": VIEWS})
    assert ddoc.list_views() == ["by_name", "count"]
    assert DesignDocument(db, "empty").list_views() == []


def test_create(http, db):
    answer(http, 201, {"ok": True, "id": "_design/app", "rev": "1-a"})
    db.new_design_doc("app", data={"language": "javascript", "views": VIEWS}).create()
    method, url, body, _ = sent(http)
    assert (method, url) == ("PUT", "http://couch:5984/db1/_design/app")
    assert body["_id"] == "_design/app"
    assert body["views"] == VIEWS


def test_query_view(http, db):
    answer(http, body={"total_rows": 0, "offset": 0, "rows": []})
    result = db.new_design_doc("app").query_view(
        "by name", key="x", limit=10, descending=True, stale="ok"
    )
    assert result["rows"] == []
    assert sent(http)[:2] == (
        "GET",
        "http://couch:5984/db1/_design/app/_view/by%20name"
        "?descending=true&key=%22x%22&limit=10&stale=ok",
    )


def test_query_view_range(http, db):
    answer(http, body={"rows": []})
    db.new_design_doc("app").query_view("count", startkey=[2020, 1], endkey=[2020, {}], group_level=2)
    assert sent(http)[1] == (
        "http://couch:5984/db1/_design/app/_view/count"
        "?endkey=%5B2020%2C%20%7B%7D%5D&group_level=2&startkey=%5B2020%2C%201%5D"
    )


def test_query_view_with_keys(http, db):
    answer(http, body={"rows": []})
    db.new_design_doc("app").query_view("by_name", keys=["a", "b"], include_docs=True)
    method, url, body, _ = sent(http)
    assert (method, url) == ("POST", "http://couch:5984/db1/_design/app/_view/by_name?include_docs=true")
    assert body == {"keys": ["a", "b"]}


def test_view_info(http, db):
    answer(http, body={"name": "app", "view_index": {}})
    assert db.new_design_doc("app").view_info()["name"] == "app"
    assert sent(http)[1] == "http://couch:5984/db1/_design/app/_info"


def test_reading_views_does_not_change_data(http, db):
    ddoc = db.new_design_doc("app", "1-a", data={"language": "javascript"})
    assert ddoc.list_views() == []
    assert ddoc.views == {}
    answer(http, 201, {"ok": True, "id": "_design/app", "rev": "2-b"})
    ddoc.update()
    assert "views" not in sent(http)[2]


# (id) values that cannot name a design document
missing_ids = [None, ""]


@pytest.mark.parametrize("id", missing_ids)
def test_id_is_required(db, id):
    with pytest.raises(InterfaceError):
        DesignDocument(db, id)
