"""SQLite record store and image storage gateways."""

import asyncio
import os
import re
from unittest.mock import MagicMock, patch

import pytest

from folio.core.datastore import SqliteDataGateway
from folio.core.errors import NotFoundError, TransientFetchError, UploadError, ValidationError
from folio.core.storage import (
    LocalStorageGateway,
    SpacesStorageGateway,
    allowed_file,
    build_storage_gateway,
    unique_filename,
)


@pytest.fixture
def store(tmp_db_dir):
    gateway = SqliteDataGateway(os.path.join(tmp_db_dir, "folio.db"))
    gateway.init_schema()
    return gateway


def _skill(name, category="Languages", **extra):
    record = {"name": name, "category": category}
    record.update(extra)
    return record


# ---------------------------------------------------------------------------
# Record store
# ---------------------------------------------------------------------------

def test_insert_assigns_id_and_encodes_columns(store):
    stored = asyncio.run(store.insert("projects", {
        "id": "ignored", "title": "t", "description": "d", "tech_stack": ["a", "b"], "featured": True,
    }))
    assert stored["id"] != "ignored"
    assert stored["tech_stack"] == ["a", "b"]
    assert stored["featured"] is True


def test_list_empty_collection(store):
    assert asyncio.run(store.list("skills")) == []


def test_list_orders_and_filters(store):
    for name, category, order in [("b", "Tools", 0), ("c", "Languages", 1), ("a", "Languages", 0)]:
        asyncio.run(store.insert("skills", _skill(name, category, order_index=order)))

    rows = asyncio.run(store.list("skills", order_by=[("category", True), ("order_index", True)]))
    assert [r["name"] for r in rows] == ["a", "c", "b"]

    rows = asyncio.run(store.list("skills", filters={"category": "Tools"}))
    assert [r["name"] for r in rows] == ["b"]


def test_check_constraint_maps_to_validation_error(store):
    with pytest.raises(ValidationError):
        asyncio.run(store.insert("skills", _skill("Go", proficiency=150)))
    assert asyncio.run(store.list("skills")) == []


def test_unknown_field_is_rejected(store):
    with pytest.raises(ValidationError):
        asyncio.run(store.insert("skills", _skill("Go", colour="red")))
    with pytest.raises(ValidationError):
        asyncio.run(store.list("skills", order_by=[("colour", True)]))


def test_update_and_delete_unknown_id(store):
    with pytest.raises(NotFoundError):
        asyncio.run(store.update("skills", "missing", {"name": "x"}))
    with pytest.raises(NotFoundError):
        asyncio.run(store.delete("skills", "missing"))


def test_delete_removes_exactly_one(store):
    keep = asyncio.run(store.insert("skills", _skill("Python")))
    drop = asyncio.run(store.insert("skills", _skill("Python")))

    asyncio.run(store.delete("skills", drop["id"]))

    assert [r["id"] for r in asyncio.run(store.list("skills"))] == [keep["id"]]


def test_get_singleton(store):
    assert asyncio.run(store.get_singleton("site_settings")) is None

    first = asyncio.run(store.insert("site_settings", {"hero_title": "first"}))
    asyncio.run(store.insert("site_settings", {"hero_title": "second"}))

    assert asyncio.run(store.get_singleton("site_settings"))["id"] == first["id"]


def test_unreadable_store_maps_to_transient_error(tmp_db_dir):
    # A directory cannot be opened as a database file
    store = SqliteDataGateway(tmp_db_dir)
    with pytest.raises(TransientFetchError):
        asyncio.run(store.list("projects"))


# ---------------------------------------------------------------------------
# Storage
# ---------------------------------------------------------------------------

def test_unique_filename_shape():
    name = unique_filename("portrait.jpeg")
    assert re.fullmatch(r"[0-9a-f]{12}-\d{13}\.jpeg", name)
    assert unique_filename("portrait.jpeg") != name


def test_allowed_file():
    assert allowed_file("a.PNG")
    assert allowed_file("a.webp")
    assert not allowed_file("a.svg")
    assert not allowed_file("noext")


def test_local_upload_never_overwrites(tmp_db_dir):
    storage = LocalStorageGateway(tmp_db_dir)
    path = asyncio.run(storage.upload("projects", "x.png", b"first"))
    assert path == "projects/x.png"
    assert storage.public_url(path) == "/static/projects/x.png"

    with pytest.raises(UploadError):
        asyncio.run(storage.upload("projects", "x.png", b"second"))
    with open(os.path.join(tmp_db_dir, "projects", "x.png"), "rb") as f:
        assert f.read() == b"first"


def test_spaces_upload_is_public_read():
    pytest.importorskip("botocore")
    storage = SpacesStorageGateway("nyc3", "portfolio", "key", "secret")
    client = MagicMock()
    with patch.object(storage, "_get_client", return_value=client):
        path = asyncio.run(storage.upload("hero", "me.png", b"data"))

    kwargs = client.put_object.call_args.kwargs
    assert kwargs["Bucket"] == "portfolio"
    assert kwargs["Key"] == "site-images/hero/me.png"
    assert kwargs["ACL"] == "public-read"
    assert kwargs["ContentType"] == "image/png"
    assert storage.public_url(path) == (
        "https://portfolio.nyc3.digitaloceanspaces.com/site-images/hero/me.png"
    )


def test_spaces_failure_maps_to_upload_error():
    botocore = pytest.importorskip("botocore.exceptions")
    storage = SpacesStorageGateway("nyc3", "portfolio", "key", "secret")
    client = MagicMock()
    client.put_object.side_effect = botocore.ClientError(
        {"Error": {"Code": "AccessDenied", "Message": "denied"}}, "PutObject"
    )
    with patch.object(storage, "_get_client", return_value=client):
        with pytest.raises(UploadError):
            asyncio.run(storage.upload("hero", "me.png", b"data"))


def test_build_storage_gateway():
    assert isinstance(build_storage_gateway({"STORAGE_TYPE": "local"}, "/tmp/static"), LocalStorageGateway)
    cloud = build_storage_gateway({"STORAGE_TYPE": "cloud", "DO_SPACES_NAME": "p"}, "/tmp/static")
    assert isinstance(cloud, SpacesStorageGateway)
    assert cloud.folder == "site-images"
