from datetime import datetime

import pytest
import pytz
from bson import ObjectId

from easyform.config.database import DatabaseConfig
from easyform.database.db_operations import id_filters
from easyform.utils.helpers import serialize_doc, unique_in_order


class FakeClient:
    def __init__(self):
        self.closed = False

    def get_default_database(self, default=None):
        return {"name": default}

    def close(self):
        self.closed = True


@pytest.fixture
def clients(monkeypatch):
    created = []

    def new_client(self):
        client = FakeClient()
        created.append(client)
        return client

    monkeypatch.setattr(DatabaseConfig, "_new_client", new_client)
    return created


async def test_session_closes_fresh_client(clients):
    config = DatabaseConfig()
    config.CACHE_CLIENT = False

    async with config.session() as database:
        assert database == {"name": config.DATABASE_NAME}

    assert len(clients) == 1
    assert clients[0].closed


async def test_session_closes_client_when_body_raises(clients):
    config = DatabaseConfig()
    config.CACHE_CLIENT = False

    with pytest.raises(RuntimeError):
        async with config.session():
            raise RuntimeError("query failed")

    assert clients[0].closed


async def test_cached_session_reuses_client_until_close(clients):
    config = DatabaseConfig()
    config.CACHE_CLIENT = True

    async with config.session():
        pass
    async with config.session():
        pass

    assert len(clients) == 1
    assert not clients[0].closed

    await config.close_db()
    assert clients[0].closed
    assert config.client is None


def test_id_filters():
    oid = ObjectId()

    assert id_filters(str(oid)) == [{"_id": oid}, {"_id": str(oid)}]
    assert id_filters(oid) == [{"_id": oid}]
    assert id_filters("form_intake") == [{"_id": "form_intake"}]


def test_serialize_doc_converts_bson_values():
    oid = ObjectId()
    doc = {
        "_id": oid,
        "createdAt": datetime(2024, 1, 2, 3, 4, 5),
        "approvedForms": [oid, "form_a"],
        "metadata": {"ref": oid, "address": "1 Main St"},
    }

    serialized = serialize_doc(doc)

    assert serialized["_id"] == str(oid)
    assert serialized["createdAt"] == pytz.utc.localize(datetime(2024, 1, 2, 3, 4, 5)).isoformat()
    assert serialized["approvedForms"] == [str(oid), "form_a"]
    assert serialized["metadata"] == {"ref": str(oid), "address": "1 Main St"}


def test_unique_in_order():
    assert unique_in_order(["b", "a", "b", "c", "a"]) == ["b", "a", "c"]
    assert unique_in_order([]) == []
