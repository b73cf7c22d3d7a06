"""
Bookworm Backend - MongoDB Store Adapter Tests
===============================================

What:  Checks the pymongo adapter without a running server.
How:   The underlying AsyncCollection / AsyncMongoClient are mocked; we verify
       the calls made and the result shapes produced.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from bson import ObjectId
from pymongo.errors import ServerSelectionTimeoutError

from bookworm.database import MongoCollection, MongoDocumentStore, get_store
from bookworm.exceptions import DatabaseError


class TestMongoCollection:

    @pytest.mark.asyncio
    async def test_insert_result_shape(self):
        new_id = ObjectId()
        raw = MagicMock()
        raw.insert_one = AsyncMock(return_value=MagicMock(inserted_id=new_id, acknowledged=True))

        result = await MongoCollection(raw).insert_one({"title": "Dune"})

        assert result == {"acknowledged": True, "insertedId": new_id}
        raw.insert_one.assert_awaited_once_with({"title": "Dune"})

    @pytest.mark.asyncio
    async def test_update_passes_upsert_flag(self):
        upserted = ObjectId()
        raw = MagicMock()
        raw.update_one = AsyncMock(return_value=MagicMock(
            matched_count=0, modified_count=0, upserted_id=upserted, acknowledged=True,
        ))

        result = await MongoCollection(raw).update_one({"a": 1}, {"$set": {"b": 2}}, upsert=True)

        raw.update_one.assert_awaited_once_with({"a": 1}, {"$set": {"b": 2}}, upsert=True)
        assert result == {
            "acknowledged": True,
            "matchedCount": 0,
            "modifiedCount": 0,
            "upsertedCount": 1,
            "upsertedId": upserted,
        }

    @pytest.mark.asyncio
    async def test_delete_result_shape(self):
        raw = MagicMock()
        raw.delete_one = AsyncMock(return_value=MagicMock(deleted_count=0, acknowledged=True))

        result = await MongoCollection(raw).delete_one({"_id": ObjectId()})

        assert result == {"acknowledged": True, "deletedCount": 0}

    @pytest.mark.asyncio
    async def test_find_applies_sort(self):
        cursor = MagicMock()
        cursor.sort.return_value = cursor
        cursor.to_list = AsyncMock(return_value=[{"name": "A"}])
        raw = MagicMock()
        raw.find.return_value = cursor

        docs = await MongoCollection(raw).find({}, sort=[("name", 1)])

        assert docs == [{"name": "A"}]
        raw.find.assert_called_once_with({})
        cursor.sort.assert_called_once_with([("name", 1)])

    @pytest.mark.asyncio
    async def test_find_without_sort(self):
        cursor = MagicMock()
        cursor.to_list = AsyncMock(return_value=[])
        raw = MagicMock()
        raw.find.return_value = cursor

        await MongoCollection(raw).find({"genre": "Fantasy"})

        cursor.sort.assert_not_called()


class TestMongoDocumentStore:

    @pytest.mark.asyncio
    async def test_connect_pings_admin(self):
        client = MagicMock()
        client.admin.command = AsyncMock(return_value={"ok": 1})
        with patch("bookworm.database.AsyncMongoClient", return_value=client) as factory:
            store = MongoDocumentStore(uri="mongodb://db.test:27017", db_name="book-worm")
            await store.connect()

        assert factory.call_args.args[0] == "mongodb://db.test:27017"
        client.admin.command.assert_awaited_once_with("ping")

    @pytest.mark.asyncio
    async def test_unreachable_server_raises_database_error(self):
        client = MagicMock()
        client.admin.command = AsyncMock(side_effect=ServerSelectionTimeoutError("no servers"))
        client.close = AsyncMock()
        with patch("bookworm.database.AsyncMongoClient", return_value=client):
            store = MongoDocumentStore()
            with pytest.raises(DatabaseError):
                await store.connect()

        client.close.assert_awaited_once()

    def test_collection_before_connect_raises(self):
        with pytest.raises(DatabaseError):
            MongoDocumentStore().collection("books")

    @pytest.mark.asyncio
    async def test_ping_false_when_not_connected(self):
        assert await MongoDocumentStore().ping() is False

    def test_get_store_reads_app_state(self, store):
        request = MagicMock()
        request.app.state.store = store
        assert get_store(request) is store
