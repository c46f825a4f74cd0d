"""Tests for BaseRepository persistence and optimistic versioning"""
import pytest
from unittest.mock import MagicMock
from bson import ObjectId
from pymongo.errors import PyMongoError

from app.core.errors import ErrorResponse
from app.models.product import Product
from app.repositories.product import ProductRepository

PRODUCT_ID = "507f1f77bcf86cd799439021"


@pytest.fixture
def repository(mock_collection):
    return ProductRepository(mock_collection)


class TestGetById:

    @pytest.mark.asyncio
    async def test_found(self, repository, mock_collection, mock_product_doc):
        mock_collection.find_one.return_value = mock_product_doc

        product = await repository.get_by_id(PRODUCT_ID)

        assert product.name == "Velvet Chair"
        mock_collection.find_one.assert_called_once_with({"_id": ObjectId(PRODUCT_ID)})

    @pytest.mark.asyncio
    async def test_malformed_id_is_not_found(self, repository, mock_collection):
        assert await repository.get_by_id("not-an-id") is None
        mock_collection.find_one.assert_not_called()

    @pytest.mark.asyncio
    async def test_driver_error_becomes_503(self, repository, mock_collection):
        mock_collection.find_one.side_effect = PyMongoError("connection reset")

        with pytest.raises(ErrorResponse) as exc_info:
            await repository.get_by_id(PRODUCT_ID)

        assert exc_info.value.status_code == 503


class TestInsert:

    @pytest.mark.asyncio
    async def test_insert_assigns_id_and_version(self, repository, mock_collection):
        new_id = ObjectId()
        mock_collection.insert_one.return_value = MagicMock(inserted_id=new_id)

        product = await repository.insert(Product(name="Lamp", version=7))

        assert product.id == str(new_id)
        assert product.version == 0
        stored = mock_collection.insert_one.call_args.args[0]
        assert stored["name"] == "Lamp"
        assert stored["version"] == 0
        assert "_id" not in stored


class TestSave:

    @pytest.mark.asyncio
    async def test_save_filters_on_read_version_and_increments(self, repository, mock_collection, sample_product):
        sample_product.version = 3
        mock_collection.replace_one.return_value = MagicMock(matched_count=1)

        saved = await repository.save(sample_product)

        query, document = mock_collection.replace_one.call_args.args
        assert query == {"_id": ObjectId(PRODUCT_ID), "version": 3}
        assert document["version"] == 4
        assert saved.version == 4

    @pytest.mark.asyncio
    async def test_unversioned_documents_match_version_zero(self, repository, mock_collection, sample_product):
        mock_collection.replace_one.return_value = MagicMock(matched_count=1)

        await repository.save(sample_product)

        query = mock_collection.replace_one.call_args.args[0]
        assert query["$or"] == [{"version": 0}, {"version": {"$exists": False}}]

    @pytest.mark.asyncio
    async def test_concurrent_modification_is_conflict(self, repository, mock_collection, sample_product):
        mock_collection.replace_one.return_value = MagicMock(matched_count=0)

        with pytest.raises(ErrorResponse) as exc_info:
            await repository.save(sample_product)

        assert exc_info.value.status_code == 409
        assert exc_info.value.message == "Document was modified concurrently, retry the request"


class TestDelete:

    @pytest.mark.asyncio
    async def test_delete(self, repository, mock_collection):
        mock_collection.delete_one.return_value = MagicMock(deleted_count=1)

        assert await repository.delete(PRODUCT_ID) is True

    @pytest.mark.asyncio
    async def test_delete_malformed_id(self, repository, mock_collection):
        assert await repository.delete("bogus") is False
        mock_collection.delete_one.assert_not_called()
