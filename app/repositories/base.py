"""
Base repository pattern for MongoDB data access.

Provides generic CRUD operations over a Motor collection, mapping documents
to Pydantic models. Domain repositories inherit from BaseRepository.
"""

from typing import Any, Dict, Generic, List, Optional, Tuple, Type, TypeVar

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo.errors import DuplicateKeyError, PyMongoError

from app.core.errors import ErrorResponse
from app.core.logger import logger
from app.models.base import DocumentModel, utc_now

T = TypeVar("T", bound=DocumentModel)


class BaseRepository(Generic[T]):
    """
    Generic repository for a single collection.

    Usage:
        class ProductRepository(BaseRepository[Product]):
            model_class = Product
    """

    model_class: Type[T]
    # messages for unique-index violations, keyed by write action
    duplicate_messages: Dict[str, str] = {}

    def __init__(self, collection: AsyncIOMotorCollection):
        self.collection = collection

    @property
    def entity(self) -> str:
        return self.model_class.__name__.lower()

    @staticmethod
    def _to_object_id(document_id: Optional[str]) -> Optional[ObjectId]:
        if document_id and ObjectId.is_valid(document_id):
            return ObjectId(document_id)
        return None

    def _doc_to_model(self, doc: Optional[dict]) -> Optional[T]:
        """Convert MongoDB document to the repository's model"""
        if not doc:
            return None
        return self.model_class.model_validate(doc)

    def _db_error(self, action: str, error: PyMongoError) -> ErrorResponse:
        logger.error(
            f"MongoDB error during {self.entity} {action}",
            error=error,
            metadata={"event": "mongodb_error", "entity": self.entity, "action": action}
        )
        return ErrorResponse(f"Database error during {self.entity} {action}", status_code=503)

    def _duplicate_error(self, action: str, error: DuplicateKeyError) -> ErrorResponse:
        logger.warning(
            f"Unique index violation during {self.entity} {action}",
            metadata={"event": "duplicate_key", "entity": self.entity, "action": action, "key": error.details}
        )
        message = self.duplicate_messages.get(action, f"{self.entity.capitalize()} already exists")
        return ErrorResponse(message, status_code=400)

    async def get_by_id(self, document_id: str) -> Optional[T]:
        """Get a document by ID; malformed IDs resolve to None"""
        obj_id = self._to_object_id(document_id)
        if obj_id is None:
            return None
        try:
            doc = await self.collection.find_one({"_id": obj_id})
        except PyMongoError as e:
            raise self._db_error("retrieval", e)
        return self._doc_to_model(doc)

    async def find_one(self, query: Dict[str, Any]) -> Optional[T]:
        try:
            doc = await self.collection.find_one(query)
        except PyMongoError as e:
            raise self._db_error("lookup", e)
        return self._doc_to_model(doc)

    async def find_many(
        self,
        query: Dict[str, Any],
        sort: Optional[List[Tuple[str, int]]] = None,
        skip: int = 0,
        limit: Optional[int] = None,
    ) -> List[T]:
        try:
            cursor = self.collection.find(query)
            if sort:
                cursor = cursor.sort(sort)
            if skip:
                cursor = cursor.skip(skip)
            if limit is not None:
                cursor = cursor.limit(limit)
            docs = await cursor.to_list(length=limit)
        except PyMongoError as e:
            raise self._db_error("listing", e)
        return [self._doc_to_model(doc) for doc in docs]

    async def count(self, query: Dict[str, Any]) -> int:
        try:
            return await self.collection.count_documents(query)
        except PyMongoError as e:
            raise self._db_error("count", e)

    async def insert(self, model: T) -> T:
        """Insert a new document and return the model with its ID"""
        now = utc_now()
        model.created_at = now
        model.updated_at = now
        model.version = 0
        try:
            result = await self.collection.insert_one(model.to_document())
        except DuplicateKeyError as e:
            raise self._duplicate_error("creation", e)
        except PyMongoError as e:
            raise self._db_error("creation", e)

        model.id = str(result.inserted_id)
        logger.info(
            f"Created {self.entity} {model.id}",
            metadata={"event": f"create_{self.entity}", "id": model.id}
        )
        return model

    async def save(self, model: T) -> T:
        """
        Persist a modified document.

        The write only applies if the stored version still equals the version
        that was read; otherwise a 409 is raised and nothing is written.
        """
        obj_id = self._to_object_id(model.id)
        if obj_id is None:
            raise ErrorResponse(f"{self.entity.capitalize()} not found", status_code=404)

        expected = model.version
        query: Dict[str, Any] = {"_id": obj_id, "version": expected}
        if expected == 0:
            # documents written before versioning carry no version field
            query = {"_id": obj_id, "$or": [{"version": 0}, {"version": {"$exists": False}}]}

        model.version = expected + 1
        model.updated_at = utc_now()
        try:
            result = await self.collection.replace_one(query, model.to_document())
        except DuplicateKeyError as e:
            raise self._duplicate_error("update", e)
        except PyMongoError as e:
            raise self._db_error("update", e)

        if result.matched_count == 0:
            logger.warning(
                f"Concurrent modification of {self.entity} {model.id}",
                metadata={"event": "version_conflict", "id": model.id, "expected_version": expected}
            )
            raise ErrorResponse(
                "Document was modified concurrently, retry the request",
                status_code=409,
            )
        return model

    async def delete(self, document_id: str) -> bool:
        obj_id = self._to_object_id(document_id)
        if obj_id is None:
            return False
        try:
            result = await self.collection.delete_one({"_id": obj_id})
        except PyMongoError as e:
            raise self._db_error("deletion", e)
        return result.deleted_count > 0
