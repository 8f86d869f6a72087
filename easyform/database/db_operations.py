"""
Database operations - Generic CRUD functions for all collections
"""
import logging
from typing import List, Dict, Optional, Any, Tuple

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument

logger = logging.getLogger(__name__)


def id_filters(doc_id: Any) -> List[Dict]:
    """
    Candidate filters for a point lookup, native ObjectId first.

    A string that parses as an ObjectId is tried both ways so records stored
    with a literal string _id stay reachable.
    """
    if isinstance(doc_id, ObjectId):
        return [{"_id": doc_id}]
    if isinstance(doc_id, str) and ObjectId.is_valid(doc_id):
        return [{"_id": ObjectId(doc_id)}, {"_id": doc_id}]
    return [{"_id": doc_id}]


class DBOperations:
    """Generic database operations for MongoDB collections"""

    @staticmethod
    async def get_all(
        database: AsyncIOMotorDatabase,
        collection_name: str,
        filter_query: Dict = None,
        sort: Optional[List[Tuple[str, int]]] = None,
        limit: int = 100,
    ) -> List[Dict]:
        """Get documents from a collection with optional filtering and sorting"""
        collection = database[collection_name]
        filter_query = filter_query or {}
        cursor = collection.find(filter_query, sort=sort, limit=limit)
        return await cursor.to_list(length=limit)

    @staticmethod
    async def get_by_id(database: AsyncIOMotorDatabase, collection_name: str, doc_id: Any) -> Optional[Dict]:
        """Get a single document by ID"""
        collection = database[collection_name]
        for filter_query in id_filters(doc_id):
            document = await collection.find_one(filter_query)
            if document is not None:
                return document
        return None

    @staticmethod
    async def create(database: AsyncIOMotorDatabase, collection_name: str, document: Dict) -> Dict:
        """Insert a document and return it with its _id"""
        collection = database[collection_name]
        result = await collection.insert_one(document)
        document["_id"] = result.inserted_id
        logger.info("[DB INSERT] %s id=%s", collection_name, result.inserted_id)
        return document

    @staticmethod
    async def update_by_id(
        database: AsyncIOMotorDatabase,
        collection_name: str,
        doc_id: Any,
        update: Dict,
    ) -> Optional[Dict]:
        """Apply an update operator document by ID, returning the updated document"""
        collection = database[collection_name]
        for filter_query in id_filters(doc_id):
            result = await collection.find_one_and_update(
                filter_query,
                update,
                return_document=ReturnDocument.AFTER,
            )
            if result is not None:
                logger.info("[DB UPDATE] %s id=%s", collection_name, result["_id"])
                return result
        return None

    @staticmethod
    async def update_one_by_id(
        database: AsyncIOMotorDatabase,
        collection_name: str,
        doc_id: Any,
        update: Dict,
    ) -> bool:
        """Apply an update without reading the document back; True if one matched"""
        collection = database[collection_name]
        for filter_query in id_filters(doc_id):
            result = await collection.update_one(filter_query, update)
            if result.matched_count:
                logger.info("[DB UPDATE] %s id=%s", collection_name, doc_id)
                return True
        return False


db_ops = DBOperations()
