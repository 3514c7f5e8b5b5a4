"""
Thin wrappers over the pymongo collections holding goals and food entries.

Every read that takes a user id filters on it; only ``FoodEntryStore.find_by_id``
fetches by id alone, because food-entry deletion checks ownership after the
fetch.
"""
from datetime import datetime
from typing import Any, Dict, List, Optional

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import ASCENDING, DESCENDING

from fittrack.errors import NotFound


def to_object_id(value: str) -> Optional[ObjectId]:
    """Parse ``value`` as an ObjectId, returning None for anything malformed."""
    if isinstance(value, ObjectId):
        return value
    try:
        return ObjectId(str(value))
    except (InvalidId, TypeError):
        return None


def to_record(doc: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    if doc is None:
        return None
    record = dict(doc)
    record["id"] = str(record.pop("_id"))
    return record


class GoalStore:
    def __init__(self, collection):
        self.collection = collection

    def ensure_indexes(self) -> None:
        self.collection.create_index([("user", ASCENDING), ("createdAt", DESCENDING)])

    def insert(self, doc: Dict[str, Any]) -> Dict[str, Any]:
        doc = dict(doc)
        result = self.collection.insert_one(doc)
        doc["_id"] = result.inserted_id
        return to_record(doc)

    def save(self, goal_id: str, user_id: str, doc: Dict[str, Any]) -> Dict[str, Any]:
        oid = to_object_id(goal_id)
        doc = {k: v for k, v in doc.items() if k not in ("id", "_id")}
        result = self.collection.replace_one({"_id": oid, "user": user_id}, doc)
        if result.matched_count == 0:
            raise NotFound("Goal not found.")
        doc["_id"] = oid
        return to_record(doc)

    def find_one(self, goal_id: str, user_id: str) -> Optional[Dict[str, Any]]:
        oid = to_object_id(goal_id)
        if oid is None:
            return None
        return to_record(self.collection.find_one({"_id": oid, "user": user_id}))

    def find_latest(self, user_id: str) -> Optional[Dict[str, Any]]:
        docs = list(
            self.collection.find({"user": user_id})
            .sort([("createdAt", DESCENDING), ("_id", DESCENDING)])
            .limit(1)
        )
        return to_record(docs[0]) if docs else None

    def find_all(self, user_id: str) -> List[Dict[str, Any]]:
        cursor = self.collection.find({"user": user_id}).sort(
            [("createdAt", DESCENDING), ("_id", DESCENDING)]
        )
        return [to_record(doc) for doc in cursor]

    def delete(self, goal_id: str, user_id: str) -> bool:
        oid = to_object_id(goal_id)
        if oid is None:
            return False
        result = self.collection.delete_one({"_id": oid, "user": user_id})
        return result.deleted_count == 1


class FoodEntryStore:
    def __init__(self, collection):
        self.collection = collection

    def ensure_indexes(self) -> None:
        self.collection.create_index([("user", ASCENDING), ("date", ASCENDING)])

    def insert(self, doc: Dict[str, Any]) -> Dict[str, Any]:
        doc = dict(doc)
        result = self.collection.insert_one(doc)
        doc["_id"] = result.inserted_id
        return to_record(doc)

    def find_by_id(self, entry_id: str) -> Optional[Dict[str, Any]]:
        oid = to_object_id(entry_id)
        if oid is None:
            return None
        return to_record(self.collection.find_one({"_id": oid}))

    def find_between(self, user_id: str, start: datetime, end: datetime) -> List[Dict[str, Any]]:
        cursor = self.collection.find(
            {"user": user_id, "date": {"$gte": start, "$lt": end}}
        ).sort("date", ASCENDING)
        return [to_record(doc) for doc in cursor]

    def delete(self, entry_id: str) -> bool:
        oid = to_object_id(entry_id)
        if oid is None:
            return False
        return self.collection.delete_one({"_id": oid}).deleted_count == 1

    def daily_calories(self, user_id: str) -> List[Dict[str, Any]]:
        pipeline = [
            {"$match": {"user": user_id}},
            {
                "$group": {
                    "_id": {"$dateToString": {"format": "%Y-%m-%d", "date": "$date"}},
                    "totalCalories": {"$sum": "$calories"},
                }
            },
            {"$sort": {"_id": 1}},
            {"$project": {"date": "$_id", "totalCalories": 1, "_id": 0}},
        ]
        return list(self.collection.aggregate(pipeline))
