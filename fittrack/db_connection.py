import logging

from pymongo import MongoClient

from fittrack.config import MONGO_URI, DB_NAME, GOAL_COLLECTION, FOOD_COLLECTION

logger = logging.getLogger(__name__)

# MongoClient connects lazily, so importing this module never blocks on the server.
client = MongoClient(MONGO_URI, serverSelectionTimeoutMS=5000)
db = client[DB_NAME]

goal_col = db[GOAL_COLLECTION]
food_col = db[FOOD_COLLECTION]
logger.debug("MongoDB collections bound on database %s", DB_NAME)
