import logging

from motor.motor_asyncio import AsyncIOMotorClient
from pymongo import ASCENDING

from app.config.settings import settings

log = logging.getLogger(__name__)

MONGO_URI = settings.MONGO_URI
client = AsyncIOMotorClient(MONGO_URI)
db = client[settings.DB_NAME]

# Collection names are fixed; they match the names the web client expects.
user_collection = db["User"]
message_collection = db["Message"]
question_collection = db["Question"]
notification_collection = db["Notification"]


async def ensure_indexes(users=None):
    """Create the storage-level constraints the documents rely on."""
    users = users if users is not None else user_collection
    await users.create_index([("username", ASCENDING)], unique=True)
    log.info("Indexes ensured on %s", users.name)
