# services/users.py
from typing import List
from pymongo.errors import PyMongoError
import logging

from errors import StorageError

logger = logging.getLogger(__name__)


class UserDirectory:
    """Read-only listing of registered users."""
    collection_name = "users"

    def __init__(self, db):
        self.collection = db[self.collection_name]

    async def list_all(self) -> List[dict]:
        try:
            users = []
            for user in await self.collection.find({}, sort=[("_id", 1)]).to_list(None):
                user.pop("_id", None)
                users.append(user)
            return users
        except PyMongoError as e:
            logger.error(f"Failed to list users: {str(e)}")
            raise StorageError(f"Failed to list users: {str(e)}")
