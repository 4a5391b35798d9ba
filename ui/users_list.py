# ui/users_list.py
import logging
from datetime import datetime
from typing import List, Optional

from errors import GatewayError
from models.user import User
from .api import StudentRecordsApi
from .notifications import Notifier
from .student_management import ListStatus
from .table import display_name, page_count, paginate, sort_rows

logger = logging.getLogger(__name__)

PAGE_SIZE_OPTIONS = (10, 20, 50)
SORT_KEYS = {
    "firstName": lambda u: u.firstName.casefold(),
    "createdAt": lambda u: u.createdAt,
}


class UsersListController:
    """Read-only list of registered users."""

    def __init__(self, api: StudentRecordsApi, notifier: Optional[Notifier] = None):
        self.api = api
        self.notifier = notifier or Notifier()
        self.status = ListStatus.IDLE
        self.users: List[User] = []
        self.page_size = PAGE_SIZE_OPTIONS[0]
        self.sort_by: Optional[str] = None
        self.descending = False
        self._mounted = False
        self._generation = 0

    async def mount(self):
        self._mounted = True
        self._generation += 1
        generation = self._generation
        self.status = ListStatus.LOADING
        try:
            users = await self.api.get_all_users()
        except GatewayError as e:
            if self._mounted and generation == self._generation:
                self.status = ListStatus.ERROR
                self.notifier.error(f"Failed to fetch users: {e.detail}")
            return
        if self._mounted and generation == self._generation:
            self.users = users
            self.status = ListStatus.LOADED

    def unmount(self):
        self._mounted = False

    def set_sort(self, key: Optional[str], descending: bool = False):
        if key is not None and key not in SORT_KEYS:
            raise ValueError(f"Cannot sort users by {key}")
        self.sort_by = key
        self.descending = descending

    def set_page_size(self, size: int):
        if size not in PAGE_SIZE_OPTIONS:
            raise ValueError(f"Page size must be one of {PAGE_SIZE_OPTIONS}")
        self.page_size = size

    def rows(self) -> List[User]:
        if self.sort_by is None:
            return list(self.users)
        return sort_rows(self.users, key=SORT_KEYS[self.sort_by], descending=self.descending)

    def page(self, number: int = 1) -> List[User]:
        return paginate(self.rows(), number, self.page_size)

    def page_count(self) -> int:
        return page_count(len(self.users), self.page_size)

    @staticmethod
    def display_name(user: User) -> str:
        return display_name(user)

    @staticmethod
    def registered_date(user: User) -> str:
        created: datetime = user.createdAt
        return created.date().isoformat()
