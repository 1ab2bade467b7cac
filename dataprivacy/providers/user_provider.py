"""In-process user directory used as the default UserLookup."""

import logging
from typing import Any, Dict, Iterable, List, Optional

from dataprivacy.core.interfaces import UserLookup
from dataprivacy.core.validation import NotFoundError
from dataprivacy.models.request import User


logger = logging.getLogger(__name__)


class InMemoryUserDirectory(UserLookup):
    """UserLookup over a fixed set of user records."""

    def __init__(self, users: Optional[Iterable[User]] = None):
        self._users: Dict[int, User] = {}
        for user in users or []:
            self.add_user(user)

    @classmethod
    def from_records(cls, records: Iterable[Dict[str, Any]]) -> "InMemoryUserDirectory":
        """Build a directory from plain user mappings."""
        return cls(User.from_dict(record) for record in records)

    def add_user(self, user: User) -> None:
        """Add or replace a user."""
        if user.id in self._users:
            logger.debug(f"Replacing user {user.id} in directory")
        self._users[user.id] = user

    def get_user(self, user_id: int, must_exist: bool = True) -> Optional[User]:
        """Return the user with the given id."""
        user = self._users.get(int(user_id))

        if user is None and must_exist:
            raise NotFoundError("user", user_id)

        return user

    def list_users(self) -> List[User]:
        """Return all users ordered by id."""
        return [self._users[user_id] for user_id in sorted(self._users)]

    def __len__(self) -> int:
        return len(self._users)

    def __contains__(self, user_id: object) -> bool:
        try:
            return int(user_id) in self._users
        except (TypeError, ValueError):
            return False
