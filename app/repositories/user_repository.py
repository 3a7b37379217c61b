"""MySQL implementation of UserRepository. Delegates to app.db (single place for init/connection)."""
from typing import Optional

import pymysql

from app.core.errors import DuplicateUserError
from app.db import create_user as _create_user, get_user_by_id as _get_by_id, get_user_by_username as _get_by_username

# MySQL error code for a unique key violation
ER_DUP_ENTRY = 1062


class MySQLUserRepository:
    """User persistence in MySQL. Uses app.db for connections and init_db at startup."""

    def get_by_id(self, user_id: int) -> Optional[dict]:
        return _get_by_id(user_id)

    def get_by_username(self, username: str) -> Optional[dict]:
        return _get_by_username(username)

    def create(self, username: str, password_hash: str) -> int:
        try:
            return _create_user(username, password_hash)
        except pymysql.err.IntegrityError as e:
            if e.args and e.args[0] == ER_DUP_ENTRY:
                raise DuplicateUserError() from e
            raise
