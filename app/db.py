"""
MySQL connection, user and session CRUD. Creates tables if not exists.
"""
import logging
import pymysql
from contextlib import contextmanager
from typing import Optional

import config

logger = logging.getLogger(__name__)

# Set to False if init_db() failed (e.g. MySQL not running or wrong credentials)
db_available = True

# utf8mb4_bin keeps usernames case-sensitive under the unique key
CREATE_USERS_TABLE = """
CREATE TABLE IF NOT EXISTS users (
  id INT AUTO_INCREMENT PRIMARY KEY,
  username VARCHAR(255) CHARACTER SET utf8mb4 COLLATE utf8mb4_bin NOT NULL UNIQUE,
  password_hash VARCHAR(255) NOT NULL,
  created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);
"""

CREATE_SESSIONS_TABLE = """
CREATE TABLE IF NOT EXISTS sessions (
  id VARCHAR(128) CHARACTER SET ascii COLLATE ascii_bin PRIMARY KEY,
  user_id INT NOT NULL,
  created_at DATETIME NOT NULL,
  expires_at DATETIME NOT NULL,
  INDEX idx_expires_at (expires_at),
  INDEX idx_user_id (user_id)
);
"""


@contextmanager
def get_connection():
    conn = pymysql.connect(
        host=config.MYSQL_HOST,
        port=config.MYSQL_PORT,
        user=config.MYSQL_USER,
        password=config.MYSQL_PASSWORD,
        database=config.MYSQL_DATABASE,
        cursorclass=pymysql.cursors.DictCursor,
    )
    try:
        yield conn
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def _ensure_database_exists():
    """Create the database if it does not exist (connect without database first)."""
    # Escape backticks in identifier for safe SQL
    db_name = config.MYSQL_DATABASE.replace("`", "``")
    conn = pymysql.connect(
        host=config.MYSQL_HOST,
        port=config.MYSQL_PORT,
        user=config.MYSQL_USER,
        password=config.MYSQL_PASSWORD,
        cursorclass=pymysql.cursors.DictCursor,
    )
    try:
        with conn.cursor() as cur:
            cur.execute("CREATE DATABASE IF NOT EXISTS `%s`" % db_name)
        conn.commit()
    finally:
        conn.close()


def init_db() -> bool:
    """Create database if not exists, then the users and sessions tables. Returns True on success."""
    global db_available
    try:
        _ensure_database_exists()
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(CREATE_USERS_TABLE)
                cur.execute(CREATE_SESSIONS_TABLE)
        db_available = True
        return True
    except pymysql.MySQLError as e:
        logger.warning("MySQL init_db failed: %s. Set MYSQL_* in .env and ensure MySQL is running.", e)
        db_available = False
        return False


# ----- Users -----


def create_user(username: str, password_hash: str) -> int:
    """Insert user; returns id. Raises pymysql IntegrityError on duplicate username."""
    with get_connection() as conn:
        with conn.cursor() as cur:
            cur.execute(
                "INSERT INTO users (username, password_hash) VALUES (%s, %s)",
                (username, password_hash),
            )
            return cur.lastrowid


def get_user_by_id(user_id: int) -> Optional[dict]:
    with get_connection() as conn:
        with conn.cursor() as cur:
            cur.execute(
                "SELECT id, username, password_hash, created_at FROM users WHERE id = %s",
                (user_id,),
            )
            return cur.fetchone()


def get_user_by_username(username: str) -> Optional[dict]:
    """Get user by exact username (includes password_hash for verification)."""
    with get_connection() as conn:
        with conn.cursor() as cur:
            cur.execute(
                "SELECT id, username, password_hash, created_at FROM users WHERE username = %s",
                (username,),
            )
            return cur.fetchone()


# ----- Sessions -----


def insert_session(session_id: str, user_id: int, created_at, expires_at) -> None:
    """Insert a session row. Datetimes are naive UTC."""
    with get_connection() as conn:
        with conn.cursor() as cur:
            cur.execute(
                "INSERT INTO sessions (id, user_id, created_at, expires_at) VALUES (%s, %s, %s, %s)",
                (session_id, user_id, created_at, expires_at),
            )


def get_session(session_id: str) -> Optional[dict]:
    """Session row if it exists and has not expired."""
    with get_connection() as conn:
        with conn.cursor() as cur:
            cur.execute(
                """SELECT id, user_id, created_at, expires_at FROM sessions
                   WHERE id = %s AND expires_at > UTC_TIMESTAMP()""",
                (session_id,),
            )
            return cur.fetchone()


def delete_session(session_id: str) -> bool:
    with get_connection() as conn:
        with conn.cursor() as cur:
            cur.execute("DELETE FROM sessions WHERE id = %s", (session_id,))
            return cur.rowcount > 0


def delete_expired_sessions() -> int:
    """Remove expired sessions; returns number of rows deleted."""
    with get_connection() as conn:
        with conn.cursor() as cur:
            cur.execute("DELETE FROM sessions WHERE expires_at <= UTC_TIMESTAMP()")
            return cur.rowcount
