"""Unit tests for MySQLUserRepository error translation."""
from unittest.mock import patch

import pymysql
import pytest

from app.core.errors import DuplicateUserError
from app.repositories.user_repository import MySQLUserRepository


def test_create_returns_id():
    with patch("app.repositories.user_repository._create_user", return_value=5) as create:
        assert MySQLUserRepository().create("alice", "hash") == 5
    create.assert_called_once_with("alice", "hash")


def test_duplicate_entry_becomes_duplicate_user_error():
    err = pymysql.err.IntegrityError(1062, "Duplicate entry 'alice' for key 'username'")
    with patch("app.repositories.user_repository._create_user", side_effect=err):
        with pytest.raises(DuplicateUserError):
            MySQLUserRepository().create("alice", "hash")


def test_other_integrity_errors_propagate():
    err = pymysql.err.IntegrityError(1048, "Column 'username' cannot be null")
    with patch("app.repositories.user_repository._create_user", side_effect=err):
        with pytest.raises(pymysql.err.IntegrityError):
            MySQLUserRepository().create("alice", "hash")


def test_lookups_delegate_to_db():
    row = {"id": 1, "username": "alice", "password_hash": "h"}
    with patch("app.repositories.user_repository._get_by_username", return_value=row):
        assert MySQLUserRepository().get_by_username("alice") == row
    with patch("app.repositories.user_repository._get_by_id", return_value=None):
        assert MySQLUserRepository().get_by_id(99) is None
