"""
Tests for db.crud — lookup and commit error mapping.

commit() is tested against a MagicMock session so the database failures can
be raised on demand; the lookups use the in-memory database from conftest.py.
"""

from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from core.errors import ConflictError, NotFoundError, StorageFailure, ValidationFailure
from core.query import build_query
from db.crud import apply_changes, commit, get_or_404, require_reference
from db.filters import paginate
from db.models import University


@pytest.fixture()
def session():
    return MagicMock()


class TestCommit:

    def test_success_commits_once(self, session):
        commit(session, "creating the thing")
        session.commit.assert_called_once()
        session.rollback.assert_not_called()

    def test_integrity_error_becomes_conflict(self, session):
        session.commit.side_effect = IntegrityError("INSERT", {}, Exception("UNIQUE constraint failed"))
        with pytest.raises(ConflictError, match="email already exists"):
            commit(session, "creating the user", conflict_message="A user with this email already exists")
        session.rollback.assert_called_once()

    def test_other_database_error_becomes_storage_failure(self, session):
        session.commit.side_effect = OperationalError("INSERT", {}, Exception("disk I/O error"))
        with pytest.raises(StorageFailure) as exc_info:
            commit(session, "creating the result")
        assert exc_info.value.message == "An error occurred while creating the result"
        assert exc_info.value.status_code == 500
        session.rollback.assert_called_once()

    def test_cause_is_not_in_the_message(self, session):
        session.commit.side_effect = OperationalError("INSERT", {}, Exception("password=hunter2"))
        with pytest.raises(StorageFailure) as exc_info:
            commit(session, "updating the user")
        assert "hunter2" not in exc_info.value.message
        assert isinstance(exc_info.value.__cause__, OperationalError)


class TestLookups:

    def test_get_or_404_returns_row(self, db_session):
        db_session.add(University(id="U1", name="Alpha U"))
        db_session.commit()
        assert get_or_404(db_session, University, "U1", "University").name == "Alpha U"

    def test_get_or_404_raises_not_found(self, db_session):
        with pytest.raises(NotFoundError, match="University not found"):
            get_or_404(db_session, University, "missing", "University")

    def test_require_reference_ignores_none(self, db_session):
        require_reference(db_session, University, None, "universityId")

    def test_require_reference_rejects_dangling_id(self, db_session):
        with pytest.raises(ValidationFailure, match="universityId 'nope' does not exist"):
            require_reference(db_session, University, "nope", "universityId")

    def test_apply_changes_sets_attributes(self):
        uni = University(name="Old")
        apply_changes(uni, {"name": "New", "location": "Leeds"})
        assert (uni.name, uni.location) == ("New", "Leeds")


class TestReadFailures:

    def test_get_or_404_maps_database_error(self, session):
        session.get.side_effect = OperationalError("SELECT", {}, Exception("server closed the connection"))
        with pytest.raises(StorageFailure, match="reading universities"):
            get_or_404(session, University, "U1", "University")
        session.rollback.assert_called_once()

    def test_require_reference_maps_database_error(self, session):
        session.get.side_effect = OperationalError("SELECT", {}, Exception("timeout"))
        with pytest.raises(StorageFailure):
            require_reference(session, University, "U1", "universityId")

    def test_paginate_maps_database_error(self, session):
        session.scalars.side_effect = OperationalError("SELECT", {}, Exception("server closed the connection"))
        with pytest.raises(StorageFailure) as exc_info:
            paginate(session, University, build_query({}, ["name"]))
        assert exc_info.value.message == "An error occurred while listing universities"
        assert "server closed" not in exc_info.value.message
        session.rollback.assert_called_once()
