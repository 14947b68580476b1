from __future__ import annotations

import pytest

from registration_portal.core.enums import SortField, SortOrder
from registration_portal.core.exceptions import ValidationError
from registration_portal.registrations.mysql_registration_repository import MySQLRegistrationRepository


class FakeCursor:
    def __init__(self, *, rowcount, stored):
        self.rowcount = rowcount
        self._stored = stored
        self.statements = []

    def execute(self, sql, params=None):
        self.statements.append((" ".join(sql.split()), params))

    def fetchone(self):
        return self._stored

    def fetchall(self):
        return []

    def close(self):
        pass


class FakeConnection:
    def __init__(self, cursor):
        self._cursor = cursor
        self.committed = False
        self.rolled_back = False

    def cursor(self, dictionary=False):
        return self._cursor

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        pass


class FakeConnectionFactory:
    """Hands out one scripted connection, the way DatabaseConnection.connect() would."""

    def __init__(self, *, rowcount=0, stored=None):
        self.cursor = FakeCursor(rowcount=rowcount, stored=stored)
        self.conn = FakeConnection(self.cursor)

    def connect(self):
        return self.conn


def _update(factory, adults, children):
    repo = MySQLRegistrationRepository(factory)
    return repo.update_check_in("reg-1", is_checked_in=True, checked_in_adults=adults, checked_in_children=children)


def test_update_check_in_applied():
    factory = FakeConnectionFactory(rowcount=1)

    assert _update(factory, 2, 1) is True
    assert len(factory.cursor.statements) == 1
    assert factory.conn.committed


def test_update_check_in_refused_by_bounds_raises():
    factory = FakeConnectionFactory(rowcount=0, stored={"adults_count": 2, "children_count": 1})

    with pytest.raises(ValidationError) as exc:
        _update(factory, 3, 0)

    assert str(exc.value) == "Cannot check in more than registered: 2 adults, 1 children"
    assert exc.value.errors == {"checkedInAdults": ["Cannot exceed 2"]}
    assert factory.conn.rolled_back


def test_update_check_in_unknown_id_is_false():
    factory = FakeConnectionFactory(rowcount=0, stored=None)

    assert _update(factory, 1, 0) is False


def test_update_check_in_with_unchanged_values_is_true():
    factory = FakeConnectionFactory(rowcount=0, stored={"adults_count": 2, "children_count": 1})

    assert _update(factory, 2, 1) is True
    assert factory.cursor.statements[1][0].startswith("SELECT adults_count, children_count FROM registrations")


def test_list_page_filters_on_check_in_state():
    factory = FakeConnectionFactory(stored={"total": 0})
    rows, total = MySQLRegistrationRepository(factory).list_page(
        search="ab",
        sort_field=SortField.CREATED_AT,
        sort_order=SortOrder.DESC,
        offset=0,
        limit=10,
        is_checked_in=False,
    )

    assert (rows, total) == ([], 0)
    sql, params = factory.cursor.statements[0]
    assert "is_checked_in = %s" in sql
    assert params[-1] == 0
