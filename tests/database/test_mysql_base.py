from decimal import Decimal

import mysql.connector
import pytest

from src.workforce_payroll.workforce_payroll.core.exceptions import PersistenceError
from src.workforce_payroll.workforce_payroll.database.bootstrap import iter_sql_statements
from src.workforce_payroll.workforce_payroll.database.mysql_base import as_decimal, db_cursor


class FakeCursor:
    def __init__(self, fail: bool):
        self.fail = fail
        self.closed = False

    def execute(self, sql, params=None):
        if self.fail:
            raise mysql.connector.errors.DatabaseError("lost connection")

    def close(self):
        self.closed = True


class FakeConnection:
    def __init__(self, fail: bool = False):
        self.cursor_obj = FakeCursor(fail)
        self.committed = False
        self.rolled_back = False
        self.closed = False

    def cursor(self, dictionary=True):
        return self.cursor_obj

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        self.closed = True


class FakeFactory:
    def __init__(self, conn=None, error=None):
        self.conn = conn
        self.error = error

    def connect(self):
        if self.error:
            raise self.error
        return self.conn


def test_commits_on_success():
    conn = FakeConnection()
    with db_cursor(FakeFactory(conn)) as (_, cur):
        cur.execute("SELECT 1")

    assert conn.committed and conn.closed and conn.cursor_obj.closed
    assert not conn.rolled_back


def test_driver_error_rolls_back_and_becomes_persistence_error():
    conn = FakeConnection(fail=True)

    with pytest.raises(PersistenceError):
        with db_cursor(FakeFactory(conn)) as (_, cur):
            cur.execute("DELETE FROM x")

    assert conn.rolled_back and conn.closed
    assert not conn.committed


class DroppedConnection(FakeConnection):
    def rollback(self):
        raise mysql.connector.errors.OperationalError("MySQL Connection not available")


def test_failed_rollback_keeps_driver_error_as_persistence_error():
    conn = DroppedConnection(fail=True)

    with pytest.raises(PersistenceError, match="lost connection"):
        with db_cursor(FakeFactory(conn)) as (_, cur):
            cur.execute("DELETE FROM x")

    assert conn.closed


def test_connect_failure_becomes_persistence_error():
    with pytest.raises(PersistenceError):
        with db_cursor(FakeFactory(error=mysql.connector.errors.InterfaceError("no route"))):
            pass


def test_as_decimal():
    assert as_decimal(None) == Decimal("0")
    assert as_decimal(2.5) == Decimal("2.5")
    assert as_decimal(Decimal("1.10")) == Decimal("1.10")


def test_sql_splitter_keeps_semicolons_in_quotes():
    sql = "INSERT INTO t VALUES ('a;b'); CREATE TABLE u (id INT);\n"

    assert list(iter_sql_statements(sql)) == ["INSERT INTO t VALUES ('a;b')", "CREATE TABLE u (id INT)"]


def test_sql_splitter_skips_line_comments():
    sql = "-- demo data\nINSERT INTO t VALUES ('--not a comment'); -- trailing\nDELETE FROM u"

    assert list(iter_sql_statements(sql)) == ["INSERT INTO t VALUES ('--not a comment')", "DELETE FROM u"]
