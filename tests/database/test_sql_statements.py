from datetime import time, timedelta
from decimal import Decimal

from geo_attendance.database.bootstrap import _strip_create_db_and_use, iter_sql_statements
from geo_attendance.database.mysql_base import as_bool, normalize_mysql_time, row_coordinates
from geo_attendance.geofence.model import Coordinates


def test_statements_split_outside_quotes_and_comments():
    sql = """
    -- tables
    CREATE TABLE a (id INT);
    INSERT INTO a VALUES (1), ('x;y');
    INSERT INTO b VALUES ("semi;colon", 'it\\'s');
    SELECT 1
    """

    statements = list(iter_sql_statements(sql))

    assert statements == [
        "CREATE TABLE a (id INT)",
        "INSERT INTO a VALUES (1), ('x;y')",
        "INSERT INTO b VALUES (\"semi;colon\", 'it\\'s')",
        "SELECT 1",
    ]


def test_create_database_and_use_are_stripped():
    sql = "CREATE DATABASE IF NOT EXISTS geo_attendance;\nUSE geo_attendance;\nCREATE TABLE t (id INT);\n"

    assert list(iter_sql_statements(_strip_create_db_and_use(sql))) == ["CREATE TABLE t (id INT)"]


def test_mysql_time_values_are_normalized():
    assert normalize_mysql_time(None) is None
    assert normalize_mysql_time(time(9, 15)) == time(9, 15)
    assert normalize_mysql_time(timedelta(hours=18, minutes=30)) == time(18, 30)
    assert normalize_mysql_time("08:05") == time(8, 5)


def test_tinyint_booleans():
    assert as_bool(1) is True
    assert as_bool("0") is False
    assert as_bool(None) is False


def test_row_coordinates_from_decimal_columns():
    row = {"lat": Decimal("12.9716000"), "lng": Decimal("77.5946000"), "missing": None}

    assert row_coordinates(row, "lat", "lng") == Coordinates(12.9716, 77.5946)
    assert row_coordinates(row, "lat", "missing") is None
    assert row_coordinates({}, "lat", "lng") is None
