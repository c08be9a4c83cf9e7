"""Integration tests: compile → execute against a real SQLite in-memory DB.

Every operation is compiled from a captured request and run through the
``sqlite3`` driver, so placeholder counts, parameter order and SQLite-specific
syntax (``limit -1``, ``nulls last``, upsert) are checked by SQLite itself.
"""
from __future__ import annotations

import json
import sqlite3

import pytest

import sqliterest
from sqliterest.compile.builder import StatementCompiler
from sqliterest.compile.operations import HTTP_METHOD_OPERATIONS
from sqliterest.errors import BadRequestError
from sqliterest.policy.engine import PolicyConfig
from sqliterest.request.snapshot import RequestSnapshot

JSON = {"Content-Type": "application/json"}


def _request(
    query: object = "",
    headers: dict[str, str] | None = None,
    body: object = None,
    table: str = "books",
) -> RequestSnapshot:
    all_headers = dict(headers or {})
    if body is not None:
        all_headers.update(JSON)
        body = json.dumps(body)
    return RequestSnapshot.capture(table, query, all_headers, body)


def _run(db: sqlite3.Connection, compiled: sqliterest.CompiledQuery) -> list[sqlite3.Row]:
    return db.execute(compiled.sql, compiled.params).fetchall()


def _ids(rows: list[sqlite3.Row]) -> list[int]:
    return [row["id"] for row in rows]


def _book(db: sqlite3.Connection, book_id: int) -> sqlite3.Row:
    return db.execute("SELECT * FROM books WHERE id = ?", (book_id,)).fetchone()


# ---------------------------------------------------------------------------
# Select
# ---------------------------------------------------------------------------


class TestSelect:
    def test_select_all(self, db):
        rows = _run(db, StatementCompiler(_request("order=id")).compile_select())
        assert _ids(rows) == [1, 2, 3, 4, 5]

    def test_select_columns(self, db):
        rows = _run(db, StatementCompiler(_request("select=id,title&id=eq.1")).compile_select())
        assert len(rows) == 1
        assert rows[0].keys() == ["id", "title"]
        assert rows[0]["title"] == "Fairy Tale"

    def test_text_parameter_compared_with_numeric_column(self, db):
        rows = _run(db, StatementCompiler(_request("price=lt.10&order=id")).compile_select())
        assert _ids(rows) == [2, 4]

    def test_range_of_filters(self, db):
        rows = _run(
            db, StatementCompiler(_request("price=ge.5&price=le.20&order=id")).compile_select()
        )
        assert _ids(rows) == [3, 4]

    def test_in_filter(self, db):
        rows = _run(db, StatementCompiler(_request("id=in.(1,3,5)&order=id")).compile_select())
        assert _ids(rows) == [1, 3, 5]

    def test_in_filter_strings(self, db):
        rows = _run(
            db,
            StatementCompiler(
                _request({"author": 'in.("V.E. Schwab","Alice Hoffman")', "order": "id"})
            ).compile_select(),
        )
        assert _ids(rows) == [2, 3]

    def test_is_null(self, db):
        rows = _run(db, StatementCompiler(_request("published=is.null")).compile_select())
        assert _ids(rows) == [4]

    def test_is_true(self, db):
        rows = _run(db, StatementCompiler(_request("in_stock=is.true&order=id")).compile_select())
        assert _ids(rows) == [1, 3, 5]

    def test_is_false(self, db):
        rows = _run(db, StatementCompiler(_request("in_stock=is.false")).compile_select())
        assert _ids(rows) == [2]

    def test_like(self, db):
        rows = _run(
            db,
            StatementCompiler(_request({"title": "like.The%", "order": "id"})).compile_select(),
        )
        assert _ids(rows) == [2, 3]

    def test_neq(self, db):
        rows = _run(
            db,
            StatementCompiler(_request({"author": "neq.Stephen King", "order": "id"})).compile_select(),
        )
        assert _ids(rows) == [2, 3, 4, 5]

    def test_order_desc_nulls_last(self, db):
        rows = _run(
            db,
            StatementCompiler(_request("order=published.desc.nullslast,id")).compile_select(),
        )
        assert _ids(rows) == [1, 2, 5, 3, 4]

    def test_order_nulls_first(self, db):
        rows = _run(
            db,
            StatementCompiler(_request("order=published.asc.nullsfirst,id")).compile_select(),
        )
        assert _ids(rows) == [4, 3, 1, 2, 5]

    def test_limit_offset(self, db):
        rows = _run(
            db, StatementCompiler(_request("order=id&limit=2&offset=1")).compile_select()
        )
        assert _ids(rows) == [2, 3]

    def test_range_header(self, db):
        rows = _run(
            db,
            StatementCompiler(_request("order=id", headers={"Range": "1-2"})).compile_select(),
        )
        assert _ids(rows) == [2, 3]

    def test_open_range_header(self, db):
        rows = _run(
            db,
            StatementCompiler(_request("order=id", headers={"Range": "3-"})).compile_select(),
        )
        assert _ids(rows) == [4, 5]

    def test_negative_limit_is_unbounded(self, db):
        rows = _run(db, StatementCompiler(_request("order=id&limit=-1")).compile_select())
        assert len(rows) == 5


# ---------------------------------------------------------------------------
# Count and Content-Range
# ---------------------------------------------------------------------------


class TestCount:
    def test_exact_count(self, db):
        compiled = StatementCompiler(_request("published=eq.2022&order=id&limit=1")).compile_exact_count()
        (row,) = _run(db, compiled)
        assert row[0] == 3

    def test_count_feeds_content_range(self, db):
        compiler = StatementCompiler(
            _request("order=id", headers={"Range": "0-1", "Prefer": "count=exact"})
        )
        assert _ids(_run(db, compiler.compile_select())) == [1, 2]
        (row,) = _run(db, compiler.compile_exact_count())
        assert compiler.response_headers(total=row[0]) == {
            "Range-Unit": "items",
            "Content-Range": "0-1/5",
        }


# ---------------------------------------------------------------------------
# Insert / upsert
# ---------------------------------------------------------------------------


class TestInsert:
    def test_insert_rows_with_sparse_columns(self, db):
        body = [
            {"id": 6, "title": "Dune", "author": "Frank Herbert", "price": 9.99},
            {"id": 7, "title": "Emma", "author": "Jane Austen", "price": 4.5, "published": 1815},
        ]
        compiled = StatementCompiler(_request(body=body)).compile_insert()
        cursor = db.execute(compiled.sql, compiled.params)
        assert cursor.rowcount == 2
        assert _book(db, 6)["published"] is None
        assert _book(db, 7)["published"] == 1815

    def test_duplicate_key_without_resolution_fails(self, db):
        compiled = StatementCompiler(
            _request(body={"id": 1, "title": "x", "author": "y", "price": 1})
        ).compile_insert()
        with pytest.raises(sqlite3.IntegrityError):
            db.execute(compiled.sql, compiled.params)

    def test_merge_duplicates(self, db):
        compiled = StatementCompiler(
            _request(
                "on_conflict=id",
                headers={"Prefer": "resolution=merge-duplicates"},
                body=[
                    {"id": 1, "title": "Fairy Tale (Paperback)", "author": "Stephen King", "price": 12},
                    {"id": 8, "title": "Persuasion", "author": "Jane Austen", "price": 3},
                ],
            )
        ).compile_insert()
        db.execute(compiled.sql, compiled.params)
        assert _book(db, 1)["title"] == "Fairy Tale (Paperback)"
        assert _book(db, 1)["price"] == 12
        assert _book(db, 8)["title"] == "Persuasion"

    def test_ignore_duplicates(self, db):
        compiled = StatementCompiler(
            _request(
                "on_conflict=id",
                headers={"Prefer": "resolution=ignore-duplicates"},
                body={"id": 1, "title": "Changed", "author": "Nobody", "price": 1},
            )
        ).compile_insert()
        cursor = db.execute(compiled.sql, compiled.params)
        assert cursor.rowcount == 0
        assert _book(db, 1)["title"] == "Fairy Tale"

    def test_ignore_duplicates_without_target(self, db):
        compiled = StatementCompiler(
            _request(
                headers={"Prefer": "resolution=ignore-duplicates"},
                body={"id": 2, "title": "Changed", "author": "Nobody", "price": 1},
            )
        ).compile_insert()
        db.execute(compiled.sql, compiled.params)
        assert _book(db, 2)["title"] == "The Bookstore Sisters: A Short Story"

    def test_upsert_with_schema_policy(self, db, schema_policy):
        compiled = StatementCompiler(
            _request(
                "on_conflict=id",
                headers={"Prefer": "resolution=merge-duplicates"},
                body={"id": 3, "book_id": 3, "rating": 1, "comment": "Changed my mind"},
                table="reviews",
            ),
            schema_policy,
        ).compile_insert()
        db.execute(compiled.sql, compiled.params)
        row = db.execute("SELECT rating, comment FROM reviews WHERE id = 3").fetchone()
        assert (row["rating"], row["comment"]) == (1, "Changed my mind")


# ---------------------------------------------------------------------------
# Update / delete
# ---------------------------------------------------------------------------


class TestUpdate:
    def test_update_matching_rows(self, db):
        compiled = StatementCompiler(
            _request("id=in.(2,4)", body={"in_stock": True})
        ).compile_update()
        cursor = db.execute(compiled.sql, compiled.params)
        assert cursor.rowcount == 2
        assert _book(db, 2)["in_stock"] == 1
        assert _book(db, 4)["in_stock"] == 1

    def test_update_single_entry(self, db):
        compiled = StatementCompiler(
            _request("id=eq.3", body={"price": 15.5, "title": "Addie LaRue"})
        ).compile_update_single_entry()
        cursor = db.execute(compiled.sql, compiled.params)
        assert cursor.rowcount == 1
        assert _book(db, 3)["price"] == 15.5
        assert _book(db, 3)["title"] == "Addie LaRue"

    def test_update_single_entry_without_filter_is_rejected(self, db):
        with pytest.raises(BadRequestError):
            StatementCompiler(_request(body={"price": 0})).compile_update_single_entry()
        assert _book(db, 1)["price"] == 23.54

    def test_update_to_null(self, db):
        compiled = StatementCompiler(
            _request("id=eq.1", body={"published": None})
        ).compile_update()
        db.execute(compiled.sql, compiled.params)
        assert _book(db, 1)["published"] is None


class TestDelete:
    def test_delete_matching_rows(self, db):
        compiled = StatementCompiler(_request("rating=lt.4", table="reviews")).compile_delete()
        cursor = db.execute(compiled.sql, compiled.params)
        assert cursor.rowcount == 1
        remaining = db.execute("SELECT id FROM reviews ORDER BY id").fetchall()
        assert _ids(remaining) == [1, 3]

    def test_delete_is_null(self, db):
        compiled = StatementCompiler(_request("comment=is.null", table="reviews")).compile_delete()
        assert db.execute(compiled.sql, compiled.params).rowcount == 1


# ---------------------------------------------------------------------------
# HTTP method dispatch
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    ("method", "query", "body", "expected_ids"),
    [
        ("GET", "author=eq.V.E. Schwab", None, [1, 2, 3, 4, 5]),
        ("DELETE", "id=eq.5", None, [1, 2, 3, 4]),
        ("PATCH", "id=eq.2", {"title": "Renamed"}, [1, 2, 3, 4, 5]),
        ("PUT", "id=eq.2", {"title": "Renamed"}, [1, 2, 3, 4, 5]),
        (
            "POST",
            "",
            {"id": 9, "title": "Beloved", "author": "Toni Morrison", "price": 7},
            [1, 2, 3, 4, 5, 9],
        ),
    ],
)
def test_http_method_round_trip(db, method, query, body, expected_ids):
    request = _request(query, body=body)
    compiled = sqliterest.compile_request(HTTP_METHOD_OPERATIONS[method], request)
    db.execute(compiled.sql, compiled.params)
    assert _ids(db.execute("SELECT id FROM books ORDER BY id").fetchall()) == expected_ids


def test_compiled_statements_are_reusable(db):
    compiler = StatementCompiler(_request("id=eq.1"), PolicyConfig())
    first = _run(db, compiler.compile_select())
    second = _run(db, compiler.compile_select())
    assert [tuple(r) for r in first] == [tuple(r) for r in second]
