"""
Shared fixtures: an in-memory SQLite database with a `files` table and the
column info table used for MIME transformations.
"""

import os

os.environ["DATABASE_URL"] = "sqlite://"

from io import BytesIO

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from dbadmin.main import app
from dbadmin.core.db import get_session, sync_engine
from dbadmin.models.base import ColumnInfo


@pytest.fixture(autouse=True)
def files_table():
    """Fresh `files` table and empty column info for every test."""
    with sync_engine.begin() as conn:
        conn.exec_driver_sql("DROP TABLE IF EXISTS files")
        conn.exec_driver_sql(
            "CREATE TABLE files (id INTEGER PRIMARY KEY, name TEXT, content BLOB)"
        )
        conn.exec_driver_sql("DELETE FROM pma__column_info")
    yield "files"


@pytest.fixture
def client():
    """Test client bound to the app"""
    return TestClient(app)


@pytest.fixture
def insert_file():
    def _insert(id_, name, content):
        with sync_engine.begin() as conn:
            conn.exec_driver_sql(
                "INSERT INTO files (id, name, content) VALUES (?, ?, ?)",
                (id_, name, content),
            )
    return _insert


@pytest.fixture
def column_info():
    def _configure(column, mimetype="", transformation="", options=""):
        with get_session() as session:
            session.add(ColumnInfo(
                db_name="main",
                table_name="files",
                column_name=column,
                mimetype=mimetype,
                transformation=transformation,
                transformation_options=options,
            ))
            session.commit()
    return _configure


def make_image(width=800, height=600, fmt="PNG", color="red") -> bytes:
    buffer = BytesIO()
    Image.new("RGB", (width, height), color).save(buffer, format=fmt)
    return buffer.getvalue()


@pytest.fixture
def image_bytes():
    return make_image
