"""
Serve one column value of one row, as configured by its transformation.

The row is picked with the caller's WHERE clause (or the first row), the
MIME type comes from the request, the column's transformation settings or
a binary default, and the value is sent raw, HTML-escaped or resized.
"""

import html
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union

from ..core.db import DatabaseInterface, get_dbi
from ..core.errors import DatabaseNotFound, TableNotFound, TransformationError, UnknownColumn
from ..core.relation import RelationParameters, get_relations_param
from ..core.transformations import get_mime, get_options
from ..schemas.transformation import TransformationParams

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "application/octet-stream"
CHARSET_PREFIX = "; charset="

MimeMap = Dict[str, Dict[str, str]]
MimeOptions = Dict[Union[int, str], str]


@dataclass
class MimeSettings:
    """Transformation settings looked up for the requested table."""
    mime_map: MimeMap = field(default_factory=dict)
    options: MimeOptions = field(default_factory=dict)


@dataclass
class StoredValue:
    """Column value of the fetched row together with its content type."""
    value: bytes
    mime_type: str


def to_bytes(value: Any) -> bytes:
    if value is None:
        return b""
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    return str(value).encode("utf-8")


def check_db_table(dbi: DatabaseInterface, params: TransformationParams) -> None:
    """Make sure the requested database and table exist."""
    if not params.db or not params.table:
        raise TransformationError("db and table parameters are required")
    if not dbi.database_exists(params.db):
        raise DatabaseNotFound(f"Database {params.db!r} not found")
    if not dbi.table_exists(params.db, params.table):
        raise TableNotFound(f"Table {params.table!r} not found in {params.db!r}")


def fetch_row(dbi: DatabaseInterface, params: TransformationParams) -> Optional[Dict[str, Any]]:
    """
    Fetch the row to serve: the first row matching the WHERE clause, or the
    first row of the table when no clause is given.

    The WHERE clause is sent to the server verbatim. It comes from links the
    application generated for rows the user could already browse, and the
    query runs with that user's own privileges.
    """
    dbi.select_db(params.db)
    table = dbi.table_reference(params.table)
    if params.where_clause is not None:
        sql = f"SELECT * FROM {table} WHERE {params.where_clause};"
    else:
        sql = f"SELECT * FROM {table} LIMIT 1;"
    return dbi.fetch_assoc(dbi.query(sql))


def load_mime_settings(
    relation: RelationParameters,
    db: str,
    table: str,
    transform_key: Optional[str],
) -> MimeSettings:
    """Look up the column's transformation settings when the storage supports them."""
    if not (relation.is_comment_work_enabled() and relation.is_mime_work_enabled()):
        return MimeSettings()

    mime_map = get_mime(db, table)
    column = mime_map.get(transform_key or "", {})
    options = get_options(column.get("transformation_options", ""))
    for option in list(options.values()):
        if option.startswith(CHARSET_PREFIX):
            options["charset"] = option
    return MimeSettings(mime_map=mime_map, options=options)


def resolve_mime_type(params: TransformationParams, mime: MimeSettings) -> str:
    """
    Content type of the served value.

    An explicit `ct` wins. Otherwise the stored MIME type (image_jpeg style,
    `_` standing for `/`) or the binary default, plus any charset option.
    """
    if params.ct:
        return params.ct
    stored = mime.mime_map.get(params.transform_key or "", {}).get("mimetype")
    base = stored.replace("_", "/") if stored else DEFAULT_CONTENT_TYPE
    return base + mime.options.get("charset", "")


def escape_html(value: bytes) -> bytes:
    # latin-1 maps every byte to one code point, so non-ASCII bytes survive as-is
    return html.escape(value.decode("latin-1")).encode("latin-1")


def render_value(value: bytes, mime_type: str) -> bytes:
    """Body for a non-resized value; HTML types get escaped so they show as text."""
    if "html" in mime_type.lower():
        return escape_html(value)
    return value


def load_stored_value(params: TransformationParams) -> Optional[StoredValue]:
    """
    Fetch the requested value and resolve its content type.

    Returns None when no row matches; that is not an error.
    """
    with get_dbi() as dbi:
        check_db_table(dbi, params)
        row = fetch_row(dbi, params)

    if not row:
        logger.info("[transformation] no row in %s.%s", params.db, params.table)
        return None

    if not params.transform_key or params.transform_key not in row:
        raise UnknownColumn(f"Unknown column {params.transform_key!r}")

    mime = load_mime_settings(get_relations_param(), params.db, params.table, params.transform_key)
    mime_type = resolve_mime_type(params, mime)
    if params.sql_query:
        logger.debug("[transformation] opened from query: %s", params.sql_query)
    logger.info(
        "[transformation] %s.%s.%s as %s",
        params.db, params.table, params.transform_key, mime_type,
    )
    return StoredValue(value=to_bytes(row[params.transform_key]), mime_type=mime_type)
