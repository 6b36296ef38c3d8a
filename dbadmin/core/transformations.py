"""
Column transformation settings stored in the configuration storage.

Each configured column maps to a MIME type (stored with `_` in place of
`/`, e.g. image_jpeg) plus transformation names and their option strings.
"""

import re
from typing import Dict, Union

from sqlalchemy import or_
from sqlmodel import select

from .db import get_session
from ..models.base import ColumnInfo

MIME_FIELDS = (
    "column_name",
    "mimetype",
    "transformation",
    "transformation_options",
    "input_transformation",
    "input_transformation_options",
)

_ESCAPED_CHAR = re.compile(r"\\(.?)", re.DOTALL)


def _strip_slashes(value: str) -> str:
    """Drop backslash escapes: \\' becomes ' and \\\\ becomes \\."""
    return _ESCAPED_CHAR.sub(r"\1", value)


def get_options(option_string: str) -> Dict[Union[int, str], str]:
    """
    Split a transformation option string into positional options.

    Options are comma separated. An option wrapped in single quotes may
    itself contain commas; the surrounding quotes are removed.

        >>> get_options("'a,b',c")
        {0: 'a,b', 1: 'c'}
    """
    if not option_string:
        return {}

    parts = option_string.split(",")
    options = []
    while parts:
        option = parts.pop(0)
        trimmed = option.strip()
        if len(trimmed) > 1 and trimmed[0] == "'" and trimmed[-1] == "'":
            option = trimmed[1:-1]
        elif trimmed.startswith("'"):
            # Quoted option split by a comma; glue parts until the closing quote
            joined = option.lstrip()
            rtrimmed = ""
            while parts:
                joined += "," + parts.pop(0)
                rtrimmed = joined.rstrip()
                if rtrimmed.endswith("'"):
                    break
            option = rtrimmed[1:-1]
        options.append(_strip_slashes(option))
    return dict(enumerate(options))


def get_mime(db: str, table: str, strict: bool = False) -> Dict[str, Dict[str, str]]:
    """
    Get the transformation settings of every configured column of a table.

    With strict=True only columns with a MIME type are returned, otherwise
    columns with any transformation setting are included too.
    """
    conditions = [ColumnInfo.mimetype != ""]
    if not strict:
        conditions.extend([
            ColumnInfo.transformation != "",
            ColumnInfo.transformation_options != "",
            ColumnInfo.input_transformation != "",
            ColumnInfo.input_transformation_options != "",
        ])

    with get_session() as session:
        stmt = select(ColumnInfo).where(
            ColumnInfo.db_name == db,
            ColumnInfo.table_name == table,
            or_(*conditions),
        )
        rows = session.exec(stmt).all()

    return {
        row.column_name: {field: getattr(row, field) or "" for field in MIME_FIELDS}
        for row in rows
    }
