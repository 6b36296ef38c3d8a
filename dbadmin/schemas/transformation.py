"""
Request parameters of the transformation wrapper.
"""

import re
from typing import Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..core.config import settings

STRING_PARAMS = ("db", "table", "cn", "ct", "sqlQuery", "transformKey", "whereClause", "resize")
SIZE_PARAMS = ("newWidth", "newHeight")

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def parse_size_param(raw: str, limit: Optional[int] = None) -> int:
    """
    Read a size parameter the lenient way: leading digits count, anything
    else is 0. Values above `limit` are clamped to it.
    """
    limit = settings.MAX_SIZE_PARAM if limit is None else limit
    match = _LEADING_INT.match(raw or "")
    value = int(match.group(1)) if match else 0
    return min(value, limit)


class TransformationParams(BaseModel):
    """Parameters recognized by the wrapper, read once per request."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    db: Optional[str] = None
    table: Optional[str] = None
    cn: Optional[str] = Field(None, description="Download file name hint")
    ct: Optional[str] = Field(None, description="Explicit content type")
    sql_query: Optional[str] = Field(None, alias="sqlQuery")
    transform_key: Optional[str] = Field(None, alias="transformKey")
    where_clause: Optional[str] = Field(None, alias="whereClause")
    resize: Optional[str] = None
    new_width: Optional[int] = Field(None, alias="newWidth")
    new_height: Optional[int] = Field(None, alias="newHeight")

    @classmethod
    def from_query(cls, query: Mapping[str, str]) -> "TransformationParams":
        """Pick the known parameters out of `query`; unknown ones are ignored."""
        values = {name: query[name] for name in STRING_PARAMS if name in query}
        for name in SIZE_PARAMS:
            if name in query:
                values[name] = parse_size_param(query[name])
        return cls(**values)

    @property
    def wants_resize(self) -> bool:
        return self.resize is not None
