# Base for SQLModel classes

from sqlmodel import SQLModel, Field
from sqlalchemy import UniqueConstraint
from typing import Optional


COLUMN_INFO_TABLE = "pma__column_info"


class ColumnInfo(SQLModel, table=True):
    """Per-column comments and MIME transformations (configuration storage)."""
    __tablename__ = COLUMN_INFO_TABLE
    __table_args__ = (
        UniqueConstraint("db_name", "table_name", "column_name", name="db_name"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    db_name: str = Field(default="", max_length=64)
    table_name: str = Field(default="", max_length=64)
    column_name: str = Field(default="", max_length=64)
    comment: str = Field(default="", max_length=255)
    mimetype: str = Field(default="", max_length=255)  # e.g. image_jpeg, text_plain
    transformation: str = Field(default="", max_length=255)
    transformation_options: str = Field(default="", max_length=255)
    input_transformation: str = Field(default="", max_length=255)
    input_transformation_options: str = Field(default="", max_length=255)
