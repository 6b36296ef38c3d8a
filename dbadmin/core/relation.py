"""
Feature detection for the configuration storage.

Comment work needs the column info table; MIME work additionally needs the
MIME/transformation columns that older storage layouts lack.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy import inspect
from sqlalchemy.engine import Engine

from .config import settings
from .db import sync_engine
from ..models.base import COLUMN_INFO_TABLE

logger = logging.getLogger(__name__)

MIME_COLUMNS = {"mimetype", "transformation", "transformation_options"}


@dataclass(frozen=True)
class RelationParameters:
    commwork: bool = False
    mimework: bool = False

    def is_comment_work_enabled(self) -> bool:
        return self.commwork

    def is_mime_work_enabled(self) -> bool:
        return self.mimework


def get_relations_param(engine: Optional[Engine] = None) -> RelationParameters:
    """Check which configuration storage features are usable."""
    if not settings.CONFIG_STORAGE_ENABLED:
        return RelationParameters()

    inspector = inspect(engine or sync_engine)
    if not inspector.has_table(COLUMN_INFO_TABLE):
        logger.debug("[relation] %s missing, comment work disabled", COLUMN_INFO_TABLE)
        return RelationParameters()

    columns = {column["name"] for column in inspector.get_columns(COLUMN_INFO_TABLE)}
    mimework = MIME_COLUMNS.issubset(columns)
    if not mimework:
        logger.debug("[relation] %s lacks MIME columns, mime work disabled", COLUMN_INFO_TABLE)
    return RelationParameters(commwork=True, mimework=mimework)
