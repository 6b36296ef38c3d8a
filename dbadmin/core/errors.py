"""
Errors raised while serving a transformed column value.

Each carries the HTTP status the API layer answers with.
"""


class TransformationError(Exception):
    status_code = 400

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class DatabaseNotFound(TransformationError):
    status_code = 404


class TableNotFound(TransformationError):
    status_code = 404


class UnknownColumn(TransformationError):
    """Requested transform key is missing or not a column of the row."""


class InvalidResizeBounds(TransformationError):
    """newWidth/newHeight missing or not positive while resizing."""


class ImageDecodeError(TransformationError):
    """Stored value could not be decoded as an image."""


class ResizeTimeout(TransformationError):
    status_code = 504
