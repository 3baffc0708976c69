from __future__ import annotations


class ExportError(RuntimeError):
    pass


class InvalidRecordError(ExportError):
    """A record is well-typed but cannot be rendered without misreporting it."""
