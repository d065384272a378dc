class ExportError(Exception):
    """Base class for caller misuse at the export API boundary."""


class InvalidModelError(ExportError):
    """A serializer was handed something other than a Model."""


class InvalidDocumentError(ExportError):
    """An input document is not a (name, content) pair."""
