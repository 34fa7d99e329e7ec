"""Error kinds raised while reading, resolving and writing documents."""


class SitedocError(Exception):
    """Base exception for all sitedoc errors."""


class FatalError(SitedocError):
    """Aborts the run even when strict front matter validation is off."""


class ReadError(SitedocError):
    """A document could not be read."""


class StructuredDataSyntaxError(ReadError):
    """Front matter or a data file is not valid YAML, or not a mapping."""


class InvalidDateError(SitedocError):
    """A date value could not be coerced to a timestamp while merging data."""

    def __init__(self, value, source: str, path: str = None):
        self.value = value
        self.source = source
        self.path = path
        where = f"Document '{path}'" if path else "Document"
        super().__init__(f"{where} does not have a valid date in the {source}: {value!r}")


class UrlTemplateError(SitedocError):
    """A URL template references a placeholder the document does not provide."""
