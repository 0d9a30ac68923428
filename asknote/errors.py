"""Error types raised by the extraction and answering pipeline."""


class AskNoteError(Exception):
    """Base class for all AskNote errors."""


class InvalidInputError(AskNoteError):
    """Missing file, wrong file type, or blank question."""


class UnsupportedDocumentError(AskNoteError):
    """Document can be read but is not supported (e.g. password protected)."""


class ParseError(AskNoteError):
    """Document structure is corrupt or unreadable."""


class EmptyContentError(AskNoteError):
    """No extractable text was found in the document."""


class RemoteServiceError(AskNoteError):
    """Network or provider failure while talking to the language model."""
