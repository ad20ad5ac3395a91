"""Custom exceptions for pubtoc."""


class PubtocError(Exception):
    """Base exception for pubtoc operations."""


class ParseError(PubtocError):
    """Input document could not be read or traversed."""


class ConflictError(PubtocError):
    """Generated output would overwrite a manuscript document."""


class ConfigurationError(PubtocError):
    """Compilation options are malformed or reference missing documents."""
