"""
Error taxonomy for the go-link service.

Every failure the core can report derives from `GoLinkError`, so the HTTP
layer can map each kind to a status code in one place:

    ValidationError   -> 400, empty/missing field or unknown field on edit
    UniquenessError   -> 409, name already taken
    NotFound          -> 400 on edit/delete; a normal branch for resolution
    TemplateError     -> 400, not enough path segments for the url template
    StoreUnavailable  -> 503, the backing database cannot be reached
"""


class GoLinkError(Exception):
    """Base class for all go-link errors."""


class ValidationError(GoLinkError):
    """A required field is empty or absent, or an unknown field was supplied."""


class UniquenessError(GoLinkError):
    """Another link already uses the requested name."""


class NotFound(GoLinkError):
    """No link matches the requested id or name."""


class TemplateError(GoLinkError):
    """A url template has more placeholders than supplied path segments."""


class StoreUnavailable(GoLinkError):
    """The persistence layer could not be reached."""
