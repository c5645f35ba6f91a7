"""
Error Taxonomy
==============

Typed failures raised by the gateways and surfaced by the controllers.
Each carries the HTTP status the JSON routes answer with.
"""


class FolioError(Exception):
    """Base exception for folio."""

    status_code = 500


class AuthenticationRequired(FolioError):
    """No session is present."""

    status_code = 401


class AuthorizationDenied(FolioError):
    """A session exists but lacks the required role."""

    status_code = 403


class TransientFetchError(FolioError):
    """Loading from the record store failed."""

    status_code = 503


class ValidationError(FolioError):
    """A write payload was rejected by the record schema."""

    status_code = 400


class NotFoundError(FolioError):
    """An update or delete referenced an unknown id."""

    status_code = 404


class UploadError(FolioError):
    """The object store refused or failed an upload."""

    status_code = 502
