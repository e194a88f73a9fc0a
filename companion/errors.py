"""
Error taxonomy shared by the store helpers and the HTTP layer.
"""


class CompanionError(Exception):
    """Base error; ``status`` is the HTTP status the API answers with."""
    status = 500


class InvalidRequest(CompanionError):
    """A required input (header, query parameter, identifier) is missing."""
    status = 400


class AuthenticationError(CompanionError):
    status = 401


class Forbidden(CompanionError):
    status = 403


class NotFound(CompanionError):
    """No matching row in the store."""
    status = 404


class UpstreamUnavailable(CompanionError):
    """The store call failed. The message is safe to show; the cause is not."""
    status = 500
    code = "upstream_unavailable"
