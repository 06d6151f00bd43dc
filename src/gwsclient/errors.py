"""
Exceptions raised by the adapters.
Remote failures (network, auth, quota) are whatever the Google client library
raises and are passed through untouched.  RemoteError just collects those types
so callers have one name to catch.
"""
import google.auth.exceptions
from googleapiclient.errors import HttpError

class GoogleClientError(Exception):
    """Base for errors raised by this package itself"""
    pass

class ConfigurationError(GoogleClientError, RuntimeError):
    """
    An operation was attempted before a required identifier or
    the authenticated session was set up.
    """
    pass

class ValidationError(GoogleClientError, ValueError):
    """Malformed user input, like an unrecognized URL or option value"""
    pass

class NotFoundError(GoogleClientError, LookupError):
    """A sheet title or ID did not match anything in the spreadsheet"""
    pass

RemoteError = (HttpError, google.auth.exceptions.GoogleAuthError)

def describe_error(e: BaseException) -> str:
    """
    Short one line diagnostic for display: class name, code, message.
    HttpError carries the HTTP status and a reason, anything else gets a 0 code.
    """
    code = getattr(e, 'status_code', None)
    if code is None:
        resp = getattr(e, 'resp', None)
        code = getattr(resp, 'status', 0) if resp is not None else 0
    message = getattr(e, 'reason', None) if isinstance(e, HttpError) else None
    if not message:
        message = str(e)
    return f"{e.__class__.__name__} {code} {message}"
