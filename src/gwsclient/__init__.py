"""
Adapters for using Google APIs (Sheets, Calendar, Gmail) from an application.
Authentication and transport are the Google client library's job; what lives
here is turning friendly input (URLs, row numbers, sheet titles) into the
right API calls.

The access singleton (gws) handles OAuth and builds services, each adapter
appends the scopes it needs.  Sheets has its own subpackage since the range
and write planning logic is most of the code.
"""

from .errors import GoogleClientError, ConfigurationError, ValidationError, NotFoundError, RemoteError
from .access import gws, GoogleAccess, GoogleServiceClient
from .config import load_config, configure
from .calendar import GoogleCalendar, parse_calendar_url
from .mail import GoogleMail
from .sheets import GoogleSheets, SpreadsheetHandle, parse_spreadsheet_url, NO_ROWS
