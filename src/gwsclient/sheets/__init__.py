"""
Classes to facilitate working with Google Sheets.

Note a 'spreadsheet' is the whole document while a 'sheet' is one tab within it.
The pieces, from the bottom up:
    SpreadsheetHandle   immutable spreadsheet ID + sheet ID/title
    SheetsApi           the sheets v4 service calls
    RangeResolver       binds ranges to the sheet title, resolving title/ID lazily
    BatchWriter         decides update/append/insert and builds the requests
    GoogleSheets        the stateful convenience facade most callers want
"""

# can address up to 'ZZZ'
GoogleSheetsMaxColumns = 18278

from .handle import SpreadsheetHandle, parse_spreadsheet_url
from .api import SheetsApi
from .resolver import RangeResolver, MissingSheet
from .writer import BatchWriter, WriteRequest, WriteMode, InsertPlan, InsertRowsPlan, NO_ROWS
from .spreadsheet import GoogleSheets
