"""
GoogleSheets, the convenience entry point for reading and writing a spreadsheet.

    sheets = GoogleSheets()
    sheets.set_spreadsheet('https://docs.google.com/spreadsheets/d/SPREADSHEET_ID/edit#gid=SHEET_ID')
    rows = sheets.get_rows(1, 5)

    sheets.add_spreadsheet('Hello World')
    sheets.set_rows(1, [['First name', 'Last name', 'Email', 'Age'],
                        ['Ryan', 'Cramer', 'ryan@processwire.com', 44]])
    sheets.append_row(['Ryan', 'Cramer', 'ryan@processwire.com', 44])
"""
import logging

from ..errors import ValidationError, describe_error
from .a1 import GoogleSheetsA1Notation
from .api import SheetsApi
from .handle import SpreadsheetHandle
from .resolver import RangeResolver, MissingSheet
from .resources import Spreadsheet, SpreadsheetProperties
from .requests import UpdateSpreadsheetPropertiesRequest
from .writer import BatchWriter, WriteRequest, WriteMode, InsertRowsPlan, NO_ROWS

logger = logging.getLogger(__name__)

class GoogleSheets():
    """
    Keeps the current SpreadsheetHandle and runs resolver/writer plans against
    the API.  The handle is swapped whole on every change, including when a
    lookup fills in the sheet title or ID.
    """
    _PROPERTY_NAMES = ('title', 'timeZone', 'locale')

    def __init__(self, spreadsheet: str = "", sheet: str|int|None = None,
                 api: SheetsApi|None = None,
                 missing_sheet: MissingSheet|str = MissingSheet.RAISE) -> None:
        self._api = api if api is not None else SheetsApi()
        self._resolver = RangeResolver(self._api, missing_sheet)
        self._writer = BatchWriter(self._resolver)
        self._handle = SpreadsheetHandle()
        if spreadsheet:
            self.set_spreadsheet(spreadsheet)
        if sheet is not None:
            self.set_sheet(sheet)

    def __str__(self) -> str:
        return str(self._handle)

    def __repr__(self) -> str:
        return f"{self.__class__}:{str(self)}"

    @property
    def api(self) -> SheetsApi:
        return self._api

    @property
    def resolver(self) -> RangeResolver:
        return self._resolver

    @property
    def writer(self) -> BatchWriter:
        return self._writer

    @property
    def handle(self) -> SpreadsheetHandle:
        return self._handle

    @handle.setter
    def handle(self, value: SpreadsheetHandle) -> None:
        self._handle = value

    def _resolved(self, need_id: bool = True) -> SpreadsheetHandle:
        """Current handle with whatever the next call needs looked up, kept for later calls"""
        self._handle = self._resolver.resolve(self._handle, need_id)
        return self._handle

    # --- spreadsheet / sheet selection

    def set_spreadsheet(self, spreadsheet: str) -> "GoogleSheets":
        """Set the current spreadsheet by ID or URL (auto-detected)"""
        if '://' in str(spreadsheet):
            return self.set_spreadsheet_url(spreadsheet)
        return self.set_spreadsheet_id(spreadsheet)

    def set_spreadsheet_url(self, url: str) -> "GoogleSheets":
        """
        Spreadsheet and, if the URL has a gid, sheet from a URL.
        Raises ValidationError for anything that isn't a sheets URL.
        """
        parsed = SpreadsheetHandle.from_url(url)
        self.set_spreadsheet_id(parsed.spreadsheet_id)
        if parsed.sheet_id is not None:
            self.set_sheet_id(parsed.sheet_id)
        return self

    def set_spreadsheet_id(self, spreadsheet_id: str, sheet: str|int = "") -> "GoogleSheets":
        """Set the spreadsheet, clearing the sheet if the ID changes"""
        self._handle = self._handle.with_spreadsheet(spreadsheet_id, sheet)
        return self

    def set_sheet(self, sheet: str|int) -> "GoogleSheets":
        """Set the current tab by title or ID"""
        self._handle = self._handle.with_sheet(sheet)
        return self

    def set_sheet_id(self, sheet_id: int|str) -> "GoogleSheets":
        self._handle = self._handle.with_sheet_id(sheet_id)
        return self

    def set_sheet_title(self, title: str) -> "GoogleSheets":
        self._handle = self._handle.with_sheet_title(title)
        return self

    @property
    def spreadsheet_id(self) -> str:
        """Current spreadsheet ID, ConfigurationError if none was set"""
        return self._handle.require()

    @property
    def sheet_id(self) -> int:
        """Current sheet ID, looked up from the title if needed"""
        return self._resolver.resolve_sheet_id(self._resolved())

    @property
    def sheet_title(self) -> str:
        """Current sheet title, looked up from the ID if needed"""
        return self._resolver.resolve_sheet_title(self._resolved(need_id=False))

    def add_spreadsheet(self, title: str, set_as_current: bool = True) -> Spreadsheet:
        """Create a new spreadsheet, by default making it the current one"""
        spreadsheet = self._api.create_spreadsheet(title)
        logger.info("created spreadsheet %s", spreadsheet.spreadsheetId)
        if set_as_current:
            self.set_spreadsheet_id(spreadsheet.spreadsheetId)
        return spreadsheet

    # --- reading

    def get_cells(self, range: str = "", major_dimension: str = "ROWS",
                  value_render_option: str = "FORMATTED_VALUE",
                  date_time_render_option: str = "FORMATTED_STRING") -> list[list]:
        """
        Cells of a row range ('1:3') or A1 range ('A1:C3') in the current sheet.
        An empty range means the whole sheet.
        """
        handle = self._resolved(need_id=False)
        value_range = self._api.get_values(handle.require(), self._resolver.qualify(range, handle),
                                           major_dimension, value_render_option,
                                           date_time_render_option)
        return value_range.values

    def get_rows(self, from_row: int, to_row: int, **options) -> list[list]:
        return self.get_cells(GoogleSheetsA1Notation.row_range(from_row, to_row), **options)

    def get_row(self, row: int, **options) -> list:
        """A single row, empty list if there is nothing in it"""
        rows = self.get_rows(row, row, **options)
        return rows[0] if rows else []

    # --- writing

    def execute(self, request: WriteRequest):
        """Issue a planned write, returning the API response as is"""
        if request.mode == WriteMode.APPEND:
            return self._api.append_values(self.spreadsheet_id, request)
        return self._api.update_values(self.spreadsheet_id, request)

    def execute_insert(self, plan: InsertRowsPlan):
        """
        Run both phases of an insert.  The update is only sent if the insert went
        through, and if the update fails the blank rows stay.
        """
        insert, write = plan.phases
        self._api.batch_update(self.spreadsheet_id, [insert.to_request()])
        return self.execute(write)

    def set_cells(self, range: str, rows: list[list], raw: bool = False,
                  action: WriteMode|str = WriteMode.UPDATE, replace: bool = True,
                  params: dict|None = None):
        """
        Update (or append to) cells.  A multi cell range must hold the rows, a
        single cell range is where the data starts.
        raw: values are stored as is instead of parsed like user input (dates, formulas)
        replace: for append, overwrite what follows rather than insert new rows
        params: passed straight through to the API call
        """
        if not rows:
            return NO_ROWS
        request = self._writer.plan_cells(self._resolved(need_id=False), range, rows, raw=raw,
                                          mode=action, replace=replace, params=params)
        return self.execute(request)

    def set_rows(self, from_row: int, rows: list[list], raw: bool = False,
                 params: dict|None = None):
        """Overwrite rows starting at from_row.  NO_ROWS if rows is empty."""
        if not rows:
            return NO_ROWS
        handle = self._resolved(need_id=False)
        return self.execute(self._writer.plan_update(handle, from_row, rows, raw=raw, params=params))

    def append_rows(self, rows: list[list], after_row: int = 1, raw: bool = False,
                    replace: bool = False, params: dict|None = None):
        """
        Add rows after the table that after_row is within, inserting new rows
        rather than overwriting anything below it.
        """
        if not rows:
            return NO_ROWS
        handle = self._resolved(need_id=False)
        return self.execute(self._writer.plan_append(handle, rows, after_row, raw=raw,
                                                     replace=replace, params=params))

    def append_row(self, row: list, after_row: int = 1, **options):
        return self.append_rows([row], after_row, **options)

    def insert_blanks(self, position: int, quantity: int, rows: bool = True):
        """
        Insert blank rows (or columns when rows=False).  A positive position
        inserts after that row/col number, a negative one inserts before it.
        NO_ROWS for a quantity below 1.
        """
        plan = self._writer.plan_insert_blanks(self._resolved(), position, quantity,
                                               "ROWS" if rows else "COLUMNS")
        if plan is None:
            return NO_ROWS
        return self._api.batch_update(self.spreadsheet_id, [plan.to_request()])

    def insert_rows_after(self, rows: list[list], row_num: int, raw: bool = False,
                          params: dict|None = None):
        """Insert new rows after row_num, returning the update response"""
        if not rows:
            return NO_ROWS
        return self.execute_insert(self._writer.plan_insert(self._resolved(), rows, row_num,
                                                            before=False, raw=raw, params=params))

    def insert_rows_before(self, rows: list[list], row_num: int, raw: bool = False,
                           params: dict|None = None):
        """Insert new rows before row_num, returning the update response"""
        if not rows:
            return NO_ROWS
        return self.execute_insert(self._writer.plan_insert(self._resolved(), rows, row_num,
                                                            before=True, raw=raw, params=params))

    # --- properties

    def set_property(self, name: str, value):
        """Update one spreadsheet property, like title"""
        return self._api.batch_update(self.spreadsheet_id,
                                      [UpdateSpreadsheetPropertiesRequest.single(name, value)])

    def get_properties(self, name: str|bool|None = None) -> Spreadsheet|SpreadsheetProperties|str:
        """
        With no name the whole Spreadsheet, True for just its properties,
        'title', 'timeZone' or 'locale' for that value, 'url' for the edit URL.
        """
        spreadsheet = self._api.get_spreadsheet(self.spreadsheet_id)
        if name is True:
            return spreadsheet.properties
        if name in self._PROPERTY_NAMES:
            return getattr(spreadsheet.properties, name)
        if name == 'url':
            return spreadsheet.spreadsheetUrl
        return spreadsheet

    def get_sheets(self, verbose: bool = False, index_by: str = "") -> list|dict:
        """
        All tabs in the spreadsheet, as summary dicts (title, sheetId, sheetType,
        index, hidden, numRows, numCols) or Sheet objects when verbose.
        index_by 'title' or 'sheetId' returns a dict keyed on that instead.
        """
        sheets = self.get_properties().sheets
        items = [s if verbose else s.properties.summary() for s in sheets]
        if not index_by:
            return items
        if index_by not in ('title', 'sheetId'):
            raise ValidationError(f"get_sheets() index_by must be 'title' or 'sheetId' not: {index_by}")
        keyed = {}
        for s, item in zip(sheets, items):
            keyed.setdefault(getattr(s.properties, index_by), item)
        return keyed

    def test(self) -> str:
        """
        Quick check that the current spreadsheet can be read, as display text.
        Any error is reported in the text rather than raised.
        """
        out = []
        try:
            title = self.get_properties('title')
            out.append(f"Google Sheets Spreadsheet: {title}")
            for s in self.get_sheets():
                out.append(f"Sheet: {s['title']} ({s['numRows']} rows, {s['numCols']} columns)")
        except Exception as e:
            logger.warning("sheets test failed: %s", describe_error(e))
            out.append(f"GoogleSheets test failed: {describe_error(e)}")
        return "\n".join(out)
