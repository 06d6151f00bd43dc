"""
Planning of sheet writes.  Nothing here talks to the API, a plan is handed to
GoogleSheets (or any caller) which executes it against SheetsApi.

Inserting rows with data is two separate remote calls, open the blank rows and
then update into them.  InsertRowsPlan keeps the two phases explicit: the update
is only issued once the insert has succeeded, the pair is not atomic, and a
failed update leaves the blank rows in place.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Self

from .a1 import GoogleSheetsA1Notation
from .handle import SpreadsheetHandle
from .requests import InsertDimensionRequest
from .resolver import RangeResolver
from .resources import DimensionRange, GoogleSheetsEnum

class _NoRows():
    """Result of a write given nothing to write.  Falsy, never an error."""
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NO_ROWS"

NO_ROWS = _NoRows()

class WriteMode(str, Enum):
    """Which spreadsheets.values method a write goes to"""
    UPDATE = "update"
    APPEND = "append"

@dataclass(frozen=True)
class WriteRequest():
    """
    A write ready for the values API: qualified range, row arrays and options.
    Rows need not be the same length, the API works out the width.
    """
    range: str
    values: list[list]
    mode: WriteMode = field(default=WriteMode.UPDATE)
    value_input_option: str = field(default="USER_ENTERED")
    insert_data_option: str|None = field(default=None)
    params: dict = field(default_factory=dict)

    def to_params(self) -> dict:
        """Query parameters for the values update()/append() call"""
        p = {'valueInputOption': self.value_input_option}
        if self.mode == WriteMode.APPEND and self.insert_data_option:
            p['insertDataOption'] = self.insert_data_option
        p.update(self.params)
        return p

    def to_body(self) -> dict:
        return {'values': [list(r) for r in self.values]}

@dataclass(frozen=True)
class InsertPlan():
    """
    Blank rows or columns to open with an insertDimension request.
    Indexes are 0-based as the API wants them.
    """
    sheet_id: int
    dimension: str
    start_index: int
    end_index: int
    inherit_from_before: bool

    @classmethod
    def from_position(cls, position: int, quantity: int,
                      sheet_id: int = 0, dimension: str = "ROWS") -> Self|None:
        """
        position is the 1-based row/col number, negative to insert before it
        and positive to insert after it.  None for a quantity below 1.
        """
        if quantity < 1:
            return None
        before = position < 0
        num = abs(int(position))
        start = num - 1 if before else num
        end = start + quantity - 1
        # nothing to inherit from at the very top of the sheet
        return cls(int(sheet_id), GoogleSheetsEnum.dimension(dimension), start, end, start > 0)

    def to_request(self) -> InsertDimensionRequest:
        return InsertDimensionRequest(DimensionRange(self.sheet_id, self.dimension,
                                                     self.start_index, self.end_index),
                                      self.inherit_from_before)

@dataclass(frozen=True)
class InsertRowsPlan():
    """insert first, then write; see module doc"""
    insert: InsertPlan
    write: WriteRequest

    @property
    def phases(self) -> tuple[InsertPlan, WriteRequest]:
        return (self.insert, self.write)

class BatchWriter():
    """
    Decides between update, append and insert-then-update and works out the
    ranges and indexes for each.
    """
    def __init__(self, resolver: RangeResolver) -> None:
        self._resolver = resolver

    @property
    def resolver(self) -> RangeResolver:
        return self._resolver

    @staticmethod
    def _input_option(raw: bool) -> str:
        return "RAW" if raw else "USER_ENTERED"

    def plan_cells(self, handle: SpreadsheetHandle, range: str, rows: list[list],
                   raw: bool = False, mode: WriteMode|str = WriteMode.UPDATE,
                   replace: bool = True, params: dict|None = None) -> WriteRequest:
        """
        Write to an explicit range.  A single cell range means the data starts
        there and extends as far as it needs.
        For append, replace=True overwrites whatever follows the table and
        replace=False inserts new rows for the data.
        """
        handle.require()
        m = WriteMode(mode)
        insert_option = None
        if m == WriteMode.APPEND:
            insert_option = "OVERWRITE" if replace else "INSERT_ROWS"
        return WriteRequest(self._resolver.qualify(range, handle),
                            [list(r) for r in rows], m,
                            self._input_option(raw), insert_option, dict(params or {}))

    def _rows_range(self, start_row: int, num_rows: int) -> str:
        s = int(start_row)
        return GoogleSheetsA1Notation.column_range('A', s, s + num_rows - 1)

    def plan_update(self, handle: SpreadsheetHandle, start_row: int, rows: list[list],
                    raw: bool = False, params: dict|None = None) -> WriteRequest|_NoRows:
        """Overwrite rows in place starting at start_row"""
        if not rows:
            return NO_ROWS
        handle.require()
        return self.plan_cells(handle, self._rows_range(start_row, len(rows)), rows,
                               raw=raw, mode=WriteMode.UPDATE, params=params)

    def plan_append(self, handle: SpreadsheetHandle, rows: list[list], after_row: int = 1,
                    raw: bool = False, replace: bool = False,
                    params: dict|None = None) -> WriteRequest|_NoRows:
        """
        Append after the table that after_row falls within.  The API finds the
        end of that table itself.
        """
        if not rows:
            return NO_ROWS
        handle.require()
        return self.plan_cells(handle, self._rows_range(after_row, len(rows)), rows,
                               raw=raw, mode=WriteMode.APPEND, replace=replace, params=params)

    def plan_insert_blanks(self, handle: SpreadsheetHandle, position: int, quantity: int,
                           dimension: str = "ROWS") -> InsertPlan|None:
        """Blank rows/cols at a signed position, see InsertPlan.from_position()"""
        handle.require()
        if quantity < 1:
            return None
        return InsertPlan.from_position(position, quantity,
                                        self._resolver.resolve_sheet_id(handle), dimension)

    def plan_insert(self, handle: SpreadsheetHandle, rows: list[list], row_num: int,
                    before: bool = False, raw: bool = False,
                    params: dict|None = None) -> InsertRowsPlan|_NoRows:
        """
        Open len(rows) blank rows right after row_num, or right before it, and
        update into them.
        """
        if not rows:
            return NO_ROWS
        n = int(row_num)
        insert = self.plan_insert_blanks(handle, -n if before else n, len(rows))
        first = n if before else n + 1
        return InsertRowsPlan(insert, self.plan_update(handle, first, rows, raw=raw, params=params))
