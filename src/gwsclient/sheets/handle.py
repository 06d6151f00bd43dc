from dataclasses import dataclass, field, replace
from typing import Self
import re

from .a1 import GoogleSheetsA1Notation
from ..errors import ConfigurationError, ValidationError

_GID_RE = re.compile(r"gid=(\d+)")
_ID_RE = re.compile(r"^([^/?#]*)(.*)$", re.DOTALL)

@dataclass(frozen=True)
class SpreadsheetHandle():
    """
    Identifies one spreadsheet and optionally one sheet (tab) within it.
    A sheet can be known by ID (the gid in the URL) or title.  Only one of the
    two is authoritative, the other is derived from it by a remote lookup and
    filled in with resolved().  Handles are immutable, every change makes a new one.
    A title given already quoted for a range ('Bob''s data') is stored plain.
    """
    spreadsheet_id: str = field(default="")
    sheet_id: int|None = field(default=None)
    sheet_title: str|None = field(default=None)

    def __post_init__(self) -> None:
        if self.sheet_title:
            object.__setattr__(self, 'sheet_title',
                               GoogleSheetsA1Notation.unquote_sheet_title(self.sheet_title))

    def __bool__(self) -> bool:
        return bool(self.spreadsheet_id)

    def __str__(self) -> str:
        if not self:
            return "<unset>"
        sheet = self.sheet_title if self.sheet_title else self.sheet_id
        return self.spreadsheet_id if sheet is None else f"{self.spreadsheet_id}[{sheet}]"

    @classmethod
    def from_url(cls, url: str) -> Self:
        return parse_spreadsheet_url(url)

    @classmethod
    def from_reference(cls, spreadsheet: str, sheet: str|int|None = None) -> Self:
        """
        Anything with a scheme is a URL, otherwise it is taken as the ID.
        """
        s = str(spreadsheet)
        handle = parse_spreadsheet_url(s) if '://' in s else cls(s)
        return handle.with_sheet(sheet)

    def require(self) -> str:
        """The spreadsheet ID, which every remote operation needs"""
        if not self.spreadsheet_id:
            raise ConfigurationError("Set a spreadsheet ID before calling any sheets operations")
        return self.spreadsheet_id

    def with_spreadsheet(self, spreadsheet_id: str, sheet: str|int|None = None) -> Self:
        """
        Switch spreadsheet.  A different ID invalidates whatever sheet we knew about.
        """
        sid = str(spreadsheet_id)
        handle = self if sid == self.spreadsheet_id else SpreadsheetHandle(sid)
        return handle.with_sheet(sheet)

    def with_sheet(self, sheet: str|int|None) -> Self:
        """Select a sheet by ID (int or all digits) or by title"""
        if isinstance(sheet, int) and not isinstance(sheet, bool):
            return self.with_sheet_id(sheet)
        if isinstance(sheet, str) and sheet:
            if sheet.isdigit():
                return self.with_sheet_id(int(sheet))
            return self.with_sheet_title(sheet)
        return self

    def with_sheet_id(self, sheet_id: int|str) -> Self:
        return replace(self, sheet_id=int(sheet_id), sheet_title=None)

    def with_sheet_title(self, title: str) -> Self:
        return replace(self, sheet_id=None, sheet_title=str(title))

    def resolved(self, sheet_id: int|None = None, sheet_title: str|None = None) -> Self:
        """
        Fill in the derived half of the sheet ID/title pair.  Known values are
        never overwritten.
        """
        return replace(self,
                       sheet_id=self.sheet_id if self.sheet_id is not None else sheet_id,
                       sheet_title=self.sheet_title if self.sheet_title else sheet_title)

def parse_spreadsheet_url(url: str) -> SpreadsheetHandle:
    """
    Spreadsheet and sheet ID from a URL like
    https://docs.google.com/spreadsheets/d/SPREADSHEET_ID/edit#gid=SHEET_ID
    """
    u = str(url)
    if '/d/' not in u:
        raise ValidationError("Unrecognized Google Sheets URL. Must be in this format: "
                              "https://docs.google.com/spreadsheets/d/SPREADSHEET_ID/edit#gid=SHEET_ID")
    rest = u.split('/d/', 1)[1]
    m = _ID_RE.match(rest)
    spreadsheet_id, tail = m.group(1), m.group(2)
    if not spreadsheet_id:
        raise ValidationError(f"No spreadsheet ID in URL: {u}")
    m = _GID_RE.search(tail)
    return SpreadsheetHandle(spreadsheet_id, int(m.group(1)) if m else None)
