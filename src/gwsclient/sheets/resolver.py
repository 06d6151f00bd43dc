from enum import Enum
import logging

from .a1 import GoogleSheetsA1Notation
from .handle import SpreadsheetHandle
from ..errors import NotFoundError

logger = logging.getLogger(__name__)

class MissingSheet(str, Enum):
    """
    What to do when a sheet title or ID is not in the spreadsheet.
    FIRST falls back to sheet ID 0 / no title, which addresses the first tab.
    """
    RAISE = "raise"
    FIRST = "first"

class RangeResolver():
    """
    Turns user friendly ranges into fully qualified ones bound to the handle's
    sheet, looking up the sheet title from its ID (or the other way) only when
    one is needed and unknown.

    Lookups go through api.get_spreadsheet(), anything with that method works.
    The handle is never changed, resolve() returns a filled in copy that callers
    should keep to avoid repeating the lookup.
    """
    def __init__(self, api, missing_sheet: MissingSheet|str = MissingSheet.RAISE) -> None:
        self._api = api
        self.missing_sheet = MissingSheet(missing_sheet)

    @property
    def api(self):
        return self._api

    def _sheets(self, handle: SpreadsheetHandle) -> list:
        logger.debug("looking up sheets of %s", handle)
        spreadsheet = self._api.get_spreadsheet(handle.require())
        return spreadsheet.sheet_properties()

    def _missing(self, handle: SpreadsheetHandle) -> SpreadsheetHandle:
        if self.missing_sheet == MissingSheet.RAISE:
            raise NotFoundError(f"No sheet {handle.sheet_title if handle.sheet_title else handle.sheet_id} "
                                f"in spreadsheet {handle.spreadsheet_id}")
        logger.debug("sheet of %s not found, using the first sheet", handle)
        # the selected sheet stays, only the derived half falls back
        if handle.sheet_title:
            return handle.resolved(sheet_id=0)
        return handle

    def resolve(self, handle: SpreadsheetHandle, need_id: bool = True) -> SpreadsheetHandle:
        """
        Handle with the derived half of the sheet ID/title pair filled in.
        One remote call at most, none if nothing is missing.  need_id=False
        skips the ID lookup for a handle that already has its title, which is
        all a range needs.
        """
        if handle.sheet_title and handle.sheet_id is None:
            if not need_id:
                return handle
            for props in self._sheets(handle):
                if props.title == handle.sheet_title:
                    return handle.resolved(sheet_id=props.sheetId)
            return self._missing(handle)
        elif handle.sheet_id is not None and not handle.sheet_title:
            for props in self._sheets(handle):
                if props.sheetId == handle.sheet_id:
                    return handle.resolved(sheet_title=props.title)
            return self._missing(handle)
        return handle

    def resolve_sheet_id(self, handle: SpreadsheetHandle) -> int:
        """Sheet ID, 0 (the first sheet) when the handle names no sheet"""
        if handle.sheet_id is not None:
            return handle.sheet_id
        sid = self.resolve(handle).sheet_id
        return 0 if sid is None else sid

    def resolve_sheet_title(self, handle: SpreadsheetHandle) -> str:
        """Sheet title, empty when the handle names no sheet"""
        if handle.sheet_title:
            return handle.sheet_title
        return self.resolve(handle, need_id=False).sheet_title or ""

    def qualify(self, range: str, handle: SpreadsheetHandle) -> str:
        """
        Prepare a range for an API call:
            '3' or 'B3' becomes '3:3' or 'B3:B3'
            anything without a sheet gets the handle's sheet title, quoted
            an empty range becomes just the quoted title, meaning the whole sheet
        Qualified ranges pass through untouched so this is safe to repeat.
        """
        r = str(range or "").strip()
        if GoogleSheetsA1Notation.is_qualified(r):
            return r
        if r and ':' not in r:
            r = f"{r}:{r}"
        title = self.resolve_sheet_title(handle)
        if title:
            quoted = GoogleSheetsA1Notation.quote_sheet_title(title)
            r = f"{quoted}!{r}" if r else quoted
        return r

    def qualify_many(self, ranges: list[str], handle: SpreadsheetHandle) -> list[str]:
        """Same as qualify() over several ranges, resolving the sheet once"""
        h = self.resolve(handle, need_id=False)
        return [self.qualify(r, h) for r in ranges]
