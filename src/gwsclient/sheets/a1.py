import re

from . import GoogleSheetsMaxColumns
from ..errors import ValidationError

class GoogleSheetsA1Notation():
    """
    Helpers for Google Sheets A1 range notation.
    See https://developers.google.com/sheets/api/guides/concepts#cell

    <title>!<start col><start row>:<end col><end row>

        All rows are integers, and are 1 based
        All cols are alphabetical A-ZZZ
        Start/end cols/rows may be missing, which means 'unbounded':
            a title alone means the whole sheet
            A:B means all rows in columns A and B
            1:6 means all cols of rows 1 through 6
        title:  Tab title.  Without it the API uses the first sheet.  Titles
                with spaces or punctuation must be single quoted, with any
                embedded single quote doubled.
    """
    _A1COLREGEXSTR = r"^[A-Z]{1,3}$"
    _A1SHEETREGEXSTR = r"^'(?:[^']|'')+'$"

    _a1_col_re = re.compile(_A1COLREGEXSTR)
    _a1_sheet_re = re.compile(_A1SHEETREGEXSTR)

    @classmethod
    def col_to_int(cls, column: str) -> int:
        """
        Column A-ZZZ to its 1-based integer, so 'A' is 1.
        0 means an invalid column.
        """
        c = str(column).upper()
        num = 0
        if cls._a1_col_re.match(c):
            for ch in c:
                num = num * 26 + (ord(ch) - 64)
        return num

    @classmethod
    def int_to_col(cls, index: int) -> str:
        """
        1-based column index to A-ZZZ, empty string for out of range.
        """
        i = int(index)
        col = ""
        if 0 < i <= GoogleSheetsMaxColumns:
            while i:
                i, r = divmod(i - 1, 26)
                col = chr(r + 65) + col
        return col

    @classmethod
    def unquote_sheet_title(cls, title: str) -> str:
        """The plain title from one that may already be quoted for a range"""
        t = str(title).strip()
        if cls.is_sheet_reference(t):
            t = t[1:-1].replace("''", "'")
        return t

    @classmethod
    def quote_sheet_title(cls, title: str) -> str:
        """
        Title quoted for use in a range.  An already quoted title is unquoted
        first so this can be applied more than once.
        """
        return "'" + cls.unquote_sheet_title(title).replace("'", "''") + "'"

    @classmethod
    def is_sheet_reference(cls, a1: str) -> bool:
        """A bare quoted title, meaning every cell in that sheet"""
        return bool(cls._a1_sheet_re.match(str(a1)))

    @classmethod
    def is_qualified(cls, a1: str) -> bool:
        """Does the range already say which sheet it belongs to?"""
        a = str(a1)
        return '!' in a or cls.is_sheet_reference(a)

    @classmethod
    def row_range(cls, start_row: int, end_row: int|None = None) -> str:
        """Whole rows, '3:5'.  A missing end means just the start row."""
        s = int(start_row)
        e = s if end_row is None else int(end_row)
        return f"{s}:{e}"

    @classmethod
    def column_range(cls, column: str|int, start_row: int, end_row: int) -> str:
        """One column over a span of rows, 'A3:A5'"""
        c = cls.int_to_col(column) if isinstance(column, int) else str(column).upper()
        if not cls._a1_col_re.match(c):
            raise ValidationError(f"invalid A1 column: {column}")
        return f"{c}{int(start_row)}:{c}{int(end_row)}"
