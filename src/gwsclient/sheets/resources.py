"""
Dataclass versions of the sheets resources we read back.
See https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets
Nested resources arrive as dicts so fixup() converts them to their dataclass.
Only the fields this package cares about are modelled, from_dict() drops the rest.
"""
from dataclasses import dataclass, field
from typing import List

from ..resources import GoogleWorkSpaceResourceBase
from ..errors import ValidationError

class GoogleSheetsEnum():
    """
    An 'enum' in the sheets client is just a string so this is
    just to translate and validate input.
    """
    _VALID_VALUE_RENDER_OPTIONS = {
        "FORMATTED": "FORMATTED_VALUE",
        "FORMATTED_VALUE": "FORMATTED_VALUE",
        "UNFORMATTED": "UNFORMATTED_VALUE",
        "UNFORMATTED_VALUE": "UNFORMATTED_VALUE",
        "FORMULA": "FORMULA"
    }
    _VALID_DATE_TIME_RENDER_OPTIONS = {
        "SERIAL": "SERIAL_NUMBER",
        "SERIAL_NUMBER": "SERIAL_NUMBER",
        "FORMATTED": "FORMATTED_STRING",
        "FORMATTED_STRING": "FORMATTED_STRING"
    }
    _VALID_DIMENSION_OPTIONS = {
        "ROWS": "ROWS",
        "R": "ROWS",
        "C": "COLUMNS",
        "COLS": "COLUMNS",
        "COLUMNS": "COLUMNS"
    }
    _VALID_VALUE_INPUT_OPTIONS = {
        "RAW": "RAW",
        "USER": "USER_ENTERED",
        "USER_ENTERED": "USER_ENTERED"
    }
    _VALID_INSERT_DATA_OPTIONS = {
        "OVERWRITE": "OVERWRITE",
        "INSERT": "INSERT_ROWS",
        "INSERT_ROWS": "INSERT_ROWS"
    }

    @staticmethod
    def _lookup(table: dict, kind: str, option: str) -> str:
        v = table.get(str(option).upper(), "")
        if not v:
            raise ValidationError(f"Invalid {kind} value: {option}")
        return v

    @classmethod
    def valueRenderOption(cls, option: str) -> str:
        """https://developers.google.com/sheets/api/reference/rest/v4/ValueRenderOption"""
        return cls._lookup(cls._VALID_VALUE_RENDER_OPTIONS, "valueRenderOption", option)

    @classmethod
    def dateTimeRenderOption(cls, option: str) -> str:
        """https://developers.google.com/sheets/api/reference/rest/v4/DateTimeRenderOption"""
        return cls._lookup(cls._VALID_DATE_TIME_RENDER_OPTIONS, "dateTimeRenderOption", option)

    @classmethod
    def dimension(cls, dim: str) -> str:
        """https://developers.google.com/sheets/api/reference/rest/v4/Dimension"""
        return cls._lookup(cls._VALID_DIMENSION_OPTIONS, "dimension", dim)

    @classmethod
    def valueInputOption(cls, option: str) -> str:
        """https://developers.google.com/sheets/api/reference/rest/v4/ValueInputOption"""
        return cls._lookup(cls._VALID_VALUE_INPUT_OPTIONS, "valueInputOption", option)

    @classmethod
    def insertDataOption(cls, option: str) -> str:
        """https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets.values/append#InsertDataOption"""
        return cls._lookup(cls._VALID_INSERT_DATA_OPTIONS, "insertDataOption", option)

@dataclass
class SpreadsheetProperties(GoogleWorkSpaceResourceBase):
    """
    https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets#SpreadsheetProperties
    """
    title: str = field(default="")
    locale: str = field(default="")
    autoRecalc: str = field(default="")
    timeZone: str = field(default="")

    def __bool__(self) -> bool:
        return bool(self.title)

@dataclass
class GridProperties(GoogleWorkSpaceResourceBase):
    """https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/sheets#gridproperties"""
    rowCount: int = field(default=0)
    columnCount: int = field(default=0)
    frozenRowCount: int = field(default=0)
    frozenColumnCount: int = field(default=0)

@dataclass
class SheetProperties(GoogleWorkSpaceResourceBase):
    """https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/sheets#sheetproperties"""
    sheetId: int = field(default=-1)
    title: str = field(default="")
    index: int = field(default=-1)
    sheetType: str = field(default="")
    gridProperties: GridProperties|dict = field(default_factory=dict)
    hidden: bool = field(default=False)

    def __post_init__(self) -> None:
        self.fixup()

    def fixup(self) -> None:
        if not isinstance(self.gridProperties, GridProperties):
            self.gridProperties = GridProperties.from_dict(self.gridProperties)

    def __bool__(self) -> bool:
        return self.sheetId >= 0 and bool(self.title)

    def __str__(self) -> str:
        if not self:
            return "<invalid sheet>"
        val = f"{self.title}({self.sheetId}[{self.index}]):{self.sheetType}"
        if self.sheetType == 'GRID':
            val += f"({self.gridProperties.rowCount}Rx{self.gridProperties.columnCount}C)"
        return val

    def summary(self) -> dict:
        """The short per-sheet info dict handed out by GoogleSheets.get_sheets()"""
        return {
            'title': self.title,
            'sheetId': self.sheetId,
            'sheetType': self.sheetType,
            'index': self.index,
            'hidden': self.hidden,
            'numRows': self.gridProperties.rowCount,
            'numCols': self.gridProperties.columnCount,
        }

@dataclass
class Sheet(GoogleWorkSpaceResourceBase):
    """
    https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/sheets#sheet
    Only the properties are modelled, grid data and the rest are never requested.
    """
    properties: SheetProperties|dict = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.fixup()

    def fixup(self) -> None:
        if not isinstance(self.properties, SheetProperties):
            self.properties = SheetProperties.from_dict(self.properties)

    def __bool__(self) -> bool:
        return bool(self.properties)

    def __str__(self) -> str:
        return str(self.properties)

@dataclass
class Spreadsheet(GoogleWorkSpaceResourceBase):
    """
    https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets#resource:-spreadsheet
    """
    spreadsheetId: str = field(default="")
    properties: SpreadsheetProperties|dict = field(default_factory=dict)
    sheets: List[Sheet|dict] = field(default_factory=list)
    spreadsheetUrl: str = field(default="")

    def __post_init__(self) -> None:
        self.fixup()

    def fixup(self) -> None:
        if not isinstance(self.properties, SpreadsheetProperties):
            self.properties = SpreadsheetProperties.from_dict(self.properties)
        self.sheets = [s if isinstance(s, Sheet) else Sheet.from_dict(s) for s in self.sheets]

    def __bool__(self) -> bool:
        return bool(self.spreadsheetId)

    def __str__(self) -> str:
        if not self.spreadsheetId:
            return 'unconnected'
        if not self.sheets:
            return f"{self.spreadsheetId}(unconnected)"
        return f"{self.properties.title}[{','.join(str(s) for s in self.sheets)}]"

    def sheet_properties(self) -> list[SheetProperties]:
        return [s.properties for s in self.sheets]

@dataclass
class DimensionRange(GoogleWorkSpaceResourceBase):
    """https://developers.google.com/sheets/api/reference/rest/v4/DimensionRange"""
    sheetId: int = field(default=0)
    dimension: str = field(default="ROWS")
    startIndex: int|None = field(default=None)
    endIndex: int|None = field(default=None)

    def __post_init__(self) -> None:
        self.fixup()

    def fixup(self) -> None:
        self.dimension = GoogleSheetsEnum.dimension(self.dimension)

@dataclass
class ValueRange(GoogleWorkSpaceResourceBase):
    """https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets.values#resource:-valuerange"""
    range: str = field(default="")
    majorDimension: str = field(default="ROWS")
    values: list[list] = field(default_factory=list)

    def __bool__(self) -> bool:
        return bool(self.range)

@dataclass
class UpdateValuesResponse(GoogleWorkSpaceResourceBase):
    """
    https://developers.google.com/sheets/api/reference/rest/v4/UpdateValuesResponse
    updatedData is only sent back when the write asked for includeValuesInResponse.
    """
    spreadsheetId: str = field(default="")
    updatedRange: str = field(default="")
    updatedRows: int = field(default=0)
    updatedColumns: int = field(default=0)
    updatedCells: int = field(default=0)
    updatedData: ValueRange|dict|None = field(default=None)

    def __post_init__(self) -> None:
        self.fixup()

    def fixup(self) -> None:
        if self.updatedData is not None and not isinstance(self.updatedData, ValueRange):
            self.updatedData = ValueRange.from_dict(self.updatedData)

    def __bool__(self) -> bool:
        return bool(self.spreadsheetId) and bool(self.updatedRange)

@dataclass
class AppendValuesResponse(GoogleWorkSpaceResourceBase):
    """
    https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets.values/append#response-body
    tableRange is the existing table the values were appended after.
    """
    spreadsheetId: str = field(default="")
    tableRange: str = field(default="")
    updates: UpdateValuesResponse|dict = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.fixup()

    def fixup(self) -> None:
        if not isinstance(self.updates, UpdateValuesResponse):
            self.updates = UpdateValuesResponse.from_dict(self.updates)

    def __bool__(self) -> bool:
        return bool(self.spreadsheetId)

@dataclass
class BatchUpdateResponse(GoogleWorkSpaceResourceBase):
    """
    https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/batchUpdate#response-body
    """
    spreadsheetId: str = field(default="")
    replies: List[dict] = field(default_factory=list)

    def __bool__(self) -> bool:
        return bool(self.spreadsheetId)
