from dataclasses import dataclass, field
from typing import Self
import re

from ..resources import GoogleWorkSpaceResourceBase
from .resources import DimensionRange

class GoogleSheetsUpdateRequestBase(GoogleWorkSpaceResourceBase):
    """
    Base class for spreadsheet batchUpdate requests.
    The request key is the class name minus the trailing 'Request' with the
    first letter lowered, so InsertDimensionRequest -> 'insertDimension'.
    """
    def to_request(self) -> dict[str, dict]:
        m = re.match("^([a-zA-Z])([a-zA-Z]+)Request$", self.__class__.__name__)
        if not m:
            raise RuntimeError("Invalid Google Sheets request format for class name")
        return {m.group(1).lower() + m.group(2): self.to_base()}

@dataclass
class InsertDimensionRequest(GoogleSheetsUpdateRequestBase):
    """
    https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/request#insertdimensionrequest
    inheritFromBefore picks up formatting from the row/col before the insertion
    (True) or the one after (False).
    """
    range: DimensionRange = field(default_factory=DimensionRange)
    inheritFromBefore: bool = field(default=False)

    def to_base(self) -> dict:
        return {'range': self.range.to_base(), 'inheritFromBefore': self.inheritFromBefore}

@dataclass
class UpdateSpreadsheetPropertiesRequest(GoogleSheetsUpdateRequestBase):
    """
    https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/request#updatespreadsheetpropertiesrequest
    fields is the mask of which properties to change, comma separated.
    """
    properties: dict = field(default_factory=dict)
    fields: str = field(default="")

    @classmethod
    def single(cls, name: str, value) -> Self:
        """Change one property, like title"""
        return cls(properties={name: value}, fields=name)

    def to_base(self) -> dict:
        return {'properties': dict(self.properties),
                'fields': self.fields or ",".join(self.properties)}

def make_request(requests: list[GoogleSheetsUpdateRequestBase|dict]) -> dict:
    """
    Assemble a batchUpdate body from request objects or raw request dicts.
    https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/batchUpdate#request-body
    """
    return {'requests': [r.to_request() if isinstance(r, GoogleSheetsUpdateRequestBase) else dict(r)
                         for r in requests]}
