from unittest.mock import MagicMock

import pytest

from gwsclient.sheets.resources import Spreadsheet

SPREADSHEET = {
    'spreadsheetId': 'XYZ',
    'spreadsheetUrl': 'https://docs.google.com/spreadsheets/d/XYZ/edit',
    'properties': {'title': 'Members', 'locale': 'en_US', 'timeZone': 'America/New_York'},
    'sheets': [
        {'properties': {'sheetId': 0, 'title': 'Sheet1', 'index': 0, 'sheetType': 'GRID',
                        'gridProperties': {'rowCount': 1000, 'columnCount': 26}}},
        {'properties': {'sheetId': 123, 'title': "Bob's data", 'index': 1, 'sheetType': 'GRID',
                        'gridProperties': {'rowCount': 50, 'columnCount': 4}}},
        {'properties': {'sheetId': 456, 'title': 'Sheet1', 'index': 2, 'sheetType': 'GRID',
                        'gridProperties': {'rowCount': 10, 'columnCount': 2}, 'hidden': True}},
    ],
}

@pytest.fixture
def api():
    """Stand-in for SheetsApi, get_spreadsheet() answers with SPREADSHEET"""
    a = MagicMock()
    a.get_spreadsheet.return_value = Spreadsheet.from_dict(SPREADSHEET)
    return a
