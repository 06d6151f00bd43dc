import pytest

from gwsclient.errors import ConfigurationError, ValidationError
from gwsclient.sheets import GoogleSheets, SpreadsheetHandle, NO_ROWS
from gwsclient.sheets.resources import Spreadsheet, ValueRange
from gwsclient.sheets.writer import WriteMode

URL = "https://docs.google.com/spreadsheets/d/XYZ/edit#gid=123"

def test_selection(api):
    sheets = GoogleSheets(URL, api=api)
    assert(sheets.handle == SpreadsheetHandle("XYZ", 123))
    assert(sheets.spreadsheet_id == "XYZ")
    assert(sheets.sheet_title == "Bob's data")
    assert(sheets.sheet_id == 123)
    sheets.set_sheet("Sheet1")
    assert(sheets.handle == SpreadsheetHandle("XYZ", None, "Sheet1"))
    sheets.set_spreadsheet_id("ABC")
    assert(sheets.handle == SpreadsheetHandle("ABC"))
    sheets.set_spreadsheet_id("ABC", 7)
    assert(sheets.handle == SpreadsheetHandle("ABC", 7))
    assert(str(sheets) == "ABC[7]")

def test_unset_spreadsheet(api):
    sheets = GoogleSheets(api=api)
    with pytest.raises(ConfigurationError):
        sheets.spreadsheet_id
    with pytest.raises(ConfigurationError):
        sheets.get_rows(1, 2)
    with pytest.raises(ConfigurationError):
        sheets.set_rows(1, [['a']])
    with pytest.raises(ValidationError):
        sheets.set_spreadsheet_url("https://example.com/spreadsheets/XYZ")

def test_add_spreadsheet(api):
    api.create_spreadsheet.return_value = Spreadsheet.from_dict(
        {'spreadsheetId': 'NEW', 'spreadsheetUrl': 'https://docs.google.com/spreadsheets/d/NEW/edit'})
    sheets = GoogleSheets(URL, api=api)
    created = sheets.add_spreadsheet("Hello World")
    assert(created.spreadsheetId == "NEW")
    assert(sheets.handle == SpreadsheetHandle("NEW"))
    api.create_spreadsheet.assert_called_once_with("Hello World")
    sheets.add_spreadsheet("Another", set_as_current=False)
    assert(sheets.spreadsheet_id == "NEW")

def test_get_rows(api):
    api.get_values.return_value = ValueRange.from_dict({'range': "'Bob''s data'!A2:B3",
                                                        'values': [['a', 'b'], ['c']]})
    sheets = GoogleSheets(URL, api=api)
    assert(sheets.get_rows(2, 3, value_render_option="UNFORMATTED") == [['a', 'b'], ['c']])
    api.get_values.assert_called_once_with("XYZ", "'Bob''s data'!2:3", "ROWS", "UNFORMATTED",
                                           "FORMATTED_STRING")

def test_get_row(api):
    api.get_values.return_value = ValueRange.from_dict({'range': "Sheet1!A9:Z9"})
    sheets = GoogleSheets("XYZ", api=api)
    assert(sheets.get_row(9) == [])
    api.get_values.assert_called_once_with("XYZ", "9:9", "ROWS", "FORMATTED_VALUE", "FORMATTED_STRING")
    api.get_values.return_value = ValueRange.from_dict({'range': "Sheet1!A9:Z9", 'values': [['x', 1]]})
    assert(sheets.get_row(9) == ['x', 1])
    sheets.get_cells()
    assert(api.get_values.call_args.args[1] == "")

def test_lookup_happens_once(api):
    sheets = GoogleSheets(URL, api=api)
    sheets.get_cells("A1:B2")
    sheets.set_rows(1, [['a']])
    sheets.append_row(['b'])
    assert(api.get_spreadsheet.call_count == 1)
    assert(sheets.handle == SpreadsheetHandle("XYZ", 123, "Bob's data"))

def test_empty_writes(api):
    sheets = GoogleSheets(URL, api=api)
    assert(sheets.set_rows(1, []) is NO_ROWS)
    assert(sheets.set_cells("A1", []) is NO_ROWS)
    assert(sheets.append_rows([]) is NO_ROWS)
    assert(sheets.insert_rows_after([], 3) is NO_ROWS)
    assert(sheets.insert_rows_before([], 3) is NO_ROWS)
    assert(sheets.insert_blanks(3, 0) is NO_ROWS)
    api.update_values.assert_not_called()
    api.append_values.assert_not_called()
    api.batch_update.assert_not_called()

def test_set_rows(api):
    sheets = GoogleSheets(URL, api=api)
    result = sheets.set_rows(2, [['First name', 'Last name'], ['Ryan', 'Cramer']], raw=True)
    assert(result is api.update_values.return_value)
    spreadsheet_id, request = api.update_values.call_args.args
    assert(spreadsheet_id == "XYZ")
    assert(request.range == "'Bob''s data'!A2:A3")
    assert(request.value_input_option == "RAW")

def test_set_cells_append(api):
    sheets = GoogleSheets("XYZ", "Sheet1", api=api)
    sheets.set_cells("C5", [[1, 2]], action="append", replace=False)
    request = api.append_values.call_args.args[1]
    assert(request.mode == WriteMode.APPEND)
    assert(request.range == "'Sheet1'!C5:C5")
    assert(request.insert_data_option == "INSERT_ROWS")
    api.update_values.assert_not_called()

def test_append_row(api):
    sheets = GoogleSheets("XYZ", api=api)
    sheets.append_row(['Ryan', 'Cramer', 44], after_row=3)
    request = api.append_values.call_args.args[1]
    assert(request.range == "A3:A3")
    assert(request.values == [['Ryan', 'Cramer', 44]])
    assert(request.to_params()['insertDataOption'] == "INSERT_ROWS")

def test_insert_rows_after(api):
    sheets = GoogleSheets(URL, api=api)
    sheets.insert_rows_after([['a'], ['b']], 4)
    calls = [c[0] for c in api.mock_calls if c[0] in ('batch_update', 'update_values')]
    assert(calls == ['batch_update', 'update_values'])
    spreadsheet_id, requests = api.batch_update.call_args.args
    assert(spreadsheet_id == "XYZ")
    assert(requests[0].to_request()['insertDimension']['range'] ==
           {'sheetId': 123, 'dimension': 'ROWS', 'startIndex': 4, 'endIndex': 5})
    assert(api.update_values.call_args.args[1].range == "'Bob''s data'!A5:A6")

def test_insert_rows_before(api):
    sheets = GoogleSheets(URL, api=api)
    sheets.insert_rows_before([['a']], 1)
    insert = api.batch_update.call_args.args[1][0].to_request()['insertDimension']
    assert(insert['range']['startIndex'] == 0)
    assert(insert['inheritFromBefore'] is False)
    assert(api.update_values.call_args.args[1].range == "'Bob''s data'!A1:A1")

def test_insert_failure_skips_update(api):
    api.batch_update.side_effect = RuntimeError("quota")
    sheets = GoogleSheets(URL, api=api)
    with pytest.raises(RuntimeError):
        sheets.insert_rows_after([['a']], 2)
    api.update_values.assert_not_called()

def test_insert_blanks(api):
    sheets = GoogleSheets("XYZ", api=api)
    sheets.insert_blanks(-3, 2, rows=False)
    insert = api.batch_update.call_args.args[1][0].to_request()['insertDimension']
    assert(insert['range'] == {'sheetId': 0, 'dimension': 'COLUMNS', 'startIndex': 2, 'endIndex': 3})

def test_missing_sheet(api):
    sheets = GoogleSheets("XYZ", "Nope", api=api)
    with pytest.raises(LookupError):
        sheets.insert_blanks(1, 1)
    api.batch_update.assert_not_called()
    with pytest.raises(LookupError):
        sheets.sheet_id
    sheets = GoogleSheets("XYZ", "Nope", api=api, missing_sheet="first")
    assert(sheets.sheet_id == 0)
    assert(sheets.handle.sheet_title == "Nope")
    assert(sheets.sheet_title == "Nope")
    sheets.insert_blanks(1, 1)
    insert = api.batch_update.call_args.args[1][0].to_request()['insertDimension']
    assert(insert['range']['sheetId'] == 0)
    sheets.set_rows(1, [['a']])
    assert(api.update_values.call_args.args[1].range == "'Nope'!A1:A1")

def test_known_title_needs_no_lookup(api):
    api.get_values.return_value = ValueRange.from_dict({'range': "Sheet1!A1:Z1", 'values': [['x']]})
    sheets = GoogleSheets("XYZ", "Sheet1", api=api)
    assert(sheets.get_row(1) == ['x'])
    api.get_values.assert_called_once_with("XYZ", "'Sheet1'!1:1", "ROWS", "FORMATTED_VALUE",
                                           "FORMATTED_STRING")
    sheets.set_rows(2, [['a']])
    sheets.append_row(['b'])
    assert(sheets.sheet_title == "Sheet1")
    api.get_spreadsheet.assert_not_called()
    sheets = GoogleSheets("XYZ", "'Bob''s data'", api=api)
    assert(sheets.handle.sheet_title == "Bob's data")
    assert(sheets.sheet_id == 123)

def test_properties(api):
    sheets = GoogleSheets("XYZ", api=api)
    assert(sheets.get_properties('title') == "Members")
    assert(sheets.get_properties('timeZone') == "America/New_York")
    assert(sheets.get_properties('url') == "https://docs.google.com/spreadsheets/d/XYZ/edit")
    assert(sheets.get_properties(True).locale == "en_US")
    assert(sheets.get_properties().spreadsheetId == "XYZ")
    sheets.set_property('title', 'Renamed')
    request = api.batch_update.call_args.args[1][0]
    assert(request.to_request() == {'updateSpreadsheetProperties': {'properties': {'title': 'Renamed'},
                                                                    'fields': 'title'}})

def test_get_sheets(api):
    sheets = GoogleSheets("XYZ", api=api)
    summary = sheets.get_sheets()
    assert(len(summary) == 3)
    assert(summary[1] == {'title': "Bob's data", 'sheetId': 123, 'sheetType': 'GRID', 'index': 1,
                          'hidden': False, 'numRows': 50, 'numCols': 4})
    by_title = sheets.get_sheets(index_by='title')
    # duplicate titles keep the first sheet
    assert(sorted(by_title) == ["Bob's data", "Sheet1"])
    assert(by_title["Sheet1"]['sheetId'] == 0)
    by_id = sheets.get_sheets(verbose=True, index_by='sheetId')
    assert(by_id[456].properties.hidden)
    with pytest.raises(ValidationError):
        sheets.get_sheets(index_by='index')

def test_test_output(api):
    sheets = GoogleSheets("XYZ", api=api)
    out = sheets.test().splitlines()
    assert(out[0] == "Google Sheets Spreadsheet: Members")
    assert(out[2] == "Sheet: Bob's data (50 rows, 4 columns)")
    api.get_spreadsheet.side_effect = RuntimeError("no access")
    assert(sheets.test() == "GoogleSheets test failed: RuntimeError 0 no access")
