import pytest

from gwsclient.errors import ConfigurationError, NotFoundError
from gwsclient.sheets.handle import SpreadsheetHandle
from gwsclient.sheets.resolver import RangeResolver, MissingSheet

def test_qualify_with_title(api):
    r = RangeResolver(api)
    h = SpreadsheetHandle("XYZ", None, "Data")
    assert(r.resolve(SpreadsheetHandle("XYZ", 5, "Data")) == SpreadsheetHandle("XYZ", 5, "Data"))
    assert(r.qualify("3", h) == "'Data'!3:3")
    assert(r.qualify("B3", h) == "'Data'!B3:B3")
    assert(r.qualify("A1:C3", h) == "'Data'!A1:C3")
    assert(r.qualify("", h) == "'Data'")
    assert(r.qualify_many(["A1", "2"], h) == ["'Data'!A1:A1", "'Data'!2:2"])
    assert(r.resolve_sheet_title(h) == "Data")
    assert(r.resolve(h, need_id=False) is h)
    api.get_spreadsheet.assert_not_called()

def test_quoted_title(api):
    r = RangeResolver(api)
    h = SpreadsheetHandle("XYZ", None, "'Sheet1'")
    assert(r.qualify("A1", h) == "'Sheet1'!A1:A1")
    api.get_spreadsheet.assert_not_called()
    assert(r.resolve_sheet_id(SpreadsheetHandle("XYZ", None, "'Bob''s data'")) == 123)
    assert(r.qualify("A1", SpreadsheetHandle("XYZ", None, "'Bob''s data'")) == "'Bob''s data'!A1:A1")

def test_qualify_is_idempotent(api):
    r = RangeResolver(api)
    h = SpreadsheetHandle("XYZ", 123)
    for rng in ("B3", "1:4", "", "Sheet1!A1"):
        once = r.qualify(rng, h)
        assert(r.qualify(once, h) == once)
    assert(r.qualify("Sheet1!A1", h) == "Sheet1!A1")

def test_qualify_without_sheet(api):
    r = RangeResolver(api)
    h = SpreadsheetHandle("XYZ")
    assert(r.qualify("A1:B2", h) == "A1:B2")
    assert(r.qualify("7", h) == "7:7")
    assert(r.qualify("", h) == "")
    assert(r.resolve_sheet_id(h) == 0)
    assert(r.resolve_sheet_title(h) == "")
    api.get_spreadsheet.assert_not_called()

def test_title_from_id(api):
    r = RangeResolver(api)
    h = SpreadsheetHandle("XYZ", 123)
    assert(r.qualify("1:2", h) == "'Bob''s data'!1:2")
    api.get_spreadsheet.assert_called_once_with("XYZ")

def test_resolve_once(api):
    r = RangeResolver(api)
    resolved = r.resolve(SpreadsheetHandle("XYZ", 123))
    assert(resolved == SpreadsheetHandle("XYZ", 123, "Bob's data"))
    assert(r.resolve(resolved) is resolved)
    assert(r.qualify_many(["A1", "B2:C3"], resolved) == ["'Bob''s data'!A1:A1", "'Bob''s data'!B2:C3"])
    assert(api.get_spreadsheet.call_count == 1)

def test_id_from_title_first_match(api):
    r = RangeResolver(api)
    assert(r.resolve_sheet_id(SpreadsheetHandle("XYZ", None, "Sheet1")) == 0)
    assert(r.resolve_sheet_id(SpreadsheetHandle("XYZ", None, "Bob's data")) == 123)

def test_missing_sheet_raises(api):
    r = RangeResolver(api)
    with pytest.raises(NotFoundError):
        r.resolve(SpreadsheetHandle("XYZ", None, "Nope"))
    with pytest.raises(NotFoundError):
        r.qualify("A1", SpreadsheetHandle("XYZ", 999))
    # NotFoundError is still a LookupError
    with pytest.raises(LookupError):
        r.resolve_sheet_id(SpreadsheetHandle("XYZ", 999))

def test_missing_sheet_first(api):
    r = RangeResolver(api, MissingSheet.FIRST)
    h = SpreadsheetHandle("XYZ", None, "Nope")
    assert(r.resolve(h) == SpreadsheetHandle("XYZ", 0, "Nope"))
    assert(r.resolve_sheet_id(h) == 0)
    assert(r.qualify("A1", h) == "'Nope'!A1:A1")
    unknown = SpreadsheetHandle("XYZ", 999)
    assert(r.resolve(unknown) == unknown)
    assert(r.resolve_sheet_id(unknown) == 999)
    assert(r.resolve_sheet_title(unknown) == "")
    assert(r.qualify("A1", unknown) == "A1:A1")
    assert(RangeResolver(api, "first").missing_sheet == MissingSheet.FIRST)

def test_lookup_needs_spreadsheet(api):
    r = RangeResolver(api)
    with pytest.raises(ConfigurationError):
        r.resolve(SpreadsheetHandle("", 123))
