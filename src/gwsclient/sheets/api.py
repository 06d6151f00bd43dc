"""
Thin wrappers over the sheets v4 service.
Each method is one remote call; results come back as the dataclasses from
.resources and errors from the client library are not caught here.
"""
import logging

from ..access import GoogleServiceClient
from .requests import GoogleSheetsUpdateRequestBase, make_request
from .resources import (GoogleSheetsEnum, Spreadsheet, ValueRange, UpdateValuesResponse,
                        AppendValuesResponse, BatchUpdateResponse)
from .writer import WriteRequest

logger = logging.getLogger(__name__)

class SheetsApi(GoogleServiceClient):
    service_name = "sheets"
    service_version = "v4"
    scopes = ("sheets",)

    def _spreadsheets(self):
        return self.service().spreadsheets()

    def get_spreadsheet(self, spreadsheet_id: str, fields: str|None = None) -> Spreadsheet:
        """
        https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/get
        Properties and sheet list, no grid data.
        """
        args = {'spreadsheetId': spreadsheet_id, 'includeGridData': False}
        if fields:
            args['fields'] = fields
        logger.debug("spreadsheets.get %s", spreadsheet_id)
        return Spreadsheet.from_dict(self._spreadsheets().get(**args).execute())

    def create_spreadsheet(self, title: str) -> Spreadsheet:
        """
        https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/create
        A whole new spreadsheet document, only its ID and URL come back.
        """
        body = {'properties': {'title': str(title)}}
        logger.debug("spreadsheets.create %r", title)
        response = self._spreadsheets().create(body=body, fields='spreadsheetId,spreadsheetUrl').execute()
        return Spreadsheet.from_dict(response)

    def get_values(self, spreadsheet_id: str, range: str,
                   major_dimension: str = "ROWS",
                   value_render_option: str = "FORMATTED_VALUE",
                   date_time_render_option: str = "FORMATTED_STRING") -> ValueRange:
        """
        https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets.values/get
        Trailing empty rows and columns are not returned.
        """
        args = {
            'spreadsheetId': spreadsheet_id,
            'range': range,
            'majorDimension': GoogleSheetsEnum.dimension(major_dimension),
            'valueRenderOption': GoogleSheetsEnum.valueRenderOption(value_render_option),
            'dateTimeRenderOption': GoogleSheetsEnum.dateTimeRenderOption(date_time_render_option),
        }
        logger.debug("values.get %s %s", spreadsheet_id, range)
        return ValueRange.from_dict(self._spreadsheets().values().get(**args).execute())

    def update_values(self, spreadsheet_id: str, request: WriteRequest) -> UpdateValuesResponse:
        """
        https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets.values/update
        """
        params = request.to_params()
        params['valueInputOption'] = GoogleSheetsEnum.valueInputOption(params['valueInputOption'])
        logger.debug("values.update %s %s (%d rows)", spreadsheet_id, request.range, len(request.values))
        response = self._spreadsheets().values().update(spreadsheetId=spreadsheet_id, range=request.range,
                                                        body=request.to_body(), **params).execute()
        return UpdateValuesResponse.from_dict(response)

    def append_values(self, spreadsheet_id: str, request: WriteRequest) -> AppendValuesResponse:
        """
        https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets.values/append
        """
        params = request.to_params()
        params['valueInputOption'] = GoogleSheetsEnum.valueInputOption(params['valueInputOption'])
        if 'insertDataOption' in params:
            params['insertDataOption'] = GoogleSheetsEnum.insertDataOption(params['insertDataOption'])
        logger.debug("values.append %s %s (%d rows)", spreadsheet_id, request.range, len(request.values))
        response = self._spreadsheets().values().append(spreadsheetId=spreadsheet_id, range=request.range,
                                                        body=request.to_body(), **params).execute()
        return AppendValuesResponse.from_dict(response)

    def batch_update(self, spreadsheet_id: str,
                     requests: list[GoogleSheetsUpdateRequestBase|dict]) -> BatchUpdateResponse:
        """
        https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/batchUpdate
        Structural changes (insert rows, properties) as opposed to cell values.
        """
        body = make_request(requests)
        logger.debug("spreadsheets.batchUpdate %s (%d requests)", spreadsheet_id, len(body['requests']))
        response = self._spreadsheets().batchUpdate(spreadsheetId=spreadsheet_id, body=body).execute()
        return BatchUpdateResponse.from_dict(response)
