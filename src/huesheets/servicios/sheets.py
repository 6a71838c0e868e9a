from __future__ import annotations

import json
import logging
from typing import List, Optional

import gspread
import requests
from google.auth.exceptions import GoogleAuthError
from google.oauth2.credentials import Credentials

logger = logging.getLogger(__name__)

INSERT_DATA_OPTION = "INSERT_ROWS"
VALUE_INPUT_OPTION = "USER_ENTERED"


def build_append_request(spreadsheet_id: str, range_: str, rows: List[list]) -> dict:
    return {
        "spreadsheetId": spreadsheet_id,
        "range": range_,
        "insertDataOption": INSERT_DATA_OPTION,
        "valueInputOption": VALUE_INPUT_OPTION,
        "values": rows,
    }


def append_rows(creds: Credentials, spreadsheet_id: str, range_: str, rows: List[list], client=None) -> Optional[dict]:
    """Un único spreadsheets.values.append. Devuelve el body de la respuesta, o None si falló.

    Se usa el http_client de gspread directamente: open_by_key() haría un GET de metadata extra.
    """
    req = build_append_request(spreadsheet_id, range_, rows)
    client = client or gspread.authorize(creds)

    logger.info("Sheet ID: %s | Range: %s | Filas: %d", spreadsheet_id, range_, len(rows))
    try:
        response = client.http_client.values_append(
            req["spreadsheetId"],
            req["range"],
            params={
                "insertDataOption": req["insertDataOption"],
                "valueInputOption": req["valueInputOption"],
            },
            body={"values": req["values"]},
        )
    except (gspread.exceptions.APIError, GoogleAuthError, requests.exceptions.RequestException) as e:
        logger.error("Error agregando filas al Sheet: %s", e)
        return None

    logger.info("Respuesta del append:\n%s", json.dumps(response, indent=2, ensure_ascii=False))
    return response
