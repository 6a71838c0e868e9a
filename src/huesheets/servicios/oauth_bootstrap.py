# huesheets/servicios/oauth_bootstrap.py
from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Optional

import requests
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import Flow
from oauthlib.oauth2.rfc6749.errors import OAuth2Error

from .errores import TokenExchangeError

logger = logging.getLogger(__name__)

SCOPES = [
    "https://www.googleapis.com/auth/drive",
    "https://www.googleapis.com/auth/drive.file",
    "https://www.googleapis.com/auth/spreadsheets",
]
GOOGLE_AUTH_URI = "https://accounts.google.com/o/oauth2/auth"
GOOGLE_TOKEN_URI = "https://oauth2.googleapis.com/token"

# Recibe la URL de autorización y devuelve el código que pegó el operador
CodeProvider = Callable[[str], str]


@dataclass(frozen=True)
class ClientSecret:
    client_id: str
    client_secret: str
    redirect_uri: str
    auth_uri: str = GOOGLE_AUTH_URI
    token_uri: str = GOOGLE_TOKEN_URI

    def to_client_config(self) -> dict:
        return {
            "web": {
                "client_id": self.client_id,
                "client_secret": self.client_secret,
                "redirect_uris": [self.redirect_uri],
                "auth_uri": self.auth_uri,
                "token_uri": self.token_uri,
            }
        }


def load_client_secret(path: str) -> ClientSecret:
    """Lee el JSON del OAuth client ({"web": {...}} o {"installed": {...}}).

    Si el archivo no existe, el FileNotFoundError se propaga: sin client no hay corrida.
    """
    if not os.path.exists(path):
        raise FileNotFoundError(f"No se encontró el OAuth client en {path}")

    with open(path, encoding="utf-8") as f:
        data = json.load(f)

    section = (data.get("web") or data.get("installed")) if isinstance(data, dict) else None
    if not isinstance(section, dict):
        raise ValueError(f"OAuth client inválido en {path}: falta la sección 'web'")

    try:
        redirect_uris = section.get("redirect_uris") or []
        return ClientSecret(
            client_id=section["client_id"],
            client_secret=section["client_secret"],
            redirect_uri=redirect_uris[0],
            auth_uri=section.get("auth_uri", GOOGLE_AUTH_URI),
            token_uri=section.get("token_uri", GOOGLE_TOKEN_URI),
        )
    except (KeyError, IndexError) as e:
        raise ValueError(f"OAuth client inválido en {path}: {e!r}") from e


def _parse_expiry(info: dict) -> Optional[datetime]:
    # google-auth trabaja con datetimes naive en UTC
    expiry = info.get("expiry")
    if expiry:
        if not isinstance(expiry, str):
            raise ValueError(f"expiry inválido en el token guardado: {expiry!r}")
        return datetime.strptime(expiry.rstrip("Z").split(".")[0], "%Y-%m-%dT%H:%M:%S")
    expiry_ms = info.get("expiry_date")
    if expiry_ms:
        return datetime.fromtimestamp(int(expiry_ms) / 1000, tz=timezone.utc).replace(tzinfo=None)
    return None


def credentials_from_info(info, client: ClientSecret) -> Credentials:
    """Arma Credentials desde el JSON guardado (formato google-auth o token OAuth crudo)."""
    if not isinstance(info, dict):
        raise ValueError("El token guardado no es un objeto JSON")
    token = info.get("token") or info.get("access_token")
    if not token:
        raise ValueError("El token guardado no tiene access token")

    return Credentials(
        token=token,
        refresh_token=info.get("refresh_token"),
        token_uri=info.get("token_uri") or client.token_uri,
        client_id=info.get("client_id") or client.client_id,
        client_secret=info.get("client_secret") or client.client_secret,
        scopes=info.get("scopes") or SCOPES,
        expiry=_parse_expiry(info),
    )


def load_cached_token(token_path: str, client: ClientSecret) -> Optional[Credentials]:
    # Sin chequeo de expiración: un token vencido pero bien formado se usa tal cual
    if not os.path.exists(token_path):
        logger.info("No hay token guardado en %s", token_path)
        return None
    try:
        with open(token_path, encoding="utf-8") as f:
            info = json.load(f)
        return credentials_from_info(info, client)
    except (OSError, ValueError, TypeError) as e:
        logger.warning("Token guardado en %s inválido (%s). Se pedirá autorización.", token_path, e)
        return None


def store_token(creds: Credentials, token_path: str) -> None:
    token_dir = os.path.dirname(token_path)
    if token_dir:
        # exist_ok cubre "ya existe"; cualquier otro error se propaga
        os.makedirs(token_dir, exist_ok=True)
    with open(token_path, "w", encoding="utf-8") as f:
        f.write(creds.to_json())
    logger.info("Token guardado en %s", token_path)


def prompt_for_code(auth_url: str) -> str:
    print("\n>>> Autorizá esta app abriendo esta URL en tu navegador:\n" f"{auth_url}\n")
    return input("Pegá acá el código de esa página: ")


def get_new_token(client: ClientSecret, code_provider: CodeProvider = prompt_for_code) -> Credentials:
    flow = Flow.from_client_config(client.to_client_config(), scopes=SCOPES, redirect_uri=client.redirect_uri)
    auth_url, _ = flow.authorization_url(access_type="offline")

    code = code_provider(auth_url).strip()
    try:
        flow.fetch_token(code=code)
    except (OAuth2Error, requests.exceptions.RequestException, ValueError) as e:
        logger.error("Error intentando obtener el access token: %r", e)
        raise TokenExchangeError(f"No se pudo canjear el código de autorización: {e}") from e
    return flow.credentials


def authorize(
    client: ClientSecret,
    token_path: str,
    code_provider: CodeProvider = prompt_for_code,
) -> Credentials:
    creds = load_cached_token(token_path, client)
    if creds is not None:
        logger.info("Usando token guardado en %s", token_path)
        return creds

    creds = get_new_token(client, code_provider)
    store_token(creds, token_path)
    return creds
