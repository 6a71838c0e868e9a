# huesheets/test/diag.py
import os
import json
import logging

from ..config import Settings
from ..core.lecturas import count_by_type
from ..servicios.hue import fetch_sensors

logging.basicConfig(level=logging.INFO, format="%(message)s")
log = logging.getLogger("diag")


def kv(k, v):
    print(f"  {k:<22} {v}")


def mask(s: str, keep=6):
    # Prefijo fijo: no delata el largo del secreto
    if not s:
        return ""
    if len(s) <= keep:
        return "****"
    return "****" + s[-keep:]


def file_info(path):
    """Estado de un archivo JSON de credenciales: existencia, tamaño y si parsea."""
    if not os.path.isfile(path):
        return "NO EXISTE"
    size = os.path.getsize(path)
    try:
        with open(path, encoding="utf-8") as f:
            json.load(f)
    except (OSError, ValueError) as e:
        return f"existe ({size} bytes), JSON inválido: {e}"
    return f"existe ({size} bytes), JSON válido"


def token_info(path):
    """Resume el token guardado sin mostrar secretos."""
    try:
        with open(path, encoding="utf-8") as f:
            info = json.load(f)
    except FileNotFoundError:
        return "NO EXISTE"
    except (OSError, ValueError) as e:
        return f"ilegible: {e!r}"
    if not isinstance(info, dict):
        return "ilegible: no es un objeto JSON"
    token = info.get("token") or info.get("access_token") or ""
    expiry = info.get("expiry") or info.get("expiry_date") or "unknown"
    refresh = "sí" if info.get("refresh_token") else "no"
    return f"token={mask(token, keep=8)} expiry={expiry} refresh_token={refresh}"


def main(settings=None):
    settings = settings or Settings.from_env()

    print("== CONFIG ==")
    kv("HUE_IP", settings.HUE_IP or "(vacío)")
    kv("HUE_APP_USERNAME", mask(settings.HUE_APP_USERNAME))
    kv("SENSOR_TYPE", settings.SENSOR_TYPE)
    kv("GOOGLE_SHEET_ID", settings.GOOGLE_SHEET_ID or "(vacío)")
    kv("GOOGLE_SHEET_RANGE", settings.GOOGLE_SHEET_RANGE or "(vacío)")

    print("\n== ARCHIVOS ==")
    kv("OAUTH_CLIENT_PATH", f"{settings.OAUTH_CLIENT_PATH} -> {file_info(settings.OAUTH_CLIENT_PATH)}")
    kv("token_path", settings.token_path)
    kv("token", token_info(settings.token_path))

    print("\n== GATEWAY ==")
    if not (settings.HUE_IP and settings.HUE_APP_USERNAME):
        kv("sensores", "sin HUE_IP/HUE_APP_USERNAME, no se consulta")
        return
    sensors = fetch_sensors(settings)
    for kind, n in sorted(count_by_type(sensors).items()):
        kv(kind, n)


if __name__ == "__main__":
    main()
