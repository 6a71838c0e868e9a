# huesheets/main.py
import logging
import logging.config
import os
import sys

import requests

from .config import Settings
from .core.recolector import collect
from .servicios.errores import HueSheetsError
from .servicios.oauth_bootstrap import authorize, load_client_secret


def setup_logging():
    use_conf = os.getenv("USE_LOGCONF", "0")
    if use_conf != "1":
        logging.basicConfig(
            level=os.getenv("LOG_LEVEL", "INFO"),
            format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        )
        # gspread/google-auth/urllib3 son muy ruidosos en DEBUG
        for name in ["urllib3", "google.auth", "gspread"]:
            logging.getLogger(name).setLevel(logging.WARNING)
        return
    conf_path = os.path.join(os.path.dirname(__file__), "logging.conf")
    if os.path.exists(conf_path):
        logging.config.fileConfig(conf_path)
    else:
        logging.basicConfig(
            level=os.getenv("LOG_LEVEL", "INFO"),
            format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        )


def run(settings: Settings, code_provider=None) -> int:
    logger = logging.getLogger("main")
    settings.validate()

    # Sin OAuth client no arrancamos (FileNotFoundError se propaga)
    client = load_client_secret(settings.OAUTH_CLIENT_PATH)

    kwargs = {"code_provider": code_provider} if code_provider else {}
    try:
        creds = authorize(client, settings.token_path, **kwargs)
    except HueSheetsError:
        logger.error("Autorización abortada. No se consultó el gateway.")
        return 1

    try:
        response = collect(creds, settings)
    except (HueSheetsError, requests.exceptions.RequestException, ValueError):
        logger.exception("Error en la recolección: no se agregaron filas al Sheet.")
        return 1

    if response is None:
        return 1
    logger.info("== Proceso finalizado ==")
    return 0


def main():
    setup_logging()
    logger = logging.getLogger("main")
    logger.info("== Iniciando huesheets ==")
    sys.exit(run(Settings.from_env()))


if __name__ == "__main__":
    main()
