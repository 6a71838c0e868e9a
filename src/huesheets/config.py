import os
from dataclasses import dataclass, field
from typing import Optional

from dotenv import load_dotenv

from .servicios.errores import ConfigError

load_dotenv()

TOKEN_FILENAME = "google-api-creds.json"


def _env(name: str, default: str = "") -> str:
    return os.getenv(name, default).strip()


def _env_float(name: str) -> Optional[float]:
    raw = _env(name)
    return float(raw) if raw else None


def home_dir() -> str:
    # HOME > HOMEPATH > USERPROFILE, el primero definido gana
    for name in ("HOME", "HOMEPATH", "USERPROFILE"):
        value = os.environ.get(name)
        if value:
            return value
    raise ConfigError("No se pudo determinar el home (HOME/HOMEPATH/USERPROFILE).")


def default_token_path() -> str:
    return os.path.join(home_dir(), ".credentials", TOKEN_FILENAME)


@dataclass(frozen=True)
class Settings:
    HUE_IP: str = field(default_factory=lambda: _env("HUE_IP"))
    HUE_APP_USERNAME: str = field(default_factory=lambda: _env("HUE_APP_USERNAME"))
    HUE_TIMEOUT: Optional[float] = field(default_factory=lambda: _env_float("HUE_TIMEOUT"))
    SENSOR_TYPE: str = field(default_factory=lambda: _env("SENSOR_TYPE", "ZLLTemperature"))

    GOOGLE_SHEET_ID: str = field(default_factory=lambda: _env("GOOGLE_SHEET_ID"))
    GOOGLE_SHEET_RANGE: str = field(default_factory=lambda: _env("GOOGLE_SHEET_RANGE"))

    OAUTH_CLIENT_PATH: str = field(default_factory=lambda: _env("OAUTH_CLIENT_PATH", "./secrets/oauth_client.json"))
    OAUTH_TOKEN_PATH: str = field(default_factory=lambda: _env("OAUTH_TOKEN_PATH"))

    EXPORT_DIR: str = field(default_factory=lambda: _env("EXPORT_DIR", "./out"))

    @classmethod
    def from_env(cls) -> "Settings":
        return cls()

    @property
    def hue_url(self) -> str:
        return f"http://{self.HUE_IP}/api/{self.HUE_APP_USERNAME}/sensors"

    @property
    def token_path(self) -> str:
        return self.OAUTH_TOKEN_PATH or default_token_path()

    def validate(self, *, require_sheet: bool = True) -> "Settings":
        required = ["HUE_IP", "HUE_APP_USERNAME"]
        if require_sheet:
            required += ["GOOGLE_SHEET_ID", "GOOGLE_SHEET_RANGE"]
        missing = [name for name in required if not getattr(self, name)]
        if missing:
            raise ConfigError(f"Faltan variables de configuración: {', '.join(missing)}")
        return self
