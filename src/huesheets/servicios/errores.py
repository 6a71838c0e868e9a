# huesheets/servicios/errores.py


class HueSheetsError(Exception):
    """Base de los errores propios de huesheets."""


class ConfigError(HueSheetsError):
    pass


class TokenExchangeError(HueSheetsError):
    """Falló el intercambio del código de autorización por un token."""


class GatewayError(HueSheetsError):
    """El gateway Hue respondió con un error en lugar de los sensores."""
