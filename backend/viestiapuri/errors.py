"""
errors.py
----------
Virhetyypit ja niiden HTTP-statuskoodit.

- ValidationError      → 400 (pakollinen kenttä puuttuu)
- StorageError         → 500 (tietokantavirhe)
- UpstreamError        → 500 (ulkoinen tekoäly-API ei vastannut oikein)
- UpstreamFormatError  → 500 (vastauksesta ei löydy tekstiä)
- ConfigError          → käynnistysvirhe, ei koskaan HTTP-vastaus
"""


class ConfigError(RuntimeError):
    """Puuttuva tai virheellinen asetus."""


class ApiError(Exception):
    status_code = 500

    def __init__(self, message: str, detail: str | None = None):
        super().__init__(message)
        self.message = message
        self.detail = detail


class ValidationError(ApiError):
    status_code = 400


class StorageError(ApiError):
    status_code = 500


class UpstreamError(ApiError):
    status_code = 500


class UpstreamFormatError(UpstreamError):
    pass
