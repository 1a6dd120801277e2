"""Country lookups against a MaxMind GeoLite2/GeoIP2 country database."""

import logging
import os
from dataclasses import dataclass

import geoip2.database
import geoip2.errors
import maxminddb

logger = logging.getLogger(__name__)


class GeoDatabaseError(Exception):
    """Raised when the geolocation database exists but cannot be opened."""


@dataclass(frozen=True)
class LookupResult:
    """Outcome of one country lookup: either a country name or a failure reason."""

    country: str | None = None
    error: str | None = None

    @classmethod
    def found(cls, country: str | None) -> "LookupResult":
        return cls(country=country)

    @classmethod
    def failure(cls, reason: str) -> "LookupResult":
        return cls(error=reason)

    @property
    def ok(self) -> bool:
        return self.error is None


class GeoLocator:
    """Thin wrapper around ``geoip2.database.Reader``.

    Per-address problems (malformed address, no record) come back as a failed
    LookupResult. Only opening the database can raise.
    """

    def __init__(self, database_path: str, reader=None):
        self._path = database_path
        if reader is not None:
            self._reader = reader
            return

        if not os.path.isfile(database_path):
            raise FileNotFoundError(f"GeoIP database not found: {database_path}")
        try:
            self._reader = geoip2.database.Reader(database_path)
        except (maxminddb.InvalidDatabaseError, ValueError, OSError) as e:
            raise GeoDatabaseError(f"Cannot open GeoIP database {database_path}: {e}") from e
        logger.info("Opened GeoIP database %s", database_path)

    def lookup_country(self, ip_address: str) -> LookupResult:
        try:
            response = self._reader.country(ip_address)
        except geoip2.errors.AddressNotFoundError:
            return LookupResult.failure("address not found")
        except ValueError as e:
            return LookupResult.failure(f"invalid address: {e}")
        except (geoip2.errors.GeoIP2Error, maxminddb.InvalidDatabaseError) as e:
            return LookupResult.failure(str(e))
        except TypeError as e:
            # raised for databases without country data, e.g. GeoLite2-ASN
            return LookupResult.failure(str(e))
        return LookupResult.found(response.country.name)

    def close(self):
        self._reader.close()
        logger.debug("Closed GeoIP database %s", self._path)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False
