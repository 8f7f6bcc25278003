"""
Message catalogs: read-only lookups from a violation key to a template.

Packaged catalogs live in ``catalogs/<locale>.yaml``. Any callable taking a
key and returning a template can be used instead, which keeps tests
independent of the packaged wording.
"""

from collections.abc import Callable, Mapping
from functools import lru_cache
from pathlib import Path

import yaml

from formcheck.observability.logger import get_logger

logger = get_logger(__name__)

CATALOG_DIR = Path(__file__).parent / "catalogs"
FALLBACK_LOCALE = "en"

MessageLookup = Callable[[str], str]


@lru_cache(maxsize=None)
def _load_catalog(catalog_path: Path) -> dict[str, str]:
    with open(catalog_path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Message catalog {catalog_path} must be a mapping of key to template")
    return {str(key): str(template) for key, template in data.items()}


class MessageCatalog:
    """
    Key -> template lookup backed by a YAML file.

    Keys missing from the selected locale fall back to the English catalog,
    then to the key itself.
    """

    def __init__(self, locale: str = FALLBACK_LOCALE, catalog_path: str | Path | None = None):
        """
        Load a catalog.

        Args:
            locale: Packaged catalog to load ("en", "es")
            catalog_path: Explicit YAML file, overriding the packaged one

        Raises:
            FileNotFoundError: If the catalog file does not exist
        """
        path = Path(catalog_path) if catalog_path else CATALOG_DIR / f"{locale}.yaml"
        if not path.exists():
            raise FileNotFoundError(f"Message catalog not found: {path}")

        self.locale = locale
        self.catalog_path = path
        self._messages = _load_catalog(path)
        fallback_path = CATALOG_DIR / f"{FALLBACK_LOCALE}.yaml"
        self._fallback = {} if path == fallback_path else _load_catalog(fallback_path)

    @classmethod
    def available_locales(cls) -> list[str]:
        return sorted(p.stem for p in CATALOG_DIR.glob("*.yaml"))

    def get(self, key: str) -> str:
        if key in self._messages:
            return self._messages[key]
        if key in self._fallback:
            return self._fallback[key]
        logger.warning(f"No message template for '{key}' in catalog '{self.locale}'")
        return key

    __call__ = get

    def __contains__(self, key: object) -> bool:
        return key in self._messages

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(locale={self.locale}, path={self.catalog_path})"


def mapping_catalog(messages: Mapping[str, str]) -> MessageLookup:
    """Wrap a plain mapping as a lookup; unknown keys render as the key."""
    def lookup(key: str) -> str:
        return messages.get(key, key)

    return lookup
