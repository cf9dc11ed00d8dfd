"""
LocaleRegistry — loads config/locales.yaml and resolves language codes and
display labels for the profile endpoints.
"""

import pathlib
from functools import lru_cache
from typing import Any, Dict, List, Optional

import yaml

from config.settings import config


class LocaleRegistry:
    def __init__(self, locales_path: str | None = None, default_language: str | None = None):
        if locales_path is None:
            locales_path = str(pathlib.Path(__file__).parent / "locales.yaml")
        with open(locales_path, "r", encoding="utf-8") as fh:
            self.registry: Dict[str, Any] = yaml.safe_load(fh)

        self.default_language: str = (default_language or self.registry["default_language"]).strip().lower()
        if self.default_language not in self.registry["languages"]:
            raise ValueError(f"Default language '{self.default_language}' is not a supported locale")
        for code, info in self.registry["languages"].items():
            missing = set(self.registry["genres"]) - set(info["genres"])
            if missing:
                raise ValueError(
                    f"Locale '{code}' has no label for genres: {sorted(missing)}"
                )

    def list_languages(self) -> List[str]:
        return list(self.registry["languages"].keys())

    def is_supported(self, language: str | None) -> bool:
        return bool(language) and language in self.registry["languages"]

    def resolve(self, *candidates: Optional[str]) -> str:
        """Return the first supported candidate, falling back to the default language."""
        for candidate in candidates:
            if candidate is None:
                continue
            code = candidate.strip().lower()
            if self.is_supported(code):
                return code
        return self.default_language

    def negotiate(self, accept_language: str | None) -> Optional[str]:
        """
        Pick the best supported language from an ``Accept-Language`` header.

        Region subtags are ignored (``es-MX`` → ``es``).  Returns ``None``
        when nothing in the header is supported.
        """
        if not accept_language:
            return None

        weighted: list[tuple[float, int, str]] = []
        for position, part in enumerate(accept_language.split(",")):
            tag, _, params = part.strip().partition(";")
            quality = 1.0
            params = params.strip()
            if params.startswith("q="):
                try:
                    quality = float(params[2:])
                except ValueError:
                    quality = 0.0
            primary = tag.strip().lower().split("-")[0]
            if quality > 0 and self.is_supported(primary):
                weighted.append((-quality, position, primary))

        if not weighted:
            return None
        return sorted(weighted)[0][2]

    def genre_label(self, genre: str, language: str) -> str:
        language = self.resolve(language)
        return self.registry["languages"][language]["genres"][genre]

    def direction(self, language: str) -> str:
        return self.registry["languages"][self.resolve(language)]["direction"]


@lru_cache()
def get_locales() -> LocaleRegistry:
    return LocaleRegistry(default_language=config.default_language)
