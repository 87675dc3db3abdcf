"""Loads locale resource bundles from JSON and YAML files.

One file per locale, named after it: ``locales/en_US.json``,
``locales/zh-TW.yml``. Nested mappings are flattened to dot-separated
keys so ``{"nav": {"home": "Home"}}`` is looked up as ``nav.home``.
"""

from collections.abc import Iterable, Mapping
import json
from pathlib import Path
from typing import Any

import yaml

from fastapi_locales.core.exceptions import ResourceLoadError
from fastapi_locales.core.logging import get_logger

logger = get_logger(__name__)

RESOURCE_SUFFIXES = (".json", ".yml", ".yaml")


def normalize_locale_name(locale: str) -> str:
    """Bundle lookup key for a locale: "zh-TW" -> "zh_tw"."""
    return locale.strip().lower().replace("-", "_")


def flatten_messages(data: Mapping[str, Any], prefix: str = "") -> dict[str, str]:
    """Flatten nested mappings into dot-separated keys with string values."""
    messages: dict[str, str] = {}
    for key, value in data.items():
        full_key = f"{prefix}{key}"
        if isinstance(value, Mapping):
            messages.update(flatten_messages(value, f"{full_key}."))
        elif value is None:
            messages[full_key] = ""
        else:
            messages[full_key] = str(value)
    return messages


def _read_file(path: Path) -> dict[str, str]:
    try:
        with open(path, encoding="utf-8") as fh:
            if path.suffix == ".json":
                data = json.load(fh)
            else:
                data = yaml.safe_load(fh)
    except (OSError, ValueError, yaml.YAMLError) as e:
        raise ResourceLoadError(str(path), str(e)) from e

    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise ResourceLoadError(
            str(path), f"expected a mapping, got {type(data).__name__}"
        )
    return flatten_messages(data)


class ResourceLoader:
    """In-memory store of locale bundles loaded at startup.

    Bundles are read-only once loaded and safe to share across requests.
    """

    def __init__(
        self,
        dirs: Iterable[str | Path] = (),
        default_locale: str = "en_US",
    ) -> None:
        self._dirs = [Path(d) for d in dirs]
        self._default_locale = default_locale
        self._bundles: dict[str, dict[str, str]] = {}
        self.load()

    @classmethod
    def from_mapping(
        cls,
        bundles: Mapping[str, Mapping[str, Any]],
        default_locale: str = "en_US",
    ) -> "ResourceLoader":
        """Build a loader from in-memory bundles instead of files."""
        loader = cls(default_locale=default_locale)
        for locale, messages in bundles.items():
            loader.add_bundle(locale, messages)
        return loader

    def load(self) -> None:
        """(Re)load every resource file from the configured directories.

        Later directories override earlier ones key by key.

        Raises:
            ResourceLoadError: If a file cannot be parsed.
        """
        bundles: dict[str, dict[str, str]] = {}
        for directory in self._dirs:
            if not directory.is_dir():
                logger.warning("locale_resource_skipped", path=str(directory))
                continue
            for path in sorted(directory.iterdir()):
                if path.suffix not in RESOURCE_SUFFIXES or not path.is_file():
                    continue
                locale = normalize_locale_name(path.stem)
                bundles.setdefault(locale, {}).update(_read_file(path))

        if self._dirs:
            self._bundles = bundles
            logger.info(
                "locale_resources_loaded",
                locales=sorted(bundles),
                dirs=[str(d) for d in self._dirs],
            )

    def add_bundle(self, locale: str, messages: Mapping[str, Any]) -> None:
        """Merge ``messages`` into the bundle for ``locale``."""
        self._bundles.setdefault(normalize_locale_name(locale), {}).update(
            flatten_messages(messages)
        )

    @property
    def locales(self) -> list[str]:
        return sorted(self._bundles)

    def has_locale(self, locale: str) -> bool:
        return normalize_locale_name(locale) in self._bundles

    def get(self, locale: str) -> Mapping[str, str]:
        """Bundle for ``locale``, else the default locale's bundle, else empty."""
        bundle = self._bundles.get(normalize_locale_name(locale))
        if bundle is None:
            bundle = self._bundles.get(normalize_locale_name(self._default_locale), {})
        return bundle
