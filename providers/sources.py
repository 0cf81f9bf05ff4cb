"""Provider configuration sources."""

from pathlib import Path
from typing import Any

import yaml

from .base import ProviderSource
from .exceptions import ProviderSourceError


class StaticProviderSource(ProviderSource):
    """Provider entries supplied in memory (bundled defaults, tests)."""

    def __init__(self, entries: list[dict[str, Any]]):
        self._entries = [dict(entry) for entry in entries]

    def load_entries(self) -> list[dict[str, Any]]:
        return [dict(entry) for entry in self._entries]


class FileProviderSource(ProviderSource):
    """Provider entries read from a YAML (or JSON) file.

    The file holds either a top-level list of entries or a mapping with a
    ``providers`` list.
    """

    def __init__(self, path: Path):
        self._path = Path(path)

    @property
    def description(self) -> str:
        return str(self._path)

    def load_entries(self) -> list[dict[str, Any]]:
        try:
            with open(self._path) as f:
                data = yaml.safe_load(f)
        except OSError as e:
            raise ProviderSourceError(self.description, str(e))
        except yaml.YAMLError as e:
            raise ProviderSourceError(self.description, f"invalid YAML: {e}")

        if isinstance(data, dict):
            data = data.get("providers")
        if data is None:
            return []
        if not isinstance(data, list) or not all(isinstance(e, dict) for e in data):
            raise ProviderSourceError(
                self.description, "expected a list of provider entries"
            )
        return data
