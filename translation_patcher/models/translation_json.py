import asyncio
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Union, cast

import aiohttp
from loguru import logger

from translation_patcher.models.language import (
    TRANSLATION_FILE_SUFFIX,
    Language,
    language_from_filename,
)
from translation_patcher.utils import nested_json
from translation_patcher.utils.exception import TranslationLoadError
from translation_patcher.utils.nested_json import TranslationKeyValue, TranslationTree


@dataclass(frozen=True)
class TranslationFile:
    path: Path

    @property
    def location(self) -> str:
        return str(self.path)


@dataclass(frozen=True)
class TranslationUrl:
    """A translation hosted remotely. Read-only."""

    url: str
    timeout: float = 30.0

    @property
    def location(self) -> str:
        return self.url


TranslationSource = Union[TranslationFile, TranslationUrl]


def _read_json_file(path: Path) -> Any:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def _write_json_file(path: Path, tree: TranslationTree) -> None:
    with open(path, "w", encoding="utf-8") as f:
        f.write(json.dumps(tree, indent=2, ensure_ascii=False))
        f.write("\n")


class TranslationJson:
    """A translation tree bound to the file or URL it was loaded from.

    The tree is loaded once with parse(), changed in place with set_value()
    and saved once with write(). Only file sources can be written.
    """

    def __init__(self, source: TranslationSource) -> None:
        self.source = source
        self.json: TranslationTree = {}

    def __repr__(self) -> str:
        return f"TranslationJson({self.source.location!r})"

    @property
    def location(self) -> str:
        return self.source.location

    @property
    def language(self) -> Optional[Language]:
        return language_from_filename(self.location)

    @property
    def is_writable(self) -> bool:
        return isinstance(self.source, TranslationFile)

    async def parse(self) -> "TranslationJson":
        """Load the tree from the source.

        Raises:
            TranslationLoadError: If the source is missing, unreachable, not
                valid JSON, or does not hold a JSON object
        """
        if isinstance(self.source, TranslationFile):
            data = await self._parse_file(self.source)
        else:
            data = await self._parse_url(self.source)

        if not isinstance(data, dict):
            raise TranslationLoadError(
                self.location, f"expected a JSON object, got {type(data).__name__}"
            )
        self.json = data
        return self

    async def _parse_file(self, source: TranslationFile) -> Any:
        loop = asyncio.get_running_loop()
        try:
            return await loop.run_in_executor(None, _read_json_file, source.path)
        except FileNotFoundError:
            raise TranslationLoadError(source.location, "file not found")
        except (OSError, UnicodeDecodeError) as e:
            raise TranslationLoadError(source.location, str(e))
        except json.JSONDecodeError as e:
            raise TranslationLoadError(source.location, f"invalid JSON: {e}")

    async def _parse_url(self, source: TranslationUrl) -> Any:
        timeout = aiohttp.ClientTimeout(total=source.timeout)
        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.get(source.url) as response:
                    response.raise_for_status()
                    return await response.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError, UnicodeDecodeError) as e:
            raise TranslationLoadError(source.location, str(e) or type(e).__name__)
        except json.JSONDecodeError as e:
            raise TranslationLoadError(source.location, f"invalid JSON: {e}")

    def get_value(self, key: str) -> Optional[str]:
        if nested_json.is_flat(self.json):
            value = self.json.get(key)
            return value if isinstance(value, str) else None
        return nested_json.get_value(self.json, key)

    def set_value(self, key: str, value: str) -> "TranslationJson":
        # Flat files keep dotted keys as literal top-level keys
        if nested_json.is_flat(self.json):
            self.json[key] = value
        else:
            nested_json.set_value(self.json, key, value)
        return self

    def apply(self, entries: List[TranslationKeyValue]) -> "TranslationJson":
        for entry in entries:
            self.set_value(entry.key, entry.value)
        return self

    def flatten(self) -> Dict[str, str]:
        return nested_json.flatten(self.json)

    def diff(self, other: "TranslationJson") -> List[TranslationKeyValue]:
        return nested_json.diff(self.json, other.json)

    async def write(self) -> "TranslationJson":
        """Save the tree back to its file with two-space indentation.

        URL sources cannot be written; a warning is logged instead.
        """
        if not self.is_writable:
            logger.warning(f"Write not supported for URL source: {self.location}")
            return self
        source = cast(TranslationFile, self.source)
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, _write_json_file, source.path, self.json)
        return self


def get_translation_files_from_path(folder: Path) -> List[TranslationFile]:
    """List the translation files directly inside a folder, sorted by name."""
    return [
        TranslationFile(path)
        for path in sorted(folder.iterdir())
        if path.is_file() and path.name.endswith(TRANSLATION_FILE_SUFFIX)
    ]
