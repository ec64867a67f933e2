"""Translation store: per-module, per-language JSON files.

Each module has its own directory, with one file per configured language:

i18n/{module_name}/
├── ja.json       # Source language: {key: "text"}
├── en.json       # Target language: {key: {"value": "...", "translated": bool}}
└── zh-CN.json

Files are always rewritten in full. There is no locking: the store assumes
a single writer at a time, so a scrape racing a manual edit on the same
module can lose one of the two updates.
"""

import json
import logging
import os
import stat
import tempfile
from pathlib import Path
from typing import Optional

from .exceptions import StorageError, ValidationError

logger = logging.getLogger(__name__)


def _target_mode(file_path: Path) -> int:
    """Permission bits for a rewritten file: the existing file's, else 0666 less umask."""
    try:
        return stat.S_IMODE(file_path.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


class TranslationStore:
    """Manage the JSON files backing every module's translations."""

    FILE_SUFFIX = ".json"

    def __init__(self, root: Path | str, source_language: str):
        """Initialize the store.

        Args:
            root: Directory holding one sub-directory per module
            source_language: Language whose file maps keys to plain strings
        """
        self.root = Path(root)
        self.source_language = source_language

    def get_module_dir(self, module_name: str) -> Path:
        """Get the directory holding a module's language files.

        Args:
            module_name: Registry name of the module

        Returns:
            Path to module directory
        """
        return self.root / module_name

    def get_language_file(self, module_name: str, language: str) -> Path:
        """Get the JSON file for a (module, language) pair.

        Args:
            module_name: Registry name of the module
            language: Language code, e.g. "en" or "zh-CN"

        Returns:
            Path to the language file
        """
        return self.get_module_dir(module_name) / f"{language}{self.FILE_SUFFIX}"

    def module_exists(self, module_name: str) -> bool:
        """Check if any file has been written for a module yet."""
        return self.get_module_dir(module_name).is_dir()

    def list_languages(self, module_name: str) -> list[str]:
        """List the languages that have a file on disk for a module."""
        module_dir = self.get_module_dir(module_name)
        if not module_dir.is_dir():
            return []
        return sorted(p.stem for p in module_dir.glob(f"*{self.FILE_SUFFIX}"))

    def read_entries(self, module_name: str, language: str) -> dict:
        """Load a language file.

        A missing, unreadable or malformed file reads as an empty mapping:
        new modules and new languages have no file until their first write.
        ValueError covers JSON syntax errors, bad UTF-8 and oversized integer
        literals; RecursionError covers pathologically nested documents.

        Args:
            module_name: Registry name of the module
            language: Language code

        Returns:
            The stored mapping, or {} if there is no usable data
        """
        file_path = self.get_language_file(module_name, language)
        if not file_path.exists():
            return {}

        try:
            with open(file_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (ValueError, RecursionError, OSError) as e:
            logger.warning("[Store] Ignoring unreadable file %s: %s", file_path, e)
            return {}

        if not isinstance(data, dict):
            logger.warning("[Store] Ignoring non-object JSON in %s", file_path)
            return {}
        return data

    def write_entries(self, module_name: str, language: str, entries: dict) -> None:
        """Replace a language file with the given mapping.

        The mapping is written to a temporary file in the same directory and
        then renamed over the target, so readers see either the old or the new
        content in full.

        Args:
            module_name: Registry name of the module
            language: Language code
            entries: Complete mapping to persist

        Raises:
            StorageError: If the file could not be written
        """
        file_path = self.get_language_file(module_name, language)
        tmp_name = None
        try:
            file_path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{language}.", suffix=".tmp", dir=file_path.parent
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(entries, f, ensure_ascii=False, indent=2)
            # mkstemp creates 0600 files; keep the permissions readers expect
            os.chmod(tmp_name, _target_mode(file_path))
            os.replace(tmp_name, file_path)
        except (OSError, TypeError, ValueError) as e:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StorageError(f"Failed to write {file_path}: {e}", path=str(file_path)) from e

    def update_single_translation(
        self,
        module_name: str,
        key: str,
        language: str,
        value: str,
        translated: Optional[bool] = None,
    ) -> dict:
        """Replace one entry in a target-language file.

        The entry is replaced, not patched: toggling only the translated flag
        still requires sending the current value.

        Args:
            module_name: Registry name of the module
            key: Translation key
            language: Target language code
            value: New translation text
            translated: Translated flag; defaults to True when omitted

        Returns:
            The entry that was written

        Raises:
            ValidationError: If language is the source language
            StorageError: If the file could not be written
        """
        if language == self.source_language:
            raise ValidationError(
                "Cannot directly modify source language file", language=language
            )

        entries = self.read_entries(module_name, language)
        entry = {
            "value": value,
            "translated": True if translated is None else translated,
        }
        entries[key] = entry
        self.write_entries(module_name, language, entries)
        return entry
