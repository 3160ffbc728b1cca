"""Patch a folder of language files after the English reference changed.

The controller diffs a base and a patched English file, loads every
language file in the output folder and sends the changed keys to the
translation backend for each of them. Once the base and patched files are
loaded, problems with a single language file or a single batch are logged
and the run carries on with the rest.
"""

import asyncio
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Tuple

from loguru import logger
from openai import AsyncOpenAI

from translation_patcher.models.config import TranslationConfig, get_translation_config
from translation_patcher.models.language import Language
from translation_patcher.models.translation_json import (
    TranslationFile,
    TranslationJson,
    get_translation_files_from_path,
)
from translation_patcher.services.llm_translation import LLMTranslation, create_client
from translation_patcher.utils.batching import batch
from translation_patcher.utils.exception import TranslationLoadError
from translation_patcher.utils.nested_json import TranslationKeyValue

TranslatorFactory = Callable[[Language], LLMTranslation]


@dataclass
class PatchSummary:
    """Counts collected during a patch run.

    Attributes:
        diff_size: Number of changed keys between base and patched files
        discovered: JSON files found in the output folder
        loaded: Files that parsed successfully
        invalid: Files that could not be parsed and were skipped
        skipped: Loaded files left untouched because their language is unknown
        translated: Files that were translated and written
        incomplete: Written files where at least one batch failed
        failed: Files whose processing raised an error
    """

    diff_size: int = 0
    discovered: int = 0
    loaded: int = 0
    invalid: int = 0
    skipped: int = 0
    translated: int = 0
    incomplete: int = 0
    failed: int = 0

    @property
    def success(self) -> bool:
        return self.failed == 0 and self.incomplete == 0


def parse_include_languages(raw: Optional[str]) -> List[str]:
    """Turn 'fr, de,pt' into ['fr', 'de', 'pt']."""
    if not raw:
        return []
    return [code for code in raw.replace(" ", "").split(",") if code]


class PatchController:
    """Drives a patch run from loading the reference files to writing results."""

    def __init__(
        self,
        config: Optional[TranslationConfig] = None,
        translator_factory: Optional[TranslatorFactory] = None,
    ) -> None:
        self.config = config if config is not None else get_translation_config()
        self._translator_factory = translator_factory
        self._client: Optional[AsyncOpenAI] = None

    def create_translator(self, language: Language) -> LLMTranslation:
        if self._translator_factory is not None:
            return self._translator_factory(language)
        # One client is shared by every language file of the run
        if self._client is None:
            self._client = create_client(self.config.backend_config)
        return LLMTranslation(language, client=self._client, config=self.config)

    async def load_translation(self, path: Path) -> TranslationJson:
        """Load a reference file. Errors here abort the run."""
        return await TranslationJson(TranslationFile(path)).parse()

    async def load_language_files(
        self, files: Sequence[TranslationFile]
    ) -> Tuple[List[TranslationJson], int]:
        """Parse language files in windows of max_concurrent_files.

        Returns:
            The parsed files in input order and the number of files skipped
        """
        loaded: List[TranslationJson] = []
        invalid = 0
        for window in batch(files, self.config.max_concurrent_files):
            results = await asyncio.gather(
                *(TranslationJson(source).parse() for source in window),
                return_exceptions=True,
            )
            for source, result in zip(window, results):
                if isinstance(result, TranslationJson):
                    loaded.append(result)
                else:
                    invalid += 1
                    logger.warning(f"Skipping invalid translation file {source.location}: {result}")
        return loaded, invalid

    def filter_languages(
        self, translations: List[TranslationJson], include_languages: Sequence[str]
    ) -> List[TranslationJson]:
        if not include_languages:
            return translations
        logger.info(f"Filtering translations for languages: {', '.join(include_languages)}")
        filtered = [
            translation
            for translation in translations
            if translation.language is not None
            and translation.language.code in include_languages
        ]
        logger.info(f"Filtered to only {len(filtered)} translations")
        return filtered

    async def translate_file(
        self,
        translation: TranslationJson,
        language: Language,
        diff: List[TranslationKeyValue],
    ) -> bool:
        """Translate the diff for one file, merge the result and write it.

        Returns:
            True if every changed key was translated
        """
        translator = self.create_translator(language)
        translated = await translator.translate(diff)
        translation.apply(translated)
        logger.info(f"Finished translating {translation.location} for {language.name}")

        logger.info(f"Writing {translation.location}")
        await translation.write()
        return len(translated) == len(diff)

    async def translate_all(
        self,
        translations: List[TranslationJson],
        diff: List[TranslationKeyValue],
        summary: PatchSummary,
    ) -> None:
        keys = ", ".join(entry.key for entry in diff)
        targets: List[Tuple[TranslationJson, Language]] = []
        for translation in translations:
            language = translation.language
            if language is None:
                summary.skipped += 1
                logger.warning(
                    f"Skipping translation file {translation.location} because language code could not be determined"
                )
                continue
            targets.append((translation, language))

        total = len(targets)
        completed = 0
        for window in batch(targets, self.config.max_concurrent_files):
            for translation, _ in window:
                logger.info(
                    f"Translating key-value pairs for {translation.location} on these keys: {keys}"
                )
            results = await asyncio.gather(
                *(
                    self.translate_file(translation, language, diff)
                    for translation, language in window
                ),
                return_exceptions=True,
            )
            for (translation, _), result in zip(window, results):
                if isinstance(result, BaseException):
                    summary.failed += 1
                    logger.opt(exception=result).error(
                        f"Failed to patch {translation.location}: {result}"
                    )
                else:
                    summary.translated += 1
                    if not result:
                        summary.incomplete += 1

            completed += len(window)
            logger.info(f"Translation progress: {round(completed / total * 100)}%")

    async def patch_translations(
        self,
        base_path: Path,
        patched_path: Path,
        output_folder: Path,
        include_languages: Optional[Sequence[str]] = None,
    ) -> PatchSummary:
        """Translate the keys that changed between base_path and patched_path
        into every language file of output_folder.

        Args:
            base_path: English reference before the change
            patched_path: English reference after the change
            output_folder: Folder holding one <code>.json file per language
            include_languages: Only patch these language codes, all if empty

        Returns:
            Summary of the run

        Raises:
            TranslationLoadError: If a reference file or the output folder cannot be read
        """
        summary = PatchSummary()

        logger.info(f"Loading base translation from {base_path}")
        base = await self.load_translation(base_path)
        logger.info(f"Loading patched translation from {patched_path}")
        patched = await self.load_translation(patched_path)

        logger.info("Comparing translations")
        diff = base.diff(patched)
        summary.diff_size = len(diff)
        logger.info(f"Found {len(diff)} differences")
        if not diff:
            logger.info("Nothing to translate")
            return summary

        logger.info("Checking output folder for existing translation files")
        try:
            files = get_translation_files_from_path(output_folder)
        except OSError as e:
            raise TranslationLoadError(output_folder, str(e)) from e
        summary.discovered = len(files)
        logger.info(f"Found {len(files)} existing translation files")

        translations, summary.invalid = await self.load_language_files(files)
        summary.loaded = len(translations)
        logger.info(
            f"Found {summary.loaded} valid files and {summary.invalid} invalid files. Skipping invalid files"
        )

        translations = self.filter_languages(translations, include_languages or [])
        if not translations:
            logger.warning("No translation files to patch")
            return summary

        try:
            await self.translate_all(translations, diff, summary)
        finally:
            if self._client is not None:
                await self._client.close()
                self._client = None
        logger.info(
            f"Done. {summary.translated} files translated, {summary.skipped} skipped, {summary.failed} failed"
        )
        return summary
