"""
patch subcommand for translating the keys that changed in the English file.
"""

import asyncio
import sys
from pathlib import Path
from typing import Optional

import click

from translation_patcher.controllers.patch_controller import (
    PatchController,
    parse_include_languages,
)
from translation_patcher.models.config import (
    API_KEY_ENV_VAR,
    DEFAULT_BASE_URL,
    DEFAULT_MODEL,
    BackendConfig,
    RetryConfig,
    TranslationConfig,
    set_translation_config,
)
from translation_patcher.models.language import get_language_by_code
from translation_patcher.utils.exception import TranslationLoadError
from translation_patcher.utils.validation import (
    validate_api_key,
    validate_batch_size,
    validate_concurrent_requests,
    validate_directory_path,
    validate_file_path,
    validate_model_name,
    validate_retry_count,
    validate_timeout,
)


@click.command("patch")
@click.argument("base_file", type=click.Path(path_type=Path))
@click.argument("patched_file", type=click.Path(path_type=Path))
@click.argument("output_folder", type=click.Path(path_type=Path))
@click.option(
    "-i",
    "--include-languages",
    default="",
    help="Comma-separated list of language codes to include in translation, e.g. 'fr,de'.",
)
@click.option(
    "--api-key",
    envvar=API_KEY_ENV_VAR,
    help=f"API key for the translation backend. Can also be set via {API_KEY_ENV_VAR} environment variable.",
)
@click.option(
    "--model",
    default=DEFAULT_MODEL,
    show_default=True,
    help="Model used for translation.",
)
@click.option(
    "--base-url",
    default=DEFAULT_BASE_URL,
    show_default=True,
    help="Base URL of the OpenAI-compatible chat completion API.",
)
@click.option(
    "--batch-size",
    type=int,
    default=50,
    show_default=True,
    help="Number of keys sent to the backend in one request.",
)
@click.option(
    "--max-concurrent-files",
    type=int,
    default=10,
    show_default=True,
    help="Number of language files translated at the same time.",
)
@click.option(
    "--max-concurrent-batches",
    type=int,
    default=5,
    show_default=True,
    help="Number of backend requests in flight per language file.",
)
@click.option(
    "--max-retries",
    type=int,
    default=3,
    show_default=True,
    help="Attempts per backend request before its keys are left untranslated.",
)
@click.option(
    "--timeout",
    type=float,
    default=60.0,
    show_default=True,
    help="Backend request timeout in seconds.",
)
def patch(
    base_file: Path,
    patched_file: Path,
    output_folder: Path,
    include_languages: str,
    api_key: Optional[str],
    model: str,
    base_url: str,
    batch_size: int,
    max_concurrent_files: int,
    max_concurrent_batches: int,
    max_retries: int,
    timeout: float,
) -> None:
    """Translate keys changed between BASE_FILE and PATCHED_FILE into every
    language file in OUTPUT_FOLDER.

    Language files are named after their language code, e.g. fr.json or
    zh-TW.json. Files are overwritten in place.

    Examples:

    \b
      # Using environment variable (recommended for security)
      export OPENROUTER_API_KEY=sk-or-...
      translation-patcher patch en.old.json en.json locales/

    \b
      # Only patch French and German
      translation-patcher patch en.old.json en.json locales/ -i fr,de
    """
    try:
        validate_file_path(base_file)
        validate_file_path(patched_file)
        validate_directory_path(output_folder)
        api_key = validate_api_key(api_key, "Translation backend")
        model = validate_model_name(model)
        config = TranslationConfig(
            retry_config=RetryConfig(max_retries=validate_retry_count(max_retries)),
            backend_config=BackendConfig(
                api_key=api_key,
                base_url=base_url,
                model=model,
                request_timeout=validate_timeout(timeout),
            ),
            batch_size=validate_batch_size(batch_size),
            max_concurrent_files=validate_concurrent_requests(max_concurrent_files),
            max_concurrent_batches=validate_concurrent_requests(max_concurrent_batches),
        )
    except (OSError, ValueError, TypeError) as e:
        click.secho(f"Error: {e}", fg="red", err=True)
        sys.exit(1)

    languages = parse_include_languages(include_languages)
    unknown = [code for code in languages if get_language_by_code(code) is None]
    if unknown:
        click.secho(
            f"Warning: unknown language codes will match no file: {', '.join(unknown)}",
            fg="yellow",
            err=True,
        )

    set_translation_config(config)
    controller = PatchController(config)
    try:
        summary = asyncio.run(
            controller.patch_translations(
                base_file, patched_file, output_folder, include_languages=languages
            )
        )
    except TranslationLoadError as e:
        click.secho(f"Error: {e}", fg="red", err=True)
        sys.exit(1)

    if not summary.success:
        click.secho(
            f"Finished with problems: {summary.failed} files failed, "
            f"{summary.incomplete} files have untranslated keys.",
            fg="yellow",
            err=True,
        )
        sys.exit(1)
