import asyncio
import json
from typing import Any, Dict, List, Optional

from loguru import logger
from openai import AsyncOpenAI

from translation_patcher.models.config import (
    BackendConfig,
    TranslationConfig,
    get_translation_config,
)
from translation_patcher.models.language import Language
from translation_patcher.utils.batching import batch
from translation_patcher.utils.exception import TranslationResponseError
from translation_patcher.utils.nested_json import TranslationKeyValue
from translation_patcher.utils.retry import retry_with_backoff

LANGUAGE_TOKEN = "{language}"

SYSTEM_PROMPT = """You are a professional translator for a Trade-in POS (Point of Sale) SaaS application. Translate the following UI text strings from English to {language}.

Domain context:
- This is a buyback/trade-in platform where customers sell used items (phones, electronics, etc.)
- Offer types describe HOW items are traded in (in-store, by mail, etc.)
- Use standard/formal register appropriate for business software

Translation rules:
1. PRESERVE placeholders exactly as-is: {value}, {type}, {0}, {1}, etc. Do not translate content inside curly braces
2. TRANSLATE all descriptive English terms including offer types, conditions, and UI labels
3. Only keep in English: proper brand names (Apple, Samsung), integration brand names (BackMarket, ShareASale, Tremendous, DataFeed), model numbers (iPhone 15), and code identifiers
4. Output ONLY a valid JSON object, no markdown, no explanation, no extra text

Domain glossary (MUST be translated, not kept in English):
- "In-Store" means physical store location (e.g., Indonesian: "di toko")
- "Mail-in" means send by postal mail (e.g., Indonesian: "kirim pos")
- "Bulk Quote" means wholesale/volume pricing (e.g., Indonesian: "penawaran grosir")
- "Easy Offer" means simple/quick offer (e.g., Indonesian: "penawaran mudah")
- "Trade-in" means exchange old item for value (translate to local equivalent)
- "Offer" means proposal/bid (translate appropriately)
- "Markup"/"Mark Up" means increase in price (e.g., Indonesian: "Naikan Harga")
- "Markdown"/"Mark Down" means decrease in price (e.g., Indonesian: "Turunkan Harga")

Example of CORRECT vs INCORRECT translation (e.g. Indonesian):
- WRONG: "In-Store Offer" -> "Penawaran In-Store" (kept English term)
- RIGHT: "In-Store Offer" -> "Penawaran di Toko" (fully translated)

Input format: one string per line, prefixed with its numeric index in square brackets.
Output format: JSON object with the same numeric indices as keys and fully translated strings as values."""

# Xhosa files are prompted with English as the target language
XHOSA = "xhosa"
XHOSA_PROMPT_LANGUAGE = "English"


def create_client(backend_config: BackendConfig) -> AsyncOpenAI:
    """Create an async client for the OpenAI-compatible backend."""
    return AsyncOpenAI(
        api_key=backend_config.api_key,
        base_url=backend_config.base_url,
        timeout=backend_config.request_timeout,
        max_retries=0,
    )


def generate_system_prompt(language_name: str) -> str:
    if language_name.lower() == XHOSA:
        language_name = XHOSA_PROMPT_LANGUAGE
    return SYSTEM_PROMPT.replace(LANGUAGE_TOKEN, language_name)


def generate_formatted_input(entries: List[TranslationKeyValue]) -> str:
    """Render entries as '[index] "text"' lines, the input format the prompt describes."""
    return "\n".join(f'[{index}] "{entry.value}"' for index, entry in enumerate(entries))


def build_response_schema(size: int) -> Dict[str, Any]:
    """JSON schema for a response holding exactly the indices 0..size-1 as strings."""
    keys = [str(index) for index in range(size)]
    return {
        "type": "object",
        "properties": {key: {"type": "string"} for key in keys},
        "required": keys,
        "additionalProperties": False,
    }


def parse_response_content(content: Any) -> Dict[str, str]:
    """Decode the message content returned by the backend.

    Raises:
        TranslationResponseError: If the content is not a JSON object of strings
    """
    if not isinstance(content, str):
        raise TranslationResponseError(
            f"Unexpected response format from LLM: content is {type(content).__name__}"
        )
    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise TranslationResponseError(f"LLM response is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise TranslationResponseError(
            f"LLM response is not a JSON object: {type(data).__name__}"
        )
    for key, value in data.items():
        if not isinstance(value, str):
            raise TranslationResponseError(
                f"LLM response value for index {key} is {type(value).__name__}, expected string"
            )
    return data


class LLMTranslation:
    """Translate batches of entries from English into one target language.

    Each batch becomes a single chat completion request whose response is
    constrained by a JSON schema keyed by the entries' positions in the batch.

    Attributes:
        language: Target language of every request
        config: Batch size, concurrency, retry and backend settings
    """

    def __init__(
        self,
        language: Language,
        client: Optional[AsyncOpenAI] = None,
        config: Optional[TranslationConfig] = None,
    ) -> None:
        self.language = language
        self.config = config if config is not None else get_translation_config()
        self._client = client

    @property
    def client(self) -> AsyncOpenAI:
        if self._client is None:
            self._client = create_client(self.config.backend_config)
        return self._client

    async def send_request(
        self, system_prompt: str, user_prompt: str, size: int
    ) -> Dict[str, str]:
        backend = self.config.backend_config
        response = await self.client.chat.completions.create(
            model=backend.model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            temperature=backend.temperature,
            stream=False,
            response_format={
                "type": "json_schema",
                "json_schema": {
                    "name": "translations",
                    "strict": True,
                    "schema": build_response_schema(size),
                },
            },
        )
        if not response.choices:
            raise TranslationResponseError("LLM response contained no choices")
        return parse_response_content(response.choices[0].message.content)

    async def translate_batch(
        self, entries: List[TranslationKeyValue]
    ) -> Optional[List[TranslationKeyValue]]:
        """Translate one batch, retrying the request on failure.

        Returns:
            Translated entries in input order, keeping the original text for any
            index the backend left out, or None if every attempt failed
        """
        if not entries:
            return []

        system_prompt = generate_system_prompt(self.language.name)
        user_prompt = generate_formatted_input(entries)
        logger.debug(f"Sending {len(entries)} entries for {self.language.name}")

        outcome = await retry_with_backoff(
            self.send_request,
            system_prompt,
            user_prompt,
            len(entries),
            config=self.config.retry_config,
        )
        if not outcome.succeeded or outcome.result is None:
            logger.error(
                json.dumps(
                    {
                        "message": "LLM request failed",
                        "metadata": {
                            "language": self.language.code,
                            "systemPrompt": system_prompt,
                            "userPrompt": user_prompt,
                            "errors": [str(e) for e in outcome.errors],
                        },
                    },
                    ensure_ascii=False,
                )
            )
            return None

        translated = outcome.result
        return [
            TranslationKeyValue(entry.key, translated.get(str(index), entry.value))
            for index, entry in enumerate(entries)
        ]

    async def translate(
        self, entries: List[TranslationKeyValue]
    ) -> List[TranslationKeyValue]:
        """Translate any number of entries in batches of config.batch_size.

        Batches run concurrently, at most config.max_concurrent_batches at a
        time. Entries of a batch that failed are left out of the result.
        """
        batches = batch(entries, self.config.batch_size)
        if not batches:
            return []

        semaphore = asyncio.Semaphore(self.config.max_concurrent_batches)
        completed = 0

        async def run_batch(
            chunk: List[TranslationKeyValue],
        ) -> Optional[List[TranslationKeyValue]]:
            nonlocal completed
            async with semaphore:
                result = await self.translate_batch(chunk)
            completed += 1
            progress = round(completed / len(batches) * 100)
            logger.info(f"Translation progress for {self.language.name}: {progress}%")
            return result

        results = await asyncio.gather(*(run_batch(chunk) for chunk in batches))

        translated: List[TranslationKeyValue] = []
        for index, result in enumerate(results):
            if result is None:
                logger.error(
                    f"Batch {index + 1}/{len(batches)} for {self.language.name} failed, "
                    f"its {len(batches[index])} keys stay untranslated"
                )
                continue
            translated.extend(result)
        return translated
