"""Top-level entry point: PaintingStudio wires images, cache and dispatcher."""

from __future__ import annotations

import logging
from typing import Any

from paintgen.cache.keys import hash_image
from paintgen.cache.store import CacheStore
from paintgen.concurrency.dispatcher import RequestDispatcher
from paintgen.config.schema import PaintgenSettings
from paintgen.errors.exceptions import DispatchError, PaintgenError
from paintgen.generation import prompts
from paintgen.generation.client import GenerationClient, create_image_message, text_message
from paintgen.generation.parser import parse_exhibition_options, parse_poster
from paintgen.images.normalizer import ImageNormalizer
from paintgen.types import (
    ArtifactKind,
    ExhibitionOption,
    ImageFile,
    Message,
    PaintingDescription,
    PosterResult,
    Role,
)
from paintgen.utils.image import image_to_base64, validate_images

logger = logging.getLogger(__name__)

# (max_tokens, temperature) per artifact kind
_GENERATION_PARAMS: dict[ArtifactKind, tuple[int, float]] = {
    ArtifactKind.DESCRIPTION: (1000, 0.7),
    ArtifactKind.EXHIBITION: (300, 0.9),
    ArtifactKind.POSTER: (1500, 0.8),
}


class PaintingStudio:
    """Generates descriptions, exhibition titles and poster copy for paintings.

    Every artifact goes through the same path: normalize images, fingerprint
    the request, consult the cache, and on a miss dispatch to the generation
    service and store the result.
    """

    def __init__(
        self,
        settings: PaintgenSettings | None = None,
        client: GenerationClient | None = None,
        cache: CacheStore | None = None,
        normalizer: ImageNormalizer | None = None,
        dispatcher: RequestDispatcher | None = None,
    ) -> None:
        self._settings = settings or PaintgenSettings()
        self._client = client
        self._cache = cache if cache is not None else CacheStore(
            max_size=self._settings.cache_max_size,
            ttl_seconds=self._settings.cache_ttl_seconds,
        )
        self._normalizer = (
            normalizer if normalizer is not None
            else ImageNormalizer(self._settings.image_constraints())
        )
        self._dispatcher = dispatcher if dispatcher is not None else RequestDispatcher(
            max_retries=self._settings.max_retries,
            backoff_unit=self._settings.backoff_unit,
        )

    @property
    def settings(self) -> PaintgenSettings:
        return self._settings

    @property
    def cache(self) -> CacheStore:
        return self._cache

    @property
    def normalizer(self) -> ImageNormalizer:
        return self._normalizer

    @property
    def dispatcher(self) -> RequestDispatcher:
        return self._dispatcher

    async def describe_paintings(self, files: list[ImageFile]) -> list[PaintingDescription]:
        """Describe each painting; one failed image does not stop the rest."""
        valid, errors = validate_images(files)
        for error in errors:
            logger.warning(error)
        if not valid:
            raise PaintgenError("No valid images to process: " + "; ".join(errors))

        normalized = await self._normalizer.normalize_batch(valid)
        prompt = prompts.description_prompt(self._settings.language)

        results: list[PaintingDescription] = []
        for image in normalized:
            try:
                text = await self._generate(
                    ArtifactKind.DESCRIPTION,
                    {"image": hash_image(image.data)},
                    [create_image_message(image_to_base64(image.data), prompt, image.mime_type)],
                )
            except DispatchError as e:
                logger.error("Description failed for %s: %s", image.name, e)
                results.append(PaintingDescription(
                    image_name=image.name,
                    description="",
                    error=str(e),
                ))
                continue
            results.append(PaintingDescription(image_name=image.name, description=text.strip()))
        return results

    async def suggest_exhibition_titles(
        self,
        descriptions: list[str | PaintingDescription],
    ) -> list[ExhibitionOption]:
        texts = _description_texts(descriptions)
        if not texts:
            raise PaintgenError("No painting descriptions provided")

        messages = [
            text_message(Role.SYSTEM, prompts.EXHIBITION_SYSTEM_PROMPT),
            text_message(Role.USER, prompts.exhibition_prompt(texts, self._settings.language)),
        ]
        text = await self._generate(ArtifactKind.EXHIBITION, {"descriptions": texts}, messages)
        return parse_exhibition_options(text)

    async def create_poster(
        self,
        title: str,
        descriptions: list[str | PaintingDescription] | None = None,
    ) -> PosterResult:
        if not title.strip():
            raise PaintgenError("Exhibition title is required")
        texts = _description_texts(descriptions or [])

        messages = [
            text_message(Role.SYSTEM, prompts.POSTER_SYSTEM_PROMPT),
            text_message(Role.USER, prompts.poster_prompt(title, texts, self._settings.language)),
        ]
        text = await self._generate(
            ArtifactKind.POSTER, {"title": title, "descriptions": texts}, messages
        )
        return parse_poster(text)

    def cancel(self) -> bool:
        """Cancel the request currently in flight, if any."""
        return self._dispatcher.cancel()

    async def close(self) -> None:
        self._dispatcher.cancel()
        self._cache.close()
        if self._client is not None:
            await self._client.close()

    async def _generate(
        self,
        kind: ArtifactKind,
        params: dict[str, Any],
        messages: list[Message],
    ) -> str:
        """Return generated text for ``messages``, from cache when possible."""
        key_params = {
            **params,
            "model": self._settings.model,
            "language": self._settings.language,
        }
        cached = self._cache.get(kind, key_params)
        if cached is not None:
            logger.info("Using cached %s", kind)
            return cached

        client = self._get_client()
        max_tokens, temperature = _GENERATION_PARAMS[kind]

        async def unit_of_work() -> str:
            response = await client.complete(
                messages, max_tokens=max_tokens, temperature=temperature
            )
            return response.content

        text = await self._dispatcher.dispatch(unit_of_work)
        self._cache.set(kind, key_params, text)
        return text

    def _get_client(self) -> GenerationClient:
        if self._client is None:
            self._client = GenerationClient(
                api_key=self._settings.api_key,
                base_url=self._settings.base_url,
                model=self._settings.model,
                http_referer=self._settings.http_referer,
                timeout=self._settings.timeout,
            )
        return self._client


def _description_texts(descriptions: list[str | PaintingDescription]) -> list[str]:
    texts: list[str] = []
    for desc in descriptions:
        text = desc if isinstance(desc, str) else desc.description
        if text and text.strip():
            texts.append(text.strip())
    return texts
