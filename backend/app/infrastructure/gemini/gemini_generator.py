"""Gemini content generators — concrete implementations of the ContentGenerator port.

Two strategies share one client and differ in how the answer is requested
and parsed:

* ``structured`` asks for JSON matching a ``{title, content}`` schema.
* ``markdown`` enables Google Search grounding (which cannot be combined
  with a JSON response schema) and reads the title from the first
  level-1 heading.
"""

import json
import logging
import re
from abc import abstractmethod
from typing import Any

from google import genai
from google.genai import types

from app.application.interfaces import ContentGenerator
from app.config import Settings
from app.domain.entities import GeneratedArticle, Source, is_web_url
from app.domain.exceptions import ConfigurationError, GenerationError
from app.infrastructure.gemini import prompts

logger = logging.getLogger(__name__)

_CODE_FENCE = re.compile(r"^```[a-zA-Z]*\s*\n(.*?)\n?\s*```\s*$", re.DOTALL)
_H1_LINE = re.compile(r"^#[ \t]+(.+?)[ \t#]*$")
_FENCE_LINE = re.compile(r"^ {0,3}(?:```|~~~)")


class GeminiContentGenerator(ContentGenerator):
    """Shared plumbing: one Gemini call, text validation, grounding sources."""

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.5-flash",
        temperature: float = 0.8,
        top_p: float = 0.95,
        client: Any = None,
    ):
        if client is None:
            if not api_key.strip():
                raise ConfigurationError("GEMINI_API_KEY", "GEMINI_API_KEY is not configured")
            client = genai.Client(api_key=api_key)
        self._client = client
        self._model = model
        self._temperature = temperature
        self._top_p = top_p

    async def generate(self, keyword: str) -> GeneratedArticle:
        try:
            response = await self._client.aio.models.generate_content(
                model=self._model,
                contents=prompts.build_prompt(keyword),
                config=self._build_config(),
            )
        except Exception as exc:
            logger.exception("Gemini request failed for keyword %r", keyword)
            raise GenerationError("The AI failed to generate the article. Please try again.") from exc

        text = getattr(response, "text", None)
        if not isinstance(text, str) or not text.strip():
            logger.error("Empty response text from Gemini for keyword %r", keyword)
            raise GenerationError("The AI did not return any text.")

        title, content = self._parse(_strip_code_fence(text.strip()), keyword)
        if not title.strip() or not content.strip():
            raise GenerationError("The AI returned an article without a title or body.")

        return GeneratedArticle(
            title=title.strip(),
            content=content.strip(),
            sources=extract_sources(response),
        )

    def _base_config(self, system_instruction: str) -> dict[str, Any]:
        return {
            "system_instruction": system_instruction,
            "temperature": self._temperature,
            "top_p": self._top_p,
        }

    @abstractmethod
    def _build_config(self) -> types.GenerateContentConfig:
        """Request config for this strategy."""

    @abstractmethod
    def _parse(self, text: str, keyword: str) -> tuple[str, str]:
        """Split the response text into ``(title, content)``."""


class StructuredGeminiGenerator(GeminiContentGenerator):
    """Requests a schema-validated JSON object ``{title, content}``."""

    name = "structured"

    def _build_config(self) -> types.GenerateContentConfig:
        schema = types.Schema(
            type=types.Type.OBJECT,
            properties={
                "title": types.Schema(type=types.Type.STRING, description=prompts.TITLE_DESCRIPTION),
                "content": types.Schema(type=types.Type.STRING, description=prompts.CONTENT_DESCRIPTION),
            },
            required=["title", "content"],
        )
        return types.GenerateContentConfig(
            **self._base_config(prompts.SYSTEM_INSTRUCTION + prompts.STRUCTURED_SUFFIX),
            response_mime_type="application/json",
            response_schema=schema,
        )

    def _parse(self, text: str, keyword: str) -> tuple[str, str]:
        try:
            parsed = json.loads(text)
        except json.JSONDecodeError as exc:
            logger.error("Failed to parse JSON response from Gemini: %s", text[:200])
            raise GenerationError("The AI responded in an unexpected format.") from exc

        if not isinstance(parsed, dict):
            raise GenerationError("The AI responded in an unexpected format.")
        title = parsed.get("title")
        content = parsed.get("content")
        if not isinstance(title, str) or not isinstance(content, str):
            logger.error("Invalid JSON structure received from Gemini: %s", list(parsed))
            raise GenerationError("The generated data does not have the expected structure.")
        return title, content


class MarkdownGeminiGenerator(GeminiContentGenerator):
    """Requests grounded markdown and takes the title from the first ``# heading``."""

    name = "markdown"

    def _build_config(self) -> types.GenerateContentConfig:
        return types.GenerateContentConfig(
            **self._base_config(prompts.SYSTEM_INSTRUCTION + prompts.MARKDOWN_SUFFIX),
            tools=[types.Tool(google_search=types.GoogleSearch())],
        )

    def _parse(self, text: str, keyword: str) -> tuple[str, str]:
        return split_title(text, keyword)


def split_title(markdown: str, keyword: str) -> tuple[str, str]:
    """Return ``(title, body)`` using the first level-1 heading as the title.

    The heading line is removed from the body. Without a heading the whole
    text is the body and the title falls back to a keyword template.
    Lines inside fenced code blocks are never taken as the heading.
    """
    lines = markdown.splitlines()
    in_fence = False
    for index, line in enumerate(lines):
        if _FENCE_LINE.match(line):
            in_fence = not in_fence
            continue
        match = None if in_fence else _H1_LINE.match(line)
        if match:
            body = "\n".join(lines[:index] + lines[index + 1:]).strip()
            return match.group(1).strip(), body
    return prompts.FALLBACK_TITLE_TEMPLATE.format(keyword=keyword), markdown


def extract_sources(response: Any) -> list[Source]:
    """Collect ``{uri, title}`` web citations from the grounding metadata.

    Entries missing either field or not linking to an http(s) URL are
    dropped; duplicate URIs keep their first occurrence.
    """
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return []
    metadata = getattr(candidates[0], "grounding_metadata", None)
    chunks = getattr(metadata, "grounding_chunks", None) or []

    sources: list[Source] = []
    seen: set[str] = set()
    for chunk in chunks:
        web = getattr(chunk, "web", None)
        uri = getattr(web, "uri", None)
        title = getattr(web, "title", None)
        if not isinstance(uri, str) or not isinstance(title, str):
            continue
        if not is_web_url(uri) or not title.strip() or uri in seen:
            continue
        seen.add(uri)
        sources.append(Source(uri=uri.strip(), title=title.strip()))
    return sources


def _strip_code_fence(text: str) -> str:
    match = _CODE_FENCE.match(text)
    return match.group(1).strip() if match else text


_STRATEGIES: dict[str, type[GeminiContentGenerator]] = {
    StructuredGeminiGenerator.name: StructuredGeminiGenerator,
    MarkdownGeminiGenerator.name: MarkdownGeminiGenerator,
}


def build_content_generator(settings: Settings, client: Any = None) -> GeminiContentGenerator:
    """Instantiate the strategy named by ``settings.generation_strategy``.

    Raises:
        ConfigurationError: no API key is configured and no client was given.
    """
    generator_cls = _STRATEGIES.get(settings.generation_strategy, StructuredGeminiGenerator)
    return generator_cls(
        api_key=settings.gemini_api_key,
        model=settings.gemini_model,
        temperature=settings.generation_temperature,
        top_p=settings.generation_top_p,
        client=client,
    )
