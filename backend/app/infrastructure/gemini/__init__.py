"""Gemini infrastructure module — content generation strategies."""

from .gemini_generator import (
    GeminiContentGenerator,
    MarkdownGeminiGenerator,
    StructuredGeminiGenerator,
    build_content_generator,
)

__all__ = [
    "GeminiContentGenerator",
    "MarkdownGeminiGenerator",
    "StructuredGeminiGenerator",
    "build_content_generator",
]
