"""Generation service client, prompts and response parsing."""

from paintgen.generation.client import GenerationClient, create_image_message, text_message
from paintgen.generation.parser import parse_exhibition_options, parse_poster

__all__ = [
    "GenerationClient",
    "create_image_message",
    "text_message",
    "parse_exhibition_options",
    "parse_poster",
]
