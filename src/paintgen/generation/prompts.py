"""Prompt templates for the three artifact kinds."""

from __future__ import annotations

from jinja2 import StrictUndefined
from jinja2.sandbox import SandboxedEnvironment

_jinja_env = SandboxedEnvironment(
    autoescape=False,
    keep_trailing_newline=False,
    undefined=StrictUndefined,
    trim_blocks=True,
    lstrip_blocks=True,
)

POSTER_CONTEXT_LIMIT = 3
POSTER_CONTEXT_CHARS = 200

POSTER_SECTION = "POSTER LAYOUT:"
DESCRIPTION_SECTION = "EXHIBITION DESCRIPTION:"

EXHIBITION_SYSTEM_PROMPT = (
    "You are an art expert and exhibition curator. Your task is to create "
    "creative, memorable titles for art exhibitions."
)

POSTER_SYSTEM_PROMPT = (
    "You are a professional poster designer and art exhibition curator. Your task "
    "is to create creative, attractive poster layouts with exhibition descriptions."
)

_DESCRIPTION_TEMPLATE = """\
Analyze this painting and write a detailed description in {{ language }}. Include:
- Style and technique
- Subject and composition
- Color palette and use of color
- Artistic features and details
- Overall impression and emotional impact

Describe the painting in detail, but keep it structured."""

_EXHIBITION_TEMPLATE = """\
Based on the following painting descriptions, suggest 3 title options for an art exhibition:

{% for desc in descriptions %}
Painting {{ loop.index }}:
{{ desc }}
{% if not loop.last %}

---

{% endif %}
{% endfor %}

Title requirements:
- Each title must be short (2-5 words) and memorable
- Titles must reflect the overall theme and style of the exhibition
- Titles must suit an art exhibition
- Titles must be in {{ language }}

Return ONLY 3 title options, each on its own line, in the format:
1. [title]
2. [title]
3. [title]

Do not add any comments or explanations."""

_POSTER_TEMPLATE = """\
Create a poster layout for an art exhibition titled: "{{ title }}"
{% if context %}

Exhibition context (descriptions of some paintings):
{% for desc in context %}
Painting {{ loop.index }}: {{ desc }}...
{% endfor %}
{% endif %}

Your task:
1. Write a detailed visual description of the poster layout (design, composition, color scheme, placement of elements)
2. Write a short exhibition description (2-3 sentences) for the poster
Answer in {{ language }}, but keep the section headers exactly as shown.

Response format (follow strictly):
{{ poster_section }}
[detailed poster layout description]

{{ description_section }}
[short exhibition description, 2-3 sentences]"""


def description_prompt(language: str = "English") -> str:
    return _render(_DESCRIPTION_TEMPLATE, language=language)


def exhibition_prompt(descriptions: list[str], language: str = "English") -> str:
    return _render(_EXHIBITION_TEMPLATE, descriptions=descriptions, language=language)


def poster_prompt(
    title: str,
    descriptions: list[str] | None = None,
    language: str = "English",
) -> str:
    """Only the first few descriptions, truncated, are used as context."""
    context = [d[:POSTER_CONTEXT_CHARS] for d in (descriptions or [])[:POSTER_CONTEXT_LIMIT]]
    return _render(
        _POSTER_TEMPLATE,
        title=title,
        context=context,
        language=language,
        poster_section=POSTER_SECTION,
        description_section=DESCRIPTION_SECTION,
    )


def _render(template_str: str, **context: object) -> str:
    template = _jinja_env.from_string(template_str)
    return template.render(**context)
