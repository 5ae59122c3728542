"""Templating utilities for the directory site pages.

Page layouts live as plain HTML files under ``templates/`` with ``{Name}``
placeholders. This module loads them and substitutes values from a context
mapping. It does not escape anything: callers pass already-escaped or
already-rendered HTML fragments.

Unknown placeholders are left untouched, so literal brace tokens in
templates (e.g. ``{z}/{x}/{y}`` in map tile URLs) survive rendering.

Examples
--------
>>> render_template("<h1>{Title}</h1>{z}", {"Title": "Hi"})
'<h1>Hi</h1>{z}'
"""

import re
from functools import lru_cache
from pathlib import Path

from src.config import TEMPLATES_DIR

_PLACEHOLDER_PATTERN = re.compile(r"\{([a-zA-Z0-9_/]+)\}")


def load_template(path: Path) -> str:
    r"""Read the contents of a template file as a string.

    Parameters
    ----------
    path : Path
        Path to the template file.

    Returns
    -------
    str
        Template content.

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    """
    with path.open("r", encoding="utf-8") as fh:
        return fh.read()


@lru_cache(maxsize=None)
def load_named_template(name: str) -> str:
    """Load ``templates/<name>`` once per process."""
    return load_template(TEMPLATES_DIR / name)


def extract_placeholders_from_template(content: str) -> list[str]:
    """Return a sorted list of unique placeholders found in the template."""
    return sorted(set(_PLACEHOLDER_PATTERN.findall(content)))


def render_template(template_content: str, context: dict[str, str]) -> str:
    """Render the template by replacing placeholders present in ``context``.

    Parameters
    ----------
    template_content : str
        The template text containing ``{Placeholders}``.
    context : dict[str, str]
        Mapping from placeholder names to their string values.

    Returns
    -------
    str
        The rendered template.
    """

    def replace_func(match: re.Match[str]) -> str:
        key = match.group(1)
        if key not in context:
            return match.group(0)
        return str(context[key])

    return _PLACEHOLDER_PATTERN.sub(replace_func, template_content)


def render_named_template(name: str, context: dict[str, str]) -> str:
    return render_template(load_named_template(name), context)
