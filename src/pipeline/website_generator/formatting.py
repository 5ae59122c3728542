"""Display formatting helpers for directory pages.

Small, pure functions turning raw record values (phone numbers, opening
hours, ratings, service lists, free-text descriptions) into display strings
or HTML fragments. Every helper accepts empty input and returns a sensible
placeholder instead of raising.
"""

import html
import math
import re

import markdown2

from src.config import FALLBACK_DESCRIPTION_TEXT, PROVIDER_EXCERPT_LENGTH

DAY_NAMES: dict[str, str] = {
    "Mo": "Monday",
    "Tu": "Tuesday",
    "We": "Wednesday",
    "Th": "Thursday",
    "Fr": "Friday",
    "Sa": "Saturday",
    "Su": "Sunday",
}

_HOURS_ENTRY_PATTERN = re.compile(r"^([A-Za-z-]+)\s+(\d.+)$")


def format_phone_number(phone: str | None) -> str:
    """Format a ten-digit US number as ``(XXX) XXX-XXXX``.

    Anything else is returned unchanged.

    >>> format_phone_number("555.123.4567")
    '(555) 123-4567'
    >>> format_phone_number("+44 20 7946 0958")
    '+44 20 7946 0958'
    """
    if not phone:
        return ""
    digits = re.sub(r"\D", "", phone)
    if len(digits) == 10:
        return f"({digits[0:3]}) {digits[3:6]}-{digits[6:10]}"
    return phone


def format_opening_hours(hours: str | None) -> str:
    r"""Render opening hours as an HTML table.

    Hours in the quoted list form ``"Mo 09:00-17:00","Tu 09:00-17:00"``
    become one table row per entry, with two-letter day codes expanded.
    Entries that do not look like ``<day> <hours>`` span both columns.
    Any other non-empty string is returned escaped as-is.

    >>> format_opening_hours("")
    'Hours not provided'
    >>> format_opening_hours('"Mo 9-5","Closed Sunday"')
    '<table class="hours-table"><tr><td class="day">Monday</td><td>9-5</td></tr><tr><td colspan="2">Closed Sunday</td></tr></table>'
    """
    if not hours:
        return "Hours not provided"
    if '"' not in hours:
        return html.escape(hours)
    rows: list[str] = []
    for entry in hours.split('","'):
        entry = entry.replace('"', "").strip()
        if not entry:
            continue
        match = _HOURS_ENTRY_PATTERN.match(entry)
        if match:
            day, span = match.groups()
            day_label = DAY_NAMES.get(day, day)
            rows.append(
                f'<tr><td class="day">{html.escape(day_label)}</td>'
                f"<td>{html.escape(span)}</td></tr>"
            )
        else:
            rows.append(f'<tr><td colspan="2">{html.escape(entry)}</td></tr>')
    return f'<table class="hours-table">{"".join(rows)}</table>'


def render_star_rating(rating: str | None) -> str:
    """Render a 0-5 rating as five Font Awesome star icons.

    >>> render_star_rating("3.5").count("fa-star-half-alt")
    1
    >>> render_star_rating("abc")
    'Rating not available'
    """
    if not rating:
        return "No ratings yet"
    try:
        value = float(rating)
    except ValueError:
        return "Rating not available"
    if value != value:
        return "Rating not available"
    stars: list[str] = []
    for position in range(1, 6):
        if position <= value:
            stars.append('<i class="fas fa-star"></i>')
        elif position - 0.5 <= value:
            stars.append('<i class="fas fa-star-half-alt"></i>')
        else:
            stars.append('<i class="far fa-star"></i>')
    return "".join(stars)


def format_services(services: str | None) -> str:
    """Render a service list as ``<li>`` items, or a paragraph for plain text.

    Commas take precedence over line breaks as the separator.

    >>> format_services("Electrolysis, Consultation")
    '<li>Electrolysis</li><li>Consultation</li>'
    >>> format_services("Walk-ins welcome")
    '<p>Walk-ins welcome</p>'
    """
    if not services:
        return ""
    for separator in (",", "\n"):
        if separator in services:
            items = [item.strip() for item in services.split(separator)]
            return "".join(f"<li>{html.escape(item)}</li>" for item in items if item)
    return f"<p>{html.escape(services)}</p>"


def display_website(url: str | None) -> str:
    """Strip the scheme and a leading ``www.`` for display.

    >>> display_website("https://www.example.com/about")
    'example.com/about'
    """
    if not url:
        return ""
    return re.sub(r"^https?://(www\.)?", "", url)


def has_coordinates(latitude: str | None, longitude: str | None) -> bool:
    """Return True when both coordinates parse as finite floats."""
    try:
        lat = float(latitude or "")
        lng = float(longitude or "")
    except ValueError:
        return False
    return math.isfinite(lat) and math.isfinite(lng)


def truncate_text(text: str | None, limit: int = PROVIDER_EXCERPT_LENGTH) -> str:
    """Shorten ``text`` to ``limit`` characters, adding ``...`` when cut.

    Empty text yields the fallback provider description.
    """
    if not text:
        return FALLBACK_DESCRIPTION_TEXT
    if len(text) <= limit:
        return text
    return text[:limit] + "..."


def clean_html_output(html_content: str) -> str:
    r"""Remove empty paragraphs, repeated breaks and inter-tag whitespace.

    Raises
    ------
    TypeError
        If input is not str.

    Examples
    --------
    >>> clean_html_output("<p></p><h1>Hi</h1><p>&nbsp;</p><br><br>")
    '<h1>Hi</h1><br>'
    """
    if not isinstance(html_content, str):
        raise TypeError("Input must be a string.")
    html_content = re.sub(r"<p>\s*</p>", "", html_content)
    html_content = re.sub(r"<p>&nbsp;</p>", "", html_content)
    html_content = re.sub(r"<p><br\s*/?>\s*</p>", "", html_content)
    html_content = re.sub(r"(<br\s*/?>\s*){2,}", "<br>", html_content)
    html_content = re.sub(r"\n\s*\n\s*\n+", "\n\n", html_content)
    html_content = re.sub(r">\s+<", "><", html_content)
    return html_content.strip()


def render_description_html(description: str | None) -> str:
    """Convert a free-text (Markdown) description to cleaned HTML.

    Raw HTML in the source is escaped. Empty descriptions render the
    fallback text as a paragraph.
    """
    if not description or not description.strip():
        return f"<p>{html.escape(FALLBACK_DESCRIPTION_TEXT)}</p>"
    description_html = markdown2.markdown(description, safe_mode="escape")
    return clean_html_output(str(description_html))
