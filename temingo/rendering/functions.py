"""Stateless helpers exposed to templates.

Helpers that need the compiled template set (``include``, ``list``) live
on :class:`temingo.rendering.engine.Renderer`.
"""

from __future__ import annotations

import logging
import re
from datetime import date, datetime
from urllib.parse import quote, unquote, urlsplit, urlunsplit

from markupsafe import Markup

logger = logging.getLogger(__name__)

_PERCENTAGE = re.compile(r"^(-?\d+)%$")
_WORD_START = re.compile(r"(?<!\w)\w")

_DEFAULT_PORTS = {"http": "80", "https": "443", "ftp": "21"}
_PATH_SAFE = "/:@!$&'()*+,;=-._~"
_QUERY_SAFE = _PATH_SAFE + "?"


def safe_html(value: str) -> Markup:
    """Mark ``value`` as HTML that must not be escaped again."""
    return Markup(value)


def safe_css(value: str) -> Markup:
    """Mark ``value`` as a style fragment that must not be escaped again."""
    return Markup(value)


def add_percentage(a: str, b: str) -> str:
    """Add two percentages given as strings, e.g. ``"10%" + "5%" -> "15%"``.

    Raises:
        ValueError: If either operand is not an integer followed by ``%``
    """
    total = 0
    for operand in (a, b):
        match = _PERCENTAGE.match(str(operand).strip())
        if not match:
            raise ValueError(f"addPercentage: {operand!r} is not an integer percentage")
        total += int(match.group(1))
    return f"{total}%"


def _normalize_netloc(scheme: str, netloc: str) -> str:
    userinfo, at, hostport = netloc.rpartition("@")
    host, sep, port = hostport, "", ""
    if ":" in hostport and not hostport.endswith("]"):
        host, sep, port = hostport.rpartition(":")
    if not port or port == _DEFAULT_PORTS.get(scheme):
        sep, port = "", ""
    return userinfo + at + host.lower() + sep + port


def normalize_url(value: str) -> str:
    """Apply the safe RFC 3986 normalisations to ``value``.

    Lowercases scheme and host, drops default and empty ports, decodes
    percent-escapes of unreserved characters and upper-cases the rest.
    """
    parts = urlsplit(value)
    scheme = parts.scheme.lower()
    netloc = _normalize_netloc(scheme, parts.netloc) if parts.netloc else ""
    path = quote(unquote(parts.path), safe=_PATH_SAFE)
    query = quote(unquote(parts.query), safe=_QUERY_SAFE)
    fragment = quote(unquote(parts.fragment), safe=_QUERY_SAFE)
    return urlunsplit((scheme, netloc, path, query, fragment))


def urlize(value: str) -> str:
    """Turn free text into a lowercase URL slug."""
    result = normalize_url(value.replace(" ", "_")).lower()
    logger.debug(f"Urlized '{value}' to '{result}'.")
    return result


def capitalize(value: str) -> str:
    """Upper-case the first letter of every word, leaving the rest untouched.

    Any character other than a letter, digit or underscore separates words,
    so ``"foo-bar (baz)"`` becomes ``"Foo-Bar (Baz)"``.
    """
    result = _WORD_START.sub(lambda m: m.group(0).upper(), value)
    logger.debug(f"Capitalized '{value}' to '{result}'.")
    return result


def now() -> datetime:
    """Current local time, timezone-aware."""
    return datetime.now().astimezone()


def format_date(layout: str, value: date | str | None = None) -> str:
    """Format ``value`` with a ``strftime`` layout, e.g. ``date("%Y-%m-%d", published)``.

    ``value`` defaults to now. Strings are parsed as ISO 8601; YAML dates
    already arrive as ``date`` objects.

    Raises:
        ValueError: If ``value`` is neither a date nor an ISO 8601 string
    """
    if value is None:
        value = now()
    elif isinstance(value, str):
        value = datetime.fromisoformat(value)
    elif not isinstance(value, date):
        raise ValueError(f"date: {value!r} is not a date")
    return value.strftime(layout)


FUNCTIONS = {
    "safeHTML": safe_html,
    "safeCSS": safe_css,
    "addPercentage": add_percentage,
    "urlize": urlize,
    "capitalize": capitalize,
    "now": now,
    "date": format_date,
}
