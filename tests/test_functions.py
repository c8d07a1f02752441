from __future__ import annotations

from datetime import date

import pytest
from markupsafe import Markup

from temingo.rendering.functions import (
    add_percentage,
    capitalize,
    format_date,
    normalize_url,
    now,
    safe_css,
    safe_html,
    urlize,
)


def test_add_percentage_sums_integers():
    assert add_percentage("10%", "5%") == "15%"
    assert add_percentage("-20%", "5%") == "-15%"


@pytest.mark.parametrize(("a", "b"), [("x%", "5%"), ("10", "5%"), ("1.5%", "5%")])
def test_add_percentage_rejects_non_percentages(a, b):
    with pytest.raises(ValueError, match="not an integer percentage"):
        add_percentage(a, b)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("Hello World", "hello_world"),
        ("My Post", "my_post"),
        ("Caf%c3%a9 Menu", "caf%c3%a9_menu"),
        ("%7Euser", "~user"),
        ("HTTP://Example.COM:80/A Page", "http://example.com/a_page"),
    ],
)
def test_urlize(raw, expected):
    assert urlize(raw) == expected


def test_normalize_url_keeps_non_default_port_and_uppercases_escapes():
    assert normalize_url("https://Example.com:8443/%7efoo/%c3%a9") == (
        "https://example.com:8443/~foo/%C3%A9"
    )


def test_capitalize_only_touches_word_starts():
    assert capitalize("hello wide WORLD") == "Hello Wide WORLD"
    assert capitalize("") == ""


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("foo-bar (baz)", "Foo-Bar (Baz)"),
        ("my-first-post", "My-First-Post"),
        ("snake_case stays", "Snake_case Stays"),
        ("2nd edition", "2nd Edition"),
    ],
)
def test_capitalize_splits_words_on_punctuation(raw, expected):
    assert capitalize(raw) == expected


def test_format_date_accepts_dates_and_iso_strings():
    assert format_date("%Y-%m-%d", date(2024, 1, 5)) == "2024-01-05"
    assert format_date("%d.%m.%Y %H:%M", "2024-01-05T09:30:00") == "05.01.2024 09:30"
    assert format_date("%Y", None) == str(now().year)


def test_format_date_rejects_non_dates():
    with pytest.raises(ValueError):
        format_date("%Y", 2024)
    with pytest.raises(ValueError):
        format_date("%Y", "yesterday")


def test_safe_helpers_return_markup():
    assert isinstance(safe_html("<b>x</b>"), Markup)
    assert safe_css("color: red") == Markup("color: red")
