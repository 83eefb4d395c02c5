from __future__ import annotations

from ariacheck import Dynamic, accessible_name, el
from ariacheck.names import NO_NAME, text_content


def test_labelledby_wins_over_label_and_content() -> None:
    button = el("button", "Content", aria_label="Label", aria_labelledby="a b")
    root = el("div", el("span", "First", id="a"), el("span", " Second ", id="b"), button)
    name = accessible_name(button)
    assert name.text == "First Second"
    assert name.source == "aria-labelledby"
    assert name.present


def test_aria_label_then_content_then_title() -> None:
    assert accessible_name(el("button", "Save", aria_label=" Store ")).text == "Store"
    assert accessible_name(el("button", "  Save   now ")).text == "Save now"
    titled = accessible_name(el("button", title="Close"))
    assert (titled.text, titled.source) == ("Close", "title")
    assert accessible_name(el("button")) == NO_NAME
    assert not NO_NAME.present


def test_blank_aria_label_falls_through() -> None:
    name = accessible_name(el("button", "Go", aria_label="   "))
    assert (name.text, name.source) == ("Go", "text")


def test_label_for_and_wrapping_label() -> None:
    field_input = el("input", id="email", type="email")
    el("form", el("label", "Email", html_for="email"), field_input)
    name = accessible_name(field_input)
    assert (name.text, name.source) == ("Email", "label")

    wrapped = el("input", type="checkbox")
    el("label", wrapped, " Remember me")
    assert accessible_name(wrapped).text == "Remember me"


def test_content_skips_hidden_and_uses_image_alt() -> None:
    link = el(
        "a",
        el("img", src="home.png", alt="Home"),
        el("span", "decoration", aria_hidden="true"),
        el("script", "var x = 1"),
        href="/",
    )
    assert accessible_name(link).text == "Home"


def test_input_button_values_and_defaults() -> None:
    assert accessible_name(el("input", type="submit")).text == "Submit"
    assert accessible_name(el("input", type="reset")).text == "Reset"
    assert accessible_name(el("input", type="submit", value="Send")).text == "Send"
    assert not accessible_name(el("input", type="button")).present
    assert accessible_name(el("input", type="image", alt="Search")).text == "Search"
    assert not accessible_name(el("input", type="text")).present


def test_dynamic_values_are_reported_as_dynamic() -> None:
    name = accessible_name(el("button", aria_label=Dynamic("label")))
    assert name.dynamic and name.present

    name = accessible_name(el("button", Dynamic("title")))
    assert name.dynamic
    assert name.source == "text"


def test_from_content_false_ignores_text() -> None:
    nav = el("nav", el("a", "Home", href="/"))
    assert not accessible_name(nav, from_content=False).present
    assert accessible_name(el("nav", aria_label="Main"), from_content=False).text == "Main"


def test_text_content_reports_dynamic_parts() -> None:
    text, dynamic = text_content(el("p", "Hello ", Dynamic("user.name"), "!"))
    assert text == "Hello !"
    assert dynamic is True
