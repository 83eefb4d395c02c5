from __future__ import annotations

import pytest

from ariacheck import (
    A11yWarning,
    CHECKS,
    CheckContext,
    Dynamic,
    EngineOptions,
    HeadingOrderOptions,
    ImageAltOptions,
    LinkTextOptions,
    NoninteractiveTabindexOptions,
    RedundantAltOptions,
    el,
)
from ariacheck.checks import check_names, event_handlers, is_focusable, is_valid_autocomplete, is_valid_lang, violation_impacts
from ariacheck.types import IMPACTS


def _run(name: str, root, options: EngineOptions | None = None):
    definition = next(d for d in CHECKS if d.name == name)
    return definition.func(root, CheckContext.for_roots(root, options))


def _ids(name: str, root, options: EngineOptions | None = None) -> list[str]:
    return [v.id for v in _run(name, root, options)]


def test_registry_is_ordered_and_complete() -> None:
    names = check_names()
    assert names[0] == "image-alt"
    assert names[-1] == "duplicate-id"
    assert len(names) == len(set(names))
    impacts = violation_impacts()
    assert set(impacts.values()) <= set(IMPACTS)
    for code in (
        "image-alt",
        "link-text-descriptive",
        "landmark-multiple-main",
        "dialog-missing-modal",
        "aria-invalid-role",
        "aria-missing-required-children",
        "aria-invalid-id-reference",
        "aria-unverified-id-reference",
        "form-required-missing-label",
        "click-events-have-key-events",
        "no-noninteractive-tabindex",
        "emoji-missing-role",
        "duplicate-id",
    ):
        assert code in impacts
    assert all(d.summary for d in CHECKS)


# image-alt


def test_image_alt_missing_empty_and_dynamic() -> None:
    assert _ids("image-alt", el("img", src="a.png")) == ["image-alt"]
    assert _ids("image-alt", el("img", src="a.png", alt="")) == ["image-alt"]
    assert _ids("image-alt", el("img", src="a.png", alt="   ")) == ["image-alt"]
    out = _run("image-alt", el("img", src="a.png", alt=Dynamic("caption")))
    assert [(v.id, v.impact) for v in out] == [("image-alt-dynamic", "minor")]
    assert _ids("image-alt", el("img", src="a.png", alt="Company logo")) == []


def test_image_alt_decorative_policy() -> None:
    hidden = el("img", src="line.png", aria_hidden="true")
    presentational = el("img", src="line.png", role="presentation")
    marked = el("img", src="line.png", data_decorative=True)

    assert _ids("image-alt", hidden) == ["image-alt"]

    lenient = EngineOptions(image_alt=ImageAltOptions(allow_missing_alt_on_decorative=True))
    assert _ids("image-alt", hidden, lenient) == []
    assert _ids("image-alt", presentational, lenient) == []
    assert _ids("image-alt", marked, lenient) == ["image-alt"]

    with_marker = EngineOptions(
        image_alt=ImageAltOptions(allow_missing_alt_on_decorative=True, marker_attributes=("data-decorative",))
    )
    assert _ids("image-alt", marked, with_marker) == []

    strict = EngineOptions(
        image_alt=ImageAltOptions(allow_missing_alt_on_decorative=True, require_aria_hidden=True)
    )
    assert _ids("image-alt", presentational, strict) == ["image-alt"]
    assert _ids("image-alt", hidden, strict) == []


def test_img_redundant_alt_matches_whole_words() -> None:
    out = _run("img-redundant-alt", el("img", src="t.jpg", alt="Photo of the team"))
    assert [v.id for v in out] == ["img-redundant-alt"]
    assert out[0].data == {"word": "photo"}
    assert _ids("img-redundant-alt", el("img", src="t.jpg", alt="Photographer at work")) == []
    assert _ids("img-redundant-alt", el("img", src="t.jpg", alt="Icon", aria_hidden="true")) == []

    custom = EngineOptions(redundant_alt=RedundantAltOptions(words=("banner",)))
    assert _ids("img-redundant-alt", el("img", src="t.jpg", alt="Photo"), custom) == []
    assert _ids("img-redundant-alt", el("img", src="t.jpg", alt="Sale banner"), custom) == ["img-redundant-alt"]


# buttons and forms


def test_button_label() -> None:
    assert _ids("button-label", el("button")) == ["button-label"]
    assert _ids("button-label", el("button", el("span", "x", aria_hidden="true"))) == ["button-label"]
    assert _ids("button-label", el("button", "Save")) == []
    assert _ids("button-label", el("button", title="Close")) == []
    assert _ids("button-label", el("button", Dynamic("label"))) == []
    assert _ids("button-label", el("input", type="submit")) == []
    assert _ids("button-label", el("input", type="button")) == ["button-label"]
    assert _ids("button-label", el("input", type="text")) == []

    labelled = el("div", el("span", "Delete item", id="del"), el("button", aria_labelledby="del"))
    assert _ids("button-label", labelled) == []


def test_form_label() -> None:
    assert _ids("form-label", el("input", type="text", name="q")) == ["form-label"]
    assert _ids("form-label", el("input", type="hidden", name="csrf")) == []
    assert _ids("form-label", el("input", type="submit")) == []
    assert _ids("form-label", el("select", el("option", "A"), aria_label="Choice")) == []
    assert _ids("form-label", el("textarea", title="Comments")) == []

    labelled = el("form", el("label", "Email", html_for="email"), el("input", id="email", type="email"))
    assert _ids("form-label", labelled) == []
    wrapped = el("label", "Subscribe", el("input", type="checkbox"))
    assert _ids("form-label", wrapped) == []


def test_required_control_needs_a_real_label() -> None:
    out = _run("form-validation", el("input", type="text", title="Email", required=True))
    assert [(v.id, v.impact) for v in out] == [("form-required-missing-label", "serious")]
    assert out[0].data == {"source": "title"}
    assert _ids("form-validation", el("textarea", title="Notes", aria_required="true")) == [
        "form-required-missing-label"
    ]

    labelled = el("form", el("label", "Email", html_for="email"), el("input", id="email", required=True))
    assert _ids("form-validation", labelled) == []
    assert _ids("form-validation", el("input", aria_label="Email", required=True)) == []
    assert _ids("form-validation", el("input", title="Email")) == []
    assert _ids("form-validation", el("input", type="submit", required=True)) == []
    # unnamed controls belong to form-label
    assert _ids("form-validation", el("input", required=True)) == []


# headings


def test_heading_order_skip_is_reported_once() -> None:
    h3 = el("h3", "Details")
    out = _run("heading-order", el("main", el("h1", "Title"), h3))
    assert [v.id for v in out] == ["heading-order"]
    assert out[0].element is h3
    assert out[0].data == {"previous": 1, "current": 3}


def test_heading_order_allows_steps_and_returns() -> None:
    page = el("main", el("h1", "a"), el("h2", "b"), el("h2", "c"), el("h3", "d"), el("h1", "e"))
    assert _ids("heading-order", page) == []


def test_heading_order_options() -> None:
    page = el("main", el("h1", "a"), el("h3", "b"))
    relaxed = EngineOptions(heading_order=HeadingOrderOptions(max_skip=2))
    assert _ids("heading-order", page, relaxed) == []

    repeats = el("main", el("h2", "a"), el("h2", "b"))
    strict = EngineOptions(heading_order=HeadingOrderOptions(allow_same_level=False))
    assert _ids("heading-order", repeats, strict) == ["heading-order"]

    with pytest.raises(ValueError):
        HeadingOrderOptions(max_skip=0)


def test_heading_order_counts_role_heading() -> None:
    page = el("div", el("h2", "a"), el("div", "b", role="heading", aria_level="4"))
    out = _run("heading-order", page)
    assert out[0].data == {"previous": 2, "current": 4}


def test_heading_has_content() -> None:
    assert _ids("heading-has-content", el("h2")) == ["heading-has-content"]
    assert _ids("heading-has-content", el("h2", "  ")) == ["heading-has-content"]
    assert _ids("heading-has-content", el("h2", Dynamic("title"))) == []
    assert _ids("heading-has-content", el("h2", aria_label="Summary")) == []


# links


def test_link_text_missing_and_generic() -> None:
    assert _ids("link-text", el("a", href="/")) == ["link-text"]
    out = _run("link-text", el("a", "Click here", href="/"))
    assert [(v.id, v.impact) for v in out] == [("link-text-descriptive", "moderate")]
    assert out[0].data == {"text": "Click here"}
    assert _ids("link-text", el("a", "Read more about pricing", href="/pricing")) == []
    assert _ids("link-text", el("a", Dynamic("label"), href="/")) == []
    assert _ids("link-text", el("a", el("img", src="home.png", alt="Home"), href="/")) == []


def test_link_text_flags_ambiguous_phrases() -> None:
    for text in ("Learn more", "here", "This page", "Go", "link"):
        assert _ids("link-text", el("a", text, href="/")) == ["link-text-descriptive"], text
    assert _ids("link-text", el("a", "Learn more about shipping", href="/shipping")) == []


def test_link_text_options() -> None:
    sensitive = EngineOptions(link_text=LinkTextOptions(case_insensitive=False))
    assert _ids("link-text", el("a", "More", href="/"), sensitive) == []
    assert _ids("link-text", el("a", "more", href="/"), sensitive) == ["link-text-descriptive"]

    allowed = EngineOptions(link_text=LinkTextOptions(allowlist_patterns=("^more$",)))
    assert _ids("link-text", el("a", "More", href="/"), allowed) == []

    words = EngineOptions(link_text=LinkTextOptions(words=("here",)))
    assert _ids("link-text", el("a", "Here", href="/"), words) == ["link-text-descriptive"]
    assert _ids("link-text", el("a", "Click here", href="/"), words) == []


def test_link_text_invalid_allowlist_pattern_warns() -> None:
    options = EngineOptions(link_text=LinkTextOptions(allowlist_patterns=("(",)))
    with pytest.warns(A11yWarning, match="allowlist"):
        ids = _ids("link-text", el("a", "click here", href="/"), options)
    assert ids == ["link-text-descriptive"]


# embedded content and grouping


def test_iframe_title() -> None:
    assert _ids("iframe-title", el("iframe", src="/x")) == ["iframe-title"]
    assert _ids("iframe-title", el("iframe", src="/x", title="  ")) == ["iframe-title"]
    assert _ids("iframe-title", el("iframe", src="/x", title=Dynamic("t"))) == ["iframe-title-dynamic"]
    assert _ids("iframe-title", el("iframe", src="/x", title="Map")) == []


def test_fieldset_legend() -> None:
    assert _ids("fieldset-legend", el("fieldset", el("input", type="radio"))) == ["fieldset-legend"]
    empty = el("legend")
    out = _run("fieldset-legend", el("fieldset", empty))
    assert [v.element for v in out] == [empty]
    assert _ids("fieldset-legend", el("fieldset", el("legend", "Shipping"))) == []
    nested = el("fieldset", el("div", el("legend", "Shipping")))
    assert _ids("fieldset-legend", nested) == ["fieldset-legend"]


def test_details_summary() -> None:
    assert _ids("details-summary", el("details", el("p", "Body"))) == ["details-summary"]
    assert _ids("details-summary", el("details", el("p", "Body"), el("summary", "More"))) == ["details-summary"]
    assert _ids("details-summary", el("details", el("summary"), el("p", "Body"))) == ["details-summary"]
    assert _ids("details-summary", el("details", el("summary", "Shipping"), el("p", "Body"))) == []


def test_table_structure() -> None:
    bare = el("table", el("tr", el("td", "1")))
    assert _ids("table-structure", bare) == ["table-caption", "table-headers"]

    good = el(
        "table",
        el("caption", "Prices"),
        el("thead", el("tr", el("th", "Item", scope="col"))),
        el("tbody", el("tr", el("td", "Tea"))),
    )
    assert _ids("table-structure", good) == []

    unscoped = el("table", el("tr", el("th", "Item")), aria_label="Prices")
    assert _ids("table-structure", unscoped) == ["table-header-scope"]

    layout = el("table", el("tr", el("td", "1")), role="presentation")
    assert _ids("table-structure", layout) == []


def test_media_captions() -> None:
    assert _ids("media-captions", el("video", src="a.mp4")) == ["video-captions"]
    assert _ids("media-captions", el("video", src="a.mp4", muted=True)) == []
    assert _ids("media-captions", el("audio", src="a.mp3")) == ["audio-captions"]

    captioned = el("video", el("track", kind="captions", srclang="en", label="English", src="a.vtt"))
    assert _ids("media-captions", captioned) == []

    incomplete = el("video", el("track", kind="captions", src="a.vtt"))
    assert _ids("media-captions", incomplete) == ["track-srclang", "track-label"]

    described = el("video", el("track", kind="descriptions", label="Audio description", src="d.vtt"))
    assert _ids("media-captions", described) == ["video-captions"]

    dynamic = el("video", el("track", kind=Dynamic("kind"), label="Track", src="a.vtt"))
    assert _ids("media-captions", dynamic) == []


# landmarks and dialogs


def test_multiple_main_flags_the_second() -> None:
    second = el("main", el("h1", "b"))
    out = _run("landmark-roles", el("div", el("main", el("h1", "a")), second))
    assert [v.id for v in out] == ["landmark-multiple-main"]
    assert out[0].element is second
    assert out[0].path == "/div[1]/main[2]"

    assert _ids("landmark-roles", el("div", el("main"), el("div", role="main"))) == ["landmark-multiple-main"]


def test_regions_need_a_name_or_heading() -> None:
    assert _ids("landmark-roles", el("section", el("p", "text"))) == ["landmark-unnamed-region"]
    assert _ids("landmark-roles", el("section", el("h2", "News"))) == []
    assert _ids("landmark-roles", el("section", el("p", "text"), aria_label="News")) == []
    assert _ids("landmark-roles", el("section", el("p", "text"), role="presentation")) == []


def test_repeated_nav_needs_names() -> None:
    unnamed = el("body", el("nav", "a"), el("nav", "b"), el("nav", "c"))
    assert _ids("landmark-roles", unnamed) == ["landmark-duplicate-unnamed", "landmark-duplicate-unnamed"]
    named = el("body", el("nav", "a", aria_label="Main"), el("nav", "b", aria_label="Footer"))
    assert _ids("landmark-roles", named) == []


def test_open_dialog_requires_aria_modal() -> None:
    dialog = el("dialog", el("h2", "Settings"), open=True)
    assert _ids("dialog-modal", dialog) == ["dialog-missing-modal"]

    modal = el("dialog", el("h2", "Settings"), open=True, aria_modal="true")
    assert _ids("dialog-modal", modal) == []

    bound = el("dialog", el("h2", "Settings"), open=True, aria_modal=Dynamic("isModal"))
    assert _ids("dialog-modal", bound) == []

    custom = el("div", el("h2", "Confirm"), role="alertdialog", aria_modal="false")
    assert _ids("dialog-modal", custom) == []

    shown = el("div", el("h2", "Confirm"), role="alertdialog", aria_modal="false", open=True)
    assert _ids("dialog-modal", shown) == ["dialog-missing-modal"]


def test_dialog_name_and_role() -> None:
    assert _ids("dialog-modal", el("dialog", el("p", "Saved"))) == ["dialog-missing-name"]
    assert _ids("dialog-modal", el("dialog", el("p", "Saved"), aria_label="Status")) == []
    out = _run("dialog-modal", el("dialog", "x", aria_label="Status", role="region"))
    assert [v.id for v in out] == ["dialog-invalid-role"]
    assert out[0].data == {"role": "region"}


# language


def test_lang() -> None:
    assert _ids("lang", el("html", el("body"))) == ["html-has-lang"]
    assert _ids("lang", el("html", el("body"), lang=" ")) == ["html-has-lang"]
    assert _ids("lang", el("html", el("body"), lang="en-US")) == []
    assert _ids("lang", el("html", el("body"), lang=Dynamic("locale"))) == []
    assert _ids("lang", el("html", el("p", "Hola", lang="xx"), lang="en")) == ["lang-valid"]
    assert _ids("lang", el("div", "no html element")) == []


@pytest.mark.parametrize("value", ["en", "en-GB", "EN-us", "zh-Hant-TW", "es-419", "und"])
def test_valid_lang_values(value: str) -> None:
    assert is_valid_lang(value)


@pytest.mark.parametrize("value", ["", "english", "xx", "en_US", "en-", "e"])
def test_invalid_lang_values(value: str) -> None:
    assert not is_valid_lang(value)


# keyboard and focus


def test_distracting_elements() -> None:
    assert _ids("no-distracting-elements", el("div", el("marquee", "Sale"), el("blink", "!"))) == [
        "no-distracting-elements",
        "no-distracting-elements",
    ]


def test_tabindex_no_positive() -> None:
    out = _run("tabindex-no-positive", el("div", "x", tabindex="3"))
    assert [v.id for v in out] == ["tabindex-no-positive"]
    assert out[0].data == {"value": 3}
    assert _ids("tabindex-no-positive", el("div", "x", tabindex="0")) == []
    assert _ids("tabindex-no-positive", el("div", "x", tabindex="-1")) == []
    assert _ids("tabindex-no-positive", el("div", "x", tabindex=Dynamic("i"))) == []


def test_access_key_and_autofocus() -> None:
    assert _ids("no-access-key", el("button", "Save", accesskey="s")) == ["no-access-key"]
    assert _ids("no-autofocus", el("input", type="text", autofocus=True)) == ["no-autofocus"]
    assert _ids("no-autofocus", el("input", type="text")) == []


def test_focusability() -> None:
    assert is_focusable(el("button"))
    assert not is_focusable(el("button", disabled=True))
    assert is_focusable(el("a", href="/"))
    assert not is_focusable(el("a"))
    assert not is_focusable(el("input", type="hidden"))
    assert is_focusable(el("div", tabindex="0"))
    assert not is_focusable(el("div", tabindex="-1"))
    assert not is_focusable(el("button", tabindex="-1"))
    assert is_focusable(el("button", tabindex=Dynamic("i")))
    assert not is_focusable(el("summary"))
    details = el("details", el("summary", "More"))
    assert is_focusable(details.element_children[0])


def test_aria_hidden_on_focusable() -> None:
    assert _ids("no-aria-hidden-on-focusable", el("button", "x", aria_hidden="true")) == [
        "no-aria-hidden-on-focusable"
    ]
    assert _ids("no-aria-hidden-on-focusable", el("div", "x", aria_hidden="true", tabindex="0")) == [
        "no-aria-hidden-on-focusable"
    ]
    assert _ids("no-aria-hidden-on-focusable", el("div", "x", aria_hidden="true", tabindex="-1")) == []
    assert _ids("no-aria-hidden-on-focusable", el("a", "x", aria_hidden="true")) == []
    assert _ids("no-aria-hidden-on-focusable", el("button", "x", aria_hidden="false")) == []


def test_role_presentation_on_focusable() -> None:
    out = _run("no-role-presentation-on-focusable", el("button", "x", role="none"))
    assert [v.id for v in out] == ["no-role-presentation-on-focusable"]
    assert out[0].data == {"role": "none"}
    assert _ids("no-role-presentation-on-focusable", el("img", src="a.png", alt="", role="presentation")) == []


def test_activedescendant_needs_focus() -> None:
    assert _ids("aria-activedescendant-has-tabindex", el("div", aria_activedescendant="opt1")) == [
        "aria-activedescendant-has-tabindex"
    ]
    assert _ids("aria-activedescendant-has-tabindex", el("div", aria_activedescendant="opt1", tabindex="0")) == []
    assert _ids("aria-activedescendant-has-tabindex", el("input", type="text", aria_activedescendant="o")) == []


# autocomplete and native semantics


@pytest.mark.parametrize(
    "value",
    ["on", "off", "email", "shipping street-address", "section-blue billing postal-code", "work tel"],
)
def test_valid_autocomplete(value: str) -> None:
    assert is_valid_autocomplete(value)


@pytest.mark.parametrize("value", ["", "emial", "on off", "billing", "email shipping", "home fax tel"])
def test_invalid_autocomplete(value: str) -> None:
    assert not is_valid_autocomplete(value)


def test_autocomplete_check() -> None:
    assert _ids("autocomplete-valid", el("input", type="email", autocomplete="email")) == []
    assert _ids("autocomplete-valid", el("input", type="email", autocomplete="emial")) == ["autocomplete-valid"]
    assert _ids("autocomplete-valid", el("input", type="checkbox", autocomplete="email")) == ["autocomplete-valid"]
    assert _ids("autocomplete-valid", el("input", type="text", autocomplete=Dynamic("ac"))) == []
    assert _ids("autocomplete-valid", el("form", autocomplete="nonsense")) == []


def test_prefer_native() -> None:
    out = _run("semantic-prefer-native", el("div", "Save", role="button", tabindex="0"))
    assert [v.id for v in out] == ["semantic-prefer-native"]
    assert out[0].data == {"role": "button", "native": "button"}
    assert _ids("semantic-prefer-native", el("span", "Tab", role="tab")) == []
    assert _ids("semantic-prefer-native", el("button", "Save", role="button")) == []


# keyboard and pointer interactions


def test_event_handlers_cover_html_and_template_syntax() -> None:
    node = el("div", onclick="go()", **{"@keydown.enter": "go()", "v-on:mouseover": "hint()"})
    assert event_handlers(node) == frozenset({"click", "keydown", "mouseover"})
    assert event_handlers(el("div", title="x")) == frozenset()


def test_click_events_need_key_events() -> None:
    out = _run("click-events-have-key-events", el("div", "Open", onclick="open()"))
    assert [(v.id, v.impact) for v in out] == [("click-events-have-key-events", "serious")]
    assert _ids("click-events-have-key-events", el("div", "Open", onclick="open()", onkeydown="key()")) == []
    assert _ids("click-events-have-key-events", el("button", "Open", onclick="open()")) == []
    assert _ids("click-events-have-key-events", el("span", "x", **{"@click": "open()"})) == [
        "click-events-have-key-events"
    ]
    assert _ids("click-events-have-key-events", el("div", "x", onclick="f()", aria_hidden="true")) == []


def test_mouse_events_need_focus_and_blur() -> None:
    out = _run("mouse-events-have-key-events", el("div", "Tip", onmouseover="show()", onmouseout="hide()"))
    assert [v.data for v in out] == [
        {"event": "mouseover", "requires": "focus"},
        {"event": "mouseout", "requires": "blur"},
    ]
    paired = el("div", "Tip", onmouseover="show()", onfocus="show()", onmouseout="hide()", onblur="hide()")
    assert _ids("mouse-events-have-key-events", paired) == []


def test_interactive_roles_must_be_focusable() -> None:
    out = _run("interactive-supports-focus", el("div", "Save", role="button"))
    assert [v.id for v in out] == ["interactive-supports-focus"]
    assert out[0].data == {"role": "button"}
    assert _ids("interactive-supports-focus", el("div", "Save", role="button", tabindex="0")) == []
    assert _ids("interactive-supports-focus", el("span", "On", role="switch", tabindex="-1")) == [
        "interactive-supports-focus"
    ]
    assert _ids("interactive-supports-focus", el("a", "Home", role="link")) == []
    assert _ids("interactive-supports-focus", el("div", role="button", tabindex=Dynamic("i"))) == []
    assert _ids("interactive-supports-focus", el("div", "Main", role="region")) == []


def test_static_elements_without_role_have_no_handlers() -> None:
    out = _run("no-static-element-interactions", el("div", "x", onclick="f()", onkeyup="g()"))
    assert [v.id for v in out] == ["no-static-element-interactions"]
    assert out[0].data == {"tag": "div", "events": ["click", "keyup"]}
    assert _ids("no-static-element-interactions", el("div", "x", role="button", onclick="f()")) == []
    assert _ids("no-static-element-interactions", el("div", "x", onscroll="f()")) == []
    assert _ids("no-static-element-interactions", el("h2", "x", onclick="f()")) == []


def test_noninteractive_elements_have_no_handlers() -> None:
    out = _run("no-noninteractive-element-interactions", el("img", src="a.png", alt="Map", onclick="zoom()"))
    assert [v.id for v in out] == ["no-noninteractive-element-interactions"]
    assert out[0].data == {"tag": "img", "events": ["click"]}
    assert _ids("no-noninteractive-element-interactions", el("h2", "Title", onmouseenter="f()")) == [
        "no-noninteractive-element-interactions"
    ]
    assert _ids("no-noninteractive-element-interactions", el("img", src="a.png", alt="", onload="f()")) == []
    assert _ids("no-noninteractive-element-interactions", el("div", "x", onclick="f()")) == []


def test_noninteractive_tabindex() -> None:
    out = _run("no-noninteractive-tabindex", el("p", "Note", tabindex="0"))
    assert [(v.id, v.impact) for v in out] == [("no-noninteractive-tabindex", "moderate")]
    assert out[0].data == {"tag": "p", "value": 0}
    assert _ids("no-noninteractive-tabindex", el("div", "x", tabindex="-1")) == []
    assert _ids("no-noninteractive-tabindex", el("div", "x", role="tab", tabindex="0")) == []
    assert _ids("no-noninteractive-tabindex", el("button", "x", tabindex="0")) == []

    region = el("section", el("h2", "Log"), role="region", tabindex="0")
    assert _ids("no-noninteractive-tabindex", region) == ["no-noninteractive-tabindex"]
    allowed = EngineOptions(noninteractive_tabindex=NoninteractiveTabindexOptions(roles=("region",)))
    assert _ids("no-noninteractive-tabindex", region, allowed) == []
    by_tag = EngineOptions(noninteractive_tabindex=NoninteractiveTabindexOptions(tags=("pre",)))
    assert _ids("no-noninteractive-tabindex", el("pre", "code", tabindex="0"), by_tag) == []


def test_emoji_needs_role_and_label() -> None:
    out = _run("accessible-emoji", el("span", "\U0001F389"))
    assert [(v.id, v.impact) for v in out] == [("emoji-missing-role", "minor"), ("emoji-missing-label", "minor")]
    assert _ids("accessible-emoji", el("span", "\u2615", role="img")) == ["emoji-missing-label"]
    assert _ids("accessible-emoji", el("span", "\U0001F389", role="img", aria_label="Party")) == []
    assert _ids("accessible-emoji", el("span", "\U0001F389", aria_hidden="true")) == []
    assert _ids("accessible-emoji", el("span", "Thanks!")) == []
    assert _ids("accessible-emoji", el("p", "\U0001F389")) == []


# aria and ids


def test_aria_validation_check_walks_every_element() -> None:
    page = el(
        "div",
        el("div", role="buton"),
        el("span", "x", aria_foo="1"),
        el("p", "y", aria_describedby="nowhere"),
    )
    assert _ids("aria-validation", page) == [
        "aria-invalid-role",
        "aria-invalid-property",
        "aria-invalid-id-reference",
    ]


def test_duplicate_id_check() -> None:
    page = el("div", el("span", id="x"), el("span", id="x"))
    assert _ids("duplicate-id", page) == ["duplicate-id"]
