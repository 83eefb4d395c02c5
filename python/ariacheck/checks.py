from __future__ import annotations

import re
import warnings
from dataclasses import dataclass, field
from typing import Any, Callable, Iterator

from .aria_validation import PRESENTATIONAL_ROLES, first_role_token, input_type_of, validate_element_aria
from .idrefs import IdRegistry, build_registry, check_duplicate_ids
from .names import accessible_name, is_hidden, text_content
from .options import EngineOptions, ImageAltOptions
from .tree import Dynamic, Element, coerce_roots, element_path, iter_elements
from .types import A11yWarning, Violation


HEADING_TAGS = ("h1", "h2", "h3", "h4", "h5", "h6")
FORM_CONTROL_TAGS = frozenset({"input", "select", "textarea"})
UNLABELED_INPUT_TYPES = frozenset({"hidden", "submit", "button", "reset", "image"})
INPUT_BUTTON_TYPES = frozenset({"button", "submit", "reset"})
DISTRACTING_TAGS = frozenset({"blink", "marquee"})
CAPTION_TRACK_KINDS = frozenset({"captions", "subtitles"})
LABEL_SOURCES = frozenset({"aria-labelledby", "aria-label", "label"})
NATIVELY_FOCUSABLE_TAGS = frozenset({"a", "area", "button", "input", "select", "textarea", "summary"})
NATIVE_INTERACTIVE_TAGS = frozenset({"a", "button", "input", "select", "textarea", "summary"})
STATIC_TAGS = frozenset(
    {
        "div", "span", "section", "article", "aside", "footer", "header", "nav", "main", "p",
        "ul", "ol", "li", "dl", "dt", "dd", "table", "thead", "tbody", "tfoot", "tr", "th", "td",
        "caption", "figure", "figcaption", "blockquote", "pre", "code", "em", "strong", "small",
        "mark", "sub", "sup", "address", "time", "abbr",
    }
)
NONINTERACTIVE_TAGS = STATIC_TAGS | frozenset(HEADING_TAGS) | frozenset({"img", "hr", "br"})
INTERACTIVE_ROLES = frozenset(
    {
        "button", "checkbox", "combobox", "gridcell", "link", "listbox", "menu", "menubar",
        "menuitem", "menuitemcheckbox", "menuitemradio", "option", "progressbar", "radio",
        "scrollbar", "searchbox", "slider", "spinbutton", "switch", "tab", "tabpanel",
        "textbox", "tree", "treeitem",
    }
)

# Handler attributes are onclick, @click or v-on:click; modifiers after "." are ignored.
EVENT_PREFIXES = ("v-on:", "@", "on")
CLICK_EVENTS = frozenset({"click"})
KEYBOARD_EVENTS = frozenset({"keydown", "keyup", "keypress"})
MOUSE_EVENTS = frozenset({"mousedown", "mouseup", "mouseover", "mouseout", "mouseenter", "mouseleave"})
FOCUS_EVENTS = frozenset({"focus", "blur"})
INTERACTION_EVENTS = CLICK_EVENTS | KEYBOARD_EVENTS | MOUSE_EVENTS | FOCUS_EVENTS
MOUSE_KEY_PAIRS = (("mouseover", "focus"), ("mouseout", "blur"))

EMOJI_PATTERN = re.compile(
    "[\U0001F300-\U0001F9FF\u2600-\u26FF\u2700-\u27BF\U0001F000-\U0001F02F"
    "\U0001F0A0-\U0001F0FF\U0001F100-\U0001F64F\U0001F680-\U0001F6FF]"
)

PREFER_NATIVE = {
    "button": "button",
    "link": "a",
    "heading": "h1-h6",
    "list": "ul/ol",
    "listitem": "li",
    "navigation": "nav",
    "main": "main",
    "article": "article",
    "region": "section",
    "banner": "header",
    "contentinfo": "footer",
    "complementary": "aside",
    "form": "form",
    "dialog": "dialog",
    "img": "img",
    "table": "table",
    "checkbox": 'input type="checkbox"',
    "radio": 'input type="radio"',
    "textbox": 'input type="text"',
}

AUTOCOMPLETE_TOKENS = frozenset(
    {
        "name", "honorific-prefix", "given-name", "additional-name", "family-name",
        "honorific-suffix", "nickname", "email", "username", "new-password",
        "current-password", "one-time-code", "organization-title", "organization",
        "street-address", "address-line1", "address-line2", "address-line3",
        "address-level4", "address-level3", "address-level2", "address-level1",
        "country", "country-name", "postal-code", "cc-name", "cc-given-name",
        "cc-additional-name", "cc-family-name", "cc-number", "cc-exp", "cc-exp-month",
        "cc-exp-year", "cc-csc", "cc-type", "transaction-currency", "transaction-amount",
        "language", "bday", "bday-day", "bday-month", "bday-year", "sex", "tel",
        "tel-country-code", "tel-national", "tel-area-code", "tel-local", "tel-extension",
        "impp", "url", "photo", "webauthn",
    }
)
AUTOCOMPLETE_PREFIXES = frozenset({"shipping", "billing", "home", "work", "mobile", "fax", "pager"})
NON_AUTOCOMPLETE_INPUT_TYPES = frozenset(
    {"button", "checkbox", "file", "hidden", "image", "radio", "reset", "submit"}
)

PRIMARY_LANGUAGES = frozenset(
    """
    aa ab ae af ak am an ar as av ay az ba be bg bh bi bm bn bo br bs ca ce ch co cr cs cu cv cy
    da de dv dz ee el en eo es et eu fa ff fi fj fo fr fy ga gd gl gn gu gv ha he hi ho hr ht hu
    hy hz ia id ie ig ii ik in io is it iu iw ja ji jv jw ka kg ki kj kk kl km kn ko kr ks ku kv
    kw ky la lb lg li ln lo lt lu lv mg mh mi mk ml mn mo mr ms mt my na nb nd ne ng nl nn no nr
    nv ny oc oj om or os pa pi pl ps pt qu rm rn ro ru rw sa sc sd se sg sh si sk sl sm sn so sq
    sr ss st su sv sw ta te tg th ti tk tl tn to tr ts tt tw ty ug uk ur uz ve vi vo wa wo xh yi
    yo za zh zu und
    """.split()
)
BCP47_PATTERN = re.compile(r"^[a-z]{2,3}(-[a-z]{4})?(-[a-z]{2}|-[0-9]{3})?$", re.IGNORECASE)


@dataclass(frozen=True)
class CheckContext:
    registry: IdRegistry
    options: EngineOptions = field(default_factory=EngineOptions)

    @classmethod
    def for_roots(cls, roots: Any, options: EngineOptions | None = None) -> CheckContext:
        return cls(registry=build_registry(roots), options=options or EngineOptions())


CheckFunc = Callable[[Any, CheckContext], "list[Violation]"]


@dataclass(frozen=True)
class CheckDefinition:
    name: str
    func: CheckFunc
    emits: tuple[tuple[str, str], ...]
    summary: str = ""


CHECKS: list[CheckDefinition] = []


def check(name: str, *emits: tuple[str, str]) -> Callable[[CheckFunc], CheckFunc]:
    """Register a check in declaration order together with the violation ids it emits."""

    def deco(fn: CheckFunc) -> CheckFunc:
        summary = (fn.__doc__ or "").strip().split("\n", 1)[0]
        CHECKS.append(CheckDefinition(name=name, func=fn, emits=tuple(emits), summary=summary))
        return fn

    return deco


def _violation(code: str, impact: str, message: str, element: Element, **data: Any) -> Violation:
    return Violation(
        id=code,
        description=message,
        impact=impact,
        element=element,
        data=data,
        path=element_path(element),
    )


def _elements(root: Any, *tags: str) -> Iterator[Element]:
    for node in iter_elements(coerce_roots(root)):
        if not tags or node.tag in tags:
            yield node


def _is_true(value: Any) -> bool:
    return isinstance(value, str) and value.strip().lower() == "true"


def _static_int(value: Any) -> int | None:
    if value is None or isinstance(value, Dynamic):
        return None
    try:
        return int(str(value).strip())
    except ValueError:
        return None


def _explicit_role(node: Element) -> str | None:
    return first_role_token(node.attributes.get("role"))


def _is_heading(node: Element) -> bool:
    return node.tag in HEADING_TAGS or _explicit_role(node) == "heading"


def _heading_level(node: Element) -> int | None:
    if node.tag in HEADING_TAGS:
        return int(node.tag[1])
    if _explicit_role(node) == "heading":
        return _static_int(node.attributes.get("aria-level"))
    return None


def _has_heading_descendant(node: Element) -> bool:
    return any(_is_heading(d) for d in node.descendants())


def event_handlers(node: Element) -> frozenset[str]:
    """Names of the events ``node`` binds a handler to."""
    events: set[str] = set()
    for attr in node.attributes:
        for prefix in EVENT_PREFIXES:
            if attr.startswith(prefix) and len(attr) > len(prefix):
                events.add(attr[len(prefix):].split(".", 1)[0])
                break
    return frozenset(events)


def is_natively_focusable(node: Element) -> bool:
    tag = node.tag
    if tag not in NATIVELY_FOCUSABLE_TAGS:
        return False
    if tag in {"a", "area"}:
        return node.has("href")
    if tag == "input" and input_type_of(node) == "hidden":
        return False
    if tag == "summary":
        return node.parent is not None and node.parent.tag == "details"
    return not node.has("disabled")


def is_focusable(node: Element) -> bool:
    value = _static_int(node.attributes.get("tabindex"))
    if value is not None:
        return value >= 0
    return is_natively_focusable(node)


def _is_decorative(img: Element, options: ImageAltOptions) -> bool:
    if not options.allow_missing_alt_on_decorative:
        return False
    hidden = _is_true(img.attributes.get("aria-hidden"))
    presentational = _explicit_role(img) in PRESENTATIONAL_ROLES
    if options.require_aria_hidden and options.require_role_presentation:
        return hidden and presentational
    if options.require_aria_hidden:
        return hidden
    if options.require_role_presentation:
        return presentational
    if hidden or presentational:
        return True
    return any(img.has(marker) for marker in options.marker_attributes)


@check("image-alt", ("image-alt", "serious"), ("image-alt-dynamic", "minor"))
def check_image_alt(root: Any, context: CheckContext) -> list[Violation]:
    """Images need a non-empty text alternative unless decorative by policy."""
    out: list[Violation] = []
    for img in _elements(root, "img"):
        alt = img.attributes.get("alt")
        if isinstance(alt, Dynamic):
            out.append(
                _violation(
                    "image-alt-dynamic",
                    "minor",
                    "Image alt attribute is dynamic. Ensure it is not empty at runtime.",
                    img,
                )
            )
        elif _is_decorative(img, context.options.image_alt):
            continue
        elif alt is None:
            out.append(_violation("image-alt", "serious", "Image must have an alt attribute.", img))
        elif not alt.strip():
            out.append(_violation("image-alt", "serious", "Image alt attribute must not be empty.", img))
    return out


@check("img-redundant-alt", ("img-redundant-alt", "minor"))
def check_img_redundant_alt(root: Any, context: CheckContext) -> list[Violation]:
    """Alt text should not repeat words like "image" or "photo"."""
    words = [w for w in context.options.redundant_alt.words if w.strip()]
    if not words:
        return []
    pattern = re.compile(r"\b(" + "|".join(re.escape(w.strip()) for w in words) + r")\b", re.IGNORECASE)
    out: list[Violation] = []
    for img in _elements(root, "img"):
        alt = img.text_attr("alt")
        if not alt or is_hidden(img):
            continue
        match = pattern.search(alt)
        if match:
            word = match.group(1)
            out.append(
                _violation(
                    "img-redundant-alt",
                    "minor",
                    f'Redundant alt text: "{word}" is unnecessary. Screen readers already announce images.',
                    img,
                    word=word.lower(),
                )
            )
    return out


@check("button-label", ("button-label", "critical"))
def check_button_label(root: Any, context: CheckContext) -> list[Violation]:
    """Buttons resolve a non-empty accessible name."""
    out: list[Violation] = []
    for node in _elements(root, "button", "input"):
        if node.tag == "input" and input_type_of(node) not in INPUT_BUTTON_TYPES:
            continue
        if not accessible_name(node, context.registry).present:
            out.append(
                _violation(
                    "button-label",
                    "critical",
                    "Button must have an accessible name (text content, value, aria-label, aria-labelledby or title).",
                    node,
                )
            )
    return out


@check("form-label", ("form-label", "critical"))
def check_form_label(root: Any, context: CheckContext) -> list[Violation]:
    """Form controls resolve a name through a label, aria-label or aria-labelledby."""
    out: list[Violation] = []
    for node in _elements(root, *FORM_CONTROL_TAGS):
        if node.tag == "input" and input_type_of(node) in UNLABELED_INPUT_TYPES:
            continue
        if not accessible_name(node, context.registry).present:
            out.append(
                _violation("form-label", "critical", "Form control must have an associated label.", node)
            )
    return out


@check("form-validation", ("form-required-missing-label", "serious"))
def check_form_validation(root: Any, context: CheckContext) -> list[Violation]:
    """Required form controls carry a programmatic label, not just a title."""
    out: list[Violation] = []
    for node in _elements(root, *FORM_CONTROL_TAGS):
        if node.tag == "input" and input_type_of(node) in UNLABELED_INPUT_TYPES:
            continue
        if not (node.has("required") or _is_true(node.attributes.get("aria-required"))):
            continue
        name = accessible_name(node, context.registry)
        # Controls with no name at all are reported by form-label.
        if name.present and name.source not in LABEL_SOURCES:
            out.append(
                _violation(
                    "form-required-missing-label",
                    "serious",
                    "Required form control must have a label (use <label>, aria-label, or aria-labelledby).",
                    node,
                    source=name.source,
                )
            )
    return out


@check("heading-order", ("heading-order", "moderate"))
def check_heading_order(root: Any, context: CheckContext) -> list[Violation]:
    """Heading levels do not skip more than the allowed number of levels."""
    options = context.options.heading_order
    out: list[Violation] = []
    previous = 0
    for node in _elements(root):
        level = _heading_level(node)
        if level is None:
            continue
        if previous > 0:
            jump = level - previous
            if jump > options.max_skip:
                out.append(
                    _violation(
                        "heading-order",
                        "moderate",
                        f"Heading level skipped from h{previous} to h{level}.",
                        node,
                        previous=previous,
                        current=level,
                    )
                )
            elif jump == 0 and not options.allow_same_level:
                out.append(
                    _violation(
                        "heading-order",
                        "moderate",
                        f"Heading level h{level} repeats the previous heading level.",
                        node,
                        previous=previous,
                        current=level,
                    )
                )
        previous = level
    return out


@check("heading-has-content", ("heading-has-content", "serious"))
def check_heading_has_content(root: Any, context: CheckContext) -> list[Violation]:
    """Headings have text content or an accessible label."""
    out: list[Violation] = []
    for node in _elements(root, *HEADING_TAGS):
        if not accessible_name(node, context.registry).present:
            out.append(
                _violation(
                    "heading-has-content",
                    "serious",
                    "Headings must have text content or an accessible label (aria-label, aria-labelledby, or title).",
                    node,
                )
            )
    return out


def _compile_allowlist(patterns: tuple[str, ...], case_insensitive: bool) -> list[re.Pattern[str]]:
    compiled: list[re.Pattern[str]] = []
    flags = re.IGNORECASE if case_insensitive else 0
    for pattern in patterns:
        try:
            compiled.append(re.compile(pattern, flags))
        except re.error as e:
            warnings.warn(
                f"Ignoring invalid link-text allowlist pattern {pattern!r}: {e}",
                A11yWarning,
                stacklevel=3,
            )
    return compiled


@check("link-text", ("link-text", "critical"), ("link-text-descriptive", "moderate"))
def check_link_text(root: Any, context: CheckContext) -> list[Violation]:
    """Links have a name, and the name is not generic ("click here")."""
    options = context.options.link_text
    links = list(_elements(root, "a"))
    if not links:
        return []
    allowlist = _compile_allowlist(options.allowlist_patterns, options.case_insensitive)
    words = [(w.lower() if options.case_insensitive else w) for w in options.words if w]
    out: list[Violation] = []
    for link in links:
        name = accessible_name(link, context.registry)
        if not name.present:
            out.append(_violation("link-text", "critical", "Link must have discernible text.", link))
            continue
        if name.dynamic or not name.text:
            continue
        haystack = name.text.lower() if options.case_insensitive else name.text
        if haystack not in words or any(p.search(name.text) for p in allowlist):
            continue
        out.append(
            _violation(
                "link-text-descriptive",
                "moderate",
                f'Link text "{name.text}" should be more descriptive.',
                link,
                text=name.text,
            )
        )
    return out


@check("iframe-title", ("iframe-title", "serious"), ("iframe-title-dynamic", "minor"))
def check_iframe_title(root: Any, context: CheckContext) -> list[Violation]:
    """Iframes carry a non-empty title."""
    out: list[Violation] = []
    for frame in _elements(root, "iframe"):
        title = frame.attributes.get("title")
        if isinstance(title, Dynamic):
            out.append(
                _violation(
                    "iframe-title-dynamic",
                    "minor",
                    "iframe title attribute is dynamic. Ensure it is not empty at runtime.",
                    frame,
                )
            )
        elif title is None:
            out.append(_violation("iframe-title", "serious", "iframe must have a title attribute.", frame))
        elif not title.strip():
            out.append(_violation("iframe-title", "serious", "iframe title attribute must not be empty.", frame))
    return out


@check("fieldset-legend", ("fieldset-legend", "serious"))
def check_fieldset_legend(root: Any, context: CheckContext) -> list[Violation]:
    """Fieldsets have a non-empty legend as a direct child."""
    out: list[Violation] = []
    for fieldset in _elements(root, "fieldset"):
        legends = [child for child in fieldset.element_children if child.tag == "legend"]
        if not legends:
            out.append(
                _violation(
                    "fieldset-legend",
                    "serious",
                    "fieldset must have a legend element as a direct child.",
                    fieldset,
                )
            )
            continue
        text, dynamic = text_content(legends[0])
        if not text and not dynamic:
            out.append(
                _violation(
                    "fieldset-legend",
                    "serious",
                    "fieldset legend must have non-empty text content.",
                    legends[0],
                )
            )
    return out


@check("details-summary", ("details-summary", "serious"))
def check_details_summary(root: Any, context: CheckContext) -> list[Violation]:
    """Details elements start with a non-empty summary."""
    out: list[Violation] = []
    for details in _elements(root, "details"):
        children = details.element_children
        if not children or children[0].tag != "summary":
            out.append(
                _violation(
                    "details-summary",
                    "serious",
                    "details element must have a summary element as its first child.",
                    details,
                )
            )
            continue
        if not accessible_name(children[0], context.registry).present:
            out.append(
                _violation(
                    "details-summary",
                    "serious",
                    "details summary element must have non-empty text content.",
                    children[0],
                )
            )
    return out


def _table_cells(table: Element) -> Iterator[Element]:
    def visit(node: Element) -> Iterator[Element]:
        for child in node.element_children:
            if child.tag == "table":
                continue
            if child.tag in {"td", "th"}:
                yield child
            yield from visit(child)

    yield from visit(table)


@check(
    "table-structure",
    ("table-caption", "moderate"),
    ("table-headers", "serious"),
    ("table-header-scope", "minor"),
)
def check_table_structure(root: Any, context: CheckContext) -> list[Violation]:
    """Data tables have a caption, header cells and scoped headers."""
    out: list[Violation] = []
    for table in _elements(root, "table"):
        if _explicit_role(table) in PRESENTATIONAL_ROLES or table.is_dynamic("role"):
            continue
        has_caption = any(child.tag == "caption" for child in table.element_children)
        if not has_caption and not (table.has("aria-label") or table.has("aria-labelledby")):
            out.append(
                _violation(
                    "table-caption",
                    "moderate",
                    "Table must have a caption element or aria-label/aria-labelledby attribute.",
                    table,
                )
            )
        cells = list(_table_cells(table))
        headers = [cell for cell in cells if cell.tag == "th"]
        if not headers and any(cell.tag == "td" for cell in cells):
            out.append(
                _violation(
                    "table-headers",
                    "serious",
                    "Data table must have at least one header cell (th).",
                    table,
                )
            )
        for th in headers:
            if not th.has("scope"):
                out.append(
                    _violation(
                        "table-header-scope",
                        "minor",
                        "Table header cells (th) should have a scope attribute.",
                        th,
                    )
                )
    return out


def _track_kind(track: Element) -> str | None:
    kind = track.attributes.get("kind")
    if isinstance(kind, Dynamic):
        return None
    return (kind or "subtitles").strip().lower()


@check(
    "media-captions",
    ("video-captions", "critical"),
    ("audio-captions", "critical"),
    ("track-srclang", "serious"),
    ("track-label", "minor"),
)
def check_media_captions(root: Any, context: CheckContext) -> list[Violation]:
    """Video has caption tracks, audio has tracks, tracks declare srclang and label."""
    out: list[Violation] = []
    for media in _elements(root, "video", "audio"):
        tracks = [d for d in media.descendants() if d.tag == "track"]
        if media.tag == "video":
            if media.has("muted"):
                continue
            if not any(_track_kind(t) in {None, "captions"} for t in tracks):
                out.append(
                    _violation(
                        "video-captions",
                        "critical",
                        'Video element must have at least one track element with kind="captions".',
                        media,
                    )
                )
        elif not tracks:
            out.append(
                _violation(
                    "audio-captions",
                    "critical",
                    "Audio element must have track elements.",
                    media,
                )
            )
    for track in _elements(root, "track"):
        kind = _track_kind(track)
        if kind in CAPTION_TRACK_KINDS and not track.has("srclang"):
            out.append(
                _violation(
                    "track-srclang",
                    "serious",
                    f'Track with kind="{kind}" must have a srclang attribute.',
                    track,
                    kind=kind,
                )
            )
        if not track.has("label"):
            out.append(_violation("track-label", "minor", "Track should have a label attribute.", track))
    return out


def _authored_name_present(node: Element, context: CheckContext) -> bool:
    name = accessible_name(node, context.registry, from_content=False)
    return name.source in {"aria-labelledby", "aria-label"}


@check(
    "landmark-roles",
    ("landmark-multiple-main", "moderate"),
    ("landmark-unnamed-region", "moderate"),
    ("landmark-duplicate-unnamed", "moderate"),
)
def check_landmarks(root: Any, context: CheckContext) -> list[Violation]:
    """One main landmark; sections are named or headed; repeated nav/aside are named."""
    out: list[Violation] = []
    seen_main = False
    unnamed: dict[str, int] = {}
    for node in _elements(root):
        role = _explicit_role(node)
        if node.tag == "main" or role == "main":
            if seen_main:
                out.append(
                    _violation(
                        "landmark-multiple-main",
                        "moderate",
                        "Page should have only one main landmark.",
                        node,
                    )
                )
            seen_main = True
        if node.tag in {"section", "article"} and (role is None or role in {"region", "article"}):
            if node.is_dynamic("role"):
                continue
            if not _authored_name_present(node, context) and not _has_heading_descendant(node):
                out.append(
                    _violation(
                        "landmark-unnamed-region",
                        "moderate",
                        f"<{node.tag}> should have an accessible name or contain a heading.",
                        node,
                    )
                )
        if node.tag in {"nav", "aside"} and not _authored_name_present(node, context):
            count = unnamed.get(node.tag, 0) + 1
            unnamed[node.tag] = count
            if count > 1:
                out.append(
                    _violation(
                        "landmark-duplicate-unnamed",
                        "moderate",
                        f"Multiple <{node.tag}> landmarks found. Each should have an accessible name "
                        "(aria-label or aria-labelledby).",
                        node,
                        tag=node.tag,
                    )
                )
    return out


@check(
    "dialog-modal",
    ("dialog-missing-name", "serious"),
    ("dialog-missing-modal", "serious"),
    ("dialog-invalid-role", "moderate"),
)
def check_dialogs(root: Any, context: CheckContext) -> list[Violation]:
    """Dialogs are named, modal dialogs declare aria-modal, and roles match."""
    out: list[Violation] = []
    for node in _elements(root):
        role = _explicit_role(node)
        if node.tag != "dialog" and role not in {"dialog", "alertdialog"}:
            continue
        if not _authored_name_present(node, context) and not _has_heading_descendant(node):
            out.append(
                _violation(
                    "dialog-missing-name",
                    "serious",
                    "Dialog element must have an accessible name (aria-label, aria-labelledby, or heading).",
                    node,
                )
            )
        modal = node.attributes.get("aria-modal")
        if node.has("open") and not (isinstance(modal, Dynamic) or _is_true(modal)):
            out.append(
                _violation(
                    "dialog-missing-modal",
                    "serious",
                    'Modal dialog should have aria-modal="true" attribute.',
                    node,
                )
            )
        if node.tag == "dialog" and role is not None and role not in {"dialog", "alertdialog"}:
            out.append(
                _violation(
                    "dialog-invalid-role",
                    "moderate",
                    'Dialog element should have role="dialog" or role="alertdialog".',
                    node,
                    role=role,
                )
            )
    return out


def is_valid_lang(value: str) -> bool:
    text = value.strip()
    if not text:
        return False
    if text.lower().split("-")[0] not in PRIMARY_LANGUAGES:
        return False
    return BCP47_PATTERN.match(text) is not None


@check("lang", ("html-has-lang", "serious"), ("lang-valid", "serious"))
def check_lang(root: Any, context: CheckContext) -> list[Violation]:
    """The html element declares a language and every lang value is a valid BCP 47 tag."""
    out: list[Violation] = []
    for node in _elements(root):
        lang = node.attributes.get("lang")
        if node.tag == "html" and (lang is None or (isinstance(lang, str) and not lang.strip())):
            out.append(
                _violation(
                    "html-has-lang",
                    "serious",
                    "<html> element must have a lang attribute.",
                    node,
                )
            )
            continue
        if isinstance(lang, str) and lang.strip() and not is_valid_lang(lang):
            out.append(
                _violation(
                    "lang-valid",
                    "serious",
                    f'Invalid lang attribute value "{lang.strip()}". Use a valid BCP 47 language tag.',
                    node,
                    value=lang.strip(),
                )
            )
    return out


@check("no-distracting-elements", ("no-distracting-elements", "serious"))
def check_distracting_elements(root: Any, context: CheckContext) -> list[Violation]:
    """No blink or marquee elements."""
    return [
        _violation(
            "no-distracting-elements",
            "serious",
            f"<{node.tag}> elements are distracting and deprecated. Replace with static content.",
            node,
        )
        for node in _elements(root, *DISTRACTING_TAGS)
    ]


@check("tabindex-no-positive", ("tabindex-no-positive", "serious"))
def check_tabindex_no_positive(root: Any, context: CheckContext) -> list[Violation]:
    """No positive tabindex values."""
    out: list[Violation] = []
    for node in _elements(root):
        value = _static_int(node.attributes.get("tabindex"))
        if value is not None and value > 0:
            out.append(
                _violation(
                    "tabindex-no-positive",
                    "serious",
                    f'Avoid positive tabindex values (found: {value}). Use tabindex="0" or tabindex="-1".',
                    node,
                    value=value,
                )
            )
    return out


@check("no-access-key", ("no-access-key", "minor"))
def check_no_access_key(root: Any, context: CheckContext) -> list[Violation]:
    """No accesskey attributes."""
    return [
        _violation(
            "no-access-key",
            "minor",
            "The accesskey attribute creates keyboard shortcuts that conflict with assistive technology.",
            node,
        )
        for node in _elements(root)
        if node.has("accesskey")
    ]


@check("no-autofocus", ("no-autofocus", "minor"))
def check_no_autofocus(root: Any, context: CheckContext) -> list[Violation]:
    """No autofocus attributes."""
    return [
        _violation(
            "no-autofocus",
            "minor",
            "The autofocus attribute can disorient users. Remove this attribute.",
            node,
        )
        for node in _elements(root)
        if node.has("autofocus")
    ]


@check("no-aria-hidden-on-focusable", ("no-aria-hidden-on-focusable", "serious"))
def check_aria_hidden_focusable(root: Any, context: CheckContext) -> list[Violation]:
    """Focusable elements are not hidden with aria-hidden."""
    return [
        _violation(
            "no-aria-hidden-on-focusable",
            "serious",
            'aria-hidden="true" must not be used on focusable elements.',
            node,
        )
        for node in _elements(root)
        if _is_true(node.attributes.get("aria-hidden")) and is_focusable(node)
    ]


@check("no-role-presentation-on-focusable", ("no-role-presentation-on-focusable", "serious"))
def check_presentation_focusable(root: Any, context: CheckContext) -> list[Violation]:
    """Focusable elements do not drop their semantics with presentation/none."""
    out: list[Violation] = []
    for node in _elements(root):
        role = _explicit_role(node)
        if role in PRESENTATIONAL_ROLES and is_focusable(node):
            out.append(
                _violation(
                    "no-role-presentation-on-focusable",
                    "serious",
                    f'role="{role}" must not be used on focusable elements.',
                    node,
                    role=role,
                )
            )
    return out


@check("aria-activedescendant-has-tabindex", ("aria-activedescendant-has-tabindex", "serious"))
def check_activedescendant_tabindex(root: Any, context: CheckContext) -> list[Violation]:
    """Elements managing aria-activedescendant are focusable."""
    return [
        _violation(
            "aria-activedescendant-has-tabindex",
            "serious",
            'Elements with aria-activedescendant must be focusable. Add tabindex="0" or tabindex="-1".',
            node,
        )
        for node in _elements(root)
        if node.has("aria-activedescendant") and not node.has("tabindex") and not is_natively_focusable(node)
    ]


def is_valid_autocomplete(value: str) -> bool:
    tokens = value.strip().lower().split()
    if not tokens:
        return False
    if tokens[0] in {"on", "off"}:
        return len(tokens) == 1
    idx = 1 if tokens[0].startswith("section-") else 0
    if idx < len(tokens) and tokens[idx] in AUTOCOMPLETE_PREFIXES:
        idx += 1
    return idx == len(tokens) - 1 and tokens[idx] in AUTOCOMPLETE_TOKENS


@check("autocomplete-valid", ("autocomplete-valid", "moderate"))
def check_autocomplete(root: Any, context: CheckContext) -> list[Violation]:
    """Autocomplete values use valid tokens on controls that support them."""
    out: list[Violation] = []
    for node in _elements(root, *FORM_CONTROL_TAGS):
        value = node.attributes.get("autocomplete")
        if value is None or isinstance(value, Dynamic):
            continue
        input_type = input_type_of(node)
        if input_type in NON_AUTOCOMPLETE_INPUT_TYPES:
            out.append(
                _violation(
                    "autocomplete-valid",
                    "moderate",
                    f'The autocomplete attribute is not supported on <input type="{input_type}">.',
                    node,
                    value=value,
                )
            )
        elif not is_valid_autocomplete(value):
            out.append(
                _violation(
                    "autocomplete-valid",
                    "moderate",
                    f'Invalid autocomplete value "{value}".',
                    node,
                    value=value,
                )
            )
    return out


@check("click-events-have-key-events", ("click-events-have-key-events", "serious"))
def check_click_key_events(root: Any, context: CheckContext) -> list[Violation]:
    """Click handlers on non-native controls come with a keyboard handler."""
    out: list[Violation] = []
    for node in _elements(root):
        if node.tag in NATIVE_INTERACTIVE_TAGS or is_hidden(node):
            continue
        events = event_handlers(node)
        if events & CLICK_EVENTS and not events & KEYBOARD_EVENTS:
            out.append(
                _violation(
                    "click-events-have-key-events",
                    "serious",
                    "Elements with click handlers must also have a keyboard event handler "
                    "(keydown, keyup, or keypress).",
                    node,
                )
            )
    return out


@check("mouse-events-have-key-events", ("mouse-events-have-key-events", "serious"))
def check_mouse_key_events(root: Any, context: CheckContext) -> list[Violation]:
    """mouseover and mouseout handlers are paired with focus and blur."""
    out: list[Violation] = []
    for node in _elements(root):
        events = event_handlers(node)
        for mouse, key in MOUSE_KEY_PAIRS:
            if mouse in events and key not in events:
                out.append(
                    _violation(
                        "mouse-events-have-key-events",
                        "serious",
                        f"{mouse} must be accompanied by {key} for keyboard accessibility.",
                        node,
                        event=mouse,
                        requires=key,
                    )
                )
    return out


@check("interactive-supports-focus", ("interactive-supports-focus", "serious"))
def check_interactive_focus(root: Any, context: CheckContext) -> list[Violation]:
    """Elements with an interactive role are focusable."""
    out: list[Violation] = []
    for node in _elements(root):
        role = _explicit_role(node)
        if role not in INTERACTIVE_ROLES or node.tag in NATIVE_INTERACTIVE_TAGS:
            continue
        if node.is_dynamic("tabindex") or _is_true(node.attributes.get("aria-disabled")):
            continue
        if not is_focusable(node):
            out.append(
                _violation(
                    "interactive-supports-focus",
                    "serious",
                    f'Elements with interactive role="{role}" must be focusable. Add tabindex="0".',
                    node,
                    role=role,
                )
            )
    return out


def _interactions(node: Element, tags: frozenset[str]) -> list[str]:
    if node.tag not in tags or node.has("role"):
        return []
    return sorted(event_handlers(node) & INTERACTION_EVENTS)


@check("no-static-element-interactions", ("no-static-element-interactions", "moderate"))
def check_static_interactions(root: Any, context: CheckContext) -> list[Violation]:
    """Static elements without a role carry no event handlers."""
    out: list[Violation] = []
    for node in _elements(root):
        events = _interactions(node, STATIC_TAGS)
        if events:
            out.append(
                _violation(
                    "no-static-element-interactions",
                    "moderate",
                    f"Static elements (<{node.tag}>) should not have event handlers. Use an interactive "
                    "element like <button> or add an appropriate role and tabindex.",
                    node,
                    tag=node.tag,
                    events=events,
                )
            )
    return out


@check("no-noninteractive-element-interactions", ("no-noninteractive-element-interactions", "moderate"))
def check_noninteractive_interactions(root: Any, context: CheckContext) -> list[Violation]:
    """Headings, images and rules without a role carry no event handlers."""
    out: list[Violation] = []
    for node in _elements(root):
        events = _interactions(node, NONINTERACTIVE_TAGS - STATIC_TAGS)
        if events:
            out.append(
                _violation(
                    "no-noninteractive-element-interactions",
                    "moderate",
                    f"Non-interactive elements (<{node.tag}>) should not have event handlers. Use an "
                    "interactive element like <button> or add an appropriate role and tabindex.",
                    node,
                    tag=node.tag,
                    events=events,
                )
            )
    return out


@check("no-noninteractive-tabindex", ("no-noninteractive-tabindex", "moderate"))
def check_noninteractive_tabindex(root: Any, context: CheckContext) -> list[Violation]:
    """Non-interactive elements stay out of the tab order."""
    options = context.options.noninteractive_tabindex
    out: list[Violation] = []
    for node in _elements(root, *NONINTERACTIVE_TAGS):
        value = _static_int(node.attributes.get("tabindex"))
        if value is None or value < 0 or node.tag in options.tags:
            continue
        role = _explicit_role(node)
        if role in INTERACTIVE_ROLES or role in options.roles or node.is_dynamic("role"):
            continue
        out.append(
            _violation(
                "no-noninteractive-tabindex",
                "moderate",
                f"Non-interactive elements (<{node.tag}>) should not have tabindex. "
                "Either remove the tabindex or add an interactive role.",
                node,
                tag=node.tag,
                value=value,
            )
        )
    return out


def _direct_text(node: Element) -> str:
    return "".join(child for child in node.children if isinstance(child, str))


@check("accessible-emoji", ("emoji-missing-role", "minor"), ("emoji-missing-label", "minor"))
def check_accessible_emoji(root: Any, context: CheckContext) -> list[Violation]:
    """Emoji wrapped in a span are exposed as a labelled image."""
    out: list[Violation] = []
    for node in _elements(root, "span"):
        if is_hidden(node) or not EMOJI_PATTERN.search(_direct_text(node)):
            continue
        if _explicit_role(node) != "img" and not node.is_dynamic("role"):
            out.append(
                _violation("emoji-missing-role", "minor", 'Emoji must have role="img".', node)
            )
        if not (node.has("aria-label") or node.has("aria-labelledby")):
            out.append(
                _violation(
                    "emoji-missing-label",
                    "minor",
                    "Emoji must have an accessible label (aria-label or aria-labelledby).",
                    node,
                )
            )
    return out


@check("semantic-prefer-native", ("semantic-prefer-native", "minor"))
def check_prefer_native(root: Any, context: CheckContext) -> list[Violation]:
    """Generic containers do not reimplement native elements through roles."""
    out: list[Violation] = []
    for node in _elements(root, "div", "span"):
        role = _explicit_role(node)
        native = PREFER_NATIVE.get(role or "")
        if native is None:
            continue
        out.append(
            _violation(
                "semantic-prefer-native",
                "minor",
                f'Prefer semantic element <{native}> instead of <{node.tag} role="{role}">.',
                node,
                role=role,
                native=native,
            )
        )
    return out


@check(
    "aria-validation",
    ("aria-invalid-role", "critical"),
    ("aria-deprecated-role", "minor"),
    ("aria-abstract-role", "minor"),
    ("aria-role-on-wrong-element", "moderate"),
    ("aria-missing-context-role", "serious"),
    ("aria-redundant-role", "minor"),
    ("aria-conflicting-semantics", "serious"),
    ("aria-missing-required-property", "critical"),
    ("aria-missing-required-children", "critical"),
    ("aria-invalid-property", "serious"),
    ("aria-deprecated-property", "minor"),
    ("aria-invalid-property-value", "serious"),
    ("aria-property-discouraged", "minor"),
    ("aria-property-not-allowed-with-role", "minor"),
    ("aria-invalid-id-reference", "serious"),
    ("aria-unverified-id-reference", "minor"),
)
def check_aria(root: Any, context: CheckContext) -> list[Violation]:
    """Roles, aria-* attributes and id references agree with WAI-ARIA 1.2."""
    out: list[Violation] = []
    for node in _elements(root):
        out.extend(validate_element_aria(node, context.registry))
    return out


@check("duplicate-id", ("duplicate-id", "serious"))
def check_duplicate_id(root: Any, context: CheckContext) -> list[Violation]:
    """Id values are unique within the validation scope."""
    return check_duplicate_ids(root, context.registry)


def check_names() -> list[str]:
    return [definition.name for definition in CHECKS]


def violation_impacts() -> dict[str, str]:
    """Every violation id the battery can emit, mapped to its impact."""
    out: dict[str, str] = {}
    for definition in CHECKS:
        for code, impact in definition.emits:
            out.setdefault(code, impact)
    return out
