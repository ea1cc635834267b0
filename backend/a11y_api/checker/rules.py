"""
Static rule table.

Each Rule pairs a scanner (extracts candidates) with a predicate (decides
whether a candidate is a violation) and the fixed report texts. Adding a
check means adding one entry to RULES.
"""
import re
from typing import Callable, List, NamedTuple

from . import scanners
from .contrast import is_low_contrast
from .scanners import Candidate


class Rule(NamedTuple):
    key: str
    title: str
    weight: int
    suggested_fix: str
    sample_snippet: str
    scan: Callable[[str], List[Candidate]]
    is_violation: Callable[[Candidate, str], bool]


MIN_FONT_SIZE_PX = 14.0
PX_PER_UNIT = {"px": 1.0, "pt": 1.333, "em": 16.0, "rem": 16.0}

SKIP_LINK_WORDS_RE = re.compile(r"skip|jump|main|content", re.IGNORECASE)
PLACEHOLDER_HREFS = {"", "#", "#!"}


# ---------------------------------------------------------------------------
# Predicates
# ---------------------------------------------------------------------------
def _image_missing_alt(c: Candidate, text: str) -> bool:
    return "alt" not in c.data["attrs"]


def _heading_skipped(c: Candidate, text: str) -> bool:
    return c.data["level"] > c.data["previous_level"] + 1


def _contrast_too_low(c: Candidate, text: str) -> bool:
    return is_low_contrast(c.data["color"], c.data["background_color"])


def _not_keyboard_reachable(c: Candidate, text: str) -> bool:
    # role="button"/"link"/"menuitem" still needs tabindex to be focusable
    return "tabindex" not in c.data["attrs"]


def _has_text(attrs, name: str) -> bool:
    return bool(attrs.get(name, "").strip())


def _control_unlabelled(c: Candidate, text: str) -> bool:
    attrs = c.data["attrs"]
    if _has_text(attrs, "aria-label") or _has_text(attrs, "aria-labelledby") or _has_text(attrs, "title"):
        return False
    element_id = attrs.get("id", "").strip()
    if element_id and element_id in c.data["label_ids"]:
        return False
    return not c.data["nested_in_label"]


def _skip_link_missing(c: Candidate, text: str) -> bool:
    if any("skip" in cls.lower() for cls in c.data["anchor_classes"]):
        return False
    for attrs, body in c.data["anchors"]:
        if attrs.get("href", "").strip().startswith("#") and SKIP_LINK_WORDS_RE.search(body):
            return False
    return True


def font_size_px(value: float, unit: str) -> float:
    return value * PX_PER_UNIT[unit]


def _font_too_small(c: Candidate, text: str) -> bool:
    return font_size_px(c.data["value"], c.data["unit"]) < MIN_FONT_SIZE_PX


def is_placeholder_href(href: str) -> bool:
    href = href.strip()
    return href in PLACEHOLDER_HREFS or href.lower().startswith("javascript:")


def _link_broken(c: Candidate, text: str) -> bool:
    return is_placeholder_href(c.data["href"])


# ---------------------------------------------------------------------------
# Registry (order = order of categories in the report)
# ---------------------------------------------------------------------------
RULES = (
    Rule(
        key="missing_alt",
        title="Missing alt attribute for image",
        weight=5,
        suggested_fix="Add an alt attribute describing the image, or alt=\"\" if it is purely decorative.",
        sample_snippet='<img src="chart.png" alt="Quarterly sales chart">',
        scan=scanners.scan_images,
        is_violation=_image_missing_alt,
    ),
    Rule(
        key="skipped_headings",
        title="Skipped heading levels",
        weight=10,
        suggested_fix="Ensure headings follow a logical order (e.g., <h1>, <h2>, <h3>) without skipping levels.",
        sample_snippet="<h1>Main Heading</h1>\n<h2>Sub Heading</h2>\n<h3>Detail</h3>",
        scan=scanners.scan_headings,
        is_violation=_heading_skipped,
    ),
    Rule(
        key="low_color_contrast",
        title="Low color contrast",
        weight=5,
        suggested_fix="Ensure a contrast ratio of at least 4.5:1 between text and background colors.",
        sample_snippet='<p style="color: #000000; background-color: #ffffff;">Readable text</p>',
        scan=scanners.scan_color_pairs,
        is_violation=_contrast_too_low,
    ),
    Rule(
        key="missing_tabindex",
        title="Interactive element not keyboard accessible",
        weight=5,
        suggested_fix="Use a native <button> or <a>, or add tabindex=\"0\" and an appropriate role to custom interactive elements.",
        sample_snippet='<div role="button" tabindex="0" onclick="doSomething()">Click Me</div>',
        scan=scanners.scan_click_handlers,
        is_violation=_not_keyboard_reachable,
    ),
    Rule(
        key="missing_labels",
        title="Form field missing label",
        weight=5,
        suggested_fix="Associate every form field with a <label for=\"...\">, wrap it in a <label>, or add aria-label/aria-labelledby.",
        sample_snippet='<label for="email">Email</label>\n<input type="email" id="email" name="email">',
        scan=scanners.scan_form_controls,
        is_violation=_control_unlabelled,
    ),
    Rule(
        key="missing_skip_link",
        title="Missing skip navigation link",
        weight=5,
        suggested_fix="Add a \"Skip to main content\" link at the top of the page for easier keyboard navigation.",
        sample_snippet='<a href="#maincontent" class="skip-link">Skip to main content</a>',
        scan=scanners.scan_document,
        is_violation=_skip_link_missing,
    ),
    Rule(
        key="font_size_too_small",
        title="Font size too small",
        weight=5,
        suggested_fix="Use a font size of at least 14px (preferably relative units such as 1rem) for body text.",
        sample_snippet='<p style="font-size: 1rem;">Readable text</p>',
        scan=scanners.scan_font_sizes,
        is_violation=_font_too_small,
    ),
    Rule(
        key="broken_links",
        title="Broken link or placeholder href",
        weight=5,
        suggested_fix="Point every link at a real destination; use a <button> for actions instead of href=\"#\" or javascript: URLs.",
        sample_snippet='<a href="https://example.com/contact">Contact us</a>',
        scan=scanners.scan_links,
        is_violation=_link_broken,
    ),
)

RULES_BY_KEY = {rule.key: rule for rule in RULES}
