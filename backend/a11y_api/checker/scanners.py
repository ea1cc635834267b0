"""
Regex scanners over raw markup.

Every scanner has the shape ``scan(text) -> List[Candidate]``: it extracts
the elements one rule cares about and hands them to that rule's predicate.
No tag tree is built. The markup size is caller-controlled, so every scan
stays linear in the input: tag patterns stop at the next ``<``, and
open/close pairs are matched in one forward pass over precomputed close
offsets instead of with lazy ``.*?`` searches.
"""
import re
from bisect import bisect_left, bisect_right
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, NamedTuple, Optional, Pattern, Tuple

_NO_DATA: Mapping[str, Any] = MappingProxyType({})


class Candidate(NamedTuple):
    snippet: str                  # faulted markup shown in the report
    needle: str = ""              # substring used for line lookup (defaults to snippet)
    data: Mapping[str, Any] = _NO_DATA
    line: Optional[int] = None    # fixed line, bypasses lookup


_TAG_NAME_RE = re.compile(r"<\s*[^\s/>]+")
_ATTR_RE = re.compile(r"""([^\s"'<>/=]+)(?:\s*=\s*("[^"]*"|'[^']*'|[^\s"'=<>`]+))?""")

_IMG_RE = re.compile(r"<img\b[^<>]*>", re.IGNORECASE)
_CLICKABLE_RE = re.compile(r"<(?:div|span|li|tr|td|img)\b[^<>]*>", re.IGNORECASE)
_FORM_CONTROL_RE = re.compile(r"<(input|select|textarea)\b[^<>]*>", re.IGNORECASE)
_LABEL_OPEN_RE = re.compile(r"<(label)\b[^<>]*>", re.IGNORECASE)
_LABEL_CLOSE_RE = re.compile(r"</(label)\s*>", re.IGNORECASE)
_ANCHOR_OPEN_RE = re.compile(r"<(a)\b[^<>]*>", re.IGNORECASE)
_ANCHOR_CLOSE_RE = re.compile(r"</(a)\s*>", re.IGNORECASE)
_HEADING_OPEN_RE = re.compile(r"<(h[1-9])(?:\s[^<>]*)?>", re.IGNORECASE)
_HEADING_CLOSE_RE = re.compile(r"</(h[1-9])\s*>", re.IGNORECASE)
_BODY_RE = re.compile(r"<body\b[^<>]*>", re.IGNORECASE)
_FONT_SIZE_RE = re.compile(
    r"font-size\s*:\s*(\d+(?:\.\d+)?|\.\d+)(px|pt|rem|em)\b", re.IGNORECASE
)

# Style text runs: anything not crossing a quote, tag bracket or CSS block brace.
_STYLE_RUN_RE = re.compile(r"[^\"'<>{}]+")
_COLOR_VALUE = r"(#[0-9a-fA-F]{6}\b|#[0-9a-fA-F]{3}\b|rgba?\([^()]{0,64}\))"
_FG_DECL_RE = re.compile(r"(?<![\w-])color\s*:\s*" + _COLOR_VALUE, re.IGNORECASE)
_BG_DECL_RE = re.compile(r"(?<![\w-])background-color\s*:\s*" + _COLOR_VALUE, re.IGNORECASE)

CLICK_HANDLERS = ("onclick", "ng-click", "@click", "(click)")
UNLABELLED_INPUT_TYPES = {"hidden", "submit", "button", "reset", "image"}

# (start tag match, inner text, end offset of the closing tag)
Block = Tuple[re.Match, str, int]


def parse_attrs(tag: str) -> Dict[str, str]:
    """Read the attributes of one start tag.

    Names are lower-cased, the first occurrence of a name wins, and a
    boolean attribute maps to ``""``.
    """
    m = _TAG_NAME_RE.match(tag)
    body = tag[m.end():] if m else tag
    body = body.rstrip(">").rstrip("/")
    attrs: Dict[str, str] = {}
    for name, raw in _ATTR_RE.findall(body):
        if raw[:1] in ('"', "'"):
            raw = raw[1:-1]
        attrs.setdefault(name.lower(), raw)
    return attrs


def paired_blocks(text: str, open_re: Pattern[str], close_re: Pattern[str]) -> List[Block]:
    """Pair each start tag with the next closing tag of the same name.

    Blocks never overlap: start tags inside a matched block are skipped and
    a start tag with no closing tag after it is dropped. Group 1 of both
    patterns must capture the tag name.
    """
    closes: Dict[str, List[re.Match]] = {}
    for m in close_re.finditer(text):
        closes.setdefault(m.group(1).lower(), []).append(m)
    close_starts = {name: [m.start() for m in ms] for name, ms in closes.items()}

    blocks: List[Block] = []
    resume = 0
    for m in open_re.finditer(text):
        if m.start() < resume:
            continue
        name = m.group(1).lower()
        starts = close_starts.get(name)
        if not starts:
            continue
        i = bisect_left(starts, m.end())
        if i == len(starts):
            continue
        close = closes[name][i]
        blocks.append((m, text[m.end():close.start()], close.end()))
        resume = close.end()
    return blocks


def scan_images(text: str) -> List[Candidate]:
    return [Candidate(m.group(0), data={"attrs": parse_attrs(m.group(0))})
            for m in _IMG_RE.finditer(text)]


def scan_headings(text: str) -> List[Candidate]:
    """One candidate per adjacent heading pair, carrying both levels."""
    candidates = []
    prev_level = None
    for open_tag, _, end in paired_blocks(text, _HEADING_OPEN_RE, _HEADING_CLOSE_RE):
        level = int(open_tag.group(1)[1])
        if prev_level is not None:
            candidates.append(Candidate(
                text[open_tag.start():end], data={"previous_level": prev_level, "level": level}))
        prev_level = level
    return candidates


def scan_color_pairs(text: str) -> List[Candidate]:
    """Style runs declaring both a text colour and a background colour, in either order."""
    candidates = []
    for run in _STYLE_RUN_RE.finditer(text):
        chunk = run.group(0)
        if "color" not in chunk.lower():
            continue
        fg = _FG_DECL_RE.search(chunk)
        bg = _BG_DECL_RE.search(chunk)
        if not fg or not bg:
            continue
        first = fg if fg.start() < bg.start() else bg
        candidates.append(Candidate(
            chunk.strip(),
            needle=first.group(0),
            data={"color": fg.group(1), "background_color": bg.group(1)},
        ))
    return candidates


def scan_click_handlers(text: str) -> List[Candidate]:
    """Non-focusable elements carrying a click handler."""
    candidates = []
    for m in _CLICKABLE_RE.finditer(text):
        attrs = parse_attrs(m.group(0))
        if any(h in attrs for h in CLICK_HANDLERS):
            candidates.append(Candidate(m.group(0), data={"attrs": attrs}))
    return candidates


def scan_form_controls(text: str) -> List[Candidate]:
    """Labelable form controls, de-duplicated, with the document's label context."""
    label_ids = frozenset(
        parse_attrs(m.group(0)).get("for", "").strip()
        for m in _LABEL_OPEN_RE.finditer(text)
    ) - {""}
    spans = [(m.end(), end) for m, _, end in paired_blocks(text, _LABEL_OPEN_RE, _LABEL_CLOSE_RE)]
    span_starts = [s for s, _ in spans]

    def in_label(m) -> bool:
        i = bisect_right(span_starts, m.start()) - 1
        return i >= 0 and m.end() <= spans[i][1]

    # element markup -> [attrs, nested in some <label>]
    controls: Dict[str, list] = {}
    for m in _FORM_CONTROL_RE.finditer(text):
        element = m.group(0)
        seen = controls.get(element)
        if seen is not None:
            seen[1] = seen[1] or in_label(m)
            continue
        attrs = parse_attrs(element)
        if m.group(1).lower() == "input" and attrs.get("type", "").strip().lower() in UNLABELLED_INPUT_TYPES:
            continue
        controls[element] = [attrs, in_label(m)]

    return [
        Candidate(element, data={"attrs": attrs, "label_ids": label_ids, "nested_in_label": nested})
        for element, (attrs, nested) in controls.items()
    ]


def scan_document(text: str) -> List[Candidate]:
    """A single document-level candidate describing every anchor, or nothing for blank input."""
    if not text.strip():
        return []
    anchors = [(parse_attrs(m.group(0)), inner)
               for m, inner, _ in paired_blocks(text, _ANCHOR_OPEN_RE, _ANCHOR_CLOSE_RE)]
    anchor_classes = [parse_attrs(m.group(0)).get("class", "") for m in _ANCHOR_OPEN_RE.finditer(text)]
    body = _BODY_RE.search(text)
    snippet = body.group(0) if body else text.strip().splitlines()[0][:200]
    return [Candidate(snippet, data={"anchors": anchors, "anchor_classes": anchor_classes}, line=1)]


def scan_font_sizes(text: str) -> List[Candidate]:
    return [Candidate(m.group(0), data={"value": float(m.group(1)), "unit": m.group(2).lower()})
            for m in _FONT_SIZE_RE.finditer(text)]


def scan_links(text: str) -> List[Candidate]:
    """Anchors that carry an href attribute."""
    candidates = []
    for m in _ANCHOR_OPEN_RE.finditer(text):
        attrs = parse_attrs(m.group(0))
        if "href" in attrs:
            candidates.append(Candidate(m.group(0), data={"href": attrs["href"]}))
    return candidates
