import logging
import re
from bisect import bisect_right
from typing import Any, Dict, Iterable, List, Union

from .rules import RULES, RULES_BY_KEY, Rule
from .scanners import Candidate

logger = logging.getLogger(__name__)

MAX_SCORE = 100

Issues = Dict[str, Dict[str, Any]]

_NEWLINE_RE = re.compile("\n")


class LineIndex:
    """Best-effort 1-based line lookup over one markup string.

    A fragment resolves to the first line that contains it, 0 if no line
    does: a repeated fragment always lands on its first occurrence and a
    fragment spanning several lines resolves to 0. Each lookup is one
    ``str.find`` plus a bisect over newline offsets.
    """

    def __init__(self, text: str):
        self.text = text
        self._newlines = [m.start() for m in _NEWLINE_RE.finditer(text)]

    @classmethod
    def from_lines(cls, lines: Union["LineIndex", Iterable[str]]) -> "LineIndex":
        if isinstance(lines, cls):
            return lines
        return cls("\n".join(lines))

    def find(self, needle: str) -> int:
        if not needle or "\n" in needle:
            return 0
        pos = self.text.find(needle)
        return 0 if pos < 0 else bisect_right(self._newlines, pos) + 1


def clamp_score(score: int) -> int:
    return max(0, min(MAX_SCORE, score))


Lines = Union[LineIndex, List[str]]


class AccessibilityAnalyzer:
    """Runs the rule table over one markup string.

    Holds no per-analysis state; one instance can serve concurrent calls.
    """

    def __init__(self, rules=RULES):
        self.rules = tuple(rules)

    # ------------------------------------------------------------------
    # Full analysis
    # ------------------------------------------------------------------
    def analyze(self, html: str) -> Dict[str, Any]:
        if not isinstance(html, str):
            raise TypeError("html must be str, got {}".format(type(html).__name__))

        issues: Issues = {}
        lines = LineIndex(html)
        deducted = 0
        for rule in self.rules:
            deducted += self.run_rule(rule, html, issues, lines)

        score = clamp_score(MAX_SCORE - deducted)
        logger.info("Accessibility analysis done: score=%d categories=%d deducted=%d",
                    score, len(issues), deducted)
        return {"complianceScore": score, "issues": issues}

    def run_rule(self, rule: Rule, html: str, issues: Issues, lines: Lines) -> int:
        """Apply one rule, record its violations in issues and return its deduction.

        ``lines`` is either a LineIndex or the markup split on newlines.
        """
        index = LineIndex.from_lines(lines)
        deducted = 0
        for candidate in rule.scan(html):
            if rule.is_violation(candidate, html):
                self._add_issue(issues, rule, candidate, index)
                deducted += rule.weight
        if deducted:
            logger.debug("Rule %s deducted %d points", rule.key, deducted)
        return deducted

    # ------------------------------------------------------------------
    # Per-rule entry points
    # ------------------------------------------------------------------
    def check_missing_alt(self, html: str, issues: Issues, lines: Lines) -> int:
        return self.run_rule(RULES_BY_KEY["missing_alt"], html, issues, lines)

    def check_skipped_headings(self, html: str, issues: Issues, lines: Lines) -> int:
        return self.run_rule(RULES_BY_KEY["skipped_headings"], html, issues, lines)

    def check_low_color_contrast(self, html: str, issues: Issues, lines: Lines) -> int:
        return self.run_rule(RULES_BY_KEY["low_color_contrast"], html, issues, lines)

    def check_missing_tabindex(self, html: str, issues: Issues, lines: Lines) -> int:
        return self.run_rule(RULES_BY_KEY["missing_tabindex"], html, issues, lines)

    def check_missing_labels(self, html: str, issues: Issues, lines: Lines) -> int:
        return self.run_rule(RULES_BY_KEY["missing_labels"], html, issues, lines)

    def check_missing_skip_link(self, html: str, issues: Issues, lines: Lines) -> int:
        return self.run_rule(RULES_BY_KEY["missing_skip_link"], html, issues, lines)

    def check_font_size_too_small(self, html: str, issues: Issues, lines: Lines) -> int:
        return self.run_rule(RULES_BY_KEY["font_size_too_small"], html, issues, lines)

    def check_broken_links(self, html: str, issues: Issues, lines: Lines) -> int:
        return self.run_rule(RULES_BY_KEY["broken_links"], html, issues, lines)

    # ------------------------------------------------------------------
    # Aggregation
    # ------------------------------------------------------------------
    @staticmethod
    def _add_issue(issues: Issues, rule: Rule, candidate: Candidate, lines: LineIndex) -> None:
        group = issues.get(rule.key)
        if group is None:
            # only the first violation's line is reported
            if candidate.line is not None:
                line = candidate.line
            else:
                line = lines.find(candidate.needle or candidate.snippet)
            group = issues[rule.key] = {"title": rule.title, "line": line, "details": []}
        group["details"].append({
            "suggestedFix": rule.suggested_fix,
            "faultedSnippet": candidate.snippet,
            "sampleSnippet": rule.sample_snippet,
        })


_default_analyzer = AccessibilityAnalyzer()


def analyze_accessibility(html: str) -> Dict[str, Any]:
    """Analyze markup and return {"complianceScore": int, "issues": {...}}."""
    return _default_analyzer.analyze(html)
