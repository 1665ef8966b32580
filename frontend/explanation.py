"""
Match explanation parsing for the Carbon Credit Matcher.

The matching service returns one long-form explanation per match, written as
six labelled subsections ("a. Industry and Focus Area Alignment: ..." and so
on). This module splits that text into its sections so the frontend can render
each one under its own heading.
"""

import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple


@dataclass(frozen=True)
class Section:
    """One expected subsection of a match explanation."""

    key: str
    title: str

    @property
    def heading(self) -> str:
        """Literal heading text as it appears in the explanation."""
        return f"{self.key}. {self.title}:"


SECTIONS: Tuple[Section, ...] = (
    Section("a", "Industry and Focus Area Alignment"),
    Section("b", "Emissions Reduction Impact"),
    Section("c", "Project Type Compatibility"),
    Section("d", "Environmental and Social Impact Relevance"),
    Section("e", "Technology and Co-benefits Analysis"),
    Section("f", "Overall Match Assessment"),
)

MISSING_SECTION_PLACEHOLDER = "No details provided for this section."


def parse_explanation(explanation: str,
                      sections: Sequence[Section] = SECTIONS) -> Dict[str, str]:
    """
    Extract the body text following each section heading.

    Sections are expected in the fixed order of ``sections``. The body of a
    section ends at the heading of the next section in that order, not at
    whatever heading happens to follow it in the text. A section whose
    successors are all missing from the text runs to the end. Headings must
    match exactly; a section whose heading is missing is simply left out of
    the result.

    Args:
        explanation: Free-form explanation text from the matching service
        sections: Expected sections, in order

    Returns:
        Mapping from section key to trimmed body text
    """
    if not isinstance(explanation, str) or not explanation:
        return {}

    headings = [re.escape(section.heading) for section in sections]
    present = [section.heading in explanation for section in sections]

    parsed: Dict[str, str] = {}
    for index, section in enumerate(sections):
        if not present[index]:
            continue
        # Next heading in fixed order that occurs anywhere in the text
        end = next((headings[j] for j in range(index + 1, len(sections)) if present[j]), r"\Z")
        pattern = re.compile(rf"{headings[index]}(.*?){end}", re.DOTALL)

        match = pattern.search(explanation)
        if match:
            parsed[section.key] = match.group(1).strip()

    return parsed


def split_sections(explanation: str,
                   sections: Sequence[Section] = SECTIONS) -> Dict[str, str]:
    """
    Extract section bodies without assuming the sections arrive in order.

    Every heading occurrence is located in one pass; each body is the text
    between its heading and the next heading occurrence, wherever that falls.
    When a heading is repeated, the first occurrence wins.

    Args:
        explanation: Free-form explanation text from the matching service
        sections: Expected sections (order is irrelevant here)

    Returns:
        Mapping from section key to trimmed body text
    """
    if not isinstance(explanation, str) or not explanation or not sections:
        return {}

    by_heading = {section.heading: section.key for section in sections}
    # Longest first so a heading that prefixes another cannot shadow it
    alternatives = sorted(by_heading, key=len, reverse=True)
    pattern = re.compile("|".join(re.escape(h) for h in alternatives))

    markers = [(m.start(), m.end(), by_heading[m.group(0)])
               for m in pattern.finditer(explanation)]

    parsed: Dict[str, str] = {}
    for position, (_, body_start, key) in enumerate(markers):
        if key in parsed:
            continue
        if position + 1 < len(markers):
            body_end = markers[position + 1][0]
        else:
            body_end = len(explanation)
        parsed[key] = explanation[body_start:body_end].strip()

    return parsed


def format_sections(parsed: Dict[str, str],
                    sections: Sequence[Section] = SECTIONS,
                    placeholder: Optional[str] = MISSING_SECTION_PLACEHOLDER) -> List[Tuple[str, str]]:
    """
    Pair every section title with its body for display.

    Missing or empty bodies are replaced by ``placeholder``.
    """
    rows = []
    for section in sections:
        body = parsed.get(section.key) or placeholder or ""
        rows.append((section.title, body))
    return rows
