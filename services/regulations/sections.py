"""
Narrative Section Extraction
============================

Pulls the administrative sections out of the plain-text rendering of a
Federal Register document (SUMMARY, DATES, ADDRESSES, contact and
supplementary information).

Version: 0.1.0
"""

import re
from dataclasses import dataclass


PARAGRAPH_BREAK = r"\n\n"
PAGE_MARKER = r"\[\[Page"


@dataclass(frozen=True)
class SectionRule:
    """Where a section starts and what ends it."""

    field: str
    header: str
    end: str = PARAGRAPH_BREAK

    @property
    def pattern(self) -> re.Pattern[str]:
        return re.compile(f"{re.escape(self.header)}([\\s\\S]+?){self.end}")


# Headers are matched exactly as they appear in the text rendering,
# including the "ADDRESSES :" spacing.
SECTION_RULES: tuple[SectionRule, ...] = (
    SectionRule("summary", "SUMMARY: "),
    SectionRule("dates", "DATES: "),
    SectionRule("addresses", "ADDRESSES :"),
    SectionRule("contact", "FOR FURTHER INFORMATION CONTACT: "),
    SectionRule("sup_info", "SUPPLEMENTARY INFORMATION: ", PAGE_MARKER),
)


def extract_section(text: str, rule: SectionRule) -> str | None:
    """Return the first capture for ``rule`` in ``text``, or None."""
    match = rule.pattern.search(text)
    return match.group(1) if match else None


def extract_sections(text: str) -> dict[str, str]:
    """
    Extract every narrative section found in ``text``.

    Sections are searched independently, so their order in the document
    does not matter. Only the first occurrence of each header is used.

    Args:
        text: Plain-text document rendering

    Returns:
        Mapping of field name to section text; missing sections are absent
    """
    sections: dict[str, str] = {}
    for rule in SECTION_RULES:
        value = extract_section(text, rule)
        if value is not None:
            sections[rule.field] = value
    return sections
