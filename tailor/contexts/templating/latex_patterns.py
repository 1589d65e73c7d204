"""
LaTeX Pattern Constants

Centralized LaTeX pattern strings used for parsing, rewriting and validation.
Organized into frozen dataclasses by category for immutability and clear grouping.
"""

from dataclasses import dataclass
from typing import List


@dataclass(frozen=True)
class DocumentPatterns:
    """
    Document-level LaTeX markers.

    Used for validation and for building the minimal document skeleton.
    """
    DOCUMENTCLASS: str = r'\documentclass'
    BEGIN_DOCUMENT: str = r'\begin{document}'
    END_DOCUMENT: str = r'\end{document}'
    BEGIN_ITEMIZE: str = r'\begin{itemize}'
    END_ITEMIZE: str = r'\end{itemize}'
    ITEM: str = r'\item'


@dataclass(frozen=True)
class SectionRegex:
    """
    Section heading regexes (use with re.IGNORECASE).

    SECTION_BLOCK captures (kind, title, content); content runs to the next
    section/subsection header, \\end{document}, or end of text.
    """
    SECTION_BLOCK: str = (
        r'\\(section|subsection)\*?\{([^}]+)\}'
        r'([\s\S]*?)'
        r'(?=\\(?:section|subsection)\*?\{|\\end\{document\}|\Z)'
    )
    # Use with .format(name=re.escape(section_name)); captures the whole named section
    NAMED_SECTION: str = r'(\\section\*?\{{{name}\}}[\s\S]*?)(?=\\section|\\end\{{document\}}|\Z)'


@dataclass(frozen=True)
class ItemRegex:
    """
    Itemize/enumerate entry regexes (use with re.IGNORECASE).

    ITEM_SPAN matches one \\item through the next \\item or list end; group 1 is
    the body. The full match is the bullet's substitution anchor.
    """
    ITEM_SPAN: str = r'\\item\s*([\s\S]*?)(?=\\item|\\end\{(?:itemize|enumerate)\})'
    END_ITEMIZE: str = r'\\end\{itemize\}'


@dataclass(frozen=True)
class CleaningRegex:
    """
    Regexes for reducing LaTeX fragments to plain text.

    FORMATTING_COMMAND is a template: use with .format(command=name).
    """
    COMMENT: str = r'(?<!\\)%.*$'  # use with re.MULTILINE
    FORMATTING_COMMAND: str = r'\\{command}\{{([^}}]*)\}}'
    HREF: str = r'\\href\{[^}]*\}\{([^}]*)\}'
    ANY_COMMAND: str = r'\\[a-zA-Z]+\*?(?:\[[^\]]*\])?(?:\{[^}]*\})?'
    SECTION_HEADER: str = r'\\(?:section|subsection|subsubsection)\*?\{([^}]*)\}'
    BEGIN_ANY_ENV: str = r'\\begin\{[^}]*\}'
    END_ANY_ENV: str = r'\\end\{[^}]*\}'
    ESCAPED_SPECIAL: str = r'\\([%$&#_])'
    BRACES: str = r'[{}]'
    WHITESPACE: str = r'\s+'


@dataclass(frozen=True)
class ValidationRegex:
    """Regexes used by structural validation."""
    OPEN_BRACE: str = r'(?<!\\)\{'
    CLOSE_BRACE: str = r'(?<!\\)\}'
    BEGIN_ENV_NAME: str = r'\\begin\{(\w+)\}'
    END_ENV_NAME: str = r'\\end\{(\w+)\}'


@dataclass(frozen=True)
class PlainTextRegex:
    """
    Line classifiers for plain text -> LaTeX conversion.

    A line is a section header when it is all caps (ALL_CAPS_HEADER) or
    capitalized text ending in a colon (COLON_HEADER).
    """
    ALL_CAPS_HEADER: str = r'^[A-Z][A-Z\s]+$'
    COLON_HEADER: str = r'^[A-Z][^:]+:$'
    BULLET_MARKER: str = r'^[-•*]\s'


class FormattingCommands:
    """One-argument formatting commands unwrapped to their argument when cleaning."""

    TEXTBF = 'textbf'
    TEXTIT = 'textit'
    EMPH = 'emph'
    UNDERLINE = 'underline'
    TEXTTT = 'texttt'

    @classmethod
    def all(cls) -> List[str]:
        """Return list of all unwrapped command names."""
        return [cls.TEXTBF, cls.TEXTIT, cls.EMPH, cls.UNDERLINE, cls.TEXTTT]


# Common LaTeX resume section names
RESUME_SECTIONS = [
    'education',
    'experience',
    'work experience',
    'professional experience',
    'skills',
    'technical skills',
    'projects',
    'certifications',
    'awards',
    'publications',
    'summary',
    'objective',
    'profile',
]
