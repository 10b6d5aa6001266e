"""
AutoClassName Script Heuristics.

String-level rules for recognizing editor-generated script stubs and
deriving the class name inserted into them.
Requires Python 3.11+.
"""

from dataclasses import dataclass
from pathlib import PurePath

from utils.config import ClassifierSettings


BOM = "\ufeff"


@dataclass(frozen=True, slots=True)
class ScriptSyntax:
    """Keywords of the watched scripting language."""

    class_name_keyword: str = "class_name"
    extends_keyword: str = "extends"
    comment_prefix: str = "#"
    max_fresh_lines: int = 3

    @classmethod
    def from_settings(cls, settings: ClassifierSettings) -> "ScriptSyntax":
        return cls(
            class_name_keyword=settings.class_name_keyword,
            extends_keyword=settings.extends_keyword,
            comment_prefix=settings.comment_prefix,
            max_fresh_lines=settings.max_fresh_lines,
        )


@dataclass(frozen=True, slots=True)
class ContentShape:
    """Summary of the meaningful lines of a script."""

    non_empty_lines: int
    has_extends: bool
    has_class_name: bool

    def is_fresh(self, max_lines: int) -> bool:
        """Empty, or short and still without a class name."""
        if self.non_empty_lines == 0:
            return True
        return self.non_empty_lines <= max_lines and not self.has_class_name


def starts_with_keyword(line: str, keyword: str) -> bool:
    """Check whether a stripped line opens with keyword as a whole word."""
    parts = line.split(maxsplit=1)
    return bool(parts) and parts[0] == keyword


def analyze_content(text: str, syntax: ScriptSyntax) -> ContentShape:
    """
    Count meaningful lines and note which declarations are present.

    Blank lines and comment lines are ignored.

    Args:
        text: Full script text
        syntax: Keywords of the scripting language

    Returns:
        ContentShape for the text
    """
    non_empty = 0
    has_extends = False
    has_class_name = False

    for raw_line in text.removeprefix(BOM).splitlines():
        line = raw_line.strip()
        if not line or line.startswith(syntax.comment_prefix):
            continue

        non_empty += 1
        if starts_with_keyword(line, syntax.extends_keyword):
            has_extends = True
        if starts_with_keyword(line, syntax.class_name_keyword):
            has_class_name = True

    return ContentShape(
        non_empty_lines=non_empty,
        has_extends=has_extends,
        has_class_name=has_class_name,
    )


def looks_freshly_created(text: str, syntax: ScriptSyntax) -> bool:
    """Check whether text has the shape of a just-generated stub."""
    return analyze_content(text, syntax).is_fresh(syntax.max_fresh_lines)


def has_declaration(text: str, syntax: ScriptSyntax) -> bool:
    """Check whether any line already declares a class name."""
    return any(
        starts_with_keyword(line.strip(), syntax.class_name_keyword)
        for line in text.removeprefix(BOM).splitlines()
    )


def derive_class_name(file_path: str) -> str:
    """
    Turn a snake_case file name into a PascalCase class name.

    The final extension is dropped, the base name is split on
    underscores and the first character of each segment upper-cased.
    Empty segments vanish; the rest of each segment is kept as is.

    Examples:
        player_stats.gd -> PlayerStats
        _weird__name.gd -> WeirdName
        ALL_CAPS.gd -> ALLCAPS
    """
    base_name = PurePath(file_path).stem
    return "".join(
        segment[:1].upper() + segment[1:]
        for segment in base_name.split("_")
    )


def prepend_declaration(text: str, class_name: str, syntax: ScriptSyntax) -> str:
    """
    Put a class name declaration line in front of text.

    A byte order mark stays first, and the new line uses CRLF when the
    text already does.
    """
    bom = BOM if text.startswith(BOM) else ""
    newline = "\r\n" if "\r\n" in text else "\n"
    body = text.removeprefix(bom)
    return f"{bom}{syntax.class_name_keyword} {class_name}{newline}{body}"
