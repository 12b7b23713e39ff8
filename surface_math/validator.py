"""
Structural validation of expression text.

The checks are permissive: they reject unbalanced grouping
and characters that can never appear in a formula, but something like
``"x++"`` passes and is left for the parser to refuse.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


OPERATORS = set("+-*/^")
GROUPING = set("()")


class ValidationIssue(Enum):
    """Why an expression was rejected."""
    EMPTY = "empty"
    UNBALANCED_GROUPING = "unbalanced_grouping"
    INVALID_CHARACTER = "invalid_character"


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    reason: str = ""
    issue: Optional[ValidationIssue] = None

    def __bool__(self):
        return self.valid


def _allowed(ch: str) -> bool:
    return (ch.isdigit() and ch.isascii()) or ch == '.' \
        or ch in OPERATORS or ch in GROUPING or ch.isspace() \
        or 'a' <= ch <= 'z'


def validate(text: str) -> ValidationResult:
    """Check grouping balance and the character set of an expression."""
    if text is None or not text.strip():
        return ValidationResult(False, "Expression is empty", ValidationIssue.EMPTY)

    depth = 0
    for pos, ch in enumerate(text):
        if ch == '(':
            depth += 1
        elif ch == ')':
            depth -= 1
            if depth < 0:
                return ValidationResult(
                    False, f"Unmatched ')' at position {pos}",
                    ValidationIssue.UNBALANCED_GROUPING)
    if depth != 0:
        return ValidationResult(
            False, f"{depth} unclosed '(' in expression",
            ValidationIssue.UNBALANCED_GROUPING)

    for pos, ch in enumerate(text):
        if not _allowed(ch):
            return ValidationResult(
                False, f"Invalid character {ch!r} at position {pos}",
                ValidationIssue.INVALID_CHARACTER)

    return ValidationResult(True)
