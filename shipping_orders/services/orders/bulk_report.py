"""
Result of a bulk order load.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass(frozen=True)
class LineIssue:
    """A line that could not be loaded, with the reason shown to the user."""

    line_number: int
    line: str
    reason: str

    def __str__(self) -> str:
        return f"line {self.line_number}: {self.reason}"


@dataclass
class BulkLoadReport:
    """
    Tally of a bulk load.

    `loaded + failed` equals the number of non-blank lines read. A file that
    cannot be opened leaves every counter at zero and sets `file_error`.
    """

    path: str
    total_lines: int = 0
    skipped_blank: int = 0
    loaded: int = 0
    failed: int = 0
    issues: List[LineIssue] = field(default_factory=list)
    file_error: str | None = None
    error_summary: Dict[str, Any] = field(default_factory=dict)

    @property
    def succeeded(self) -> bool:
        """True when the file was read and every record was loaded."""
        return self.file_error is None and self.failed == 0

    def record_issue(self, line_number: int, line: str, reason: str) -> None:
        self.failed += 1
        self.issues.append(LineIssue(line_number=line_number, line=line, reason=reason))

    def summary(self) -> str:
        if self.file_error:
            return f"{self.path}: could not be read ({self.file_error})"
        return (
            f"{self.path}: {self.loaded} loaded, {self.failed} failed, "
            f"{self.skipped_blank} blank of {self.total_lines} lines"
        )
