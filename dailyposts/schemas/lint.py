from typing import List, Literal, Optional

from pydantic import BaseModel, Field, computed_field

Severity = Literal["error", "warning"]


class LintIssue(BaseModel):
    rule: str
    severity: Severity = "error"
    path: str
    index: Optional[int] = None  # position inside a multi-post file
    message: str

    def format(self) -> str:
        location = self.path if self.index is None else f"{self.path}#{self.index}"
        return f"{location}: {self.severity}: [{self.rule}] {self.message}"


class LintReport(BaseModel):
    files: int = 0
    documents: int = 0
    issues: List[LintIssue] = Field(default_factory=list)

    @computed_field
    @property
    def error_count(self) -> int:
        return sum(1 for issue in self.issues if issue.severity == "error")

    @computed_field
    @property
    def warning_count(self) -> int:
        return sum(1 for issue in self.issues if issue.severity == "warning")

    @computed_field
    @property
    def ok(self) -> bool:
        return self.error_count == 0
