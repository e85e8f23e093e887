"""Lint issue and lint result models with markdown rendering."""

from datetime import datetime
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field

from .rules import RuleId
from .schema import Workflow

Severity = Literal["info", "warn", "error", "critical"]
Family = Literal["AUT", "SYS"]

# Most severe first
SEVERITY_ORDER: tuple[Severity, ...] = ("critical", "error", "warn", "info")


class LintLocation(BaseModel):
    """Where in the workflow an issue was found."""

    node_id: Optional[str] = None
    edge_id: Optional[str] = None
    path: Optional[str] = None  # "version" | "nodes" | "variables.foo"
    line: Optional[int] = None
    column: Optional[int] = None


class LintIssue(BaseModel):
    """A single diagnostic produced by a validation run."""

    id: str
    rule_id: RuleId
    error_code: str  # "AUT-3311" | "SYS-5511" | etc.
    family: Family
    severity: Severity
    message: str
    remediation: str
    dev_hint: Optional[str] = None
    location: Optional[LintLocation] = None
    context: Optional[dict[str, Any]] = None
    fixable: bool = False
    suggestions: Optional[list[str]] = None
    timestamp: datetime = Field(default_factory=datetime.now)


class LintSummary(BaseModel):
    total: int = 0
    errors: int = 0
    warnings: int = 0
    infos: int = 0
    criticals: int = 0


class LintPerformance(BaseModel):
    analysis_time_ms: float = 0.0
    rules_executed: int = 0


class LintResult(BaseModel):
    """Outcome of validating one workflow."""

    workflow_id: str
    is_valid: bool
    summary: LintSummary
    issues: list[LintIssue] = []
    errors: list[LintIssue] = []
    warnings: list[LintIssue] = []
    infos: list[LintIssue] = []
    criticals: list[LintIssue] = []
    fixable_count: int = 0
    permissions: list[str] = []
    workflow: Optional[Workflow] = None  # copy annotated with inferred permissions
    timestamp: datetime = Field(default_factory=datetime.now)
    performance: LintPerformance = Field(default_factory=LintPerformance)

    @classmethod
    def from_issues(
        cls,
        workflow_id: str,
        issues: list[LintIssue],
        *,
        permissions: Optional[list[str]] = None,
        workflow: Optional[Workflow] = None,
        performance: Optional[LintPerformance] = None,
    ) -> "LintResult":
        """Partition issues by severity and derive the validity flag."""
        errors = [i for i in issues if i.severity == "error"]
        warnings = [i for i in issues if i.severity == "warn"]
        infos = [i for i in issues if i.severity == "info"]
        criticals = [i for i in issues if i.severity == "critical"]

        return cls(
            workflow_id=workflow_id,
            is_valid=not errors and not criticals,
            summary=LintSummary(
                total=len(issues),
                errors=len(errors),
                warnings=len(warnings),
                infos=len(infos),
                criticals=len(criticals),
            ),
            issues=issues,
            errors=errors,
            warnings=warnings,
            infos=infos,
            criticals=criticals,
            fixable_count=sum(1 for i in issues if i.fixable),
            permissions=permissions or [],
            workflow=workflow,
            performance=performance or LintPerformance(),
        )

    def to_markdown(self) -> str:
        status = "VALID" if self.is_valid else "INVALID"
        lines = [
            f"# Lint Report: {self.workflow_id}",
            "",
            f"**Status:** {status}",
            f"**Total issues:** {self.summary.total}",
            f"**Criticals:** {self.summary.criticals}",
            f"**Errors:** {self.summary.errors}",
            f"**Warnings:** {self.summary.warnings}",
            f"**Infos:** {self.summary.infos}",
            "",
        ]

        if self.permissions:
            lines.append("## Required Permissions")
            for perm in self.permissions:
                lines.append(f"- `{perm}`")
            lines.append("")

        if self.issues:
            lines.append("## Issues")
            lines.append("")
            lines.append("| # | Code | Rule | Severity | Location | Message |")
            lines.append("|---|------|------|----------|----------|---------|")

            for i, issue in enumerate(self.issues, 1):
                location = ""
                if issue.location:
                    location = issue.location.node_id or issue.location.edge_id or issue.location.path or ""
                lines.append(
                    f"| {i} | {issue.error_code} | `{issue.rule_id.value}` | {issue.severity} "
                    f"| {location} | {issue.message} |"
                )
            lines.append("")

        lines.append(
            f"**Analysis time:** {self.performance.analysis_time_ms:.2f}ms "
            f"({self.performance.rules_executed} rules executed)"
        )

        return "\n".join(lines)

    def to_dict(self) -> dict:
        return self.model_dump(mode="json")
