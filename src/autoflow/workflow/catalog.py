"""Error catalog for lint issues and the issue builder.

Code ranges carry meaning:
  3xxx  missing or invalid resource (AUT)
  4xxx  policy and rate-limit violations (AUT)
  5xxx  platform and system failures (SYS)
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass
from typing import Optional, Union

from .report import Family, LintIssue, LintLocation, Severity
from .rules import RuleId


@dataclass(frozen=True)
class CatalogEntry:
    family: Family
    key: str
    severity: Severity
    message: str
    remediation: str


ERROR_CATALOG: dict[int, CatalogEntry] = {
    # --- AUT 3xxx: missing / invalid resources ---
    3310: CatalogEntry(
        family="AUT",
        key="AUT_WORKFLOW_UNREACHABLE_NODES",
        severity="warn",
        message="Workflow contains unreachable nodes",
        remediation="Remove unreachable nodes or add connections to make them reachable",
    ),
    3311: CatalogEntry(
        family="AUT",
        key="AUT_NODE_MISSING_CONNECTIONS",
        severity="error",
        message="Node is missing required connections",
        remediation="Add connections array to node or connect to valid target nodes",
    ),
    3312: CatalogEntry(
        family="AUT",
        key="AUT_VARIABLE_INVALID_INTERPOLATION",
        severity="error",
        message="Invalid variable interpolation syntax",
        remediation="Use correct syntax: {variable.name} or {member.displayName}",
    ),
    3313: CatalogEntry(
        family="AUT",
        key="AUT_ICON_NOT_APPROVED",
        severity="warn",
        message="Icon is not in the approved icon catalog",
        remediation="Choose from approved icons in the icon catalog",
    ),
    # --- AUT 4xxx: policy limits ---
    4120: CatalogEntry(
        family="AUT",
        key="AUT_RATE_LIMIT_HIGH_WEIGHT",
        severity="warn",
        message="Workflow weight may cause rate limiting",
        remediation="Reduce node weight or optimize workflow to use fewer resources",
    ),
    4121: CatalogEntry(
        family="AUT",
        key="AUT_NODE_MISSING_WEIGHT",
        severity="warn",
        message="Action node missing rate limit weight",
        remediation="Add weight property to action node for accurate rate limiting",
    ),
    # --- SYS 5xxx: platform and external failures ---
    5510: CatalogEntry(
        family="SYS",
        key="SYS_WORKFLOW_PARSE_ERROR",
        severity="error",
        message="Unable to parse workflow file",
        remediation="Check JSON syntax and workflow structure",
    ),
    5511: CatalogEntry(
        family="SYS",
        key="SYS_SCHEMA_VALIDATION_FAILED",
        severity="error",
        message="Workflow schema validation failed",
        remediation="Fix schema violations listed in validation errors",
    ),
}

SYSTEM_ERROR_CODE = 5510


class IssueFactory:
    """Builds lint issues from catalog entries, numbering them per instance."""

    def __init__(self) -> None:
        self._ids = itertools.count(1)

    def create(
        self,
        rule_id: Union[RuleId, str],
        error_code: int,
        *,
        message: Optional[str] = None,
        location: Optional[LintLocation] = None,
        suggestions: Optional[list[str]] = None,
    ) -> LintIssue:
        entry = ERROR_CATALOG[error_code]
        return LintIssue(
            id=f"issue-{next(self._ids)}",
            rule_id=RuleId(rule_id),
            error_code=f"{entry.family}-{error_code}",
            family=entry.family,
            severity=entry.severity,
            message=message or entry.message,
            remediation=entry.remediation,
            location=location,
            suggestions=suggestions,
            fixable=False,
        )

    def system_error(self, error: BaseException) -> LintIssue:
        """The single issue reported when validation itself fails."""
        entry = ERROR_CATALOG[SYSTEM_ERROR_CODE]
        return LintIssue(
            id=f"system-error-{next(self._ids)}",
            rule_id=RuleId.SYSTEM_PARSE_ERROR,
            error_code=f"{entry.family}-{SYSTEM_ERROR_CODE}",
            family=entry.family,
            severity="error",
            message=f"System error: {str(error) or type(error).__name__}",
            remediation="Check workflow structure and try again",
            context={"exception": type(error).__name__},
            fixable=False,
        )
