"""AutoFlow: validation and permission inference for automation workflows."""

from .workflow import (
    AutoFlowValidator,
    LintConfig,
    LintIssue,
    LintResult,
    Pack,
    PackPermissionAggregator,
    Workflow,
    WorkflowParseError,
    detect_required_permissions,
    get_permission_breakdown,
    validate,
)

__all__ = [
    "AutoFlowValidator",
    "LintConfig",
    "LintIssue",
    "LintResult",
    "Pack",
    "PackPermissionAggregator",
    "Workflow",
    "WorkflowParseError",
    "detect_required_permissions",
    "get_permission_breakdown",
    "validate",
]
