from .catalog import ERROR_CATALOG, IssueFactory
from .editor import deployment_summary, group_issues, workflow_from_editor_graph
from .errors import WorkflowParseError
from .inference import (
    PermissionBreakdown,
    detect_required_permissions,
    get_permission_breakdown,
    infer_permissions,
)
from .pack import PackComparison, PackPermissionAggregator, PermissionSummary
from .report import LintIssue, LintLocation, LintResult
from .rules import DEFAULT_RULES, LintConfig, LintSettings, RuleId
from .schema import Pack, VariableDefinition, Workflow, WorkflowNode, WorkflowTrigger
from .validator import AutoFlowValidator, validate

__all__ = [
    "AutoFlowValidator",
    "DEFAULT_RULES",
    "ERROR_CATALOG",
    "IssueFactory",
    "LintConfig",
    "LintIssue",
    "LintLocation",
    "LintResult",
    "LintSettings",
    "Pack",
    "PackComparison",
    "PackPermissionAggregator",
    "PermissionBreakdown",
    "PermissionSummary",
    "RuleId",
    "VariableDefinition",
    "Workflow",
    "WorkflowNode",
    "WorkflowParseError",
    "WorkflowTrigger",
    "deployment_summary",
    "detect_required_permissions",
    "get_permission_breakdown",
    "group_issues",
    "infer_permissions",
    "validate",
    "workflow_from_editor_graph",
]
