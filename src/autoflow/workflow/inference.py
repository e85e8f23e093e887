"""Permission inference over a workflow's trigger and action nodes."""

from __future__ import annotations

from typing import Any, Iterator, Optional, Union

from pydantic import BaseModel

from .catalog import IssueFactory
from .errors import coerce_model
from .permissions import (
    ACTION_PERMISSION_MAPPINGS,
    TRIGGER_PERMISSION_MAPPINGS,
    has_action_permission_mapping,
    has_trigger_permission_mapping,
)
from .report import LintIssue, LintLocation
from .rules import LintConfig, RuleId
from .schema import Workflow, WorkflowNode

WorkflowInput = Union[Workflow, dict[str, Any]]


class PermissionBreakdown(BaseModel):
    """Per-source view of a workflow's required permissions."""

    total_permissions: list[str]
    trigger_permissions: list[str]
    node_permissions: dict[str, list[str]]
    unknown_actions: list[str]  # raw, may repeat


def _trigger_permissions(workflow: Workflow) -> tuple[str, ...]:
    event = workflow.trigger.event if workflow.trigger else None
    if event and has_trigger_permission_mapping(event):
        return TRIGGER_PERMISSION_MAPPINGS[event]
    return ()


def _action_nodes(workflow: Workflow) -> Iterator[WorkflowNode]:
    for node in workflow.nodes or []:
        if node.type == "action" and node.action:
            yield node


def detect_required_permissions(workflow: WorkflowInput) -> list[str]:
    """Sorted union of the trigger's and every known action's permissions.

    Unknown actions contribute nothing here; they are only reported by
    ``infer_permissions``. The workflow is not modified.
    """
    workflow = coerce_model(Workflow, workflow)
    required: set[str] = set(_trigger_permissions(workflow))

    for node in _action_nodes(workflow):
        if has_action_permission_mapping(node.action):
            required.update(ACTION_PERMISSION_MAPPINGS[node.action])

    return sorted(required)


def infer_permissions(
    workflow: WorkflowInput,
    config: Optional[LintConfig] = None,
    factory: Optional[IssueFactory] = None,
) -> tuple[Workflow, list[LintIssue]]:
    """Return an annotated copy of the workflow plus issues for unmapped actions.

    The copy carries each action node's resolved permissions (empty for
    unmapped actions) and the workflow-level union on ``permissions``.
    """
    workflow = coerce_model(Workflow, workflow)
    config = config or LintConfig.merged()
    factory = factory or IssueFactory()

    annotated = workflow.model_copy(deep=True)
    issues: list[LintIssue] = []
    required: set[str] = set(_trigger_permissions(annotated))

    for node in _action_nodes(annotated):
        if has_action_permission_mapping(node.action):
            node.permissions = list(ACTION_PERMISSION_MAPPINGS[node.action])
            required.update(node.permissions)
            continue

        node.permissions = []
        if config.is_rule_enabled(RuleId.SECURITY_MISSING_PERMISSIONS):
            issues.append(
                factory.create(
                    RuleId.SECURITY_MISSING_PERMISSIONS,
                    3311,
                    message=f"Unknown action '{node.action}' - cannot detect required permissions",
                    location=LintLocation(node_id=node.id),
                    suggestions=[
                        "Check if the action is listed in ACTION_PERMISSION_MAPPINGS",
                        "Add a permission mapping for this action type",
                    ],
                )
            )

    annotated.permissions = sorted(required)
    return annotated, issues


def get_permission_breakdown(workflow: WorkflowInput) -> PermissionBreakdown:
    workflow = coerce_model(Workflow, workflow)
    node_permissions: dict[str, list[str]] = {}
    unknown_actions: list[str] = []

    for node in _action_nodes(workflow):
        if has_action_permission_mapping(node.action):
            node_permissions[node.id] = list(ACTION_PERMISSION_MAPPINGS[node.action])
        else:
            unknown_actions.append(node.action)
            node_permissions[node.id] = []

    return PermissionBreakdown(
        total_permissions=detect_required_permissions(workflow),
        trigger_permissions=list(_trigger_permissions(workflow)),
        node_permissions=node_permissions,
        unknown_actions=unknown_actions,
    )
