"""Bridges between a node/edge editor graph and the validator.

Editors describe a graph as ``nodes`` (``{"id", "data": {...}}``) plus
``edges`` (``{"id", "source", "target"}``). These helpers convert that shape
into a ``Workflow`` and project lint issues back onto node and edge ids.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence, Union

from pydantic import BaseModel

from .errors import coerce_model
from .report import SEVERITY_ORDER, LintIssue, LintResult, Severity
from .schema import Workflow, WorkflowNode, WorkflowTrigger

DEFAULT_EDITOR_TRIGGER = WorkflowTrigger(type="event", event="messageCreate")


class EditorNode(BaseModel):
    id: str
    data: dict[str, Any] = {}


class EditorEdge(BaseModel):
    id: Optional[str] = None
    source: str
    target: str


class DeploymentSummary(BaseModel):
    is_valid: bool
    can_deploy: bool
    message: str
    total: int = 0
    errors: int = 0
    warnings: int = 0
    infos: int = 0
    criticals: int = 0


class GroupedIssues(BaseModel):
    critical: list[LintIssue] = []
    error: list[LintIssue] = []
    warning: list[LintIssue] = []
    info: list[LintIssue] = []
    by_node: dict[str, list[LintIssue]] = {}


def workflow_from_editor_graph(
    nodes: Sequence[Union[EditorNode, Mapping[str, Any]]],
    edges: Sequence[Union[EditorEdge, Mapping[str, Any]]],
    *,
    workflow_id: str = "temp-workflow",
    name: str = "Temporary Workflow",
    version: str = "1.0.0",
    trigger: Optional[WorkflowTrigger] = None,
) -> Workflow:
    """Build a workflow whose node connections are the targets of each node's outgoing edges."""
    editor_nodes = [coerce_model(EditorNode, n) for n in nodes]
    editor_edges = [coerce_model(EditorEdge, e) for e in edges]

    workflow_nodes = []
    for node in editor_nodes:
        data = node.data
        workflow_nodes.append(
            coerce_model(
                WorkflowNode,
                {
                    "id": node.id,
                    "type": data.get("type") or "action",
                    "action": data.get("action"),
                    "params": data.get("params") or {},
                    "connections": [edge.target for edge in editor_edges if edge.source == node.id],
                    "weight": data.get("weight"),
                },
            )
        )

    return Workflow(
        id=workflow_id,
        name=name,
        version=version,
        trigger=trigger or DEFAULT_EDITOR_TRIGGER.model_copy(),
        nodes=workflow_nodes,
    )


def issues_for_node(result: Optional[LintResult], node_id: str) -> list[LintIssue]:
    if result is None:
        return []
    return [i for i in result.issues if i.location and i.location.node_id == node_id]


def issues_for_edge(result: Optional[LintResult], edge_id: str) -> list[LintIssue]:
    if result is None:
        return []
    return [i for i in result.issues if i.location and i.location.edge_id == edge_id]


def highest_severity(issues: Sequence[LintIssue]) -> Optional[Severity]:
    present = {issue.severity for issue in issues}
    for severity in SEVERITY_ORDER:
        if severity in present:
            return severity
    return None


def group_issues(issues: Sequence[LintIssue]) -> GroupedIssues:
    grouped = GroupedIssues()
    by_severity = {
        "critical": grouped.critical,
        "error": grouped.error,
        "warn": grouped.warning,
        "info": grouped.info,
    }
    for issue in issues:
        by_severity[issue.severity].append(issue)
        if issue.location and issue.location.node_id:
            grouped.by_node.setdefault(issue.location.node_id, []).append(issue)
    return grouped


def deployment_summary(result: Optional[LintResult], node_count: int = 0) -> DeploymentSummary:
    """Human-facing verdict: errors and criticals block deployment, warnings do not."""
    if result is None:
        return DeploymentSummary(
            is_valid=node_count == 0,
            can_deploy=False,
            message="No workflow to validate" if node_count == 0 else "Validating...",
        )

    counts = result.summary.model_dump()

    if result.is_valid and result.summary.warnings == 0:
        return DeploymentSummary(
            is_valid=True, can_deploy=True, message="Workflow is valid and ready to deploy", **counts
        )

    blocking = result.summary.errors + result.summary.criticals
    if blocking > 0:
        return DeploymentSummary(
            is_valid=False,
            can_deploy=False,
            message=f"{blocking} error{'' if blocking == 1 else 's'} must be fixed before deployment",
            **counts,
        )

    warnings = result.summary.warnings
    return DeploymentSummary(
        is_valid=True,
        can_deploy=True,
        message=f"{warnings} warning{'' if warnings == 1 else 's'} - deployment allowed",
        **counts,
    )
