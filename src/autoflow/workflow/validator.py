"""Validation pipeline: runs every check over a workflow and summarises the result."""

from __future__ import annotations

import logging
import time
from typing import Any, Mapping, Optional, Union

from .catalog import IssueFactory
from .checks import validate_node_list, validate_performance, validate_structure, validate_variables
from .errors import coerce_model
from .graph import validate_graph_integrity
from .inference import (
    PermissionBreakdown,
    WorkflowInput,
    detect_required_permissions,
    get_permission_breakdown,
    infer_permissions,
)
from .report import LintIssue, LintPerformance, LintResult
from .rules import LintConfig
from .schema import Workflow, WorkflowNode

logger = logging.getLogger(__name__)

ConfigInput = Union[LintConfig, Mapping[str, Any]]


def _workflow_id(workflow: Any) -> str:
    if isinstance(workflow, Workflow):
        return workflow.id or "unknown"
    if isinstance(workflow, Mapping):
        value = workflow.get("id")
        return value if isinstance(value, str) and value else "unknown"
    return "unknown"


class AutoFlowValidator:
    """Validates workflows against a rule configuration.

    One instance numbers its issues sequentially; reuse it sequentially, not
    from several threads at once.
    """

    def __init__(self, config: Optional[ConfigInput] = None):
        self.config = LintConfig.merged(config)
        self._issues = IssueFactory()

    def validate_workflow(self, workflow: WorkflowInput) -> LintResult:
        """Run the full pipeline. Never raises; internal failures become one SYS-5510 issue."""
        started = time.perf_counter()
        rules_executed = 0

        try:
            workflow = coerce_model(Workflow, workflow)
            issues: list[LintIssue] = []
            permissions: list[str] = []
            annotated: Optional[Workflow] = None

            issues.extend(validate_structure(workflow, self.config, self._issues))
            rules_executed += 4

            if workflow.nodes:
                issues.extend(validate_graph_integrity(workflow.nodes, self.config, self._issues))
                rules_executed += 5

            if workflow.nodes is not None:
                issues.extend(validate_node_list(workflow.nodes, self.config, self._issues))
                rules_executed += len(workflow.nodes) * 3

            if workflow.variables is not None:
                issues.extend(validate_variables(workflow.variables, self.config, self._issues))
                rules_executed += len(workflow.variables) * 2

            issues.extend(validate_performance(workflow, self.config, self._issues))
            rules_executed += 3

            if workflow.trigger is not None and workflow.nodes is not None:
                annotated, permission_issues = infer_permissions(workflow, self.config, self._issues)
                issues.extend(permission_issues)
                permissions = annotated.permissions
                rules_executed += 1

            filtered = self.filter_issues(issues)
            result = LintResult.from_issues(
                workflow.id or "unknown",
                filtered,
                permissions=permissions,
                workflow=annotated,
                performance=LintPerformance(
                    analysis_time_ms=(time.perf_counter() - started) * 1000,
                    rules_executed=rules_executed,
                ),
            )
        except Exception as e:
            logger.exception("Validation of workflow %r failed", _workflow_id(workflow))
            return LintResult.from_issues(
                _workflow_id(workflow),
                [self._issues.system_error(e)],
                performance=LintPerformance(
                    analysis_time_ms=(time.perf_counter() - started) * 1000,
                    rules_executed=rules_executed,
                ),
            )

        logger.debug(
            "Validated workflow %s: %d issue(s), valid=%s, %.2fms",
            result.workflow_id,
            result.summary.total,
            result.is_valid,
            result.performance.analysis_time_ms,
        )
        return result

    def validate_nodes(self, nodes: list[Union[WorkflowNode, Mapping[str, Any]]]) -> list[LintIssue]:
        """Graph and node checks for a bare node list; ``type`` defaults to ``action``."""
        workflow_nodes = [coerce_model(WorkflowNode, node) for node in nodes]

        issues: list[LintIssue] = []
        issues.extend(validate_graph_integrity(workflow_nodes, self.config, self._issues))
        issues.extend(validate_node_list(workflow_nodes, self.config, self._issues))
        return self.filter_issues(issues)

    def detect_required_permissions(self, workflow: WorkflowInput) -> list[str]:
        return detect_required_permissions(workflow)

    def get_permission_breakdown(self, workflow: WorkflowInput) -> PermissionBreakdown:
        return get_permission_breakdown(workflow)

    def filter_issues(self, issues: list[LintIssue]) -> list[LintIssue]:
        """Drop issues whose rule is disabled in this validator's configuration."""
        return [issue for issue in issues if self.config.is_rule_enabled(issue.rule_id)]

    def error_result(self, workflow: Any, error: BaseException) -> LintResult:
        return LintResult.from_issues(_workflow_id(workflow), [self._issues.system_error(error)])


def validate(workflow: WorkflowInput, config: Optional[ConfigInput] = None) -> LintResult:
    """Validate one workflow with a throwaway validator."""
    try:
        validator = AutoFlowValidator(config)
    except Exception as e:
        logger.exception("Invalid lint configuration")
        return AutoFlowValidator().error_result(workflow, e)
    return validator.validate_workflow(workflow)
