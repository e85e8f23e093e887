"""Structural, node, variable and performance checks.

Each check returns the issues it found; none of them raise for content
problems. Checks skip work for disabled rules, and the validator filters the
combined list again afterwards.
"""

from __future__ import annotations

import re

from .catalog import IssueFactory
from .report import LintIssue, LintLocation
from .rules import LintConfig, RuleId
from .schema import VariableDefinition, Workflow, WorkflowNode

REQUIRED_FIELDS = ("id", "name", "version", "trigger")

SEMVER_PATTERN = re.compile(
    r"^(0|[1-9][0-9]*)\.(0|[1-9][0-9]*)\.(0|[1-9][0-9]*)"
    r"(?:-[0-9A-Za-z.-]+)?(?:\+[0-9A-Za-z.-]+)?$"
)

LARGE_WORKFLOW_NODE_COUNT = 50


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validate_structure(
    workflow: Workflow,
    config: LintConfig,
    factory: IssueFactory,
) -> list[LintIssue]:
    """Required fields and version format."""
    issues: list[LintIssue] = []

    if config.is_rule_enabled(RuleId.SCHEMA_REQUIRED_FIELDS):
        for field_name in REQUIRED_FIELDS:
            if not getattr(workflow, field_name):
                issues.append(
                    factory.create(
                        RuleId.SCHEMA_REQUIRED_FIELDS,
                        5511,
                        message=f"Required field '{field_name}' is missing",
                        location=LintLocation(path=field_name),
                    )
                )

    if workflow.version and config.is_rule_enabled(RuleId.SCHEMA_SEMVER):
        if not SEMVER_PATTERN.fullmatch(workflow.version):
            issues.append(
                factory.create(
                    RuleId.SCHEMA_SEMVER,
                    5511,
                    message="Version must be valid SemVer (e.g., 1.2.3)",
                    location=LintLocation(path="version"),
                )
            )

    return issues


def validate_node_list(
    nodes: list[WorkflowNode],
    config: LintConfig,
    factory: IssueFactory,
) -> list[LintIssue]:
    """Per-node action type and rate-limit weight checks."""
    issues: list[LintIssue] = []
    max_weight = config.settings.max_node_weight

    for node in nodes:
        if node.type == "action" and config.is_rule_enabled(RuleId.ACTION_MISSING_PARAMS):
            if not node.action:
                issues.append(
                    factory.create(
                        RuleId.ACTION_MISSING_PARAMS,
                        3311,
                        message=f"Action node '{node.id}' is missing action type",
                        location=LintLocation(node_id=node.id),
                    )
                )

        if node.type == "action" and config.is_rule_enabled(RuleId.PERF_MISSING_WEIGHT):
            if not _is_number(node.weight):
                issues.append(
                    factory.create(
                        RuleId.PERF_MISSING_WEIGHT,
                        4121,
                        message=f"Action node '{node.id}' is missing rate limit weight",
                        location=LintLocation(node_id=node.id),
                        suggestions=["Add weight property (typical values: 5-30)"],
                    )
                )

        if _is_number(node.weight) and config.is_rule_enabled(RuleId.PERF_HIGH_WEIGHT):
            if node.weight > max_weight:
                issues.append(
                    factory.create(
                        RuleId.PERF_HIGH_WEIGHT,
                        4120,
                        message=(
                            f"Node '{node.id}' weight ({node.weight:g}) exceeds "
                            f"recommended maximum ({max_weight:g})"
                        ),
                        location=LintLocation(node_id=node.id),
                    )
                )

    return issues


def validate_variables(
    variables: list[VariableDefinition],
    config: LintConfig,
    factory: IssueFactory,
) -> list[LintIssue]:
    issues: list[LintIssue] = []

    if not config.is_rule_enabled(RuleId.VARIABLE_NAMING_CONVENTION):
        return issues

    # A malformed pattern raises re.error here; the validator reports it as a system issue.
    pattern = re.compile(config.settings.variable_name_pattern)

    for variable in variables:
        if not pattern.search(variable.name):
            issues.append(
                factory.create(
                    RuleId.VARIABLE_NAMING_CONVENTION,
                    3312,
                    message=f"Variable name '{variable.name}' doesn't follow naming convention",
                    location=LintLocation(path=f"variables.{variable.name}"),
                    suggestions=["Use camelCase or snake_case naming"],
                )
            )

    return issues


def validate_performance(
    workflow: Workflow,
    config: LintConfig,
    factory: IssueFactory,
) -> list[LintIssue]:
    """Workflow size and aggregate rate-limit weight."""
    issues: list[LintIssue] = []

    if workflow.nodes is None:
        return issues

    node_count = len(workflow.nodes)
    if config.is_rule_enabled(RuleId.PERF_LARGE_WORKFLOW) and node_count > LARGE_WORKFLOW_NODE_COUNT:
        issues.append(
            factory.create(
                RuleId.PERF_LARGE_WORKFLOW,
                4120,
                message=f"Large workflow ({node_count} nodes) may be difficult to maintain",
                location=LintLocation(path="nodes"),
            )
        )

    if config.is_rule_enabled(RuleId.PERF_HIGH_WEIGHT):
        total_weight = sum(node.weight for node in workflow.nodes if _is_number(node.weight))
        threshold = config.settings.workflow_weight_threshold
        if total_weight > threshold:
            issues.append(
                factory.create(
                    RuleId.PERF_HIGH_WEIGHT,
                    4120,
                    message=(
                        f"Total workflow weight ({total_weight:g}) approaches rate limit "
                        f"threshold ({threshold:g})"
                    ),
                    location=LintLocation(path="nodes"),
                )
            )

    return issues
