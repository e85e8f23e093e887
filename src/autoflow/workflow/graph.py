"""Graph integrity analysis: dangling edges, entry points and reachability."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field

from .catalog import IssueFactory
from .report import LintIssue, LintLocation
from .rules import LintConfig, RuleId
from .schema import WorkflowNode


@dataclass
class WorkflowGraph:
    """Adjacency view of a node list with dangling edges split out."""

    node_ids: list[str]
    forward: dict[str, list[str]]
    reverse: dict[str, list[str]]
    dangling: list[tuple[str, str]] = field(default_factory=list)  # (source, missing target)
    entry_points: list[str] = field(default_factory=list)

    @classmethod
    def build(cls, nodes: list[WorkflowNode]) -> WorkflowGraph:
        declared = {node.id for node in nodes}
        node_ids = [node.id for node in nodes]
        forward: dict[str, list[str]] = {nid: [] for nid in node_ids}
        reverse: dict[str, list[str]] = {nid: [] for nid in node_ids}
        dangling: list[tuple[str, str]] = []

        for node in nodes:
            for target in node.connections:
                if target not in declared:
                    dangling.append((node.id, target))
                    continue
                forward[node.id].append(target)
                reverse[target].append(node.id)

        # Any node without a predecessor counts as an entry point, not only triggers.
        entry_points = [
            node.id for node in nodes if node.type == "trigger" or not reverse[node.id]
        ]

        return cls(
            node_ids=node_ids,
            forward=forward,
            reverse=reverse,
            dangling=dangling,
            entry_points=entry_points,
        )

    def reachable(self) -> set[str]:
        """Node ids reachable from any entry point by following forward edges."""
        visited: set[str] = set()
        for entry in self.entry_points:
            stack: deque[str] = deque([entry])
            while stack:
                nid = stack.pop()
                if nid in visited:
                    continue
                visited.add(nid)
                # Reversed so siblings are visited in declaration order
                stack.extend(t for t in reversed(self.forward[nid]) if t not in visited)
        return visited

    def unreachable(self) -> list[str]:
        reachable = self.reachable()
        return [nid for nid in self.node_ids if nid not in reachable]


def validate_graph_integrity(
    nodes: list[WorkflowNode],
    config: LintConfig,
    factory: IssueFactory,
) -> list[LintIssue]:
    issues: list[LintIssue] = []

    if not nodes:
        return issues

    graph = WorkflowGraph.build(nodes)

    if config.is_rule_enabled(RuleId.GRAPH_MISSING_NODES):
        for source, target in graph.dangling:
            issues.append(
                factory.create(
                    RuleId.GRAPH_MISSING_NODES,
                    3311,
                    message=f"Node '{source}' connects to non-existent node '{target}'",
                    location=LintLocation(node_id=source),
                )
            )

    if config.is_rule_enabled(RuleId.GRAPH_ENTRY_POINTS) and not graph.entry_points:
        issues.append(
            factory.create(
                RuleId.GRAPH_ENTRY_POINTS,
                3311,
                message="Workflow must have at least one entry point (trigger node)",
                location=LintLocation(path="nodes"),
            )
        )

    if config.is_rule_enabled(RuleId.GRAPH_UNREACHABLE_NODES):
        for nid in graph.unreachable():
            issues.append(
                factory.create(
                    RuleId.GRAPH_UNREACHABLE_NODES,
                    3310,
                    message=f"Node '{nid}' is unreachable from entry points",
                    location=LintLocation(node_id=nid),
                )
            )

    return issues
