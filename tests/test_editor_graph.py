import sys
import unittest
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1] / "src"))

from autoflow.workflow.editor import (
    deployment_summary,
    group_issues,
    highest_severity,
    issues_for_edge,
    issues_for_node,
    workflow_from_editor_graph,
)
from autoflow.workflow.errors import WorkflowParseError
from autoflow.workflow.schema import WorkflowTrigger
from autoflow.workflow.validator import validate

NODES = [
    {"id": "t", "data": {"type": "trigger"}},
    {"id": "greet", "data": {"action": "send_message", "params": {"message": "hi"}, "weight": 5}},
    {"id": "react", "data": {"type": "action", "action": "add_reaction", "weight": 2}},
]
EDGES = [
    {"id": "e1", "source": "t", "target": "greet"},
    {"id": "e2", "source": "t", "target": "react"},
]


class EditorConversionTests(unittest.TestCase):
    def test_edges_become_connections(self):
        workflow = workflow_from_editor_graph(NODES, EDGES)

        self.assertEqual(workflow.id, "temp-workflow")
        self.assertEqual(workflow.version, "1.0.0")
        self.assertEqual(workflow.trigger.event, "messageCreate")
        self.assertEqual([n.connections for n in workflow.nodes], [["greet", "react"], [], []])
        self.assertEqual([n.type for n in workflow.nodes], ["trigger", "action", "action"])
        self.assertEqual(workflow.nodes[1].params, {"message": "hi"})

    def test_custom_trigger_and_id(self):
        workflow = workflow_from_editor_graph(
            NODES,
            EDGES,
            workflow_id="automation-draft",
            trigger=WorkflowTrigger(type="event", event="user_join"),
        )

        self.assertEqual(workflow.id, "automation-draft")
        self.assertEqual(workflow.trigger.event, "user_join")

    def test_unknown_node_type_is_kept(self):
        workflow = workflow_from_editor_graph(
            [{"id": "t", "data": {"type": "trigger"}}, {"id": "x", "data": {"type": "teleport"}}],
            [{"source": "t", "target": "x"}],
        )

        self.assertEqual(workflow.nodes[1].type, "teleport")
        self.assertEqual(validate(workflow).issues, [])

    def test_non_numeric_editor_weight_is_reported(self):
        nodes = [
            {"id": "t", "data": {"type": "trigger"}},
            {"id": "a", "data": {"action": "send_message", "weight": "5"}},
        ]

        result = validate(workflow_from_editor_graph(nodes, [{"source": "t", "target": "a"}]))

        self.assertEqual([i.rule_id for i in issues_for_node(result, "a")], ["perf/missing-weight"])

    def test_edge_without_target_raises(self):
        with self.assertRaises(WorkflowParseError):
            workflow_from_editor_graph(NODES, [{"id": "e1", "source": "t"}])


class DeploymentSummaryTests(unittest.TestCase):
    def test_clean_graph_is_deployable(self):
        result = validate(workflow_from_editor_graph(NODES, EDGES))

        summary = deployment_summary(result, node_count=len(NODES))

        self.assertTrue(summary.can_deploy)
        self.assertEqual(summary.message, "Workflow is valid and ready to deploy")
        self.assertEqual(result.permissions, ["ADD_REACTIONS", "SEND_MESSAGES", "VIEW_CHANNEL"])

    def test_errors_block_deployment(self):
        nodes = [{"id": "t", "data": {"type": "trigger"}}, {"id": "blank", "data": {}}]
        result = validate(workflow_from_editor_graph(nodes, [{"source": "t", "target": "blank"}]))

        summary = deployment_summary(result)

        self.assertFalse(summary.can_deploy)
        self.assertFalse(summary.is_valid)
        self.assertEqual(summary.message, "1 error must be fixed before deployment")
        self.assertEqual(summary.warnings, 1)

    def test_warnings_allow_deployment(self):
        nodes = [
            {"id": "t", "data": {"type": "trigger"}},
            {"id": "a", "data": {"action": "send_message"}},
            {"id": "b", "data": {"action": "send_message"}},
        ]
        edges = [{"source": "t", "target": "a"}, {"source": "t", "target": "b"}]

        summary = deployment_summary(validate(workflow_from_editor_graph(nodes, edges)))

        self.assertTrue(summary.can_deploy)
        self.assertEqual(summary.message, "2 warnings - deployment allowed")

    def test_no_result(self):
        self.assertEqual(deployment_summary(None).message, "No workflow to validate")
        self.assertEqual(deployment_summary(None, node_count=3).message, "Validating...")
        self.assertFalse(deployment_summary(None).can_deploy)


class IssueProjectionTests(unittest.TestCase):
    def setUp(self):
        nodes = [
            {"id": "t", "data": {"type": "trigger"}},
            {"id": "blank", "data": {}},
            {"id": "orphan", "data": {"type": "condition"}},
        ]
        edges = [
            {"id": "e1", "source": "t", "target": "blank"},
            {"id": "e2", "source": "orphan", "target": "orphan"},
        ]
        self.result = validate(workflow_from_editor_graph(nodes, edges))

    def test_issues_for_node(self):
        rules = [i.rule_id for i in issues_for_node(self.result, "blank")]

        self.assertEqual(rules, ["action/missing-params", "perf/missing-weight"])
        self.assertEqual(issues_for_node(self.result, "t"), [])
        self.assertEqual(issues_for_node(None, "blank"), [])
        self.assertEqual(issues_for_edge(self.result, "e1"), [])

    def test_highest_severity(self):
        self.assertEqual(highest_severity(self.result.issues), "error")
        self.assertEqual(highest_severity(issues_for_node(self.result, "orphan")), "warn")
        self.assertIsNone(highest_severity([]))

    def test_group_issues(self):
        grouped = group_issues(self.result.issues)

        self.assertEqual(len(grouped.error), 1)
        self.assertEqual(len(grouped.warning), 2)
        self.assertEqual(grouped.critical, [])
        self.assertEqual(sorted(grouped.by_node), ["blank", "orphan"])


if __name__ == "__main__":
    unittest.main()
