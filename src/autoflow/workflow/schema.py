"""Pydantic models defining the automation workflow graph.

Workflows are validated while still being drafted, so kinds and weights are
kept as authored: an unknown node type or a non-numeric weight is something
the checks report, not a reason to reject the payload.
"""

from typing import Any, Literal, Optional

from pydantic import BaseModel

TriggerType = Literal["event", "slash_command", "prefixed_command", "schedule"]
NodeType = Literal["trigger", "action", "condition", "transformer", "end"]


class WorkflowTrigger(BaseModel):
    """The entry condition of a workflow."""

    type: Optional[str] = None  # TriggerType
    event: Optional[str] = None  # "user_join" | "send_message" | etc.
    command: Optional[str] = None
    prefix: Optional[str] = None
    schedule: Optional[str] = None


class WorkflowNode(BaseModel):
    """A single vertex in the workflow graph."""

    id: str = ""  # unassigned in early drafts
    type: Optional[str] = "action"  # NodeType
    action: Optional[str] = None  # "send_message" | "ban_user" | etc.
    params: dict[str, Any] = {}
    connections: list[str] = []  # target node ids, not necessarily declared
    on_error: Optional[str] = None
    weight: Any = None  # rate-limit weight; only int/float count as set
    permissions: list[str] = []  # derived by permission inference


class VariableDefinition(BaseModel):
    """A named workflow-scoped value."""

    name: str = ""
    type: Optional[str] = "custom"  # "guild" | "member" | "custom"
    scope: Optional[str] = "guild"  # "guild" | "global"
    description: Optional[str] = None
    default: Any = None


class Workflow(BaseModel):
    """An automation workflow, possibly still an incomplete draft."""

    id: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    icon: Optional[str] = None
    color: Optional[str] = None
    version: Optional[str] = None
    category: Optional[str] = None
    tags: list[str] = []
    trigger: Optional[WorkflowTrigger] = None
    nodes: Optional[list[WorkflowNode]] = None
    variables: Optional[list[VariableDefinition]] = None
    permissions: list[str] = []  # derived, never hand-authored
    visibility: Optional[str] = None  # "public" | "private" | "unlisted"
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class Pack(BaseModel):
    """A bundle of workflows installed together."""

    id: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    version: str = "1.0.0"
    author: Optional[str] = None
    automations: Optional[list[Workflow]] = None
    tags: list[str] = []
    visibility: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
