"""API models for the AutoFlow validation service."""

from typing import Any, Optional

from pydantic import BaseModel, Field

from .workflow.editor import DeploymentSummary
from .workflow.inference import PermissionBreakdown
from .workflow.pack import PermissionSummary
from .workflow.permissions import PermissionInfo
from .workflow.report import LintResult


class ValidateWorkflowRequest(BaseModel):
    """Request to validate a (possibly incomplete) workflow."""

    workflow: dict[str, Any] = Field(
        ..., description="Workflow JSON; unknown keys are ignored"
    )
    config: Optional[dict[str, Any]] = Field(
        None,
        description="Partial lint config: {'rules': {rule_id: level}, 'settings': {...}}",
    )


class WorkflowPermissionsRequest(BaseModel):
    workflow: dict[str, Any] = Field(..., description="Workflow JSON")


class WorkflowPermissionsResponse(BaseModel):
    permissions: list[str]
    breakdown: PermissionBreakdown
    details: list[PermissionInfo]


class EditorValidateRequest(BaseModel):
    """Editor graph to validate, as nodes plus edges."""

    nodes: list[dict[str, Any]] = Field(
        ..., description="Editor nodes: {'id', 'data': {'type', 'action', 'params', 'weight'}}"
    )
    edges: list[dict[str, Any]] = Field(
        [], description="Editor edges: {'id', 'source', 'target'}"
    )
    config: Optional[dict[str, Any]] = None


class EditorValidateResponse(BaseModel):
    result: LintResult
    deployment: DeploymentSummary


class PackPermissionsRequest(BaseModel):
    pack: dict[str, Any] = Field(..., description="Pack JSON with an 'automations' list")


class PackPermissionsResponse(BaseModel):
    summary: PermissionSummary
    weight: int
    dangerous_permissions: list[str]


class ComparePacksRequest(BaseModel):
    pack_a: dict[str, Any] = Field(..., description="Baseline pack (e.g. installed version)")
    pack_b: dict[str, Any] = Field(..., description="Candidate pack (e.g. upgrade)")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    service: str = "AutoFlow Validator"
