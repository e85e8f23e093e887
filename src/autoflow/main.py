import logging

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from .config import get_settings
from .models import (
    ComparePacksRequest,
    EditorValidateRequest,
    EditorValidateResponse,
    HealthResponse,
    PackPermissionsRequest,
    PackPermissionsResponse,
    ValidateWorkflowRequest,
    WorkflowPermissionsRequest,
    WorkflowPermissionsResponse,
)
from .workflow.editor import deployment_summary, workflow_from_editor_graph
from .workflow.errors import WorkflowParseError
from .workflow.pack import PackComparison, PackPermissionAggregator
from .workflow.permissions import describe_permission
from .workflow.report import LintResult
from .workflow.validator import AutoFlowValidator, validate

load_dotenv()

settings = get_settings()
logging.basicConfig(level=settings.log_level.upper())
logger = logging.getLogger(__name__)

app = FastAPI(
    title="AutoFlow API",
    description="Validates automation workflows and infers the permissions they need",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Only used for read-only permission queries; full lint runs get their own validator.
permission_validator = AutoFlowValidator()
pack_aggregator = PackPermissionAggregator(permission_validator)


@app.get("/api/health", response_model=HealthResponse)
def health():
    return HealthResponse(status="ok")


@app.post("/api/workflows/validate", response_model=LintResult)
def validate_workflow_endpoint(request: ValidateWorkflowRequest):
    """Full lint run. Content problems come back as issues, never as HTTP errors."""
    return validate(request.workflow, request.config)


@app.post("/api/workflows/permissions", response_model=WorkflowPermissionsResponse)
def workflow_permissions(request: WorkflowPermissionsRequest):
    try:
        breakdown = permission_validator.get_permission_breakdown(request.workflow)
    except WorkflowParseError as e:
        raise HTTPException(status_code=422, detail=str(e))

    return WorkflowPermissionsResponse(
        permissions=breakdown.total_permissions,
        breakdown=breakdown,
        details=[describe_permission(p) for p in breakdown.total_permissions],
    )


@app.post("/api/editor/validate", response_model=EditorValidateResponse)
def validate_editor_graph(request: EditorValidateRequest):
    try:
        workflow = workflow_from_editor_graph(request.nodes, request.edges)
    except WorkflowParseError as e:
        raise HTTPException(status_code=422, detail=str(e))

    result = validate(workflow, request.config)
    return EditorValidateResponse(
        result=result,
        deployment=deployment_summary(result, node_count=len(request.nodes)),
    )


@app.post("/api/packs/permissions", response_model=PackPermissionsResponse)
def pack_permissions(request: PackPermissionsRequest):
    try:
        summary = pack_aggregator.generate_permission_summary(request.pack)
        weight = pack_aggregator.calculate_pack_permission_weight(request.pack)
        dangerous = pack_aggregator.get_dangerous_permissions(request.pack)
    except WorkflowParseError as e:
        raise HTTPException(status_code=422, detail=str(e))

    logger.info(
        "Pack %s: %d automation(s), %d permission(s), weight %d",
        request.pack.get("id"),
        summary.automation_count,
        summary.permission_count,
        weight,
    )
    return PackPermissionsResponse(
        summary=summary,
        weight=weight,
        dangerous_permissions=dangerous,
    )


@app.post("/api/packs/compare", response_model=PackComparison)
def compare_packs(request: ComparePacksRequest):
    try:
        return pack_aggregator.compare_pack_permissions(request.pack_a, request.pack_b)
    except WorkflowParseError as e:
        raise HTTPException(status_code=422, detail=str(e))
