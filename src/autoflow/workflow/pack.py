"""Permission aggregation across the workflows of a pack."""

from __future__ import annotations

from collections import Counter
from typing import Any, Union

from pydantic import BaseModel

from .errors import coerce_model
from .permissions import SEVERITY_WEIGHTS, get_permission_severity
from .schema import Pack, Workflow
from .validator import AutoFlowValidator

PackInput = Union[Pack, dict[str, Any]]


class PermissionSummary(BaseModel):
    """Shared vs unique permission breakdown for a pack."""

    total_permissions: list[str]
    permissions_by_automation: dict[str, list[str]]  # one entry per automation, in pack order
    shared_permissions: list[str]  # needed by 2+ automations
    unique_permissions: dict[str, list[str]]  # automation id -> needed only by it
    automation_count: int
    permission_count: int


class PackComparison(BaseModel):
    added_permissions: list[str]  # in B, not in A
    removed_permissions: list[str]  # in A, not in B
    common_permissions: list[str]
    pack_a_total: list[str]
    pack_b_total: list[str]


class PackPermissionAggregator:
    """Answers "what does installing this pack grant?" for a whole pack of workflows."""

    def __init__(self, validator: AutoFlowValidator):
        self.validator = validator

    @staticmethod
    def _automations(pack: PackInput) -> list[Workflow]:
        return coerce_model(Pack, pack).automations or []

    @staticmethod
    def _automation_key(automation: Workflow, index: int, seen: dict[str, list[str]]) -> str:
        """Automation id, suffixed with its index when missing or already taken."""
        if automation.id and automation.id not in seen:
            return automation.id
        return f"{automation.id or 'automation'}-{index}"

    def aggregate_pack_permissions(self, pack: PackInput) -> list[str]:
        """Sorted union of the permissions every automation in the pack needs."""
        permissions: set[str] = set()
        for automation in self._automations(pack):
            permissions.update(self.validator.detect_required_permissions(automation))
        return sorted(permissions)

    def generate_permission_summary(self, pack: PackInput) -> PermissionSummary:
        automations = self._automations(pack)
        permissions_by_automation: dict[str, list[str]] = {}
        usage: Counter[str] = Counter()

        for index, automation in enumerate(automations):
            perms = self.validator.detect_required_permissions(automation)
            key = self._automation_key(automation, index, permissions_by_automation)
            permissions_by_automation[key] = perms
            usage.update(perms)

        shared = sorted(perm for perm, count in usage.items() if count > 1)
        unique = {
            automation_id: [perm for perm in perms if usage[perm] == 1]
            for automation_id, perms in permissions_by_automation.items()
        }
        total = sorted(usage)

        return PermissionSummary(
            total_permissions=total,
            permissions_by_automation=permissions_by_automation,
            shared_permissions=shared,
            unique_permissions=unique,
            automation_count=len(automations),
            permission_count=len(total),
        )

    def compare_pack_permissions(self, pack_a: PackInput, pack_b: PackInput) -> PackComparison:
        perms_a = set(self.aggregate_pack_permissions(pack_a))
        perms_b = set(self.aggregate_pack_permissions(pack_b))

        return PackComparison(
            added_permissions=sorted(perms_b - perms_a),
            removed_permissions=sorted(perms_a - perms_b),
            common_permissions=sorted(perms_a & perms_b),
            pack_a_total=sorted(perms_a),
            pack_b_total=sorted(perms_b),
        )

    def calculate_pack_permission_weight(self, pack: PackInput) -> int:
        """Severity-weighted score: dangerous 10, moderate 3, safe 1, each permission once."""
        return sum(
            SEVERITY_WEIGHTS[get_permission_severity(perm)]
            for perm in self.aggregate_pack_permissions(pack)
        )

    def get_dangerous_permissions(self, pack: PackInput) -> list[str]:
        return [
            perm
            for perm in self.aggregate_pack_permissions(pack)
            if get_permission_severity(perm) == "dangerous"
        ]
