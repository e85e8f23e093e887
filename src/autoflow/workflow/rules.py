"""Lint rule identifiers, enablement levels and tunable settings."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Literal, Mapping, Optional, Union, get_args

from pydantic import BaseModel, Field

from ..config import get_settings

logger = logging.getLogger(__name__)

RuleLevel = Literal["off", "warn", "error"]


class RuleId(str, Enum):
    """Every rule the validator knows about."""

    SCHEMA_REQUIRED_FIELDS = "schema/required-fields"
    SCHEMA_FIELD_TYPES = "schema/field-types"
    SCHEMA_SEMVER = "schema/semver"
    SCHEMA_ENUM_VALUES = "schema/enum-values"

    GRAPH_MISSING_NODES = "graph/missing-nodes"
    GRAPH_ENTRY_POINTS = "graph/entry-points"
    GRAPH_UNREACHABLE_NODES = "graph/unreachable-nodes"
    GRAPH_INFINITE_LOOPS = "graph/infinite-loops"
    GRAPH_DEAD_ENDS = "graph/dead-ends"

    VARIABLE_UNDEFINED_REFERENCE = "variable/undefined-reference"
    VARIABLE_INVALID_INTERPOLATION = "variable/invalid-interpolation"
    VARIABLE_SCOPE_MISMATCH = "variable/scope-mismatch"
    VARIABLE_NAMING_CONVENTION = "variable/naming-convention"

    TRIGGER_UNKNOWN_EVENT = "trigger/unknown-event"
    TRIGGER_INVALID_COMMAND = "trigger/invalid-command"
    ACTION_UNKNOWN_TYPE = "action/unknown-type"
    ACTION_MISSING_PARAMS = "action/missing-params"

    SECURITY_MISSING_PERMISSIONS = "security/missing-permissions"
    SECURITY_EXCESSIVE_PERMISSIONS = "security/excessive-permissions"
    SECURITY_HARDCODED_SECRETS = "security/hardcoded-secrets"
    SECURITY_PII_EXPOSURE = "security/pii-exposure"

    PERF_MISSING_WEIGHT = "perf/missing-weight"
    PERF_HIGH_WEIGHT = "perf/high-weight"
    PERF_DEEP_NESTING = "perf/deep-nesting"
    PERF_LARGE_WORKFLOW = "perf/large-workflow"

    STYLE_NAMING_CONVENTION = "style/naming-convention"
    STYLE_DESCRIPTION_REQUIRED = "style/description-required"
    STYLE_ICON_COLOR_CONSISTENCY = "style/icon-color-consistency"
    STYLE_DEPRECATED_FEATURES = "style/deprecated-features"

    # Only used by the synthetic issue for internal failures; never configurable.
    SYSTEM_PARSE_ERROR = "system/parse-error"


DEFAULT_RULES: dict[RuleId, RuleLevel] = {
    RuleId.SCHEMA_REQUIRED_FIELDS: "error",
    RuleId.SCHEMA_FIELD_TYPES: "error",
    RuleId.SCHEMA_SEMVER: "error",
    RuleId.SCHEMA_ENUM_VALUES: "error",
    RuleId.GRAPH_MISSING_NODES: "error",
    RuleId.GRAPH_ENTRY_POINTS: "error",
    RuleId.GRAPH_UNREACHABLE_NODES: "warn",
    RuleId.GRAPH_INFINITE_LOOPS: "error",
    RuleId.GRAPH_DEAD_ENDS: "warn",
    RuleId.VARIABLE_UNDEFINED_REFERENCE: "error",
    RuleId.VARIABLE_INVALID_INTERPOLATION: "error",
    RuleId.VARIABLE_SCOPE_MISMATCH: "warn",
    RuleId.VARIABLE_NAMING_CONVENTION: "warn",
    RuleId.TRIGGER_UNKNOWN_EVENT: "error",
    RuleId.TRIGGER_INVALID_COMMAND: "error",
    RuleId.ACTION_UNKNOWN_TYPE: "error",
    RuleId.ACTION_MISSING_PARAMS: "error",
    RuleId.SECURITY_MISSING_PERMISSIONS: "error",
    RuleId.SECURITY_EXCESSIVE_PERMISSIONS: "warn",
    RuleId.SECURITY_HARDCODED_SECRETS: "error",
    RuleId.SECURITY_PII_EXPOSURE: "warn",
    RuleId.PERF_MISSING_WEIGHT: "warn",
    RuleId.PERF_HIGH_WEIGHT: "warn",
    RuleId.PERF_DEEP_NESTING: "warn",
    RuleId.PERF_LARGE_WORKFLOW: "warn",
    RuleId.STYLE_NAMING_CONVENTION: "warn",
    RuleId.STYLE_DESCRIPTION_REQUIRED: "warn",
    RuleId.STYLE_ICON_COLOR_CONSISTENCY: "warn",
    RuleId.STYLE_DEPRECATED_FEATURES: "warn",
}


def _default_settings() -> dict[str, Any]:
    settings = get_settings()
    return {
        "max_workflow_weight": settings.max_workflow_weight,
        "max_node_weight": settings.max_node_weight,
        "warn_threshold": settings.warn_threshold,
        "workflow_id_pattern": settings.workflow_id_pattern,
        "node_id_pattern": settings.node_id_pattern,
        "variable_name_pattern": settings.variable_name_pattern,
    }


class LintSettings(BaseModel):
    """Rate-limit budgets and naming patterns used by the checks."""

    max_workflow_weight: float = 1000
    max_node_weight: float = 100
    warn_threshold: float = 0.8
    workflow_id_pattern: str = r"^automation-[A-Za-z0-9]{15}$"
    node_id_pattern: str = r"^[a-zA-Z][a-zA-Z0-9_-]*$"
    variable_name_pattern: str = r"^[a-zA-Z][a-zA-Z0-9_]*$"

    @classmethod
    def from_environment(cls) -> LintSettings:
        return cls.model_validate(_default_settings())

    @property
    def workflow_weight_threshold(self) -> float:
        return self.max_workflow_weight * self.warn_threshold


class LintConfig(BaseModel):
    """Rule table plus settings for one validator."""

    rules: dict[RuleId, RuleLevel] = Field(default_factory=lambda: dict(DEFAULT_RULES))
    settings: LintSettings = Field(default_factory=LintSettings.from_environment)

    @classmethod
    def merged(
        cls,
        override: Optional[Union[LintConfig, Mapping[str, Any]]] = None,
    ) -> LintConfig:
        """Merge a partial override onto the defaults, entry by entry."""
        base = cls()
        if override is None:
            return base

        if isinstance(override, LintConfig):
            rule_overrides: Mapping[Any, Any] = override.rules
            settings_overrides: Mapping[str, Any] = override.settings.model_dump(exclude_unset=True)
        else:
            rule_overrides = override.get("rules") or {}
            settings_overrides = override.get("settings") or {}

        rules = dict(base.rules)
        for key, level in rule_overrides.items():
            try:
                rule_id = RuleId(key)
            except ValueError:
                logger.warning("Ignoring unknown lint rule %r in config override", key)
                continue
            if rule_id is RuleId.SYSTEM_PARSE_ERROR:
                logger.warning("Rule %r cannot be configured", rule_id.value)
                continue
            if level not in get_args(RuleLevel):
                logger.warning("Ignoring invalid level %r for lint rule %r", level, rule_id.value)
                continue
            rules[rule_id] = level

        settings = LintSettings.model_validate(
            {**base.settings.model_dump(), **dict(settings_overrides)}
        )
        return cls.model_validate({"rules": rules, "settings": settings})

    def rule_level(self, rule_id: Union[RuleId, str]) -> RuleLevel:
        try:
            return self.rules.get(RuleId(rule_id), "off")
        except ValueError:
            return "off"

    def is_rule_enabled(self, rule_id: Union[RuleId, str]) -> bool:
        return self.rule_level(rule_id) != "off"
