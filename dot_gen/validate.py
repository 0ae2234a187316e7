# dot_gen/validate.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Optional, Tuple

from .dot_fmt import is_dot_id
from .model import Diagram

Severity = Literal["error", "warning"]


@dataclass(frozen=True)
class ValidationIssue:
    """Structured validation issue for callers that want more than strings."""

    severity: Severity
    code: str
    message: str
    path: str = ""
    hint: Optional[str] = None


@dataclass(frozen=True)
class ValidateConfig:
    """Validation configuration.

    Every rule is advisory by default: the pipeline renders unknown
    references as-is. `strict` escalates all warnings to errors, which the
    CLI treats as a failed conversion.
    """

    ignore: set[str] = field(default_factory=set)
    escalate: set[str] = field(default_factory=set)
    strict: bool = False


def validate_diagram_issues(
    diagram: Diagram, cfg: Optional[ValidateConfig] = None
) -> list[ValidationIssue]:
    """Return structured validation issues for a parsed diagram."""

    cfg = cfg or ValidateConfig()
    issues: list[ValidationIssue] = []

    def emit(
        severity: Severity,
        code: str,
        message: str,
        path: str = "",
        hint: Optional[str] = None,
    ) -> None:
        if code in cfg.ignore:
            return
        final_severity: Severity = (
            "error"
            if severity == "warning" and (cfg.strict or code in cfg.escalate)
            else severity
        )
        issues.append(
            ValidationIssue(
                severity=final_severity,
                code=code,
                message=message,
                path=path,
                hint=hint,
            )
        )

    entity_ids: dict[str, int] = {}
    for i, entity in enumerate(diagram.entities):
        if entity.id in entity_ids:
            emit(
                "warning",
                "W_ENTITY_DUPLICATE_ID",
                f"duplicate entity id {entity.id!r} (also in entities[{entity_ids[entity.id]}])",
                path=f"/entities/{i}/id",
                hint="Graphviz merges nodes that share an id",
            )
        else:
            entity_ids[entity.id] = i

        if not is_dot_id(entity.id):
            emit(
                "warning",
                "W_ENTITY_ID_NOT_DOT_SAFE",
                f"entity id {entity.id!r} is not a bare DOT identifier; it will be quoted",
                path=f"/entities/{i}/id",
                hint="Use [A-Za-z0-9_] and do not start with a digit",
            )

    for i, rel in enumerate(diagram.relationships):
        if rel.from_entity not in entity_ids:
            emit(
                "warning",
                "W_REL_FROM_UNKNOWN_ENTITY",
                f"relationship.from_entity references unknown entity id {rel.from_entity!r}",
                path=f"/relationships/{i}/from_entity",
            )
        if rel.to_entity not in entity_ids:
            emit(
                "warning",
                "W_REL_TO_UNKNOWN_ENTITY",
                f"relationship.to_entity references unknown entity id {rel.to_entity!r}",
                path=f"/relationships/{i}/to_entity",
            )

    for g, group in enumerate(diagram.same_rank_groups):
        for m, member in enumerate(group):
            if member not in entity_ids:
                emit(
                    "warning",
                    "W_RANK_GROUP_UNKNOWN_ENTITY",
                    f"same_rank_groups[{g}] references unknown entity id {member!r}",
                    path=f"/layout_hints/same_rank_groups/{g}/{m}",
                )

    return issues


def validate_diagram(
    diagram: Diagram, *, strict: bool = False
) -> Tuple[list[str], list[str]]:
    """Return `(errors, warnings)` as message lists."""
    issues = validate_diagram_issues(diagram, ValidateConfig(strict=strict))
    errors = [iss.message for iss in issues if iss.severity == "error"]
    warnings = [iss.message for iss in issues if iss.severity == "warning"]
    return errors, warnings
