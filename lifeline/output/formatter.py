"""Output formatting for diagnostics and network snapshots."""

import json
from typing import Literal

from ..network.records import NetworkSnapshot
from ..simulation.flow import FlowReport
from ..validators.base import Severity, ValidationIssue, ValidationResult

_SYMBOLS = {
    Severity.ERROR: "✘",
    Severity.WARNING: "⚠",
    Severity.INFO: "ℹ",
}


def format_validation_result(
    result: ValidationResult,
    format: Literal["text", "json"] = "text",
) -> str:
    """Format diagnostics for output.

    Args:
        result: The diagnostics to format.
        format: Output format ("text" or "json").

    Returns:
        Formatted string representation.
    """
    if format == "json":
        return json.dumps(_result_data(result), indent=2)

    lines: list[str] = []
    for title, issues in (("ERRORS:", result.errors), ("WARNINGS:", result.warnings)):
        lines.append(title)
        lines.extend(f"  {_format_issue_text(i)}" for i in issues)
        if not issues:
            lines.append("  (none)")
        lines.append("")

    errors, warnings = len(result.errors), len(result.warnings)
    if result.is_valid:
        suffix = f" with {warnings} warning(s)" if warnings else ""
        lines.append(f"Check passed{suffix}")
    else:
        lines.append(f"Check failed: {errors} error(s), {warnings} warning(s)")

    return "\n".join(lines)


def format_snapshot(
    snapshot: NetworkSnapshot,
    format: Literal["text", "json"] = "text",
    report: FlowReport | None = None,
) -> str:
    """Format a network snapshot as a status table or JSON.

    Args:
        snapshot: The snapshot to format.
        format: Output format ("text" or "json").
        report: Flow totals of the last tick, if any.
    """
    if format == "json":
        data = snapshot.to_dict()
        if report is not None:
            data["flow"] = {
                "generated": report.generated,
                "delivered": report.delivered,
                "dropped": report.dropped,
                "idle_sources": report.idle_sources,
            }
        return json.dumps(data, indent=2)

    labels = {node.id: node.label for node in snapshot.nodes}
    lines = [f"TICK {snapshot.tick}", "", "NODES:"]
    for node in snapshot.nodes:
        marker = "!" if node.overridden else " "
        lines.append(
            f"  {marker} {node.label:<20} {node.type.value:<11} "
            f"{node.load:>8.1f}/{node.capacity:<8.1f} {node.load_percent:>4}%  "
            f"{node.status.value}"
        )
    if not snapshot.nodes:
        lines.append("  (none)")

    lines.extend(["", "EDGES:"])
    for edge in snapshot.edges:
        marker = "!" if edge.overridden else " "
        route = f"{labels[edge.source]} -> {labels[edge.target]}"
        lines.append(
            f"  {marker} {route:<32} {edge.type.value:<6} "
            f"{edge.flow:>8.1f}/{edge.max_flow:<8.1f} {edge.state.value}"
        )
    if not snapshot.edges:
        lines.append("  (none)")

    if report is not None:
        lines.extend(
            [
                "",
                f"Generated {report.generated:.1f}, delivered {report.delivered:.1f}, "
                f"dropped {report.dropped:.1f}",
            ]
        )

    return "\n".join(lines)


def _format_issue_text(issue: ValidationIssue) -> str:
    location = f"{issue.location} " if issue.location else ""
    return f"{_SYMBOLS[issue.severity]} {issue.code}: {location}{issue.message}"


def _result_data(result: ValidationResult) -> dict:
    return {
        "valid": result.is_valid,
        "error_count": len(result.errors),
        "warning_count": len(result.warnings),
        "issues": [
            {
                "code": issue.code,
                "message": issue.message,
                "severity": issue.severity.value,
                "node": issue.node,
                "edge": issue.edge,
                "details": issue.details,
            }
            for issue in result.issues
        ],
    }
