"""
QPML (Query Plan Markup Language) export.

A QPML document is engine independent: a `diagram` root node where each node
carries a human readable `title`, a normalized `operator` and its `inputs`.
"""
from pathlib import Path
from typing import Any, Dict

import yaml

from sqlbench.errors import ArtifactWriteError
from sqlbench.service.engine.engine import LogicalPlan, PlanNode

QPML_EXTENSION = "qpml"


def operator_for(name: str) -> str:
    """Map an engine operator name onto the QPML operator vocabulary."""
    upper = name.upper()
    if "SCAN" in upper or upper in ("GET", "READ_PARQUET"):
        return "scan"
    if "JOIN" in upper or upper == "CROSS_PRODUCT":
        return "join"
    if upper == "PROJECTION":
        return "projection"
    if upper == "FILTER":
        return "filter"
    if "AGGREGATE" in upper or "GROUP_BY" in upper:
        return "aggregate"
    if upper in ("ORDER_BY", "TOP_N"):
        return "sort"
    if upper == "LIMIT":
        return "limit"
    return name.lower()


def _node(node: PlanNode) -> Dict[str, Any]:
    operator = operator_for(node.name)
    # scans are titled by the file they read
    title = node.source if operator == "scan" and node.source else node.label()
    return {
        "title": title,
        "operator": operator,
        "inputs": [_node(child) for child in node.children],
    }


def export_plan(plan: LogicalPlan) -> Dict[str, Any]:
    return {"diagram": _node(plan.root)}


def write_qpml(plan: LogicalPlan, path: Path) -> Path:
    try:
        with open(path, "w", encoding="utf-8") as f:
            yaml.safe_dump(export_plan(plan), f, sort_keys=False, default_flow_style=False)
            f.flush()
    except OSError as e:
        raise ArtifactWriteError(path, str(e)) from e
    return path
