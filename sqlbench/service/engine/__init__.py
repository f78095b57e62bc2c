from .engine import Engine, LogicalPlan, PlanNode, ResultHandle

__all__ = ["Engine", "LogicalPlan", "PlanNode", "ResultHandle"]
