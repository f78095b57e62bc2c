from .qpml import export_plan, write_qpml

__all__ = ["export_plan", "write_qpml"]
