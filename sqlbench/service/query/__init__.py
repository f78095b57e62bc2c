from .query_source import QuerySource

__all__ = ["QuerySource"]
