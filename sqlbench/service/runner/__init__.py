from .query_runner import QueryRunner

__all__ = ["QueryRunner"]
