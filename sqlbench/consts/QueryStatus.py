from enum import Enum


class QueryStatus(Enum):
    OK = "ok"
    FAILED = "failed"
