from enum import Enum


class DriverState(Enum):
    INITIALIZING = "initializing"
    DATASET_BOUND = "dataset_bound"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"
