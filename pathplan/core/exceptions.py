"""PathPlan exceptions"""


class PathPlanError(Exception):
    """Base class for package errors"""


class StorageError(PathPlanError):
    """The persistence layer failed to commit or read a change"""

    def __init__(self, operation: str, message: str):
        self.operation = operation
        super().__init__(f"{operation} failed: {message}")
