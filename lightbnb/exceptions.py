"""
Exceptions raised by the data access layer.

Every store failure is reported as DataAccessError; bad caller input is
reported as InvalidArgumentError before any query is issued.
"""


class LightBnBError(Exception):
    """Base exception for the project"""

    pass


class InvalidArgumentError(LightBnBError, ValueError):
    """A required argument is missing or out of range"""

    pass


class DataAccessError(LightBnBError):
    """A query against the relational store failed"""

    def __init__(self, operation: str, message: str):
        super().__init__(f"{operation} failed: {message}")
        self.operation = operation
