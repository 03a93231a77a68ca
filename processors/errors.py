"""
Exceptions raised by the grade processors.
"""


class GradeCalculatorError(Exception):
    """Base class for grade calculator errors."""
    pass


class InvalidSchemaError(GradeCalculatorError):
    """Column schema cannot be used (e.g. it has no columns at all)."""
    pass


class NoGradeColumnsError(InvalidSchemaError):
    """Average requested but the schema defines no grade columns."""

    def __init__(self, message: str = "Cannot compute an average without grade columns"):
        super().__init__(message)


class ColumnNotFoundError(GradeCalculatorError, KeyError):
    """No column with the requested id exists in the schema."""

    def __init__(self, column_id: str):
        self.column_id = column_id
        super().__init__(f"Column not found: {column_id}")

    def __str__(self):
        return self.args[0]
