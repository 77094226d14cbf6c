"""Exceptions raised by the SQL builders and entry points."""


class PolySQLError(Exception):
    """Base exception for polysql errors."""

    pass


class InvalidIdentifierError(PolySQLError):
    """Raised when a table or column name is not a safe identifier."""

    pass


class InvalidColumnTypeError(PolySQLError):
    """Raised when a column type is not one of the portable types."""

    pass


class SchemaInvariantError(PolySQLError):
    """Raised when a table or index definition breaks a structural rule."""

    pass


class UnsafeMutationError(PolySQLError):
    """Raised when a mutation would touch every row or write nothing."""

    pass


class ExecutionError(PolySQLError):
    """Raised when the database handle reports a failure."""

    def __init__(self, operation: str, target: str, error: BaseException) -> None:
        """Initialize execution error.

        Args:
            operation: Operation being run (e.g. "create table")
            target: Table or index the operation addressed
            error: Original error reported by the handle
        """
        super().__init__(f"{operation} {target!r}: {error}")
        self.operation = operation
        self.target = target
        self.error = error
