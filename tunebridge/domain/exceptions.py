"""Fatal errors for a migration run.

Anything raised from here aborts the run before destination files are
touched. Match and playlist problems are not exceptions: they are
diagnostics and never stop the pipeline.

Each exception carries an ``exit_code`` so the CLI can map it to a
process status without inspecting the type.
"""


class MigrationError(Exception):
    """Base exception for tunebridge.

    Attributes:
        exit_code: Process exit status for this failure.
    """

    exit_code: int = 1

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidRecordError(MigrationError):
    """A library record is unusable.

    Raised for records missing their identifier, duplicate identifiers and
    unparseable numeric fields.
    """


class LibraryFormatError(MigrationError):
    """A library file is not in the expected format or version."""


class PreconditionError(MigrationError):
    """The run's preconditions are not met.

    Raised when reconciliation is requested without a backup of the
    destination files.
    """


class BackupExistsError(PreconditionError):
    """A backup from a previous run is still present.

    Overwriting it could destroy the only copy of the pre-migration state.
    """
