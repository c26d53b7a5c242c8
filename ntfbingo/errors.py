"""Error taxonomy and process exit codes for ntf-bingo."""

from enum import IntEnum


class ExitCode(IntEnum):
    """Process exit codes. Values match the codes the scan tool has always used."""
    OK = 0
    UNKNOWN_ERROR = 1
    UNCAUGHT_ERROR = 2
    FAILED_READING_MOVIES_JSON = 3
    STILLS_DIR_DOESNT_EXIST = 4
    UNABLE_TO_WRITE_MOVIE_DB = 5


class NtfBingoError(Exception):
    """Base error. Carries the exit code a CLI should use when it is fatal."""
    exit_code = ExitCode.UNKNOWN_ERROR


class ValidationError(NtfBingoError, ValueError):
    """Bad arguments to card generation or a malformed movie entry."""
    pass


class DatabaseReadError(NtfBingoError):
    """movies.json could not be read or parsed."""
    exit_code = ExitCode.FAILED_READING_MOVIES_JSON


class StillsDirError(NtfBingoError):
    """The stills directory is missing or cannot be listed."""
    exit_code = ExitCode.STILLS_DIR_DOESNT_EXIST


class DatabaseWriteError(NtfBingoError):
    """movies.json (or its backup) could not be written."""
    exit_code = ExitCode.UNABLE_TO_WRITE_MOVIE_DB


class TitleLookupError(LookupError):
    """Remote title search failed or returned nothing usable.

    Recoverable: the edit session falls back to the manual decision prompt.
    """
    pass


class Interrupted(NtfBingoError):
    """Raised from a signal handler so the scan workflow can finalize."""

    def __init__(self, signum: int):
        super().__init__(f"Interrupted by signal {signum}")
        self.signum = signum
