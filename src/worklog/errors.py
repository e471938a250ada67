# SPDX-License-Identifier: MIT


class WorklogError(Exception):
    """Base class for errors reported to the user."""


class StorageError(WorklogError):
    pass


class StorageReadError(StorageError):
    """The persisted log collection is missing pieces or cannot be parsed."""


class StorageWriteError(StorageError):
    """Writing the log collection failed; the triggering operation did not happen."""


class NotFoundError(WorklogError):
    pass


class ValidationError(WorklogError):
    pass
