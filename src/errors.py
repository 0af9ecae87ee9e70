from __future__ import annotations
from typing import Optional


class BackendError(OSError):
    """Raised when an input backend cannot read or inject events.

    Always fatal: the pointer agent cannot reconcile against a surface it can
    no longer read, so nothing catches this short of ``cli.main``.
    """

    def __init__(
        self, operation: str, backend: str, cause: Optional[BaseException] = None
    ):
        self.operation = operation
        self.backend = backend
        self.cause = cause
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"{operation} failed on {backend}{detail}")
