from __future__ import annotations
from typing import Any, Dict, Optional


class ValidationError(ValueError):
    """Raised when a caller breaks an engine contract (bad index, impossible tracker state, ...).

    Rejected moves and cuts are NOT reported this way; those come back as result objects.
    """

    def __init__(self, message: str, metadata: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.metadata: Dict[str, Any] = dict(metadata or {})

    def __str__(self) -> str:
        if not self.metadata:
            return self.message
        extra = ", ".join(f"{k}={v!r}" for k, v in self.metadata.items())
        return f"{self.message} ({extra})"
