from __future__ import annotations

from typing import Optional


class ProjectionDomainError(ValueError):
    """Raised when a projection cannot run on the given inputs.

    ``field`` names the offending input (e.g. ``purchase_price``) so callers
    can re-prompt for it.
    """

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.field = field
