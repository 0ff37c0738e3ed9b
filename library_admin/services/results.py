"""
Operation results returned by the service layer.

Services never let store or lookup exceptions escape to the routes. They
return an OperationResult, and the route hands failures to a single mapping
step (library_admin.views.respond_to_failure).
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional


class FailureKind(Enum):
    """Classification of a failed operation."""
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    STORE = "store"
    UNCLASSIFIED = "unclassified"


@dataclass
class OperationResult:
    ok: bool
    value: Any = None
    kind: Optional[FailureKind] = None
    message: Optional[str] = None
    errors: Dict[str, list] = field(default_factory=dict)
    context: Dict[str, Any] = field(default_factory=dict)
    exception: Optional[BaseException] = None

    @classmethod
    def success(cls, value=None, message=None):
        return cls(ok=True, value=value, message=message)

    @classmethod
    def failure(cls, kind, message, context=None, exception=None, errors=None):
        return cls(
            ok=False,
            kind=kind,
            message=message,
            context=context or {},
            exception=exception,
            errors=errors or {},
        )

    def __bool__(self):
        return self.ok
