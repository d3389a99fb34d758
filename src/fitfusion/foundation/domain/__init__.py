"""FitFusion Foundation Domain -- pure Python domain primitives.

Exceptions, owner value objects, schema constants, and the port interfaces
through which the cascade engine reaches the document store and the
identity provider.
"""

from fitfusion.foundation.domain.exceptions import (
    AuthenticationError,
    AuthorizationError,
    CascadeError,
    DomainError,
    ExecutorError,
    IdentityDeletionFailed,
    PermissionDeniedError,
    PlannerError,
    ValidationError,
)
from fitfusion.foundation.domain.owner_value_objects import DenialReason, Role
from fitfusion.foundation.domain.ports import (
    DELETE_FIELD,
    Document,
    IdentityGatewayPort,
    StoreGatewayPort,
    WriteKind,
    WriteOperation,
)

__all__ = [
    "DELETE_FIELD",
    "AuthenticationError",
    "AuthorizationError",
    "CascadeError",
    "DenialReason",
    "Document",
    "DomainError",
    "ExecutorError",
    "IdentityDeletionFailed",
    "IdentityGatewayPort",
    "PermissionDeniedError",
    "PlannerError",
    "Role",
    "StoreGatewayPort",
    "ValidationError",
    "WriteKind",
    "WriteOperation",
]
