"""Domain port interfaces for hexagonal architecture.

Ports define the interfaces the cascade engine uses to reach the document
store and the identity provider. Adapters live in infrastructure.
"""

from fitfusion.foundation.domain.ports.identity_gateway import IdentityGatewayPort
from fitfusion.foundation.domain.ports.store_gateway import (
    DELETE_FIELD,
    Document,
    QueryOperator,
    StoreGatewayPort,
    WriteKind,
    WriteOperation,
)

__all__ = [
    "DELETE_FIELD",
    "Document",
    "IdentityGatewayPort",
    "QueryOperator",
    "StoreGatewayPort",
    "WriteKind",
    "WriteOperation",
]
