"""Port interface for the identity provider.

Credential records live outside the document store and fail independently
of it. There is no transactional bridge between the two.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class IdentityGatewayPort(Protocol):
    """Port for deleting identity-provider credentials."""

    def delete_credential(self, owner_id: str) -> None:
        """Delete the credential keyed by ``owner_id``.

        Raises:
            Exception: Any failure. Callers do not retry.
        """
        ...
