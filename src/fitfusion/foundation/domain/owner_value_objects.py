"""Value objects for owner accounts and their sharing state.

Immutable domain primitives shared by the planner, guard and sweeper.
"""

from __future__ import annotations

from enum import StrEnum


class Role(StrEnum):
    """Account role stored on the owner record.

    Uses StrEnum so values compare equal to the raw strings in documents.
    """

    TRAINER = "trainer"
    CLIENT = "client"


class DenialReason(StrEnum):
    """Reason codes returned by the permission guard.

    Ordered as the guard evaluates them; the first failing gate wins.
    """

    UNAUTHENTICATED = "unauthenticated"
    NOT_A_TRAINER = "not-a-trainer"
    NOT_YOUR_CLIENT = "not-your-client"

