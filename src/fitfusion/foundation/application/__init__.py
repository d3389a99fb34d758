"""FitFusion Foundation Application -- contribution types and discovery."""

from fitfusion.foundation.application.contributions import (
    LIFESPAN_PRIORITY_OBSERVABILITY,
    ErrorHandlerContribution,
    LifespanContribution,
)
from fitfusion.foundation.application.discovery import (
    ContributionGroup,
    DiscoveredContribution,
    discover,
)

__all__ = [
    "LIFESPAN_PRIORITY_OBSERVABILITY",
    "ContributionGroup",
    "DiscoveredContribution",
    "ErrorHandlerContribution",
    "LifespanContribution",
    "discover",
]
