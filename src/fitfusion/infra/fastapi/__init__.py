"""FitFusion Infra FastAPI -- app factory, error handlers, dependencies, routers."""

from fitfusion.infra.fastapi.app_factory import create_app
from fitfusion.infra.fastapi.dependencies import get_caller_id
from fitfusion.infra.fastapi.error_handlers import (
    ProblemDetail,
    register_exception_handlers,
)
from fitfusion.infra.fastapi.settings import AppSettings, CORSSettings

__all__ = [
    "AppSettings",
    "CORSSettings",
    "ProblemDetail",
    "create_app",
    "get_caller_id",
    "register_exception_handlers",
]
