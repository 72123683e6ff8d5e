"""lanbar utilities - logging and environment helpers."""

from lanbar.utils.env import (
    EnvVarError,
    EnvVarTypeError,
    get_env,
)
from lanbar.utils.logger import (
    Logger,
    LoggerNotConfiguredError,
    LogLevel,
)

__all__ = [
    # Env
    "EnvVarError",
    "EnvVarTypeError",
    "get_env",
    # Logger
    "LogLevel",
    "Logger",
    "LoggerNotConfiguredError",
]
