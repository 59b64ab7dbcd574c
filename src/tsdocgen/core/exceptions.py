"""Custom exceptions for tsdocgen."""

from __future__ import annotations

from typing import Any


class TsDocgenError(Exception):
    """Base exception for all tsdocgen errors."""

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            ctx = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} ({ctx})"
        return self.message


class ConfigurationError(TsDocgenError):
    """Error in configuration."""

    pass


class CompilerOptionsError(ConfigurationError):
    """A compilerOptions block could not be converted."""

    def __init__(self, diagnostic: Any, config_file: str | None = None) -> None:
        context: dict[str, Any] = {}
        if config_file:
            context["config_file"] = config_file
        super().__init__(str(diagnostic.message), context)
        self.diagnostic = diagnostic


class SourceFileNotFoundError(TsDocgenError):
    """A root source file does not exist or cannot be read."""

    def __init__(self, file_path: str) -> None:
        super().__init__(f"Source file not found: {file_path}", {"file_path": file_path})
        self.file_path = file_path
