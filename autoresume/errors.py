# autoresume/errors.py
"""
Exception hierarchy for auto-resume.

Failure categories:
- Validation (bad names, nothing selected): recovered on the same screen
- Persistence (config files, exported outputs): operation aborted
- Generation (LLM call): classified from the client's error text

Every class derives from AutoResumeError, which is what the UI controller
catches and shows in the error banner.
"""
from __future__ import annotations

from pathlib import Path
from typing import Optional


class AutoResumeError(Exception):
    """Base exception for auto-resume."""
    pass


# --- Validation ---
class ValidationError(AutoResumeError):
    """User input rejected before anything was changed."""
    pass


class EmptyNameError(ValidationError):
    def __init__(self, what: str = "project"):
        super().__init__(f"{what} name cannot be empty")
        self.what = what


class DuplicateNameError(ValidationError):
    def __init__(self, name: str, what: str = "project"):
        if what == "project":
            message = f"project with name '{name}' already exists"
        else:
            message = f"{what} name must be unique"
        super().__init__(message)
        self.name = name
        self.what = what


class InvalidNameError(ValidationError):
    """Project names become directory names, so they must be a single path component."""
    def __init__(self, name: str):
        super().__init__(f"project name '{name}' is not a valid directory name")
        self.name = name


class NoOutputSelectedError(ValidationError):
    def __init__(self, action: str = "use"):
        super().__init__(f"no output to {action}")
        self.action = action


# --- Persistence ---
class PersistenceError(AutoResumeError):
    """Reading, parsing or writing a file failed."""
    def __init__(self, message: str, path: Optional[Path] = None, cause: Optional[BaseException] = None):
        detail = f"{message}: {cause}" if cause is not None else message
        super().__init__(detail)
        self.path = path
        self.cause = cause


# --- Generation ---
class GenerationError(AutoResumeError):
    """Generic LLM failure; subclasses narrow the category."""
    def __init__(self, cause: object = None, message: Optional[str] = None):
        super().__init__(message if message is not None else f"LLM error: {cause}")
        self.cause = cause


class NoModelSelectedError(GenerationError):
    def __init__(self):
        super().__init__(message="no LLM model selected")


class InvalidCredentialError(GenerationError):
    def __init__(self, provider: str, cause: object = None):
        super().__init__(cause, f"invalid API key for {provider}")
        self.provider = provider


class RateLimitError(GenerationError):
    def __init__(self, provider: str, cause: object = None):
        super().__init__(cause, f"rate limit exceeded for {provider}")
        self.provider = provider


class ModelNotFoundError(GenerationError):
    def __init__(self, provider: str, model: str, cause: object = None):
        super().__init__(cause, f"model {model} not found for {provider}")
        self.provider = provider
        self.model = model


class ServiceUnavailableError(GenerationError):
    def __init__(self, provider: str, cause: object = None):
        super().__init__(cause, f"connection to {provider} failed - is the service running?")
        self.provider = provider


class EmptyResponseError(GenerationError):
    def __init__(self):
        super().__init__(message="received empty response from LLM")


class GenerationTimeoutError(GenerationError):
    def __init__(self, provider: str, seconds: float):
        super().__init__(message=f"{provider} did not answer within {seconds:g}s")
        self.provider = provider
        self.seconds = seconds


__all__ = [
    "AutoResumeError",
    "ValidationError",
    "EmptyNameError",
    "DuplicateNameError",
    "InvalidNameError",
    "NoOutputSelectedError",
    "PersistenceError",
    "GenerationError",
    "NoModelSelectedError",
    "InvalidCredentialError",
    "RateLimitError",
    "ModelNotFoundError",
    "ServiceUnavailableError",
    "EmptyResponseError",
    "GenerationTimeoutError",
]
