"""Exceptions raised by armswing before any geometry runs."""

from __future__ import annotations

from typing import Iterable, Optional


class ArmSwingError(Exception):
    """Base exception for the package."""


class KeypointValidationError(ArmSwingError):
    """Raised when a keypoint set is incomplete, malformed or non-finite."""

    def __init__(self, message: str, landmarks: Optional[Iterable[str]] = None):
        self.message = message
        self.landmarks = list(landmarks or [])
        if self.landmarks:
            super().__init__(f"{message} (landmarks: {', '.join(self.landmarks)})")
        else:
            super().__init__(message)


class ConfigError(ArmSwingError):
    """Raised for invalid estimator settings."""
