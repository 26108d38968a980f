#!/usr/bin/env python3
"""
KUBEMANI ERRORS
---------------
Typed failures raised by the indexing core. Anything deriving from
BuildError aborts the current build; ResourceNotFoundError is a soft
error that consumer actions absorb.

Author: KubeMani Diff Team
Date: 2026-10-19
"""

from pathlib import Path
from typing import Optional, Union


class KubeManiError(Exception):
    """Base class for every error raised by kubemani."""


class BuildError(KubeManiError):
    """A build could not complete. No index is available afterwards."""


class ManifestDecodeError(BuildError):
    """A whole input stream could not be read or parsed as YAML."""

    def __init__(self, side: str, source: str, reason: str):
        self.side = side
        self.source = source
        self.reason = reason
        super().__init__(f"Failed to parse {side} ({source}) as Kubernetes manifest YAML: {reason}")


class MaterializationError(BuildError):
    """A rendering could not be persisted under the storage root."""

    def __init__(self, path: Union[str, Path], reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Failed to materialize '{self.path}': {reason}")


class StorageError(BuildError):
    """The storage root itself could not be created."""

    def __init__(self, path: Optional[Union[str, Path]], reason: str):
        self.path = Path(path) if path else None
        self.reason = reason
        super().__init__(f"Storage failure at '{path}': {reason}")


class ResourceNotFoundError(KubeManiError):
    """A locator's backing file no longer exists."""

    def __init__(self, locator: Union[str, Path]):
        self.locator = Path(locator)
        super().__init__(f"Resource not found: {self.locator}")
