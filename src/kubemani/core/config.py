#!/usr/bin/env python3
"""
KUBEMANI SETTINGS
-----------------
Runtime knobs for a diff index build. Defaults live here; the CLI
overrides them from its flags.

Author: KubeMani Diff Team
Date: 2026-10-19
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class IndexSettings:
    """
    Configuration shared by the renderer, materializer and workspace.
    """
    sort_keys: bool = False                     # Emit mapping keys in lexicographic order
    artifact_suffix: str = ".txt"               # Extension of the per-side rendering file
    temp_prefix: str = "kubemani-diff-temp-"    # Prefix of the storage root directory name
    temp_base: Optional[str] = None             # Parent dir for storage roots (None = system temp)
    encoding: str = "utf-8"                     # Encoding for reading inputs and writing artifacts
