#!/usr/bin/env python3
"""
KUBEMANI BUILD CONTEXT
----------------------
The record of one index build: where its renderings live and what
happened to the documents of each side.

Author: KubeMani Diff Team
Date: 2026-10-19
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from kubemani.core.models import Side


@dataclass
class SideStats:
    """
    Counters for one input collection. Every decoded document ends up in
    exactly one of indexed/invalid; empty documents never reach validation.
    """
    source: str = "<stream>"   # File path, or <stream> for in-memory input
    parsed: int = 0            # Non-empty documents decoded from the source
    empty: int = 0             # Null documents skipped before validation
    invalid: int = 0           # Documents dropped by the validator
    indexed: int = 0           # Documents materialized and inserted

    def as_dict(self) -> Dict[str, Any]:
        return {
            "source": self.source,
            "parsed": self.parsed,
            "empty": self.empty,
            "invalid": self.invalid,
            "indexed": self.indexed,
        }


@dataclass
class BuildContext:
    storage_root: Optional[Path] = None
    sort_keys: bool = False
    sides: Dict[Side, SideStats] = field(default_factory=lambda: {side: SideStats() for side in Side})

    def stats(self, side: Side) -> SideStats:
        return self.sides[side]
