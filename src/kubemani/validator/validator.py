#!/usr/bin/env python3
"""
KUBEMANI VALIDATOR - The Gatekeeper
-----------------------------------
Decides whether a decoded YAML document can take part in the diff index.
Only the identity triple is checked (apiVersion, kind, metadata.name);
everything else in the document is carried through untouched.

Author: KubeMani Diff Team
Date: 2026-10-19
"""

import logging
from collections.abc import Mapping
from typing import Any, Optional, Tuple

from kubemani.core.models import ManifestIdentity

logger = logging.getLogger("kubemani.validator")

CORE_GROUP = "core"

# Segments that cannot name a directory under the storage root
_UNSAFE_SEGMENTS = {".", ".."}


def derive_group(api_version: str) -> str:
    """
    'apps/v1' -> 'apps', 'v1' -> 'core'.
    """
    parts = api_version.split("/")
    return parts[0] if len(parts) > 1 else CORE_GROUP


class ManifestValidator:
    """
    Turns raw documents into ManifestIdentity objects.
    validate() is total: it never raises, whatever the decoder produced.
    """

    def __init__(self):
        self.required_fields = ["apiVersion", "kind", "metadata"]

    def validate(self, raw: Any) -> Tuple[Optional[ManifestIdentity], str]:
        """
        Returns (identity, "") for a usable manifest, or (None, reason).
        """
        if not isinstance(raw, Mapping):
            return None, f"document is a {type(raw).__name__}, not a mapping"

        for field in self.required_fields:
            if field not in raw:
                return None, f"missing required top-level field '{field}'"

        api_version = raw.get("apiVersion")
        kind = raw.get("kind")
        metadata = raw.get("metadata")

        if not self._is_text(api_version):
            return None, "'apiVersion' must be a non-empty string"
        if not self._is_text(kind):
            return None, "'kind' must be a non-empty string"
        if not isinstance(metadata, Mapping):
            return None, "'metadata' must be a mapping"

        name = metadata.get("name")
        if not self._is_text(name):
            return None, "'metadata.name' must be a non-empty string"

        group = derive_group(api_version)
        if not group.strip():
            return None, f"apiVersion '{api_version}' has an empty group"

        for label, segment in (("apiVersion group", group), ("kind", kind), ("metadata.name", name)):
            if not self._is_path_segment(segment):
                logger.debug(f"Rejected {kind}/{name}: unsafe {label} '{segment}'")
                return None, f"{label} '{segment}' cannot be used as a path segment"

        return ManifestIdentity(group=group, kind=kind, name=name), ""

    def is_valid(self, raw: Any) -> bool:
        identity, _ = self.validate(raw)
        return identity is not None

    @staticmethod
    def _is_text(value: Any) -> bool:
        return isinstance(value, str) and bool(value.strip())

    @staticmethod
    def _is_path_segment(value: str) -> bool:
        if value in _UNSAFE_SEGMENTS or "/" in value or "\\" in value:
            return False
        # No control characters in directory names
        return value.isprintable()
