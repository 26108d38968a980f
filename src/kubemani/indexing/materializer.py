#!/usr/bin/env python3
"""
KUBEMANI MATERIALIZER
---------------------
Persists one side's canonical rendering of a manifest at
<root>/<group>/<kind>/<name>/<Side><suffix> and hands back the
MaterializedDocument that points at it.

Author: KubeMani Diff Team
Date: 2026-10-19
"""

import logging
from pathlib import Path, PurePosixPath

from kubemani.core.models import ManifestIdentity, MaterializedDocument, Side
from kubemani.storage.workspace import TempWorkspace

logger = logging.getLogger("kubemani.materializer")


class ContentMaterializer:

    def __init__(self, workspace: TempWorkspace, suffix: str = ".txt", encoding: str = "utf-8"):
        self.workspace = workspace
        self.suffix = suffix
        self.encoding = encoding

    def relative_dir(self, identity: ManifestIdentity) -> PurePosixPath:
        return PurePosixPath(identity.group, identity.kind, identity.name)

    def artifact_name(self, side: Side) -> str:
        return f"{side.value}{self.suffix}"

    def materialize(self, identity: ManifestIdentity, rendering: str, side: Side,
                    storage_root: Path) -> MaterializedDocument:
        """
        Writes the rendering for one side. Directory creation is idempotent,
        so the same leaf can be materialized for both sides (or twice for one).
        Raises MaterializationError when the directory or the file cannot be created.
        """
        leaf_dir = self.workspace.create_sub_path(storage_root, self.relative_dir(identity))
        locator = self.workspace.write_text(leaf_dir / self.artifact_name(side), rendering, encoding=self.encoding)
        logger.debug(f"Materialized {identity.path_key} ({side.value}) at {locator}")

        return MaterializedDocument(
            identity=identity,
            side=side,
            canonical_text=rendering,
            locator=locator,
        )
