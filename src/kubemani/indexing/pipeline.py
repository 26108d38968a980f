#!/usr/bin/env python3
"""
KUBEMANI INDEXING PIPELINE
--------------------------
Runs every raw document of one side through the fixed sequence
validate -> render -> materialize -> insert. Invalid documents are
dropped and counted; materialization failures abort the build.

Author: KubeMani Diff Team
Date: 2026-10-19
"""

import logging
from pathlib import Path
from typing import Any, Iterable, Optional

from kubemani.core.models import Forest, MaterializedDocument, Side
from kubemani.indexing.builder import IndexBuilder
from kubemani.indexing.context import BuildContext
from kubemani.indexing.materializer import ContentMaterializer
from kubemani.indexing.renderer import CanonicalRenderer
from kubemani.validator.validator import ManifestValidator


class IndexingPipeline:
    """
    The Orchestrator: keeps the per-document phases in a strict order so
    the forest only ever references renderings that are already on disk.
    """

    def __init__(self, materializer: ContentMaterializer,
                 validator: Optional[ManifestValidator] = None,
                 renderer: Optional[CanonicalRenderer] = None,
                 builder: Optional[IndexBuilder] = None,
                 logger: Optional[logging.Logger] = None):
        self.materializer = materializer
        self.validator = validator or ManifestValidator()
        self.renderer = renderer or CanonicalRenderer()
        self.builder = builder or IndexBuilder()
        self.logger = logger or logging.getLogger("kubemani.pipeline")

    def materialize_one(self, raw: Any, side: Side, storage_root: Path,
                        context: BuildContext) -> Optional[MaterializedDocument]:
        """
        Phases 1-3 for a single document. Returns None when the document
        is not a usable manifest.
        """
        stats = context.stats(side)

        # --- PHASE 1: IDENTITY ---
        identity, reason = self.validator.validate(raw)
        if identity is None:
            stats.invalid += 1
            self.logger.warning(
                f"unexpected format of object as Kubernetes manifest in {stats.source} "
                f"({reason}). the object will be ignored"
            )
            return None

        # --- PHASE 2: CANONICAL RENDERING ---
        rendering = self.renderer.render(raw, sort_keys=context.sort_keys)

        # --- PHASE 3: MATERIALIZATION ---
        return self.materializer.materialize(identity, rendering, side, storage_root)

    def run(self, forest: Forest, documents: Iterable[Any], side: Side,
            context: BuildContext) -> Forest:
        """
        Processes one side completely and returns the same forest.
        """
        if context.storage_root is None:
            raise ValueError("BuildContext has no storage root")

        stats = context.stats(side)
        for raw in documents:
            if raw is None or (isinstance(raw, str) and not raw.strip()):
                stats.empty += 1
                self.logger.warning(f"An empty document has been included in {stats.source} and will be ignored.")
                continue
            stats.parsed += 1
            document = self.materialize_one(raw, side, context.storage_root, context)
            if document is None:
                continue

            # --- PHASE 4: INDEX INSERTION ---
            self.builder.insert(forest, document)
            stats.indexed += 1

        self.logger.info(
            f"{side.value}: {stats.indexed} manifests indexed, {stats.invalid} ignored from {stats.source}"
        )
        return forest
