#!/usr/bin/env python3
"""
KUBEMANI LOADER - Stream Decoding
---------------------------------
Reads a multi-document YAML source (documents separated by '---') into
a list of raw documents. A source that cannot be read or parsed fails as
a whole; empty documents inside an otherwise valid source are skipped
and counted.

Author: KubeMani Diff Team
Date: 2026-10-19
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Union

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from kubemani.core.errors import ManifestDecodeError
from kubemani.core.models import Side

logger = logging.getLogger("kubemani.loader")


@dataclass
class LoadResult:
    """The decoded documents of one source plus the number of empty ones skipped."""
    source: str
    documents: List[Any] = field(default_factory=list)
    empty: int = 0


class ManifestLoader:
    """
    Decodes YAML sources for one side of the comparison.
    """

    def __init__(self, encoding: str = "utf-8"):
        # BOM-aware read, as editors on Windows like to add one
        self.encoding = "utf-8-sig" if encoding.lower().replace("_", "-") == "utf-8" else encoding
        self.yaml = YAML(typ='rt')

    def read_file(self, path: Union[str, Path], side: Side) -> LoadResult:
        """Reads and decodes a manifest file. Raises ManifestDecodeError on any failure."""
        file_path = Path(path)
        try:
            text = file_path.read_text(encoding=self.encoding)
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Error reading file {file_path}: {e}")
            raise ManifestDecodeError(side.value, str(file_path), str(e)) from e

        return self.decode(text, side, source=str(file_path))

    def decode(self, text: str, side: Side, source: str = "<stream>") -> LoadResult:
        """Splits a multi-document YAML text into raw documents."""
        result = LoadResult(source=source)
        try:
            for doc in self.yaml.load_all(text):
                if doc is None or (isinstance(doc, str) and not doc.strip()):
                    logger.warning(f"An empty document has been included in {source} and will be ignored.")
                    result.empty += 1
                    continue
                result.documents.append(doc)
        except YAMLError as e:
            logger.error(f"Error parsing {side.value} source {source}: {e}")
            raise ManifestDecodeError(side.value, source, str(e)) from e

        logger.info(f"{len(result.documents)} objects found, and {result.empty} ignored in {source}")
        return result
