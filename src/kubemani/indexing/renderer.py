#!/usr/bin/env python3
"""
KUBEMANI RENDERER - Canonical Text
----------------------------------
Serializes a manifest into the byte-stable YAML text that is written to
disk and diffed later. Comments, anchors and original quoting are not
part of the canonical form; two manifests holding the same data render
to the same text.

Author: KubeMani Diff Team
Date: 2026-10-19
"""

import io
from typing import Any

from ruamel.yaml import YAML
from ruamel.yaml.scalarbool import ScalarBoolean
from ruamel.yaml.scalarstring import LiteralScalarString


class CanonicalRenderer:
    """
    Converts decoded documents to canonical YAML strings.
    """

    def __init__(self):
        self.yaml = YAML(typ='rt')
        # Standard K8s: 2 spaces, sequences indented 4 (offset 2)
        self.yaml.indent(mapping=2, sequence=4, offset=2)
        self.yaml.width = 4096
        self.yaml.default_flow_style = False

    def _to_plain(self, data: Any, sort_keys: bool) -> Any:
        """
        Recursively rebuilds the document from plain dicts and lists, so no
        comment or anchor metadata from the source survives into the output.
        """
        if isinstance(data, dict):
            keys = list(data.keys())
            if sort_keys:
                keys = sorted(keys, key=str)
            return {key: self._to_plain(data[key], sort_keys) for key in keys}

        if isinstance(data, (list, tuple)):
            return [self._to_plain(item, sort_keys) for item in data]

        return self._plain_scalar(data)

    def _plain_scalar(self, value: Any) -> Any:
        """
        Drops the source formatting carried by round-trip scalar types
        (hex ints, quoted strings, float precision).
        """
        if isinstance(value, (bool, ScalarBoolean)):
            return bool(value)
        if isinstance(value, str):
            text = str(value)
            # Multi-line strings read best as literal blocks
            return LiteralScalarString(text) if self._fits_literal_block(text) else text
        if isinstance(value, int):
            return int(value)
        if isinstance(value, float):
            return float(value)
        return value

    @staticmethod
    def _fits_literal_block(text: str) -> bool:
        """
        A literal block only carries "\\n" line breaks and printable text.
        Anything else (CR, other control characters) stays double-quoted.
        """
        if "\n" not in text:
            return False
        return all(line.replace("\t", " ").isprintable() for line in text.split("\n"))

    def render(self, raw: Any, sort_keys: bool = False) -> str:
        """
        Produces the canonical rendering. With sort_keys every mapping, at
        every depth, is emitted in lexicographic key order; otherwise the
        decoded order is kept.
        """
        stream = io.StringIO()
        self.yaml.dump(self._to_plain(raw, sort_keys), stream)
        return stream.getvalue()

    def decode(self, text: str) -> Any:
        """Loads a single rendering back into a document."""
        return self._to_plain(self.yaml.load(text), sort_keys=False)
