"""Decoded schematic container and its records."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from ._constants import MAGIC


@dataclass(frozen=True)
class Tag:
    label: str
    content: str


@dataclass(frozen=True)
class PlacedBlock:
    name_index: int
    position: int
    config: int
    rotation: int


@dataclass(frozen=True)
class Schematic:
    """Everything one decode call reads out of a schematic file.

    Counts are derived from the decoded sequences, which the decoder fills
    with exactly as many entries as the body declares.
    """

    magic: bytes
    version: bytes
    width: int
    height: int
    tags: Tuple[Tag, ...] = ()
    block_names: Tuple[str, ...] = ()
    placed_blocks: Tuple[PlacedBlock, ...] = ()

    @property
    def version_number(self) -> int:
        return int.from_bytes(self.version, "big")

    @property
    def has_standard_magic(self) -> bool:
        return self.magic == MAGIC

    @property
    def tag_count(self) -> int:
        return len(self.tags)

    @property
    def block_name_count(self) -> int:
        return len(self.block_names)

    @property
    def placed_block_count(self) -> int:
        return len(self.placed_blocks)

    def tag(self, label: str, default: Optional[str] = None) -> Optional[str]:
        """Content of the first tag named `label`."""
        for t in self.tags:
            if t.label == label:
                return t.content
        return default

    def tag_dict(self) -> Dict[str, str]:
        # Later duplicates overwrite earlier ones.
        return {t.label: t.content for t in self.tags}

    def block_name(self, block: PlacedBlock) -> str:
        """Resolve a record's name index against the block-name table.

        The decoder does not range-check indices; an out-of-range index
        surfaces here as IndexError.
        """
        if not 0 <= block.name_index < len(self.block_names):
            raise IndexError("block name index {} out of range ({} name(s))".format(
                block.name_index, len(self.block_names)))
        return self.block_names[block.name_index]

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready view.  Raw header bytes are rendered as hex."""
        return {
            "magic": self.magic.hex(),
            "version": self.version.hex(),
            "version_number": self.version_number,
            "width": self.width,
            "height": self.height,
            "tags": [[t.label, t.content] for t in self.tags],
            "block_names": list(self.block_names),
            "placed_blocks": [
                {
                    "name_index": b.name_index,
                    "position": b.position,
                    "config": b.config,
                    "rotation": b.rotation,
                }
                for b in self.placed_blocks
            ],
        }
