# =========================
# indexblocks/index_block_sets.py
# INDEX_BLOCK_SETS / INDEX_BLOCK_SET readers and writers
# =========================

from __future__ import annotations
import logging
from typing import Iterator, List, Optional, TextIO, Tuple

from .exceptions import (
    DuplicateBlockIdError,
    IndexBlockError,
    IndexBoundError,
    IndexFormatError,
)
from .index_block import IndexBlock
from .model_config import ModelConfiguration
from . import dimensions as dims
from . import parser_utils as pu

logger = logging.getLogger(__name__)

KEYWORD_SETS = "INDEX_BLOCK_SETS"
KEYWORD_SET = "INDEX_BLOCK_SET"


class IndexBlockSet:
    """
    Numbered IndexBlocks over one dimension type.

    Text form:
        <type> <nBlocks>
        <id> <block>      # nBlocks times, ids 1..nBlocks in any order
    """

    def __init__(self, config: ModelConfiguration, strict: bool = False):
        self.config = config
        self.strict = strict
        self.type = ""
        self.dispatch_key = ""
        self.mod_min = dims.UNRESOLVED
        self.mod_max = dims.UNRESOLVED
        self.blocks: List[IndexBlock] = []

    # ---------- type / allocation ----------
    def set_type(
        self, type_text: str, bounds: Optional[Tuple[int, int]] = None, line_no: int = 0
    ) -> None:
        """Set the dimension type and resolve (mod_min, mod_max) from it.

        Non-standard types only produce a warning; pass `bounds` to give them
        usable limits.
        """
        if self.type and self.type != type_text:
            raise IndexBlockError(
                line_no, f"index type already set to '{self.type}', got '{type_text}'"
            )
        self.type = type_text
        self.dispatch_key = dims.dispatch_key(type_text)
        if dims.is_known_dimension(self.dispatch_key):
            self.mod_min, self.mod_max = dims.resolve_bounds(
                self.dispatch_key, self.config, line_no
            )
        else:
            logger.warning(
                "defining non-standard index type '%s'. Make sure this is what you want.",
                self.dispatch_key,
            )
        if bounds is not None:
            self.mod_min, self.mod_max = bounds
        logger.debug(
            "IndexBlockSet type=%s mod_min=%s mod_max=%s", self.type, self.mod_min, self.mod_max
        )

    def allocate(self, n: int, line_no: int = 0) -> None:
        if n < 0:
            raise IndexBoundError(line_no, f"number of index blocks must be >= 0, got {n}")
        self.blocks = [
            IndexBlock(self.mod_min, self.mod_max, strict=self.strict) for _ in range(n)
        ]

    # ---------- lookups ----------
    def get_type(self) -> str:
        return self.type

    def get_block(self, block_id: int) -> IndexBlock:
        if not 1 <= block_id <= len(self.blocks):
            raise IndexError(
                f"index block id {block_id} out of range 1..{len(self.blocks)}"
                f" in index block set '{self.type}'"
            )
        return self.blocks[block_id - 1]

    def __len__(self) -> int:
        return len(self.blocks)

    def __iter__(self) -> Iterator[IndexBlock]:
        return iter(self.blocks)

    # ---------- read ----------
    def read(self, stream: pu.TokenStream) -> None:
        logger.debug("starting IndexBlockSet.read")
        if not self.type:
            tok = stream.next_token("index type")
            self.set_type(tok, line_no=stream.line_no)

        n = stream.next_int("number of index blocks")
        self.allocate(n, stream.line_no)

        seen = set()
        for _ in range(n):
            block_id = stream.next_int("index block id")
            if not 1 <= block_id <= n:
                raise IndexBoundError(
                    stream.line_no,
                    f"index block id {block_id} out of range 1..{n} "
                    f"in index block set '{self.type}'",
                )
            if block_id in seen:
                raise DuplicateBlockIdError(
                    stream.line_no,
                    f"index block id {block_id} defined twice "
                    f"in index block set '{self.type}'",
                )
            seen.add(block_id)
            self.blocks[block_id - 1].read(stream)
            logger.debug("%d\t%s", block_id, self.blocks[block_id - 1])
        logger.debug("finished IndexBlockSet.read")

    # ---------- output ----------
    def write(self) -> str:
        lines = [
            f"{self.type}\t#index type (dimension name)",
            f"{len(self.blocks)}\t#number of index blocks defined",
            "#id  Blocks",
        ]
        for i, b in enumerate(self.blocks, start=1):
            lines.append(f"{i}\t{b.write()}")
        return "\n".join(lines)

    def write_to_r(self) -> str:
        blocks = ",".join(f"`{i}`={b.write_to_r()}" for i, b in enumerate(self.blocks, start=1))
        return f"list(type='{self.type}',modMin={self.mod_min},modMax={self.mod_max},blocks=list({blocks}))"

    def __str__(self) -> str:
        return self.write()


class IndexBlockSets:
    """
    Top-level collection of IndexBlockSets, addressed by 1-based slot.

    Text form:
        INDEX_BLOCK_SETS <nSets>
        INDEX_BLOCK_SET <slot> <index block set>     # nSets times
    """

    def __init__(self, config: ModelConfiguration, strict: bool = False):
        self.config = config
        self.strict = strict
        self.sets: List[IndexBlockSet] = []

    @classmethod
    def from_text(
        cls,
        text: str,
        config: ModelConfiguration,
        strict: bool = False,
        source: str = "<string>",
    ) -> "IndexBlockSets":
        ibss = cls(config, strict=strict)
        ibss.read(pu.TokenStream(text, source=source))
        return ibss

    # ---------- creation / type ----------
    def create_sets(self, n: int) -> None:
        if n < 0:
            raise IndexBoundError(0, f"number of index block sets must be >= 0, got {n}")
        self.sets = [IndexBlockSet(self.config, strict=self.strict) for _ in range(n)]

    def set_type(self, slot: int, type_text: str) -> None:
        self.get_block_set(slot).set_type(type_text)

    # ---------- lookups ----------
    def get_block_set(self, slot: int) -> IndexBlockSet:
        if not 1 <= slot <= len(self.sets):
            raise IndexError(f"index block set slot {slot} out of range 1..{len(self.sets)}")
        return self.sets[slot - 1]

    def get_by_type(self, type_text: str) -> Optional[IndexBlockSet]:
        """First set (in slot order) whose type is `type_text`, else None."""
        for ibs in self.sets:
            if ibs.get_type() == type_text:
                return ibs
        return None

    def __len__(self) -> int:
        return len(self.sets)

    def __iter__(self) -> Iterator[IndexBlockSet]:
        return iter(self.sets)

    # ---------- read ----------
    def read(self, stream: pu.TokenStream, echo: Optional[TextIO] = None) -> None:
        """Read INDEX_BLOCK_SETS; when `echo` is given, what was read is echoed to it."""
        logger.debug("starting IndexBlockSets.read from %s", stream.source)

        def _echo(line: str) -> None:
            if echo is not None:
                echo.write(line + "\n")

        kw = stream.next_token(f"keyword '{KEYWORD_SETS}'")
        _echo(f"{kw}\t#Required keyword")
        if kw != KEYWORD_SETS:
            raise IndexFormatError(
                stream.line_no,
                f"error reading {stream.source}: expected key word '{KEYWORD_SETS}' "
                f"and got '{kw}' instead",
            )

        n = stream.next_int("number of index block sets")
        _echo(f"{n}\t#number of IndexBlockSets to define")
        if n < 0:
            raise IndexBoundError(
                stream.line_no, f"number of index block sets must be >= 0, got {n}"
            )
        self.create_sets(n)

        filled = set()
        for i in range(1, n + 1):
            kw = stream.next_token(f"keyword '{KEYWORD_SET}'")
            slot = stream.next_int("index block set slot")
            _echo(f"{kw}\t{slot}\t#defining this IndexBlockSet")
            if kw != KEYWORD_SET:
                raise IndexFormatError(
                    stream.line_no,
                    f"error reading {i}th {KEYWORD_SET} in {stream.source}: "
                    f"expected key word '{KEYWORD_SET}' and got '{kw}' instead",
                )
            if not 1 <= slot <= n or slot in filled:
                raise IndexBoundError(
                    stream.line_no,
                    f"error reading {i}th {KEYWORD_SET} in {stream.source}: "
                    f"expected an unused slot in 1..{n} but got {slot}",
                )
            filled.add(slot)
            ibs = IndexBlockSet(self.config, strict=self.strict)
            ibs.read(stream)
            self.sets[slot - 1] = ibs
            _echo(ibs.write())
        logger.debug("finished IndexBlockSets.read")

    # ---------- output ----------
    def write(self) -> str:
        lines = [
            KEYWORD_SETS,
            f"{len(self.sets)}\t#number of index block sets to be defined",
        ]
        for i, ibs in enumerate(self.sets, start=1):
            lines.append(f"{KEYWORD_SET}\t{i}")
            lines.append(ibs.write())
        return "\n".join(lines)

    def write_to_r(self) -> str:
        return "list(" + ",".join(f"`{s.type}`={s.write_to_r()}" for s in self.sets) + ")"

    def __str__(self) -> str:
        return self.write()


# 関数型API


def parse_index_block_sets(
    text: str, config: ModelConfiguration, strict: bool = False
) -> IndexBlockSets:
    return IndexBlockSets.from_text(text, config, strict=strict)
