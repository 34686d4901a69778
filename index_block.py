# =========================
# indexblocks/index_block.py
# Union of IndexRanges: "[r1;r2;...]" with forward/reverse index maps
# =========================

from __future__ import annotations
import logging
from typing import Dict, List, Tuple

from .exceptions import IndexFormatError, IndexOverlapError
from .index_range import IndexRange
from . import parser_utils as pu

logger = logging.getLogger(__name__)


class IndexBlock:
    """
    Ordered union of index ranges, e.g. "[1962:2000;2005;-1:1959]".

    forward map: block position (1-based) -> model index, one entry per
                 index of each range in range order (duplicates kept)
    reverse map: model index -> block position, 0 when not in the block.
                 Overlapping ranges: the later range wins.

    With strict=True overlapping ranges raise IndexOverlapError instead.
    """

    def __init__(self, mod_min: int, mod_max: int, strict: bool = False):
        self.mod_min = mod_min
        self.mod_max = mod_max
        self.strict = strict
        self.ranges: List[IndexRange] = []
        self._fwd: List[int] = []
        self._rev: List[int] = []
        self._rev_min = mod_min

    # ---------- parse / read ----------
    def parse(self, text: str, line_no: int = 0) -> None:
        s = text.strip()
        logger.debug("IndexBlock.parse(%r)", s)
        if not s.startswith("["):
            raise IndexFormatError(
                line_no,
                f"error parsing index block '{s}': expected 1st character to be '[' "
                f"but got '{s[:1]}' (expected '[x:y;z;...]')",
            )
        if len(s) < 2 or not s.endswith("]"):
            raise IndexFormatError(
                line_no,
                f"error parsing index block '{s}': expected last character to be ']' "
                f"but got '{s[-1:]}' (expected '[x:y;z;...]')",
            )

        ranges: List[IndexRange] = []
        for piece in s[1:-1].split(";"):
            r = IndexRange(self.mod_min, self.mod_max)
            r.parse(piece, line_no)
            ranges.append(r)
        logger.debug("found %d intervals", len(ranges))

        fwd, rev, lo = self._create_index_vectors(ranges, s, line_no)
        self.ranges = ranges
        self._fwd = fwd
        self._rev = rev
        self._rev_min = lo

    def read(self, stream: pu.TokenStream) -> None:
        self.parse(stream.next_token("index block"), stream.line_no)

    def _create_index_vectors(
        self, ranges: List[IndexRange], text: str, line_no: int
    ) -> Tuple[List[int], List[int], int]:
        """Build (forward, reverse, reverse_min) for `ranges` without touching the block."""
        lo, hi = self.mod_min, self.mod_max
        for r in ranges:
            lo = min(lo, r.mn)
            hi = max(hi, r.mx)

        # model elements that don't map to the block keep 0
        rev = [0] * (hi - lo + 1) if hi >= lo else []
        fwd: List[int] = []
        for r in ranges:
            for i in r.indices:
                if self.strict and rev[i - lo]:
                    raise IndexOverlapError(
                        line_no,
                        f"model index {i} of range '{r.write()}' appears twice in block '{text}'",
                    )
                fwd.append(i)
                rev[i - lo] = len(fwd)
        return fwd, rev, lo

    # ---------- lookups ----------
    def get_block_index(self, model_index: int) -> int:
        """Block position of `model_index`, or 0 when it is not in the block."""
        k = model_index - self._rev_min
        if 0 <= k < len(self._rev):
            return self._rev[k]
        return 0

    def get_model_index(self, position: int) -> int:
        """Model index at 1-based block `position`."""
        if not 1 <= position <= len(self._fwd):
            raise IndexError(
                f"block position {position} out of range 1..{len(self._fwd)}"
            )
        return self._fwd[position - 1]

    def __contains__(self, model_index: int) -> bool:
        return self.get_block_index(model_index) > 0

    def __len__(self) -> int:
        return len(self._fwd)

    @property
    def forward_map(self) -> List[int]:
        return list(self._fwd)

    @property
    def reverse_span(self) -> Tuple[int, int]:
        return self._rev_min, self._rev_min + len(self._rev) - 1

    @property
    def reverse_map(self) -> Dict[int, int]:
        return {self._rev_min + k: v for k, v in enumerate(self._rev)}

    # ---------- output ----------
    def write(self) -> str:
        if not self.ranges:
            # "[]" is not parse-able
            raise IndexFormatError(0, "cannot write an index block that has not been parsed")
        return "[" + ";".join(r.write() for r in self.ranges) + "]"

    def write_to_r(self) -> str:
        if not self.ranges:
            raise IndexFormatError(0, "cannot write an index block that has not been parsed")
        return "c(" + ",".join(r.write_to_r() for r in self.ranges) + ")"

    def __str__(self) -> str:
        return self.write()

    def __repr__(self) -> str:
        text = self.write() if self.ranges else "<unparsed>"
        return f"IndexBlock({text!r}, mod_min={self.mod_min}, mod_max={self.mod_max})"
