# =========================
# indexblocks/index_range.py
# A single interval "x:y" or "x" over one model dimension
# =========================

from __future__ import annotations
import logging
from typing import Iterator, List, Optional

from .exceptions import IndexFormatError
from . import parser_utils as pu

logger = logging.getLogger(__name__)


class IndexRange:
    """
    Contiguous interval of model indices.

    Negative operands of "x:y" are defaults: x < 0 becomes mod_min and
    y < 0 becomes mod_max. The singleton form "x" is taken literally.
    """

    def __init__(self, mod_min: int, mod_max: int):
        self.mod_min = mod_min
        self.mod_max = mod_max
        self.mn: Optional[int] = None
        self.mx: Optional[int] = None
        self.indices: List[int] = []

    # ---------- parse / read ----------
    def parse(self, text: str, line_no: int = 0) -> None:
        s = text.strip()
        parts = s.split(":")
        if len(parts) == 2:
            mn = pu.parse_int(parts[0], line_no, f"range start in '{s}' (expected 'x:y' or 'x')")
            mx = pu.parse_int(parts[1], line_no, f"range end in '{s}' (expected 'x:y' or 'x')")
            if mn < 0:
                mn = self.mod_min
            if mx < 0:
                mx = self.mod_max
        elif len(parts) == 1:
            mn = mx = pu.parse_int(s, line_no, f"range '{s}' (expected 'x:y' or 'x')")
        else:
            raise IndexFormatError(
                line_no, f"invalid index range '{s}' (expected 'x:y' or 'x')"
            )
        logger.debug("IndexRange.parse(%r) -> mn=%s, mx=%s", s, mn, mx)
        self._create_range_vector(mn, mx)

    def read(self, stream: pu.TokenStream) -> None:
        self.parse(stream.next_token("index range"), stream.line_no)

    def _create_range_vector(self, mn: int, mx: int) -> None:
        if mn > mx:
            logger.warning(
                "empty index range %d:%d (bounds %d..%d)", mn, mx, self.mod_min, self.mod_max
            )
        self.mn, self.mx = mn, mx
        self.indices = list(range(mn, mx + 1))

    # ---------- accessors ----------
    def get_min(self) -> Optional[int]:
        return self.mn

    def get_max(self) -> Optional[int]:
        return self.mx

    def __len__(self) -> int:
        return len(self.indices)

    def __iter__(self) -> Iterator[int]:
        return iter(self.indices)

    # ---------- output ----------
    def write(self) -> str:
        """Parse-able form: 'mn' for a singleton, 'mn:mx' otherwise."""
        if self.mn == self.mx:
            return str(self.mn)
        return f"{self.mn}:{self.mx}"

    def write_to_r(self) -> str:
        return f"{self.mn}:{self.mx}"

    def __str__(self) -> str:
        return self.write()

    def __repr__(self) -> str:
        return f"IndexRange({self.write()!r}, mod_min={self.mod_min}, mod_max={self.mod_max})"
