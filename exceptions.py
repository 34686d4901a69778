# indexblocks/exceptions.py
from typing import Optional


class IndexBlockError(Exception):
    """Base class for index block errors.

    `line_no` is 0 when the text did not come from a numbered input;
    `source` names the input (file path) when it is known.
    """

    def __init__(self, line_no: int, message: str, source: Optional[str] = None):
        where = f"[line {line_no}]" if source is None else f"{source} [line {line_no}]"
        super().__init__(f"{where} {message}")
        self.line_no = line_no
        self.message = message
        self.source = source


class IndexFormatError(IndexBlockError):
    """Malformed range/block text or unexpected keyword."""


class IndexBoundError(IndexBlockError):
    """Slot or block id outside its declared count."""


class DuplicateBlockIdError(IndexBlockError):
    """The same block id appears twice within one INDEX_BLOCK_SET."""


class UnknownDimensionError(IndexBlockError):
    """No bound source exists for the dimension type."""


class IndexOverlapError(IndexBlockError):
    """Ranges overlap inside a block parsed in strict mode."""


class ConfigurationError(IndexBlockError):
    """Invalid or incomplete model configuration."""
