"""Index block sets: compact text selections of model dimension indices."""

from .exceptions import (
    ConfigurationError,
    DuplicateBlockIdError,
    IndexBlockError,
    IndexBoundError,
    IndexFormatError,
    IndexOverlapError,
    UnknownDimensionError,
)
from .dimensions import dispatch_key, resolve_bounds
from .index_block import IndexBlock
from .index_block_sets import IndexBlockSet, IndexBlockSets, parse_index_block_sets
from .index_range import IndexRange
from .model_config import ModelConfiguration, load_model_config
from .parser_utils import TokenStream

__all__ = [
    "ConfigurationError",
    "DuplicateBlockIdError",
    "IndexBlockError",
    "IndexBoundError",
    "IndexFormatError",
    "IndexOverlapError",
    "UnknownDimensionError",
    "dispatch_key",
    "resolve_bounds",
    "IndexBlock",
    "IndexBlockSet",
    "IndexBlockSets",
    "parse_index_block_sets",
    "IndexRange",
    "ModelConfiguration",
    "load_model_config",
    "TokenStream",
]
