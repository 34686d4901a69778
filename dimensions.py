# =========================
# indexblocks/dimensions.py
# Model dimension names and the dimension-bounds resolver
# =========================

from __future__ import annotations
from typing import Callable, Dict, Tuple

from .exceptions import UnknownDimensionError
from .model_config import ModelConfiguration

STR_YEAR = "YEAR"
STR_SIZE = "SIZE"
STR_SEX = "SEX"
STR_MATURITY_STATE = "MATURITY_STATE"
STR_SHELL_CONDITION = "SHELL_CONDITION"
STR_FISHERY = "FISHERY"
STR_SURVEY = "SURVEY"

# fixed cardinalities
N_SEXES = 2
N_MATURITY_STATES = 2
N_SHELL_CONDITIONS = 2

# bounds of a dimension type that could not be resolved
UNRESOLVED = -1

Bounds = Tuple[int, int]


# ------------------------------------------------------------
# dimension name -> bound function
# ------------------------------------------------------------
BOUNDS_TABLE: Dict[str, Callable[[ModelConfiguration], Bounds]] = {
    STR_YEAR: lambda cfg: (cfg.min_year, cfg.max_year),
    STR_SIZE: lambda cfg: (1, cfg.n_size_bins),
    STR_SEX: lambda cfg: (1, N_SEXES),
    STR_MATURITY_STATE: lambda cfg: (1, N_MATURITY_STATES),
    STR_SHELL_CONDITION: lambda cfg: (1, N_SHELL_CONDITIONS),
    STR_FISHERY: lambda cfg: (1, cfg.n_fisheries),
    STR_SURVEY: lambda cfg: (1, cfg.n_surveys),
}

# longest first so MATURITY_STATE wins over a shorter prefix
_NAMES_BY_LENGTH = sorted(BOUNDS_TABLE, key=len, reverse=True)


def is_known_dimension(key: str) -> bool:
    return key in BOUNDS_TABLE


def dispatch_key(type_text: str) -> str:
    """Reduce a block set type such as 'YEAR_RECRUITMENT' to its dimension name.

    A known dimension name followed by '_suffix' dispatches to that name
    ('MATURITY_STATE_M' -> 'MATURITY_STATE'). Anything else is cut at the
    first '_'.
    """
    for name in _NAMES_BY_LENGTH:
        if type_text == name or type_text.startswith(name + "_"):
            return name
    return type_text.split("_", 1)[0]


def resolve_bounds(key: str, config: ModelConfiguration, line_no: int = 0) -> Bounds:
    """Return the (min, max) index bounds of dimension `key`."""
    try:
        fn = BOUNDS_TABLE[key]
    except KeyError:
        raise UnknownDimensionError(
            line_no,
            f"unrecognized index type '{key}' "
            f"(known: {', '.join(sorted(BOUNDS_TABLE))})",
        )
    return fn(config)
