"""
Model dimension configuration consumed by the index block readers.

Only the part of the model configuration that defines index bounds lives here:
the year span, the number of size bins (and their cut points), and the
fishery/survey labels. Instances are immutable and are handed to every
IndexBlockSets / IndexBlockSet at construction time.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

from .exceptions import ConfigurationError, IndexFormatError
from .parser_utils import TokenStream

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ModelConfiguration:
    """
    Global model dimensions.

    `fishery_labels` / `survey_labels` / `size_cutpoints` are optional; when
    given, their lengths must agree with the corresponding counts.
    """

    min_year: int
    max_year: int
    n_size_bins: int
    n_fisheries: int = 0
    n_surveys: int = 0
    name: str = "model"
    size_cutpoints: Tuple[float, ...] = field(default_factory=tuple)
    fishery_labels: Tuple[str, ...] = field(default_factory=tuple)
    survey_labels: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self):
        _validate_int(self, "min_year", self.min_year)
        _validate_int(self, "max_year", self.max_year)
        _validate_non_negative(self, "n_size_bins", self.n_size_bins)
        _validate_non_negative(self, "n_fisheries", self.n_fisheries)
        _validate_non_negative(self, "n_surveys", self.n_surveys)
        if self.min_year > self.max_year:
            raise ConfigurationError(
                0,
                f"{self.__class__.__name__}: min_year ({self.min_year}) must be <= "
                f"max_year ({self.max_year})",
            )
        if self.size_cutpoints and len(self.size_cutpoints) != self.n_size_bins + 1:
            raise ConfigurationError(
                0,
                f"expected {self.n_size_bins + 1} size bin cut points, "
                f"got {len(self.size_cutpoints)}",
            )
        if self.fishery_labels and len(self.fishery_labels) != self.n_fisheries:
            raise ConfigurationError(
                0,
                f"expected {self.n_fisheries} fishery labels, got {len(self.fishery_labels)}",
            )
        if self.survey_labels and len(self.survey_labels) != self.n_surveys:
            raise ConfigurationError(
                0,
                f"expected {self.n_surveys} survey labels, got {len(self.survey_labels)}",
            )

    # ---------- constructors ----------
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ModelConfiguration":
        """Build from a mapping such as the one loaded from a YAML file.

        Counts may be given directly (`n_fisheries`) or implied by a label
        list (`fishery_labels`); likewise `n_size_bins` by `size_cutpoints`.
        """
        if not isinstance(data, dict):
            raise ConfigurationError(0, "model configuration must be a mapping")
        for key in ("min_year", "max_year"):
            if key not in data:
                raise ConfigurationError(0, f"missing required key '{key}'")

        try:
            cutpoints = tuple(float(z) for z in data.get("size_cutpoints") or ())
        except (TypeError, ValueError):
            raise ConfigurationError(0, "size_cutpoints must be a list of numbers")
        fisheries = tuple(str(x) for x in data.get("fishery_labels") or ())
        surveys = tuple(str(x) for x in data.get("survey_labels") or ())

        n_size_bins = data.get("n_size_bins")
        if n_size_bins is None:
            if not cutpoints:
                raise ConfigurationError(
                    0, "either 'n_size_bins' or 'size_cutpoints' is required"
                )
            n_size_bins = len(cutpoints) - 1

        return cls(
            min_year=data["min_year"],
            max_year=data["max_year"],
            n_size_bins=n_size_bins,
            n_fisheries=data.get("n_fisheries", len(fisheries)),
            n_surveys=data.get("n_surveys", len(surveys)),
            name=str(data.get("name", "model")),
            size_cutpoints=cutpoints,
            fishery_labels=fisheries,
            survey_labels=surveys,
        )

    @classmethod
    def read(cls, stream: TokenStream) -> "ModelConfiguration":
        """
        Read the dimension header of a line-oriented model configuration file:

            name
            min_year max_year
            n_size_bins
            <n_size_bins+1 cut points>
            n_fisheries <labels...>
            n_surveys <labels...>

        Remaining entries of the file (run flags, file names) are left unread.
        """
        name = stream.next_token("configuration name")
        min_year = stream.next_int("min model year")
        max_year = stream.next_int("max model year")
        n_size_bins = stream.next_int("number of size bins")
        if n_size_bins < 0:
            raise ConfigurationError(stream.line_no, "number of size bins must be >= 0")
        cutpoints = []
        for _ in range(n_size_bins + 1):
            tok = stream.next_token("size bin cut point")
            try:
                cutpoints.append(float(tok))
            except ValueError:
                raise IndexFormatError(
                    stream.line_no, f"expected number for size bin cut point but got '{tok}'"
                )
        n_fisheries = stream.next_int("number of fisheries")
        fisheries = [stream.next_token("fishery label") for _ in range(max(n_fisheries, 0))]
        n_surveys = stream.next_int("number of surveys")
        surveys = [stream.next_token("survey label") for _ in range(max(n_surveys, 0))]

        cfg = cls(
            min_year=min_year,
            max_year=max_year,
            n_size_bins=n_size_bins,
            n_fisheries=n_fisheries,
            n_surveys=n_surveys,
            name=name,
            size_cutpoints=tuple(cutpoints),
            fishery_labels=tuple(fisheries),
            survey_labels=tuple(surveys),
        )
        logger.debug("read model configuration %r", cfg)
        return cfg


def load_model_config(path: Path | str) -> ModelConfiguration:
    """Load a model configuration from a YAML file or the line-oriented format."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Model configuration file not found: {path}")
    if path.suffix.lower() in (".yaml", ".yml"):
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except UnicodeDecodeError as e:
            raise ConfigurationError(
                0, f"not a UTF-8 text file (byte {e.start}: {e.reason})", source=str(path)
            )
        if data is None:
            raise ConfigurationError(0, f"model configuration file is empty: {path}")
        return ModelConfiguration.from_dict(data)
    return ModelConfiguration.read(TokenStream.from_path(path))


def _validate_int(obj: Any, field_name: str, value: Optional[int]) -> None:
    """Validate that a required integer field is provided."""
    if value is None:
        raise ConfigurationError(
            0, f"{obj.__class__.__name__}.{field_name} is REQUIRED and was not provided"
        )
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(
            0,
            f"{obj.__class__.__name__}.{field_name} must be int, "
            f"got {type(value).__name__}",
        )


def _validate_non_negative(obj: Any, field_name: str, value: Optional[int]) -> None:
    """Validate that an integer count is non-negative."""
    _validate_int(obj, field_name, value)
    if value < 0:
        raise ConfigurationError(
            0, f"{obj.__class__.__name__}.{field_name} must be non-negative, got {value}"
        )
