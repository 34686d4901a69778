# indexblocks/tests/test_model_config.py
import dataclasses

import pytest
from indexblocks.model_config import ModelConfiguration, load_model_config
from indexblocks.parser_utils import TokenStream
from indexblocks.exceptions import ConfigurationError, IndexFormatError

ADMB_CONFIG = """
#TCSAM Model Configuration File
snowcrab    #Model configuration name
1965        #Min model year
1970        #Max model year
4           #Number of model size classes
#size bin cut points
25 30 35 40 45
2           #number of fisheries
TCF SCF
1           #number of surveys
NMFS
ON          #run operating model?
"""


def test_from_dict_with_labels():
    cfg = ModelConfiguration.from_dict(
        {
            "name": "base",
            "min_year": 1965,
            "max_year": 1970,
            "size_cutpoints": [25, 30, 35],
            "fishery_labels": ["TCF", "SCF", "GTF"],
            "survey_labels": ["NMFS"],
        }
    )
    assert cfg.n_size_bins == 2
    assert cfg.n_fisheries == 3
    assert cfg.n_surveys == 1
    assert cfg.size_cutpoints == (25.0, 30.0, 35.0)


def test_from_dict_counts_only():
    cfg = ModelConfiguration.from_dict(
        {"min_year": 2000, "max_year": 2001, "n_size_bins": 10, "n_fisheries": 2}
    )
    assert (cfg.n_size_bins, cfg.n_fisheries, cfg.n_surveys) == (10, 2, 0)


@pytest.mark.parametrize(
    "data",
    [
        {"max_year": 2000, "n_size_bins": 1},
        {"min_year": 2001, "max_year": 2000, "n_size_bins": 1},
        {"min_year": 2000, "max_year": 2001},
        {"min_year": 2000, "max_year": 2001, "n_size_bins": -1},
        {"min_year": "2000", "max_year": 2001, "n_size_bins": 1},
        {"min_year": 2000, "max_year": 2001, "n_size_bins": 1, "n_fisheries": 2,
         "fishery_labels": ["TCF"]},
        {"min_year": 2000, "max_year": 2001, "n_size_bins": 2, "size_cutpoints": [1, 2]},
        {"min_year": 2000, "max_year": 2001, "size_cutpoints": ["a", "b"]},
        ["not", "a", "mapping"],
    ],
)
def test_from_dict_invalid(data):
    with pytest.raises(ConfigurationError):
        ModelConfiguration.from_dict(data)


def test_frozen():
    cfg = ModelConfiguration(min_year=1, max_year=2, n_size_bins=3)
    with pytest.raises(dataclasses.FrozenInstanceError):
        cfg.min_year = 5


def test_read_line_oriented():
    cfg = ModelConfiguration.read(TokenStream(ADMB_CONFIG))
    assert cfg.name == "snowcrab"
    assert (cfg.min_year, cfg.max_year) == (1965, 1970)
    assert cfg.n_size_bins == 4
    assert cfg.size_cutpoints == (25.0, 30.0, 35.0, 40.0, 45.0)
    assert cfg.fishery_labels == ("TCF", "SCF")
    assert cfg.survey_labels == ("NMFS",)


def test_read_bad_cutpoint():
    with pytest.raises(IndexFormatError):
        ModelConfiguration.read(TokenStream("m 1965 1970 1 25 x 0 0"))


def test_load_yaml(tmp_path):
    p = tmp_path / "model.yaml"
    p.write_text(
        "name: base\nmin_year: 1960\nmax_year: 1965\nn_size_bins: 32\n"
        "fishery_labels: [TCF, SCF]\nn_surveys: 1\n",
        encoding="utf-8",
    )
    cfg = load_model_config(p)
    assert (cfg.min_year, cfg.max_year, cfg.n_fisheries, cfg.n_surveys) == (1960, 1965, 2, 1)


def test_load_empty_yaml(tmp_path):
    p = tmp_path / "empty.yml"
    p.write_text("", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_model_config(p)


def test_load_line_oriented(tmp_path):
    p = tmp_path / "model.dat"
    p.write_text(ADMB_CONFIG, encoding="utf-8")
    assert load_model_config(p).n_fisheries == 2


def test_load_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_model_config(tmp_path / "nope.yaml")
