# indexblocks/tests/test_dimensions.py
import pytest
from indexblocks import dimensions as dims
from indexblocks.model_config import ModelConfiguration
from indexblocks.exceptions import UnknownDimensionError

CFG = ModelConfiguration(min_year=1950, max_year=2020, n_size_bins=32, n_fisheries=4, n_surveys=2)


@pytest.mark.parametrize(
    "type_text, key",
    [
        ("YEAR", "YEAR"),
        ("YEAR_RECRUITMENT", "YEAR"),
        ("SIZE_MALE", "SIZE"),
        ("MATURITY_STATE", "MATURITY_STATE"),
        ("MATURITY_STATE_M", "MATURITY_STATE"),
        ("SHELL_CONDITION", "SHELL_CONDITION"),
        ("SEXES", "SEXES"),
        ("AREA_NORTH", "AREA"),
        ("AREA", "AREA"),
    ],
)
def test_dispatch_key(type_text, key):
    assert dims.dispatch_key(type_text) == key


def test_resolve_bounds():
    assert dims.resolve_bounds("YEAR", CFG) == (1950, 2020)
    assert dims.resolve_bounds("SIZE", CFG) == (1, 32)
    assert dims.resolve_bounds("SEX", CFG) == (1, dims.N_SEXES)
    assert dims.resolve_bounds("MATURITY_STATE", CFG) == (1, 2)
    assert dims.resolve_bounds("SHELL_CONDITION", CFG) == (1, 2)
    assert dims.resolve_bounds("FISHERY", CFG) == (1, 4)
    assert dims.resolve_bounds("SURVEY", CFG) == (1, 2)


def test_resolve_unknown_is_fatal():
    with pytest.raises(UnknownDimensionError):
        dims.resolve_bounds("AREA", CFG)


def test_is_known_dimension():
    assert dims.is_known_dimension("FISHERY")
    assert not dims.is_known_dimension("YEAR_RECRUITMENT")
