"""Tests of the registry of porous-flow variables."""

import pytest

import porousflow as pf


def test_coupled_indices_follow_ordering():
    dictator = pf.PorousFlowDictator([7, 2, 5], num_phases=2)
    assert dictator.num_variables == 3
    assert dictator.num_phases == 2
    assert dictator.variable_numbers == (7, 2, 5)
    assert [dictator.porous_flow_variable_num(v) for v in (7, 2, 5)] == [0, 1, 2]


def test_unknown_variable():
    dictator = pf.PorousFlowDictator([7, 2, 5], num_phases=0)
    assert dictator.porous_flow_variable_num(3) is None
    assert dictator.not_porous_flow_variable(3)
    assert not dictator.is_porous_flow_variable(3)
    assert dictator.is_porous_flow_variable(2)
    assert not dictator.not_porous_flow_variable(2)


def test_no_variables():
    dictator = pf.PorousFlowDictator([], num_phases=0)
    assert dictator.num_variables == 0
    assert dictator.porous_flow_variable_num(0) is None


def test_variable_names():
    dictator = pf.PorousFlowDictator(
        [4, 1], num_phases=1, variable_names=["pressure", "temperature"]
    )
    assert dictator.variable_number("temperature") == 1
    assert dictator.porous_flow_variable_num(
        dictator.variable_number("pressure")
    ) == 0
    with pytest.raises(KeyError, match="saturation") as excinfo:
        dictator.variable_number("saturation")
    # The failed dictionary lookup is not chained to the error
    assert excinfo.value.__suppress_context__


@pytest.mark.parametrize(
    "kwargs",
    [
        {"variable_numbers": [1, 1], "num_phases": 1},
        {"variable_numbers": [1, 2], "num_phases": -1},
        {"variable_numbers": [1, 2], "num_phases": 1, "variable_names": ["p"]},
    ],
)
def test_invalid_input(kwargs):
    with pytest.raises(ValueError):
        pf.PorousFlowDictator(**kwargs)
