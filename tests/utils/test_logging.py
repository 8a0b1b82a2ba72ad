"""Tests of the timing decorator."""

import porousflow as pf


@pf.time_logger(sections=[pf.NUMERICS])
def _scaled_sum(a, b, scale=1.0):
    """Sum scaled by a factor."""
    return scale * (a + b)


def test_decorated_function_is_transparent():
    assert _scaled_sum(1, 2) == 3
    assert _scaled_sum(1, 2, scale=2.0) == 6.0
    assert _scaled_sum.__name__ == "_scaled_sum"
    assert _scaled_sum.__doc__ == "Sum scaled by a factor."


def test_logging_is_inactive_by_default():
    # No porousflow.cfg is present where the tests are run
    assert "logging" not in pf.config
    assert not pf.utils.logging.logger_is_active
