# tests/test_diagnostics.py

import pytest
from datetime import datetime, timezone

np = pytest.importorskip("numpy")

from hilal.core.config import SearchConfig
from hilal.diagnostics import lunation_lengths as ll

UTC = timezone.utc


def test_lunation_length_statistics():
    lengths = ll.lunation_lengths(np, datetime(2020, 1, 1, tzinfo=UTC), 14)
    s = ll.summarize(np, lengths)
    assert s["n"] == 13
    assert s["mean"] == pytest.approx(29.53, abs=0.15)
    assert 29.0 < s["min"] <= s["max"] < 30.1


def test_bisection_error_within_bound():
    opt = pytest.importorskip("scipy.optimize")
    from hilal.diagnostics import locator_precision as lp

    search = SearchConfig()
    errs = lp.bisection_errors_seconds(np, opt, datetime(2024, 1, 1, tzinfo=UTC), 6, search)
    bound = 86400.0 * search.bracket_half_width_days / 2 ** search.bisection_iterations
    assert errs.shape == (6,)
    assert np.max(np.abs(errs)) <= bound + 1e-3


def test_lunation_lengths_main_writes_plot(tmp_path, capsys):
    pytest.importorskip("matplotlib")
    out = tmp_path / "lengths.png"
    assert ll.main(["--start-year", "2024", "--count", "5", "--out-png", str(out)]) == 0
    assert out.exists()
    assert "Lunations from 2024-01-01" in capsys.readouterr().out
