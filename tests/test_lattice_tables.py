from __future__ import annotations

import pytest

from binomial_lattice import ModelParameters, OptionType, build_lattice
from binomial_lattice.diagnostics.lattice import (
    export_lattice_csv,
    format_results,
    lattice_frame,
    terminal_results_table,
)


@pytest.fixture
def one_step():
    params = ModelParameters.symmetric(
        S0=10.0, S1=11.0, prob_up=0.5, frequency=1.0, maturity=1.0
    )
    return build_lattice(params)


def test_lattice_frame_layout(scenario_a):
    lattice, _ = build_lattice(scenario_a)
    frame = lattice_frame(lattice)

    assert frame.shape == (4, 4)
    assert frame.iloc[0, 0] == "10.0000(1.0000)"
    assert frame.iloc[0, 3] == "13.3100(0.1250)"
    assert frame.iloc[3, 3] == "7.2900(0.1250)"
    # above the diagonal is blank
    assert frame.iloc[1, 0] == ""
    assert frame.iloc[3, 2] == ""


def test_export_lattice_csv(tmp_path, one_step):
    lattice, _ = one_step
    out = export_lattice_csv(lattice, tmp_path / "bopm_output.csv")

    assert out.exists()
    assert out.read_text(encoding="utf-8") == (
        "10.0000(1.0000),11.0000(0.5000)\n"
        ",9.0000(0.5000)\n"
    )


def test_export_lattice_csv_propagates_os_errors(tmp_path, one_step):
    lattice, _ = one_step
    with pytest.raises(OSError):
        export_lattice_csv(lattice, tmp_path / "missing_dir" / "out.csv")


def test_terminal_results_table(scenario_a):
    _, terminal = build_lattice(scenario_a)
    table = terminal_results_table(terminal, strike=10.0, kind=OptionType.PUT)

    assert list(table.columns) == ["final_price", "payoff", "probability"]
    assert table["payoff"].tolist() == pytest.approx([0.0, 0.0, 1.09, 2.71])
    assert table["probability"].sum() == pytest.approx(1.0)


def test_format_results(scenario_a):
    _, terminal = build_lattice(scenario_a)
    table = terminal_results_table(terminal, strike=10.0, kind="call")
    text = format_results("call", table, 0.69075305)

    lines = text.splitlines()
    assert lines[0] == "Call Option"
    assert "Final Price" in lines[1] and "Probability" in lines[1]
    assert "13.3100" in text and "3.3100" in text
    assert lines[-1] == "The price of the Call option is 0.6908"


def test_format_results_requires_columns(scenario_a):
    _, terminal = build_lattice(scenario_a)
    table = terminal_results_table(terminal, strike=10.0, kind="call").drop(
        columns=["payoff"]
    )
    with pytest.raises(ValueError, match="payoff"):
        format_results("call", table, 0.5)
