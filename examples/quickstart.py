from __future__ import annotations


def main() -> None:
    # [START README_QUICKSTART]
    from binomial_lattice import (
        ModelParameters,
        OptionType,
        build_lattice,
        price_option,
    )
    from binomial_lattice.diagnostics.lattice import (
        export_lattice_csv,
        format_results,
        terminal_results_table,
    )

    params = ModelParameters.asymmetric(
        S0=10.0, S1_up=12.0, S1_down=9.0, prob_up=0.60, frequency=4.0, maturity=1.0
    )
    lattice, terminal = build_lattice(params)
    export_lattice_csv(lattice, "bopm_output.csv")

    for kind in (OptionType.CALL, OptionType.PUT):
        price = price_option(
            terminal.prices, terminal.probs, 10.0, 0.08, params.frequency, kind
        )
        table = terminal_results_table(terminal, strike=10.0, kind=kind)
        print(format_results(kind, table, price))
    # [END README_QUICKSTART]


if __name__ == "__main__":
    main()
