# Command line entry point: one-shot commands on circuit files and the interactive menu
import argparse
import logging
import sys
from typing import Callable, List, Optional

from mna_solver.core.circuit import Circuit
from mna_solver.core.errors import CircuitError
from mna_solver.core.netlist import load_circuit, save_circuit
from mna_solver.core.solver_settings import SolverSettings
from mna_solver.core.visualization import format_results, render_adjacency, to_graphviz

logger = logging.getLogger(__name__)

MENU = """
========================================
   CIRCUIT SOLVER (MNA Algorithm)
========================================
1. Add Resistor
2. Add Current Source
3. Add Voltage Source
4. Solve Circuit
5. Save Circuit
6. Load Circuit (Auto-Solves)
7. Clear Circuit
8. Visualize Circuit (Text Graph)
9. Export Graphviz
0. Exit
========================================"""

# menu choice -> (kind, prompts for name, node A, node B, value)
ADD_PROMPTS = {
    "1": ("R", "Resistor", ("Enter Name (e.g., R1): ", "Enter Node A: ", "Enter Node B: ",
                            "Enter Resistance (Ohms): ")),
    "2": ("I", "Current Source", ("Enter Name (e.g., I1): ", "Enter Node From: ", "Enter Node To: ",
                                  "Enter Current (Amps): ")),
    "3": ("V", "Voltage Source", ("Enter Name (e.g., V1): ", "Enter Positive Node: ",
                                  "Enter Negative Node: ", "Enter Voltage (Volts): ")),
}


def configure_logging(verbose: bool = False, log_file: Optional[str] = None) -> None:
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='w'))
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=handlers,
        force=True,
    )


def prompt_float(prompt: str, input_fn: Callable[[str], str], output: Callable[[str], None]) -> float:
    """Ask until the answer parses as a number."""
    while True:
        answer = input_fn(prompt)
        try:
            return float(answer)
        except ValueError:
            output("Invalid input. Please enter a number.")


def solve_and_report(circuit: Circuit, output: Callable[[str], None]) -> bool:
    try:
        circuit.solve()
    except CircuitError as exc:
        output(f"[SOLVER ERROR]: {exc}")
        return False
    output(format_results(circuit))
    return True


def interactive_menu(circuit: Circuit,
                     input_fn: Callable[[str], str] = input,
                     output: Callable[[str], None] = print) -> None:
    """
    Run the interactive menu until the user exits or input ends.

    Errors from any action are reported and the loop continues.
    """
    while True:
        output(MENU)
        try:
            choice = input_fn("Enter choice: ").strip()
        except EOFError:
            output("Exiting.")
            return

        try:
            if choice in ADD_PROMPTS:
                kind, label, prompts = ADD_PROMPTS[choice]
                name = input_fn(prompts[0]).strip()
                node_a = input_fn(prompts[1]).strip()
                node_b = input_fn(prompts[2]).strip()
                value = prompt_float(prompts[3], input_fn, output)
                circuit.add_component(kind, name, node_a, node_b, value)
                output(f"{label} added.")
            elif choice == "4":
                solve_and_report(circuit, output)
            elif choice == "5":
                filename = input_fn("Enter filename to save: ").strip()
                save_circuit(circuit, filename)
                output(f"Circuit saved to {filename}")
            elif choice == "6":
                filename = input_fn("Enter filename to load: ").strip()
                count = load_circuit(circuit, filename)
                output(f"Loaded {count} components.")
                output("Auto-solving loaded circuit...")
                solve_and_report(circuit, output)
            elif choice == "7":
                circuit.clear()
                output("Circuit cleared.")
            elif choice == "8":
                output(render_adjacency(circuit))
            elif choice == "9":
                output(to_graphviz(circuit))
            elif choice == "0":
                output("Exiting.")
                return
            else:
                output("Invalid choice. Try again.")
        except EOFError:
            output("Exiting.")
            return
        except CircuitError as exc:
            output(f"[ERROR]: {exc}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Linear DC circuit solver using Modified Nodal Analysis',
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    parser.add_argument('--tolerance', type=float, default=1e-9,
                        help='Smallest pivot accepted by the Gaussian elimination')
    parser.add_argument('--precision', type=int, default=3,
                        help='Decimals printed for node voltages')
    parser.add_argument('--no-sanity-checks', action='store_true',
                        help='Skip the advisory topology warnings')
    parser.add_argument('--verbose', action='store_true',
                        help='Enable verbose logging')
    parser.add_argument('--log-file', default=None,
                        help='Also write the log to this file')

    subparsers = parser.add_subparsers(dest='command')
    for command, help_text in (
        ('solve', 'Load a circuit file, solve it and print node voltages'),
        ('show', 'Print the adjacency view of a circuit file'),
        ('dot', 'Print Graphviz DOT source for a circuit file'),
    ):
        sub = subparsers.add_parser(command, help=help_text)
        sub.add_argument('circuit_file', help='Path to the circuit file')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose, args.log_file)

    try:
        settings = SolverSettings(
            pivot_tolerance=args.tolerance,
            result_precision=args.precision,
            run_sanity_checks=not args.no_sanity_checks,
        )
    except ValueError as exc:
        print(f"[ERROR]: {exc}", file=sys.stderr)
        return 2
    circuit = Circuit(settings=settings)
    logger.debug(f"Solver settings: {settings.model_dump()}")

    if args.command is None:
        interactive_menu(circuit)
        return 0

    try:
        load_circuit(circuit, args.circuit_file)
        if args.command == 'solve':
            circuit.solve()
            print(format_results(circuit))
        elif args.command == 'show':
            print(render_adjacency(circuit))
        elif args.command == 'dot':
            print(to_graphviz(circuit))
    except CircuitError as exc:
        print(f"[ERROR]: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
