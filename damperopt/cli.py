"""Command line entry point that tunes damper parameters on a simulated road."""

from __future__ import annotations

import argparse
from collections.abc import Sequence

import numpy as np

from damperopt.optimizer import BayesianOptimization, ParameterBounds
from damperopt.road_profile import RoadProfile
from damperopt.surrogate import GaussianProcess, KernelAverage
from damperopt.vehicle_dynamics import VehicleDynamics

PARAMETERS: tuple[tuple[str, ParameterBounds], ...] = (
    ("C_c", ParameterBounds(500.0, 5000.0)),
    ("C_r", ParameterBounds(1000.0, 8000.0)),
    ("Blow-off", ParameterBounds(0.5, 2.0)),
    ("Gas Pressure", ParameterBounds(5.0, 20.0)),
    ("Motion Ratio", ParameterBounds(0.5, 1.5)),
    ("Inclination", ParameterBounds(0.0, 30.0)),
    ("Knee Point", ParameterBounds(0.0, 2.0)),
    ("Stroke Limit", ParameterBounds(0.05, 0.1)),
    ("Spring Preload", ParameterBounds(0.0, 1000.0)),
    ("Tire Damping", ParameterBounds(50.0, 500.0)),
    ("Anti-roll Stiffness", ParameterBounds(1000.0, 10000.0)),
)

_DEFAULT_CANDIDATES = {"kernel": 2000, "gp": 1000}


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="damperopt", description="Tune damper parameters with Bayesian optimisation."
    )
    parser.add_argument("--initial", type=int, default=15, help="random starting evaluations")
    parser.add_argument("--iterations", type=int, default=50, help="guided evaluations")
    parser.add_argument(
        "--surrogate", choices=sorted(_DEFAULT_CANDIDATES), default="kernel",
        help="surrogate model used for expected improvement",
    )
    parser.add_argument("--candidates", type=int, default=None, help="random candidates per step")
    parser.add_argument(
        "--steps", type=int, default=VehicleDynamics.SIM_STEPS, help="simulation steps"
    )
    parser.add_argument("--seed", type=int, default=None, help="seed for reproducible runs")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the optimisation and print the best parameters found."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    if args.initial < 1:
        parser.error("--initial must be at least 1")
    if args.iterations < 0:
        parser.error("--iterations must not be negative")
    if args.steps < 2:
        parser.error("--steps must be at least 2")
    candidates = args.candidates or _DEFAULT_CANDIDATES[args.surrogate]
    if candidates < 1:
        parser.error("--candidates must be at least 1")

    rng = np.random.default_rng(args.seed)
    print("Starting DamperOptimization...")
    bounds = [b for _, b in PARAMETERS]
    print("Parameter bounds initialized.")
    road = RoadProfile.generate(args.steps, VehicleDynamics.DT, rng)
    simulator = VehicleDynamics(road)
    print("VehicleDynamics simulator initialized.")

    def objective(params: np.ndarray) -> float:
        print("Evaluating objective for parameters...")
        result = simulator.evaluate_objective(params)
        print(f"Objective value: {result:g}")
        return result

    surrogate = KernelAverage() if args.surrogate == "kernel" else GaussianProcess()
    optimizer = BayesianOptimization(bounds, objective, surrogate, candidates, rng)
    print("BayesianOptimization initialized.")
    print("Starting initialization...")
    optimizer.initialize(args.initial)
    print("Initialization complete. Starting optimization...")
    optimizer.optimize(args.iterations)
    print("Optimization complete.")

    best_params, best_value = optimizer.best()
    print(f"Best Objective Value: {best_value:g}")
    print("Best Parameters:")
    for (name, _), value in zip(PARAMETERS, best_params):
        print(f"{name}: {value:g}")
    print("Program finished successfully.")
    return 0