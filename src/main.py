#!/usr/bin/env python3
"""
continuous-time markov chain analysis CLI

drives the full pipeline on a chain description:
- generator matrix, irreducibility and stationary distribution
- exact distribution over time via the matrix exponential
- monte-carlo simulation of sample paths
- theory vs simulation validation with total variation distance

usage:
  python main.py analyze -e cycle  # structure + stationary distribution
  python main.py evolve -f chain.txt -T 10 --plot  # exact distribution over time
  python main.py simulate -e weather -m 5000 --seed 7  # empirical proportions
  python main.py validate -c validation.yaml  # full comparison with plots
"""

import argparse
import os
import sys
import time
from typing import Optional, Tuple

import numpy as np

from chains import EXAMPLE_CHAINS, ChainDefinition, ChainParseError, parse_or_raise
from chains.generator import build_generator_matrix, is_irreducible, reachable_from
from compute import matrix_exponential, evenly_spaced_times
from analysis import (
    stationary_distribution, distribution_over_time, distance_to_stationary,
    summarize_convergence, total_variation_distance, ValidationConfig, ValidationRunner,
)
from simulation import SimulationConfig, simulate, system_source
from viz import plot_distribution, plot_validation, save_distribution_data


def create_output_dir(base_name: str) -> str:
    """create timestamped output directory"""
    timestamp = time.strftime("%Y%m%d-%H%M%S")
    output_dir = f"{base_name}_{timestamp}"
    os.makedirs(output_dir, exist_ok=True)
    return output_dir


def load_chain(args) -> Tuple[ChainDefinition, str]:
    """parse the chain named on the command line, exiting on invalid input"""
    if args.file:
        with open(args.file, 'r', encoding='utf-8') as f:
            text = f.read()
        name = os.path.splitext(os.path.basename(args.file))[0]
    else:
        text = EXAMPLE_CHAINS[args.example]
        name = args.example

    try:
        return parse_or_raise(text), name
    except ChainParseError as e:
        print(f"❌ invalid chain ({e.kind.value}): {e}")
        sys.exit(1)


def format_matrix(matrix: np.ndarray, states, precision: int = 4) -> str:
    width = max(max(len(s) for s in states), precision + 4)
    header = " " * (width + 2) + " ".join(f"{s:>{width}}" for s in states)
    rows = [header]
    for i, state in enumerate(states):
        values = " ".join(f"{matrix[i, j]:>{width}.{precision}f}" for j in range(len(states)))
        rows.append(f"{state:>{width}}  {values}")
    return "\n".join(rows)


def print_distribution(dist, states, label: str) -> None:
    print(f"{label}:")
    for state in states:
        print(f"  {state}: {dist[state]:.6f}")


def cmd_analyze(args) -> None:
    """structural analysis and equilibrium"""
    print("═" * 60)
    print("CHAIN ANALYSIS")
    print("═" * 60)

    chain, name = load_chain(args)
    states = chain.states

    print(f"chain: {name}")
    print(f"states: {', '.join(states)}")
    print(f"transitions: {len(chain.transitions)}")
    print_distribution(chain.initial_distribution, states, "initial distribution")

    q = build_generator_matrix(chain)
    print("\ngenerator matrix Q:")
    print(format_matrix(q, states))

    irreducible = is_irreducible(chain)
    print(f"\nirreducible: {'yes' if irreducible else 'no'}")
    if not irreducible:
        for state in states:
            reachable = sorted(reachable_from(chain, state), key=chain.index_of)
            print(f"  {state} reaches: {', '.join(reachable)}")

    stationary = stationary_distribution(chain)
    if stationary is None:
        print("stationary distribution: none (chain is not irreducible)")
    else:
        print_distribution(stationary, states, "stationary distribution")

    if args.time is not None:
        p = matrix_exponential(q, states, args.time)
        print(f"\ntransition matrix P(t) at t = {args.time}:")
        print(format_matrix(p, states))


def cmd_evolve(args) -> None:
    """exact distribution over time"""
    print("═" * 60)
    print("DISTRIBUTION OVER TIME")
    print("═" * 60)

    chain, name = load_chain(args)
    states = chain.states
    try:
        times = evenly_spaced_times(args.horizon, args.num_points)
    except ValueError as e:
        print(f"❌ {e}")
        sys.exit(1)

    print(f"chain: {name}")
    print(f"time grid: [0, {args.horizon}] with {args.num_points} points")

    result = distribution_over_time(chain, times)
    stationary = stationary_distribution(chain)

    step = max(1, len(times) // 10)
    print("\n" + "t".rjust(10) + "".join(f"{s:>12}" for s in states))
    indices = list(range(0, len(times), step))
    if indices[-1] != len(times) - 1:
        indices.append(len(times) - 1)
    for idx in indices:
        row = "".join(f"{result.distributions[s][idx]:>12.6f}" for s in states)
        print(f"{times[idx]:>10.4f}{row}")

    comments = [f"horizon={args.horizon}, points={args.num_points}"]
    if stationary is not None:
        distances = distance_to_stationary(result.distributions, stationary, states)
        report = summarize_convergence(times, distances)
        print(f"\ntotal variation to stationary at t = {args.horizon}: {report.final_distance:.6f}")
        if report.mixing_time is not None:
            print(f"within tv 0.01 of stationary from t ≈ {report.mixing_time:.4f}")
        comments.append("stationary: " + ", ".join(f"{s}={stationary[s]:.6f}" for s in states))

    if args.plot or args.save_data:
        output_dir = create_output_dir(args.output_dir)
        if args.plot:
            plot_file = plot_distribution(times, result.distributions, states, name,
                                          output_dir, stationary)
            print(f"\nsaved plot to: {plot_file}")
        if args.save_data:
            data_file = save_distribution_data(times, result.distributions, states, name,
                                               output_dir, comments)
            print(f"saved data to: {data_file}")


def cmd_simulate(args) -> None:
    """monte-carlo estimate of the distribution over time"""
    print("═" * 60)
    print("MONTE-CARLO SIMULATION")
    print("═" * 60)

    chain, name = load_chain(args)
    states = chain.states

    try:
        config = SimulationConfig(trajectory_count=args.num_trajectories,
                                  horizon=args.horizon,
                                  grid_points=args.num_points,
                                  verbose=True)
    except ValueError as e:
        print(f"❌ {e}")
        sys.exit(1)

    print(f"chain: {name}")
    print(f"trajectories: {config.trajectory_count}")
    print(f"horizon: {config.horizon}, grid points: {config.grid_points}")
    print(f"seed: {args.seed if args.seed is not None else 'none (system entropy)'}")
    print()

    result = simulate(chain, config, system_source(args.seed))

    final = result.final()
    errors = result.standard_errors()
    print(f"\nproportions at t = {config.horizon}:")
    for state in states:
        print(f"  {state}: {final[state]:.4f} ± {errors[state][-1]:.4f}")

    stationary = stationary_distribution(chain)
    if stationary is not None:
        tv = total_variation_distance(final, stationary, states)
        print(f"total variation to stationary: {tv:.4f}")

    if args.output_dir:
        output_dir = create_output_dir(args.output_dir)
        results_file = os.path.join(output_dir, "simulation_results.json")
        result.save(results_file)
        print(f"\nresults saved to: {results_file}")


def cmd_validate(args) -> None:
    """theory vs simulation"""
    print("═" * 60)
    print("THEORY VS SIMULATION")
    print("═" * 60)

    try:
        if args.config:
            config = ValidationConfig.from_yaml(args.config)
        else:
            text = None
            if args.file:
                with open(args.file, 'r', encoding='utf-8') as f:
                    text = f.read()
            config = ValidationConfig(
                chain_text=text,
                example=None if text is not None else args.example,
                horizon=args.horizon,
                grid_points=args.num_points,
                trajectory_count=args.num_trajectories,
                seed=args.seed,
                confidence_level=args.confidence_level,
                output_dir=args.output_dir or "validation_results",
            )
        runner = ValidationRunner(config)
    except ChainParseError as e:
        print(f"❌ invalid chain ({e.kind.value}): {e}")
        sys.exit(1)
    except ValueError as e:
        print(f"❌ {e}")
        sys.exit(1)

    name = config.example or (os.path.splitext(os.path.basename(args.file))[0]
                              if args.file else "chain")
    print(f"chain: {name}")
    print(f"trajectories: {config.trajectory_count}, horizon: {config.horizon}, "
          f"grid points: {config.grid_points}")
    print()

    results = runner.run()
    summary = results.summary()

    print("\n" + "═" * 60)
    print("RESULTS")
    print("═" * 60)
    print(f"irreducible: {'yes' if results.irreducible else 'no'}")
    print(f"max tv(simulation, exact): {summary['max_simulation_distance']:.4f}")
    print(f"mean tv(simulation, exact): {summary['mean_simulation_distance']:.4f}")
    print(f"exact inside {config.confidence_level*100:.0f}% band: "
          f"{summary['band_coverage']*100:.1f}% of points")

    if results.stationary is not None:
        print_distribution(results.stationary, results.chain.states, "stationary distribution")
        print(f"final tv(simulation, stationary): {results.final_distance_to_stationary:.4f}")
        report = results.convergence_report
        if report.mixing_time is not None:
            print(f"mixing time (tv ≤ {config.convergence.tolerance}): {report.mixing_time:.4f}")
        else:
            print(f"mixing time: not reached within horizon (final tv {report.final_distance:.4f})")
    print(f"computation time: {results.compute_time:.1f}s")

    output_dir = create_output_dir(config.output_dir)
    plot_file = plot_validation(results, name, output_dir)
    print(f"\nsaved comparison plots to: {plot_file}")
    results_file = os.path.join(output_dir, "validation_results.json")
    results.save(results_file)
    print(f"results saved to: {results_file}")


def main(argv: Optional[list] = None):
    parser = argparse.ArgumentParser(description='continuous-time markov chain CLI')
    subparsers = parser.add_subparsers(dest='command', help='analysis commands')

    # shared arguments
    def add_chain_args(parser):
        source = parser.add_mutually_exclusive_group()
        source.add_argument('-f', '--file', type=str, default=None,
                            help='chain description file')
        source.add_argument('-e', '--example', type=str, default='cycle',
                            choices=sorted(EXAMPLE_CHAINS.keys()),
                            help='built-in example chain')

    def add_grid_args(parser):
        parser.add_argument('-T', '--horizon', type=float, default=10.0,
                            help='time horizon')
        parser.add_argument('-N', '--num-points', type=int, default=100,
                            help='number of time grid points')

    def add_simulation_args(parser):
        parser.add_argument('-m', '--num-trajectories', type=int, default=500,
                            help='number of simulated trajectories')
        parser.add_argument('--seed', type=int, default=None,
                            help='random seed (omit for system entropy)')

    # analyze command - structure and equilibrium
    analyze_parser = subparsers.add_parser('analyze', help='generator, irreducibility, stationary')
    add_chain_args(analyze_parser)
    analyze_parser.add_argument('-t', '--time', type=float, default=None,
                                help='also print P(t) at this time')

    # evolve command - exact distribution over time
    evolve_parser = subparsers.add_parser('evolve', help='exact distribution over time')
    add_chain_args(evolve_parser)
    add_grid_args(evolve_parser)
    evolve_parser.add_argument('--plot', action='store_true', help='save distribution plot')
    evolve_parser.add_argument('-s', '--save-data', action='store_true',
                               help='save distribution table')
    evolve_parser.add_argument('-o', '--output-dir', type=str, default='distribution_results',
                               help='output directory base name')

    # simulate command - monte-carlo proportions
    simulate_parser = subparsers.add_parser('simulate', help='monte-carlo simulation')
    add_chain_args(simulate_parser)
    add_grid_args(simulate_parser)
    add_simulation_args(simulate_parser)
    simulate_parser.add_argument('-o', '--output-dir', type=str, default=None,
                                 help='output directory base name (omit to skip saving)')

    # validate command - theory vs simulation
    validate_parser = subparsers.add_parser('validate', help='compare simulation with theory')
    add_chain_args(validate_parser)
    add_grid_args(validate_parser)
    add_simulation_args(validate_parser)
    validate_parser.add_argument('-c', '--config', type=str, default=None,
                                 help='yaml validation config (overrides other options)')
    validate_parser.add_argument('--confidence-level', type=float, default=0.95,
                                 help='confidence level for simulation bands')
    validate_parser.add_argument('-o', '--output-dir', type=str, default='validation_results',
                                 help='output directory base name')

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return

    # dispatch commands
    if args.command == 'analyze':
        cmd_analyze(args)
    elif args.command == 'evolve':
        cmd_evolve(args)
    elif args.command == 'simulate':
        cmd_simulate(args)
    elif args.command == 'validate':
        cmd_validate(args)
    else:
        print(f"❌ unknown command: {args.command}")


if __name__ == '__main__':
    main()
