"""
Distribution plotting functions
"""

import numpy as np
import matplotlib.pyplot as plt
from typing import Dict, List, Optional, Sequence
import os
import time

STATE_COLORS = ['cyan', 'magenta', 'orange', 'lime', 'red', 'yellow', 'deepskyblue', 'violet']


def _color(idx: int) -> str:
    return STATE_COLORS[idx % len(STATE_COLORS)]


def _timestamped(output_dir: str, prefix: str, name: str, ext: str) -> str:
    timestamp = time.strftime("%Y%m%d-%H%M%S")
    return os.path.join(output_dir, f"{prefix}_{name.lower().replace(' ', '_')}_{timestamp}.{ext}")


def plot_distribution(
    times: Sequence[float],
    distributions: Dict[str, Sequence[float]],
    states: Sequence[str],
    chain_name: str,
    output_dir: str,
    stationary: Optional[Dict[str, float]] = None
) -> str:
    """Plot P(X(t) = s) for every state, with stationary levels if known"""

    plt.style.use('dark_background')
    fig, ax = plt.subplots(figsize=(12, 7))

    for idx, state in enumerate(states):
        ax.plot(times, distributions[state], color=_color(idx), linewidth=1.5, alpha=0.9,
                label=state)
        if stationary is not None:
            ax.axhline(y=stationary[state], color=_color(idx), linestyle='--', alpha=0.5)

    ax.set_xlabel('Time')
    ax.set_ylabel('Probability')
    ax.set_ylim(-0.02, 1.02)
    ax.set_title(f'{chain_name} - Distribution Over Time')
    ax.grid(True, alpha=0.3)
    ax.legend()

    plt.tight_layout()

    filename = _timestamped(output_dir, "distribution", chain_name, "png")
    plt.savefig(filename, dpi=150, bbox_inches='tight')
    plt.close(fig)

    return filename


def plot_validation(results, chain_name: str, output_dir: str) -> str:
    """Four-panel comparison of exact and simulated distributions"""

    plt.style.use('dark_background')
    fig, ((ax1, ax2), (ax3, ax4)) = plt.subplots(2, 2, figsize=(15, 12))

    states = results.chain.states
    times = results.exact.times
    bands = results.simulated.confidence_band(results.confidence_level)

    # exact curves
    for idx, state in enumerate(states):
        ax1.plot(times, results.exact.distributions[state], color=_color(idx),
                 linewidth=1.5, label=state)
        if results.stationary is not None:
            ax1.axhline(y=results.stationary[state], color=_color(idx), linestyle='--', alpha=0.5)
    ax1.set_xlabel('Time')
    ax1.set_ylabel('Probability')
    ax1.set_title(f'{chain_name} - Exact Distribution (matrix exponential)')
    ax1.grid(True, alpha=0.3)
    ax1.legend()

    # simulated proportions with confidence bands, exact overlaid
    for idx, state in enumerate(states):
        low, high = bands[state]
        ax2.fill_between(results.simulated.times, low, high, color=_color(idx), alpha=0.2)
        ax2.plot(results.simulated.times, results.simulated.proportions[state],
                 color=_color(idx), linewidth=1.0, alpha=0.9, label=f'{state} (sim)')
        ax2.plot(times, results.exact.distributions[state], color='white',
                 linewidth=0.8, linestyle=':', alpha=0.7)
    ax2.set_xlabel('Time')
    ax2.set_ylabel('Proportion')
    ax2.set_title(f'Monte-Carlo ({results.simulated.trajectory_count} trajectories, '
                  f'{results.confidence_level*100:.0f}% bands)')
    ax2.grid(True, alpha=0.3)
    ax2.legend()

    # simulation vs theory
    ax3.plot(times, results.simulation_distance, 'cyan', linewidth=1.5, alpha=0.8)
    ax3.axhline(y=np.mean(results.simulation_distance), color='yellow', linestyle='--',
                alpha=0.7, label='Mean')
    ax3.set_xlabel('Time')
    ax3.set_ylabel('Total Variation')
    ax3.set_title('Simulation vs Exact')
    ax3.grid(True, alpha=0.3)
    ax3.legend()

    # convergence to equilibrium
    if results.exact_to_stationary is not None:
        ax4.semilogy(times, np.maximum(results.exact_to_stationary, 1e-16), 'magenta',
                     linewidth=1.5, alpha=0.8)
        report = results.convergence_report
        if report is not None and report.mixing_time is not None:
            ax4.axvline(x=report.mixing_time, color='yellow', linestyle='--', alpha=0.7,
                        label=f'mixing time {report.mixing_time:.3f}')
            ax4.legend()
        ax4.set_title('Exact vs Stationary')
    else:
        ax4.text(0.5, 0.5, 'chain is not irreducible:\nno stationary distribution',
                 ha='center', va='center', transform=ax4.transAxes)
        ax4.set_title('Exact vs Stationary (n/a)')
    ax4.set_xlabel('Time')
    ax4.set_ylabel('Total Variation')
    ax4.grid(True, alpha=0.3)

    plt.tight_layout()

    filename = _timestamped(output_dir, "validation", chain_name, "png")
    plt.savefig(filename, dpi=150, bbox_inches='tight')
    plt.close(fig)

    return filename


def save_distribution_data(
    times: Sequence[float],
    distributions: Dict[str, Sequence[float]],
    states: Sequence[str],
    chain_name: str,
    output_dir: str,
    comments: Optional[List[str]] = None
) -> str:
    """Save a distribution-over-time table to a tab separated file"""

    filename = _timestamped(output_dir, "distribution", chain_name, "txt")

    with open(filename, 'w', encoding='utf-8') as f:
        f.write(f"# Distribution over time for {chain_name}\n")
        for comment in comments or []:
            f.write(f"# {comment}\n")

        f.write("# Time\t" + "\t".join(states) + "\n")

        for idx, t in enumerate(times):
            def fmt(x):
                if x is None or not np.isfinite(x):
                    return "nan"
                return f"{x:.8f}"

            row = "\t".join(fmt(distributions[s][idx]) for s in states)
            f.write(f"{t:.6f}\t{row}\n")

    return filename
