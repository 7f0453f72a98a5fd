"""Plots of value functions, greedy policies and planner convergence."""

from typing import Dict, List, Optional, Tuple

import numpy as np
import matplotlib
import matplotlib.pyplot as plt

from ..Planning.observers import ConvergenceTrace

# arrow (dx, dy) per GridWorld action name
ARROWS = {
    "north": (0.0, 0.35),
    "south": (0.0, -0.35),
    "east": (0.35, 0.0),
    "west": (-0.35, 0.0),
}


def plot_value_function(
    values: np.ndarray,
    policy_actions: Optional[Dict[Tuple[int, int], List[str]]] = None,
    title: str = "Value Function",
    save_path: Optional[str] = None,
    show: bool = True,
):
    """Heat map of a grid value function with optional greedy action arrows.

    Parameters
    ----------
    values : np.ndarray
        (height, width) array of state values, NaN for cells without a value
    policy_actions : dict, optional
        (x, y) -> list of greedy action names, drawn as arrows
    title : str
        Figure title
    save_path : str, optional
        Path to save figure (e.g., "images/four_rooms_values.png")
    show : bool
        Whether to display the figure
    """
    fig, ax = plt.subplots(figsize=(7, 6))

    masked = np.ma.masked_invalid(values)
    cmap = matplotlib.colormaps["viridis"].with_extremes(bad="black")
    im = ax.imshow(masked, origin="lower", cmap=cmap)
    fig.colorbar(im, ax=ax, label="V(s)")

    if policy_actions:
        for (x, y), actions in policy_actions.items():
            for a in actions:
                if a not in ARROWS:
                    continue
                dx, dy = ARROWS[a]
                ax.arrow(x, y, dx, dy, head_width=0.15, head_length=0.1,
                         fc="white", ec="white", length_includes_head=True)

    ax.set_xlabel("x")
    ax.set_ylabel("y")
    ax.set_title(title)

    plt.tight_layout()
    if save_path:
        plt.savefig(save_path, dpi=150, bbox_inches='tight')
        print(f"Saved value function plot to {save_path}")
    if show:
        plt.show()
    else:
        plt.close(fig)


def plot_convergence(
    trace: ConvergenceTrace,
    save_path: Optional[str] = None,
    show: bool = True
):
    """Final-sweep delta and sweep count for each evaluation pass.

    Parameters
    ----------
    trace : ConvergenceTrace
        Observer attached to the planner during planning
    save_path : str, optional
        Path to save figure
    show : bool
        Whether to display the figure
    """
    if not trace.records:
        print("No evaluation passes to plot")
        return

    fig, axes = plt.subplots(1, 2, figsize=(12, 4))
    passes = np.arange(1, len(trace.records) + 1)

    ax = axes[0]
    deltas = np.array(trace.deltas)
    ax.semilogy(passes, np.maximum(deltas, 1e-16), marker='o', color='steelblue')
    ax.set_xlabel('Evaluation Pass')
    ax.set_ylabel('Final Sweep Delta')
    ax.set_title('Policy Evaluation Convergence')
    ax.grid(alpha=0.3)

    ax = axes[1]
    ax.bar(passes, [r.sweeps for r in trace.records], color='darkorange', alpha=0.7)
    ax.set_xlabel('Evaluation Pass')
    ax.set_ylabel('Sweeps')
    ax.set_title('Sweeps per Evaluation Pass')
    ax.grid(axis='y', alpha=0.3)

    plt.tight_layout()
    if save_path:
        plt.savefig(save_path, dpi=150, bbox_inches='tight')
        print(f"Saved convergence plot to {save_path}")
    if show:
        plt.show()
    else:
        plt.close(fig)
