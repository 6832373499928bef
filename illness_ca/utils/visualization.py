"""
Rendering and visualization tools for the illness automaton
"""
import logging
from pathlib import Path
from typing import Optional, Union

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.animation import FuncAnimation, PillowWriter
from PIL import Image

from .board import Board

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def render_frame(board: Board) -> np.ndarray:
    """Return an independent (height, width) uint8 raster of the board."""
    return np.array(board.state, dtype=np.uint8, copy=True)


def frame_path(output_dir: PathLike, prefix: str, index: int) -> Path:
    """Path of frame ``index``, e.g. ``png/foo-0007.png``."""
    return Path(output_dir) / f"{prefix}-{index:04d}.png"


def save_frame(board: Board, path: PathLike) -> Path:
    """
    Write the board as an 8-bit grayscale PNG.

    Args:
        board: Board to render
        path: Destination file; missing parent directories are created

    Returns:
        The written path

    Raises:
        OSError: If the file cannot be written
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    image = Image.fromarray(render_frame(board))
    image.save(path, format='PNG')
    logger.debug("Saved frame to %s", path)
    return path


def visualize_state(state: np.ndarray,
                    title: str = "Illness automaton",
                    save_path: Optional[PathLike] = None,
                    figsize: tuple = (8, 8)) -> None:
    """
    Visualize a single state with a colorbar.

    Args:
        state: State array (H x W)
        title: Plot title
        save_path: Path to save figure, None for display only
        figsize: Figure size
    """
    fig, ax = plt.subplots(figsize=figsize)

    im = ax.imshow(state, cmap='gray', vmin=0, vmax=255, interpolation='nearest')
    ax.set_title(title, fontsize=16, pad=10)
    ax.set_xticks([])
    ax.set_yticks([])
    fig.colorbar(im, ax=ax, fraction=0.046, pad=0.04, label='illness')

    plt.tight_layout()

    if save_path:
        plt.savefig(save_path, dpi=200, bbox_inches='tight')
        logger.info("Saved state to %s", save_path)
    else:
        plt.show()

    plt.close()


def visualize_trajectory(trajectory: np.ndarray,
                         title: str = "Illness automaton",
                         save_path: Optional[PathLike] = None,
                         figsize: tuple = (16, 4),
                         num_frames_to_show: int = 8) -> None:
    """
    Visualize evenly spaced frames from a trajectory.

    Args:
        trajectory: Trajectory array (T, H, W)
        title: Figure title
        save_path: Path to save figure
        figsize: Figure size
        num_frames_to_show: Number of frames to display
    """
    num_steps = len(trajectory)
    num_frames_to_show = min(num_frames_to_show, num_steps)
    indices = np.linspace(0, num_steps - 1, num_frames_to_show, dtype=int)

    fig, axes = plt.subplots(1, num_frames_to_show, figsize=figsize)
    axes = np.atleast_1d(axes)

    for ax, idx in zip(axes, indices):
        ax.imshow(trajectory[idx], cmap='gray', vmin=0, vmax=255, interpolation='nearest')
        ax.set_title(f"t={idx}", fontsize=12)
        ax.set_xticks([])
        ax.set_yticks([])

    fig.suptitle(f"{title} Evolution", fontsize=16)
    plt.tight_layout()

    if save_path:
        plt.savefig(save_path, dpi=200, bbox_inches='tight')
        logger.info("Saved trajectory to %s", save_path)
    else:
        plt.show()

    plt.close()


def create_animation(trajectory: np.ndarray,
                     title: str = "Illness automaton",
                     save_path: Optional[PathLike] = None,
                     fps: int = 10,
                     figsize: tuple = (8, 8)) -> None:
    """
    Create an animated GIF from a trajectory.

    Args:
        trajectory: Trajectory array (T, H, W)
        title: Title prefix shown above each frame
        save_path: Path to save GIF file
        fps: Frames per second
        figsize: Figure size
    """
    fig, ax = plt.subplots(figsize=figsize)

    im = ax.imshow(trajectory[0], cmap='gray', vmin=0, vmax=255,
                   interpolation='nearest', animated=True)
    ax.set_xticks([])
    ax.set_yticks([])
    label = ax.set_title(f"{title} - Step 0", fontsize=16)

    def update(frame):
        im.set_array(trajectory[frame])
        label.set_text(f"{title} - Step {frame}")
        return [im, label]

    anim = FuncAnimation(fig, update, frames=len(trajectory),
                         interval=1000 // fps, blit=True, repeat=True)

    if save_path:
        writer = PillowWriter(fps=fps)
        anim.save(save_path, writer=writer)
        logger.info("Saved animation to %s", save_path)
    else:
        plt.show()

    plt.close()


def plot_population_history(history: dict,
                            save_path: Optional[PathLike] = None,
                            figsize: tuple = (10, 5)) -> None:
    """
    Plot healthy / infected / illed counts per generation.

    Args:
        history: Output of ``population_history``
        save_path: Path to save figure
        figsize: Figure size
    """
    fig, ax = plt.subplots(figsize=figsize)

    steps = np.arange(len(history['healthy']))
    ax.plot(steps, history['healthy'], label='healthy', color='tab:green')
    ax.plot(steps, history['infected'], label='infected', color='tab:orange')
    ax.plot(steps, history['illed'], label='illed', color='tab:red')
    ax.set_xlabel('generation')
    ax.set_ylabel('cells')
    ax.grid(alpha=0.3)
    ax.legend(loc='upper right')

    ax2 = ax.twinx()
    ax2.plot(steps, history['mean_intensity'], color='gray', linestyle='--', linewidth=1)
    ax2.set_ylabel('mean intensity')
    ax2.set_ylim(0, 255)

    ax.set_title("Population per generation", fontsize=14)
    plt.tight_layout()

    if save_path:
        plt.savefig(save_path, dpi=150, bbox_inches='tight')
        logger.info("Saved population plot to %s", save_path)
    else:
        plt.show()

    plt.close()
