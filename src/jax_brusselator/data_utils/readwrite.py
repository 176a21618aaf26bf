"""
Utilities for saving and loading simulation output.
"""

import os
from typing import Tuple, Optional

import numpy as np
import jax
import jax.numpy as jnp

from ..solvers.grid import Grid
from ..solvers.trajectory import Trajectory


def save_dataset(dataset: dict, save_path: str, metadata: Optional[dict] = None, verbose: bool = False):
    """
    Save arrays to a compressed NPZ file with metadata.

    Args:
        dataset: Dictionary of arrays
        save_path: Path to save the NPZ file
        metadata: Scalars/strings stored under a 'meta_' prefix
        verbose: Print a summary of what was written
    """
    directory = os.path.dirname(save_path)
    if directory:
        os.makedirs(directory, exist_ok=True)

    save_data = {}
    for key, value in dataset.items():
        if key.startswith('meta_'):
            raise ValueError(f"Dataset keys may not start with 'meta_': {key}")
        if isinstance(value, jax.Array):
            save_data[key] = np.asarray(value)
        else:
            save_data[key] = value

    if metadata:
        for key, value in metadata.items():
            save_data[f"meta_{key}"] = value

    np.savez_compressed(save_path, **save_data)

    if verbose:
        print(f"Dataset saved to: {save_path}")
        for key, value in save_data.items():
            if key.startswith('meta_'):
                print(f"  {key}: {value}")
            elif hasattr(value, 'shape'):
                print(f"  {key}: shape {value.shape}, dtype {value.dtype}")


def load_dataset(file_path: str, convert_to_jax: bool = True, verbose: bool = False) -> Tuple[dict, dict]:
    """
    Load arrays and metadata from an NPZ file written by `save_dataset`.

    Args:
        file_path: Path to the NPZ file
        convert_to_jax: Whether to convert arrays to JAX arrays (default: True)
        verbose: Print a summary of what was read

    Returns:
        Tuple of (dataset, metadata) dictionaries, metadata keys without
        the 'meta_' prefix
    """
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"Dataset file not found: {file_path}")

    dataset = {}
    metadata = {}

    with np.load(file_path) as data:
        for key in data.files:
            value = data[key]
            if key.startswith('meta_'):
                metadata[key[5:]] = value.item() if value.ndim == 0 else value
            elif convert_to_jax:
                dataset[key] = jnp.asarray(value)
            else:
                dataset[key] = value

    if verbose:
        print(f"Dataset loaded from: {file_path}")
        print(f"File size: {os.path.getsize(file_path) / 1024**2:.1f} MB")
        for key, value in dataset.items():
            print(f"  {key}: shape {value.shape}, dtype {value.dtype}")
        for key, value in metadata.items():
            print(f"  meta_{key}: {value}")

    return dataset, metadata


_GRID_METADATA = ('dx', 'dy')


def save_trajectory(trajectory: Trajectory, save_path: str, metadata: Optional[dict] = None, verbose: bool = False):
    """
    Save a Trajectory (and its grid, if any) to NPZ.

    Args:
        trajectory: Trajectory to save
        save_path: Path to save the NPZ file
        metadata: Extra metadata, e.g. the run parameters. The keys 'dx' and
            'dy' are reserved for the grid spacing.
    """
    metadata = dict(metadata or {})
    reserved = [key for key in _GRID_METADATA if key in metadata]
    if reserved:
        raise ValueError(f"Metadata keys {reserved} are reserved for the grid spacing")

    dataset = {'t': trajectory.t, 'y': trajectory.y}
    grid = trajectory.grid
    if grid is not None:
        dataset['x'] = grid.x
        dataset['y_coords'] = grid.y
        metadata.update(dx=grid.dx, dy=grid.dy)
    save_dataset(dataset, save_path, metadata=metadata, verbose=verbose)


def load_trajectory(file_path: str, verbose: bool = False) -> Tuple[Trajectory, dict]:
    """
    Load a Trajectory written by `save_trajectory`.

    Returns:
        Tuple of (trajectory, metadata)
    """
    dataset, metadata = load_dataset(file_path, convert_to_jax=True, verbose=verbose)
    for key in ('t', 'y'):
        if key not in dataset:
            raise ValueError(f"{file_path} is not a trajectory file (missing '{key}')")

    grid = None
    if 'x' in dataset and 'y_coords' in dataset:
        for key in _GRID_METADATA:
            if key not in metadata:
                raise ValueError(
                    f"{file_path} stores grid coordinates but no '{key}' metadata"
                )
        grid = Grid(
            x=dataset['x'],
            y=dataset['y_coords'],
            dx=float(metadata.pop('dx')),
            dy=float(metadata.pop('dy')),
        )

    return Trajectory(dataset['t'], dataset['y'], grid=grid), metadata
