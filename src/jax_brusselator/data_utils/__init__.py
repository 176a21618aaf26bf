"""Data utilities for saving simulation output."""

from .readwrite import save_dataset, load_dataset, save_trajectory, load_trajectory

__all__ = [
    "save_dataset",
    "load_dataset",
    "save_trajectory",
    "load_trajectory",
]
