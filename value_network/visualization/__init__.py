"""Visualization module - Plots and text reports."""

from .plots import NetworkPlotter

__all__ = ["NetworkPlotter"]
