"""
ValueNetwork

A randomly connected network of valued nodes, meant to be embedded
in larger simulations (diffusion, contagion, opinion dynamics) that
need a reproducible random graph with node-level state.
"""

__version__ = "0.1.0"
