"""Configuration package for the rail simulation.

Module-level constants live in ``simulation`` and ``server``; the aggregate
runtime configuration dataclass lives in ``simulation_config``.
"""
