"""Kamino lending snapshot adapter."""
from .parser import build_compute_args, parse_reserve_asset

__all__ = ["build_compute_args", "parse_reserve_asset"]
