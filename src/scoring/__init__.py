"""Deterministic points engine."""

from src.scoring.engine import RULES, calculate_points, points_breakdown

__all__ = ["RULES", "calculate_points", "points_breakdown"]
