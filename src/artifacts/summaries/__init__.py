"""Summary helpers for modplan build plans."""

from artifacts.summaries.builders import compute_fan_stats, compute_plan_summary

__all__ = ["compute_fan_stats", "compute_plan_summary"]
