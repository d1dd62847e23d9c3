"""Plan artifact models exposed at the contract boundary."""

from artifacts.models.artifacts.descriptors import ModuleDescriptor
from artifacts.models.artifacts.plan import BuildPlan, ModulePlan, PlanSummary

__all__ = ["BuildPlan", "ModuleDescriptor", "ModulePlan", "PlanSummary"]
