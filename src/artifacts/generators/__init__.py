"""Build plan artifact generators for modplan."""

from artifacts.generators.deps import DepsGenerator
from artifacts.generators.plan import PlanGenerator

__all__ = ["DepsGenerator", "PlanGenerator"]
