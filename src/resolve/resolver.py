"""Resolver entry point: descriptors in, build plan or error out."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import TYPE_CHECKING

from artifacts.models.artifacts.environment import BuildEnvironment
from artifacts.models.artifacts.plan import BuildPlan, ModulePlan
from artifacts.summaries.builders import compute_plan_summary
from graph.algos import (
    check_acyclic,
    public_closures,
    ready_sets,
    topological_order,
    visible_dependencies,
)
from graph.model import build_dependency_graph
from resolve.errors import DuplicateModuleError, ResolutionError
from rules.layers import check_layering
from rules.policy import check_policies

if TYPE_CHECKING:
    from collections.abc import Iterable

    from artifacts.models.artifacts.descriptors import ModuleDescriptor
    from graph.model import DependencyGraph
    from rules.config import LayeringConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolutionResult:
    """Outcome of one resolution: exactly one of ``plan`` and ``error`` is set."""

    plan: BuildPlan | None = None
    error: ResolutionError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> BuildPlan:
        """Return the plan, raising the resolution error if there is one."""
        if self.error is not None:
            raise self.error
        if self.plan is None:
            msg = "ResolutionResult carries neither a plan nor an error."
            raise RuntimeError(msg)
        return self.plan


def _check_unique_names(descriptors: Iterable[ModuleDescriptor]) -> None:
    seen: set[str] = set()
    for descriptor in descriptors:
        if descriptor.name in seen:
            raise DuplicateModuleError(descriptor.name)
        seen.add(descriptor.name)


def _select(
    descriptors: Iterable[ModuleDescriptor] | Mapping[str, ModuleDescriptor],
    environment: BuildEnvironment,
) -> tuple[Iterable[ModuleDescriptor] | Mapping[str, ModuleDescriptor], set[str]]:
    """Drop descriptors whose kind the environment leaves out.

    Names must be unique across the whole input, including modules the
    environment excludes.
    """
    if isinstance(descriptors, Mapping):
        items = list(descriptors.items())
        _check_unique_names(d for _, d in items)
        kept: Mapping[str, ModuleDescriptor] = {
            key: d for key, d in items if environment.includes(d.kind)
        }
        excluded = {d.name for _, d in items if not environment.includes(d.kind)}
        return kept, excluded

    descriptors = list(descriptors)
    _check_unique_names(descriptors)

    selected: list[ModuleDescriptor] = []
    excluded = set()
    for descriptor in descriptors:
        if environment.includes(descriptor.kind):
            selected.append(descriptor)
        else:
            excluded.add(descriptor.name)
    return selected, excluded


def _check_and_close(
    graph: DependencyGraph,
    order: list[str],
    environment: BuildEnvironment,
    *,
    parallel: bool,
) -> dict[str, frozenset[str]]:
    """Run the policy checks and compute public closures.

    Both passes only read the graph. In parallel mode the policy error, if
    any, still wins over the closure result so the outcome matches the
    sequential run.
    """
    if not parallel:
        check_policies(graph, environment)
        return public_closures(graph, order)

    with ThreadPoolExecutor(max_workers=2, thread_name_prefix="modplan") as pool:
        policies = pool.submit(check_policies, graph, environment)
        closures = pool.submit(public_closures, graph, order)
        policies.result()
        return closures.result()


def _build_plan(
    graph: DependencyGraph,
    environment: BuildEnvironment,
    layering: LayeringConfig | None,
    *,
    parallel: bool,
) -> BuildPlan:
    check_acyclic(graph)
    logger.debug("Graph with %d modules is acyclic", len(graph))

    order = topological_order(graph)
    waves = ready_sets(graph)
    check_layering(graph, layering)
    logger.debug("Planned %d modules in %d ready sets", len(order), len(waves))

    closures = _check_and_close(graph, order, environment, parallel=parallel)
    visible = visible_dependencies(graph, closures)

    modules: dict[str, ModulePlan] = {}
    for name in order:
        descriptor = graph.descriptor(name)
        modules[name] = ModulePlan(
            name=name,
            kind=descriptor.kind,
            pch_policy=descriptor.pch_policy,
            toolchain_version=descriptor.toolchain_version,
            public_dependencies=descriptor.public_dependencies,
            private_dependencies=descriptor.private_dependencies,
            public_closure=tuple(sorted(closures[name])),
            visible_dependencies=tuple(sorted(visible[name])),
        )

    return BuildPlan(
        environment=environment,
        order=tuple(order),
        ready_sets=tuple(tuple(wave) for wave in waves),
        modules=modules,
        summary=compute_plan_summary(graph),
    )


def resolve(
    descriptors: Iterable[ModuleDescriptor] | Mapping[str, ModuleDescriptor],
    *,
    environment: BuildEnvironment | None = None,
    layering: LayeringConfig | None = None,
    parallel: bool = False,
) -> ResolutionResult:
    """Resolve module descriptors into a build plan.

    Resolution is all-or-nothing: the first violation found aborts it and is
    returned as the result's ``error``; no partial plan is ever produced.

    Args:
        descriptors: Module descriptors, as an iterable or a name-keyed mapping.
        environment: Build environment; defaults to every module kind and no
            toolchain ceiling.
        layering: Module kind layering rules; defaults apply when omitted.
        parallel: Run the policy checks and closure computation concurrently.

    Returns:
        ResolutionResult holding either the plan or the error.
    """
    if environment is None:
        environment = BuildEnvironment()

    try:
        selected, excluded = _select(descriptors, environment)
        graph = build_dependency_graph(selected, excluded=excluded)
        logger.debug(
            "Built dependency graph: %d modules, %d excluded by environment",
            len(graph),
            len(excluded),
        )
        plan = _build_plan(graph, environment, layering, parallel=parallel)
    except ResolutionError as exc:
        logger.debug("Resolution failed with %s: %s", exc.kind, exc)
        return ResolutionResult(error=exc)

    return ResolutionResult(plan=plan)


__all__ = ["ResolutionResult", "resolve"]
