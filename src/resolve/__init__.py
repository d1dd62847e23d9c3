"""Public resolver surface.

The error taxonomy is imported eagerly; the resolver itself is loaded on
first access because it depends on the graph and rules packages, which in
turn import the errors from here.
"""

from resolve.errors import (
    CyclicDependencyError,
    DuplicateEdgeError,
    DuplicateModuleError,
    IncompatiblePCHPolicyError,
    InvalidLayeringError,
    ResolutionError,
    ToolchainVersionSkewError,
    UnknownModuleError,
)


def __getattr__(name: str) -> object:
    if name in {"ResolutionResult", "resolve"}:
        from resolve.resolver import ResolutionResult, resolve

        return {"ResolutionResult": ResolutionResult, "resolve": resolve}[name]

    msg = f"module 'resolve' has no attribute {name!r}"
    raise AttributeError(msg)


__all__ = [
    "CyclicDependencyError",
    "DuplicateEdgeError",
    "DuplicateModuleError",
    "IncompatiblePCHPolicyError",
    "InvalidLayeringError",
    "ResolutionError",
    "ResolutionResult",
    "ToolchainVersionSkewError",
    "UnknownModuleError",
    "resolve",
]
