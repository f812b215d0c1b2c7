"""Interfaces (ports) for TOOLCHEST.

Defines small, framework-free contracts shared by the combinators and their
adapters (e.g., clocks).

Dependency rule: this package is independent; do not import from any other
`toolchest.*` modules. It may be imported by `toolchest.functions` and
`toolchest.adapters`.
"""

from .clock import Clock

__all__ = ["Clock"]
