"""Support namespace for cross-cutting, dependency-light helpers.

This package provides a neutral location for small, reusable functions that
would otherwise clutter the combinator modules.

Scope:
- Small, stateless helpers with minimal dependencies (e.g., duration
  normalisation and argument validation).
- No gating logic, no threads, no shared state.
- Organize by single-purpose modules (e.g., ``durations.py``) rather than one
  catch-all file.

Import direction:
- May be imported by any TOOLCHEST package.
- Must not import from `toolchest.functions` or `toolchest.entrypoints`.

Public API:
- Nothing is re-exported at the package level. Import specific helpers from
  their defining modules.
"""
