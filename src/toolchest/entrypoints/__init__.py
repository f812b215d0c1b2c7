"""Entrypoints (inbound adapters) for TOOLCHEST.

Expose the library to the outside world. Currently this is the ``toolchest``
command-line interface, which configures logging and runs small demonstrations
of the combinators.

Dependency rule: may import `toolchest.functions` and `toolchest.adapters`;
library packages must not import this package.
"""
