"""Command-line interface for instance-registry.

Provides developer tooling such as checking that a bootstrap function wires up
a registry whose entries all resolve.
"""

from instance_registry.cli.app import app

__all__ = ["app"]
