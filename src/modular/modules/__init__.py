"""
Module system for modular.

A module is a self-contained bundle of routes, migrations, seeders,
factories and a service provider that lives under the configured modules
directory and is declared in configuration.
"""

from modular.modules.module import Capability, Module
from modular.modules.registry import Modular

__all__ = ["Capability", "Module", "Modular"]
