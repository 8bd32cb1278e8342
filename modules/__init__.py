"""Module package exports.

Only descriptors live here; module bodies are provided by the host program.
"""

from .registry import ALL_MODULES, ModuleDescriptor, ModuleProtocol, ModuleRegistry

__all__ = ["ALL_MODULES", "ModuleDescriptor", "ModuleProtocol", "ModuleRegistry"]
