"""Statistics registry package."""

from .registry import RegistryKey, StatisticsRegistry, get_registry, lookup, register

__all__ = ["RegistryKey", "StatisticsRegistry", "get_registry", "lookup", "register"]
