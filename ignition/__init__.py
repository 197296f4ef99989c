"""A sparse-set entity component system: pools, scenes, errors, runtime settings and a component registry."""

__version__ = "0.1.0"
__all__ = ["config", "errors", "pool", "registry", "scene"]