from .registry import EnvironmentRegistry, normalize_name

__all__ = ["EnvironmentRegistry", "normalize_name"]
