"""Install and sync Blue Gardener AI agent prompts into a project."""

__version__ = "0.1.0"

__all__ = ["__version__"]
