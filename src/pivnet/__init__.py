"""Client library and CLI for the Pivotal Network product-distribution API."""

__all__ = ["client", "config", "errors", "logging", "models", "resolve", "resources"]
__version__ = "0.1.0"
