class ConfigurationError(ValueError):
    """Raised at construction time when a simulation component is misconfigured."""
