"""Domain layer: service identity, events, configuration sections, errors."""
