"""Domain layer: program model, configuration and errors."""
