"""Infrastructure layer: Python frontend built on ast and tokenize."""
