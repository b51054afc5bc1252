"""Session domain: entities, value objects, ports and exceptions."""
