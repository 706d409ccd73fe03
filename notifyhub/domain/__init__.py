"""Domain layer: entities and the table catalog."""
