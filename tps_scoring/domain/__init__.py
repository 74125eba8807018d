"""Domain layer: trait scoring, classifiers and their entities."""
