"""Domain rules: shared validation, error taxonomy and policy lifecycle."""
