"""Domain layer for payment matching: enums and immutable value objects."""
