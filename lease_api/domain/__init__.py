"""Domain primitives: enums, response envelope, serialization and request schemas."""
