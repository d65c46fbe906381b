"""Core domain objects for junitview."""
