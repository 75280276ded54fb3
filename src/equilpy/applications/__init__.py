"""Applications of equilpy which are not part of the core functionality, such as
utilities for testing."""
