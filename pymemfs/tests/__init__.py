"""pymemfs test suite."""
