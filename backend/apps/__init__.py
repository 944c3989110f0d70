"""Domain apps: one package per API area."""
