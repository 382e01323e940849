"""Use cases and ports of the PR description generator."""
