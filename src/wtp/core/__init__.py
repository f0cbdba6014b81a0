"""Core functionality for wtp: configuration, hook execution and worktrees."""
