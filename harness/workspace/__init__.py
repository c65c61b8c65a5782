"""Helpers over a learner's project: files, terminal logs and shell commands."""
