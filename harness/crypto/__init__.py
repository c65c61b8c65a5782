"""Hashing and signature helpers."""
