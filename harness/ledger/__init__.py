"""Ledger state resolution for contract-based curriculum projects.

Folds a project's committed ledger and its pending contract pool into the
current view of a single smart contract.
"""
