"""Hierarchical key-space walker.

This module resolves dotted sysctl names to store positions and walks
the store depth-first from any seek position without loading the tree.
"""
