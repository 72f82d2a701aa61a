# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Core infrastructure for lq.

This module collects the foundational classes and helpers used across the lq
codebase: configuration, error handling, structured logging, answer sources,
execution of external commands and fallback chains.
"""
