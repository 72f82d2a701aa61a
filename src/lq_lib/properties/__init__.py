# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Value types describing the host, the selected drivers and the queue plan.
"""
