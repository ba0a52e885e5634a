#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mailmarker/utils/__init__.py
"""Utility modules for the mailmarker package."""
