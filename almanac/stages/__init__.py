"""Remapping stages.

A stage is immutable once parsed; every lookup returns fresh values and the
pipeline owns the ordering between stages.
"""
