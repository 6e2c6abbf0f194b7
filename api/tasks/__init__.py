"""
Background tasks.
"""
