"""
Core Package

Immutable data models and the exception hierarchy shared by the
stitching and slicing pipelines.
"""
