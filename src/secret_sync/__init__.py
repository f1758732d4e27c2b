"""
secret-sync: keep AI exclusion settings and container secret mounts in sync.
"""

__version__ = "0.1.0"
