"""
Attrscan: runtime attribute introspection, free-text search and structural copy
for arbitrary Python objects.
"""

__version__ = "0.1.0"
