"""
Engines - pure outline logic with no I/O.
"""
