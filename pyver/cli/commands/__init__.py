"""
Command implementations for the pyver CLI.
"""
