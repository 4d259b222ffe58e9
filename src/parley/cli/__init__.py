"""
Command-line interface for Parley.
"""
