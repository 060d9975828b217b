"""
Parser, loader and error types.
"""
