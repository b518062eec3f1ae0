"""Entity storage layer.

This package resolves record identifiers and maps records to files.
It powers keyed put and get operations for the SDK and CLI.
"""
