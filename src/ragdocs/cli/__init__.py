"""
Command-line interface for ragdocs.
"""
