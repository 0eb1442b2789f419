"""
Command groups for the b2bstate CLI.
"""
