"""
Interface layer package.

Contains the command-line front end.
"""
