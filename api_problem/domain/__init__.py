"""
Domain layer package.

Contains the problem value and the errors raised while building one.
No framework imports allowed.
"""
