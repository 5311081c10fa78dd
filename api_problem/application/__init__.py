"""
Application layer package.

Decides what to do with a failure: ignore it, use the problem it
already is, or synthesize a generic server-error problem from it.
"""
