"""
Interfaces layer package.

Contains the error-hook adapter, the FastAPI/Starlette binding
and the health router. No classification logic belongs here.
"""
