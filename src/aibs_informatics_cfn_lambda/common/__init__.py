"""Common Lambda utilities and base classes.

Provides the base handler class, logging and metrics mixins shared by the
SDK alias handlers.
"""
