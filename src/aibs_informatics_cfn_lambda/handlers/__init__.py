"""Lambda handler implementations.

Contains handlers that expose SDK aliases as strongly-typed Lambda functions.
"""
