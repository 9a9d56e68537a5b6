"""AIBS Informatics CloudFormation Lambda utilities.

Provides SDK aliases for implementing CloudFormation custom resources on top of
AWS SDK calls, along with the Lambda handler base classes, logging and metrics
they are served with.
"""
