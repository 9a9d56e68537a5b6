from aws_lambda_powertools.utilities.typing import LambdaContext

CONTEXT_ATTR = "_context"


class HandlerMixins:
    """Access to the Lambda context and handler naming shared by all handlers."""

    @property
    def context(self) -> LambdaContext:
        """Get the Lambda context for the current invocation.

        Raises:
            ValueError: If context has not been set.
        """
        if not hasattr(self, CONTEXT_ATTR):
            raise ValueError(f"Lambda context has not been set on {self.__class__.__name__}")
        return getattr(self, CONTEXT_ATTR)

    @context.setter
    def context(self, value: LambdaContext):
        setattr(self, CONTEXT_ATTR, value)

    @classmethod
    def handler_name(cls) -> str:
        return cls.__name__

    @classmethod
    def service_name(cls) -> str:
        """Service name used for logging and metrics"""
        return cls.__name__
