from aibs_informatics_core.exceptions import ApplicationException

INVALID_ARITY_MESSAGE = "Could not determine cfn-lambda SDKAlias method signature at runtime."


class SDKAliasError(ApplicationException):
    pass


class InvalidArityError(SDKAliasError):
    """Raised when an alias is called with an unsupported number of arguments"""

    def __init__(self, *args):
        super().__init__(*(args or (INVALID_ARITY_MESSAGE,)))


class SDKAliasServiceError(SDKAliasError):
    """Wraps a non-exception error value reported by an aliased SDK method.

    Attributes:
        error: The raw error value passed to the response callback.
    """

    def __init__(self, error):
        self.error = error
        super().__init__(f"SDK method reported an error: {error}")
