from dataclasses import dataclass
from typing import Callable, Generic, Optional, TypeVar, Union

from aibs_informatics_aws_utils.s3 import download_to_json_object, upload_json
from aibs_informatics_core.executors.base import BaseExecutor
from aibs_informatics_core.models.aws.s3 import S3URI
from aibs_informatics_core.models.base import ModelProtocol
from aibs_informatics_core.utils.json import JSON
from aws_lambda_powertools.utilities.typing import LambdaContext

from aibs_informatics_cfn_lambda.common.base import HandlerMixins
from aibs_informatics_cfn_lambda.common.logging import LoggingMixins
from aibs_informatics_cfn_lambda.common.metrics import MetricsMixins

LambdaEvent = Union[JSON]  # type: ignore # https://github.com/python/mypy/issues/7866
LambdaHandlerType = Callable[[LambdaEvent, LambdaContext], Optional[JSON]]

REQUEST = TypeVar("REQUEST", bound=ModelProtocol)
RESPONSE = TypeVar("RESPONSE", bound=ModelProtocol)


@dataclass  # type: ignore[misc] # mypy #5374
class LambdaHandler(
    LoggingMixins,
    MetricsMixins,
    HandlerMixins,
    BaseExecutor[REQUEST, RESPONSE],
    Generic[REQUEST, RESPONSE],
):
    """Base class for strongly-typed AWS Lambda handlers.

    Subclasses implement `handle`, taking a REQUEST model and returning a RESPONSE
    model (both following `ModelProtocol`). The handler takes care of:
    - Request deserialization and response serialization
    - Structured logging via AWS Lambda Powertools
    - CloudWatch metrics collection

    Type Parameters:
        REQUEST: The request model type (must implement ModelProtocol).
        RESPONSE: The response model type (must implement ModelProtocol).

    Example:
        ```python
        @dataclass
        class DescribeStackHandler(LambdaHandler[SDKAliasRequest, SDKAliasResponse]):
            def handle(self, request: SDKAliasRequest) -> SDKAliasResponse:
                ...

        handler = DescribeStackHandler.get_handler()
        ```
    """

    def __post_init__(self):
        self.context = LambdaContext()
        super().__post_init__()

    @classmethod
    def load_input__remote(cls, remote_path: S3URI) -> JSON:
        """Load input data from a remote S3 location.

        Args:
            remote_path (S3URI): The S3 URI to download the input from.

        Returns:
            The JSON content from the S3 object.
        """
        return download_to_json_object(remote_path)

    @classmethod
    def write_output__remote(cls, output: JSON, remote_path: S3URI) -> None:
        """Write output data to a remote S3 location.

        Args:
            output (JSON): The JSON content to upload.
            remote_path (S3URI): The S3 URI to upload the output to.
        """
        return upload_json(output, remote_path)

    @classmethod
    def get_handler(cls, *args, **kwargs) -> LambdaHandlerType:
        """Create a Lambda handler function for this handler class.

        A new handler instance is created for every invocation, receiving the
        Lambda context and the service logger before the event is deserialized
        and handled.

        Args:
            *args: Positional arguments passed to the handler constructor.
            **kwargs: Keyword arguments passed to the handler constructor.

        Returns:
            A callable Lambda handler function suitable for AWS Lambda.
        """

        logger = cls.get_logger(service=cls.service_name(), add_to_root=False)

        @logger.inject_lambda_context(log_event=True)
        def handler(event: LambdaEvent, context: LambdaContext) -> Optional[JSON]:
            lambda_handler = cls(*args, **kwargs)  # type: ignore[call-arg]
            logger.info(f"Instantiated {lambda_handler}.")
            lambda_handler.log = logger
            lambda_handler.context = context
            lambda_handler.add_logger_to_root()

            lambda_handler.log.info(f"Deserializing event: {event}")

            request = lambda_handler.deserialize_request(event)

            lambda_handler.log.info("Event successfully deserialized. Calling handler...")
            response = lambda_handler.handle(request=request)

            lambda_handler.log.info(
                f"Handler completed and returned following response: {response}"
            )
            if response:
                lambda_handler.log.info("Serializing response")
                return lambda_handler.serialize_response(response)

            return None

        return handler

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"request: {self.get_request_cls()}, "
            f"response: {self.get_response_cls()}"
            ")"
        )
