"""Adapter exposing boto3 client operations as SDK alias methods."""

__all__ = [
    "BotoClientApi",
]

from typing import Any, Callable, Dict, Iterator, Mapping, Optional

import boto3
from aibs_informatics_aws_utils.core import get_region
from aibs_informatics_core.utils.logging import get_logger
from botocore.client import BaseClient
from botocore.exceptions import BotoCoreError, ClientError

logger = get_logger(__name__)

AliasMethod = Callable[[Dict[str, Any], Callable[..., None]], None]


class BotoClientApi(Mapping[str, AliasMethod]):
    """Maps boto3 client operation names to ``(params, callback)`` callables.

    boto3 calls are synchronous and raise on failure. Each wrapped operation calls
    the client with the assembled parameters as keyword arguments and reports
    ``(None, response)`` or ``(error, None)`` to the callback before returning.
    """

    def __init__(self, client: BaseClient):
        self.client = client

    @classmethod
    def from_service(cls, service_name: str, region: Optional[str] = None) -> "BotoClientApi":
        return cls(boto3.client(service_name, region_name=region or get_region()))

    @property
    def operation_names(self) -> Dict[str, str]:
        # python method name -> API operation name
        return dict(self.client.meta.method_to_api_mapping)

    def __getitem__(self, method: str) -> AliasMethod:
        if method not in self.operation_names:
            raise KeyError(method)
        operation = getattr(self.client, method)

        def call(params: Dict[str, Any], callback: Callable[..., None]) -> None:
            try:
                response = operation(**params)
            except (ClientError, BotoCoreError) as e:
                logger.debug(f"{method} failed: {e}")
                callback(e, None)
                return
            callback(None, response)

        return call

    def __iter__(self) -> Iterator[str]:
        return iter(self.operation_names)

    def __len__(self) -> int:
        return len(self.operation_names)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.client.meta.service_model.service_name})"
