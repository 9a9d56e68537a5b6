"""Lambda handlers backed by SDK aliases.

Example:
    ```python
    get_bucket_location = SDKAlias.from_options(
        {
            "api": BotoClientApi.from_service("s3"),
            "method": "get_bucket_location",
            "physicalIdAs": "Bucket",
            "returnAttrs": ["LocationConstraint"],
        }
    )
    handler = SDKAliasHandler.get_handler(alias=get_bucket_location)
    ```
"""

from dataclasses import dataclass
from typing import Optional

from aibs_informatics_cfn_lambda.common.handler import LambdaHandler
from aibs_informatics_cfn_lambda.handlers.sdk_alias.model import (
    SDKAliasRequest,
    SDKAliasResponse,
)
from aibs_informatics_cfn_lambda.sdk_alias import SDKAlias


@dataclass
class SDKAliasHandler(LambdaHandler[SDKAliasRequest, SDKAliasResponse]):
    alias: Optional[SDKAlias] = None

    def handle(self, request: SDKAliasRequest) -> SDKAliasResponse:
        if self.alias is None:
            raise ValueError(f"{self.handler_name()} was created without an SDK alias")

        self.logger.info(
            f"Calling {self.alias.config.method} (physical id: {request.physical_id}, "
            f"properties: {sorted(request.properties)})"
        )
        try:
            result = self.alias.invoke(
                physical_id=request.physical_id,
                properties=request.properties,
                old_properties=request.old_properties,
            )
        except Exception as e:
            self.logger.error(f"{self.alias.config.method} failed: {e}")
            self.metrics.add_failure_metric(name=self.handler_name())
            raise
        self.metrics.add_success_metric(name=self.handler_name())

        return SDKAliasResponse(physical_id=result.physical_id, attributes=result.attributes)
