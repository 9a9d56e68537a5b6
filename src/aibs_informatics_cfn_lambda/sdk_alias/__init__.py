"""SDK aliases for CloudFormation custom-resource handlers.

Wraps an SDK method so it can be used directly as a custom resource lifecycle
function, shaping resource properties into SDK parameters and SDK responses into
a physical id and attributes.
"""

from aibs_informatics_cfn_lambda.sdk_alias.boto import BotoClientApi
from aibs_informatics_cfn_lambda.sdk_alias.core import (
    AliasResult,
    SDKAlias,
    SDKAliasConfig,
    create_alias,
    get_error_codes,
)
from aibs_informatics_cfn_lambda.sdk_alias.errors import (
    InvalidArityError,
    SDKAliasError,
    SDKAliasServiceError,
)
from aibs_informatics_cfn_lambda.sdk_alias.extractors import Extractor, KeySubset, StringKey

__all__ = [
    "AliasResult",
    "BotoClientApi",
    "Extractor",
    "InvalidArityError",
    "KeySubset",
    "SDKAlias",
    "SDKAliasConfig",
    "SDKAliasError",
    "SDKAliasServiceError",
    "StringKey",
    "create_alias",
    "get_error_codes",
]
