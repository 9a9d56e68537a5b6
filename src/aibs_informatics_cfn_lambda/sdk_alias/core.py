"""SDK aliases for CloudFormation custom resources.

An alias wraps a single SDK method behind the calling convention used by
custom-resource lifecycle functions::

    alias(callback)
    alias(physical_id, callback)
    alias(physical_id, properties, callback)
    alias(physical_id, properties, old_properties, callback)

Resource properties are shaped into SDK parameters, the SDK method is called with
an error-first ``(error, response)`` callback and its outcome is reported to
``callback(error, physical_id, attributes)``.
"""

__all__ = [
    "AliasResult",
    "Callback",
    "SDKAlias",
    "SDKAliasConfig",
    "create_alias",
    "get_error_codes",
]

from dataclasses import dataclass, field, fields
from typing import (
    Any,
    Callable,
    Dict,
    FrozenSet,
    List,
    Mapping,
    Optional,
    Set,
    Tuple,
    Union,
)

from aibs_informatics_core.utils.logging import get_logger
from botocore.exceptions import ClientError

from aibs_informatics_cfn_lambda.sdk_alias.errors import (
    InvalidArityError,
    SDKAliasError,
    SDKAliasServiceError,
)
from aibs_informatics_cfn_lambda.sdk_alias.extractors import (
    ResponseRule,
    as_attributes_rule,
    as_physical_id_rule,
)

logger = get_logger(__name__)

Callback = Callable[[Any, Any, Any], None]
ResponseCallback = Callable[..., None]
ErrorCode = Union[int, str]

# option name -> config field name
OPTION_NAMES: Dict[str, str] = {
    "api": "api",
    "method": "method",
    "keys": "keys",
    "mapKeys": "map_keys",
    "downcase": "downcase",
    "physicalIdAs": "physical_id_as",
    "returnPhysicalId": "return_physical_id",
    "returnAttrs": "return_attrs",
    "ignoreErrorCodes": "ignore_error_codes",
}

ERROR_CODE_NAMES = ("statusCode", "status_code", "code")


@dataclass(frozen=True)
class SDKAliasConfig:
    """Immutable configuration of an SDK alias.

    Attributes:
        api: Mapping of method name to a ``(params, callback)`` callable. Any object
            exposing the method as an attribute is accepted as well.
        method: Name of the method to call on ``api``.
        keys: Property names to retain. All properties are retained if unset.
        map_keys: Property renames (source -> destination), applied on top of ``keys``.
        downcase: Lower-case the first character of every retained key.
        physical_id_as: Parameter name under which the physical id is injected.
        return_physical_id: Rule that reads the physical id out of a response.
        return_attrs: Rule that reads the attributes out of a response.
        ignore_error_codes: Error codes reported as success without data.
    """

    api: Optional[Any] = None
    method: Optional[str] = None
    keys: Optional[Tuple[str, ...]] = None
    map_keys: Optional[Mapping[str, str]] = None
    downcase: bool = False
    physical_id_as: Optional[str] = None
    return_physical_id: Optional[ResponseRule] = None
    return_attrs: Optional[ResponseRule] = None
    ignore_error_codes: FrozenSet[ErrorCode] = field(default_factory=frozenset)

    def __post_init__(self):
        # frozen, so normalized values are set through object.__setattr__
        if isinstance(self.keys, str):
            object.__setattr__(self, "keys", (self.keys,))
        elif self.keys is not None:
            object.__setattr__(self, "keys", tuple(self.keys))
        if self.map_keys is not None:
            object.__setattr__(self, "map_keys", dict(self.map_keys))
        object.__setattr__(self, "downcase", bool(self.downcase))
        object.__setattr__(
            self, "return_physical_id", as_physical_id_rule(self.return_physical_id)
        )
        object.__setattr__(self, "return_attrs", as_attributes_rule(self.return_attrs))
        object.__setattr__(self, "ignore_error_codes", frozenset(self.ignore_error_codes or ()))

    @classmethod
    def from_options(cls, options: Mapping[str, Any]) -> "SDKAliasConfig":
        """Build a config from an options mapping.

        Both the option names (``mapKeys``, ``physicalIdAs``, ...) and the field names
        (``map_keys``, ``physical_id_as``, ...) are recognized. Anything else is ignored.

        Args:
            options (Mapping[str, Any]): alias options

        Returns:
            SDKAliasConfig: the config
        """
        field_names = {f.name for f in fields(cls)}
        kwargs: Dict[str, Any] = {}
        for name, value in options.items():
            field_name = OPTION_NAMES.get(name, name)
            if field_name in field_names:
                kwargs[field_name] = value
            else:
                logger.debug(f"Ignoring unrecognized SDKAlias option {name}")
        return cls(**kwargs)


@dataclass(frozen=True)
class AliasResult:
    physical_id: Optional[Any] = None
    attributes: Optional[Any] = None


def get_error_codes(error: Any) -> Set[ErrorCode]:
    """Collect the status and error codes carried by an SDK error

    Args:
        error (Any): error value passed to a response callback

    Returns:
        Set[ErrorCode]: all codes found on the error
    """
    codes: Set[ErrorCode] = set()
    if isinstance(error, ClientError):
        metadata = error.response.get("ResponseMetadata", {})
        if metadata.get("HTTPStatusCode") is not None:
            codes.add(metadata["HTTPStatusCode"])
        if error.response.get("Error", {}).get("Code") is not None:
            codes.add(error.response["Error"]["Code"])
    for name in ERROR_CODE_NAMES:
        if isinstance(error, Mapping):
            value = error.get(name)
        else:
            value = getattr(error, name, None)
        if isinstance(value, (int, str)):
            codes.add(value)
    return codes


@dataclass(frozen=True)
class SDKAlias:
    """Callable adapter around a single SDK method.

    Example:
        ```python
        delete_bucket = SDKAlias.from_options(
            {
                "api": BotoClientApi.from_service("s3"),
                "method": "delete_bucket",
                "physicalIdAs": "Bucket",
                "ignoreErrorCodes": [404],
            }
        )
        delete_bucket(physical_id, properties, reply)
        ```
    """

    config: SDKAliasConfig = field(default_factory=SDKAliasConfig)

    @classmethod
    def from_options(cls, options: Mapping[str, Any]) -> "SDKAlias":
        return cls(config=SDKAliasConfig.from_options(options))

    def __call__(self, *args: Any) -> None:
        if not 1 <= len(args) <= 4:
            raise InvalidArityError()
        *positional, callback = args
        # old properties (4th position) are accepted but never used
        physical_id, properties = (list(positional) + [None, None])[:2]

        params = self.build_parameters(physical_id, properties)
        target = self.resolve_method()
        logger.debug(f"Calling {self.config.method} with parameters {sorted(params)}")

        def on_response(error: Any = None, response: Any = None) -> None:
            callback(*self.translate_response(error, response))

        target(params, on_response)

    def invoke(
        self,
        physical_id: Optional[str] = None,
        properties: Optional[Mapping[str, Any]] = None,
        old_properties: Optional[Mapping[str, Any]] = None,
    ) -> AliasResult:
        """Call the alias and wait for its outcome.

        Only usable with SDK methods that report back before returning.

        Args:
            physical_id (Optional[str]): physical id of the resource
            properties (Optional[Mapping[str, Any]]): current resource properties
            old_properties (Optional[Mapping[str, Any]]): previous resource properties

        Raises:
            SDKAliasServiceError: if the SDK reported an error that is not an exception
            SDKAliasError: if the SDK method did not report back

        Returns:
            AliasResult: physical id and attributes
        """
        outcomes: List[Tuple[Any, Any, Any]] = []
        self(physical_id, properties, old_properties, lambda *outcome: outcomes.append(outcome))
        if not outcomes:
            raise SDKAliasError(f"{self.config.method} did not complete synchronously")

        error, result_physical_id, attributes = outcomes[0]
        if error is not None:
            if isinstance(error, BaseException):
                raise error
            raise SDKAliasServiceError(error)
        return AliasResult(physical_id=result_physical_id, attributes=attributes)

    def resolve_method(self) -> Callable[[Dict[str, Any], ResponseCallback], Any]:
        api, method = self.config.api, self.config.method
        if api is None or method is None:
            raise SDKAliasError("SDKAlias requires both an api and a method")
        try:
            if isinstance(api, Mapping):
                return api[method]
            return getattr(api, method)
        except (KeyError, AttributeError) as e:
            raise SDKAliasError(f"Method {method} not found on {api}") from e

    def build_parameters(
        self, physical_id: Optional[Any], properties: Optional[Mapping[str, Any]]
    ) -> Dict[str, Any]:
        """Assemble SDK parameters from resource properties

        Args:
            physical_id (Optional[Any]): physical id to inject, if configured
            properties (Optional[Mapping[str, Any]]): resource properties

        Returns:
            Dict[str, Any]: a new parameter mapping
        """
        config = self.config
        source = dict(properties or {})

        if config.keys is None:
            params = dict(source)
        else:
            params = {key: source[key] for key in config.keys if key in source}

        # renames apply simultaneously
        map_keys = config.map_keys or {}
        renamed = {dest: source[src] for src, dest in map_keys.items() if src in source}
        for source_key in map_keys:
            params.pop(source_key, None)
        params.update(renamed)

        if config.downcase:
            downcased = {downcase_first(key): value for key, value in params.items()}
            if len(downcased) < len(params):
                logger.warning(f"Downcasing merged parameter keys {sorted(params)}")
            params = downcased

        if config.physical_id_as and physical_id is not None:
            params[config.physical_id_as] = physical_id
        return params

    def translate_response(self, error: Any, response: Any) -> Tuple[Any, Any, Any]:
        """Translate an SDK ``(error, response)`` pair to ``(error, physical_id, attributes)``"""
        config = self.config
        if error is not None:
            if config.ignore_error_codes and get_error_codes(error) & config.ignore_error_codes:
                logger.debug(f"Suppressing ignorable error from {config.method}: {error}")
                return None, None, None
            return error_message(error), None, None

        physical_id = (
            config.return_physical_id.extract(response) if config.return_physical_id else None
        )
        attributes = config.return_attrs.extract(response) if config.return_attrs else None
        return None, physical_id, attributes


def downcase_first(key: str) -> str:
    return key[:1].lower() + key[1:]


def create_alias(
    config: Union[SDKAliasConfig, Mapping[str, Any], None] = None, **options: Any
) -> SDKAlias:
    """Create an SDK alias.

    Args:
        config: An SDKAliasConfig or an options mapping.
        **options: Options merged over ``config`` when it is a mapping.

    Returns:
        SDKAlias: a callable alias
    """
    if isinstance(config, SDKAliasConfig):
        if options:
            raise ValueError("Options cannot be combined with an SDKAliasConfig")
        return SDKAlias(config=config)
    return SDKAlias.from_options({**(config or {}), **options})


def error_message(error: Any) -> Any:
    """Reduce a non-exception SDK error to its ``message``, if it carries one"""
    if isinstance(error, BaseException):
        return error
    if isinstance(error, Mapping):
        return error.get("message", error)
    return getattr(error, "message", error)
