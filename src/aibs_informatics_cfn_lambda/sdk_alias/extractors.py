"""Response extraction rules for SDK aliases.

An alias can pull a physical id and an attribute mapping out of an SDK response.
Each rule is configured either as plain data (a key name or a list of keys) or as
a function of the response; both forms are normalized into one of the rule types
below so that response translation is a single ``extract`` call.
"""

__all__ = [
    "Extractor",
    "KeySubset",
    "ResponseRule",
    "StringKey",
    "as_attributes_rule",
    "as_physical_id_rule",
]

from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional, Sequence, Tuple, Union

Response = Optional[Mapping[str, Any]]


@dataclass(frozen=True)
class StringKey:
    """Reads a single key from the response"""

    name: str

    def extract(self, response: Response) -> Any:
        if not response:
            return None
        return response.get(self.name)


@dataclass(frozen=True)
class KeySubset:
    """Selects the listed keys that are present in the response"""

    keys: Tuple[str, ...]

    def extract(self, response: Response) -> Dict[str, Any]:
        if not response:
            return {}
        return {key: response[key] for key in self.keys if key in response}


@dataclass(frozen=True)
class Extractor:
    """Delegates to a user supplied function of the response"""

    func: Callable[[Response], Any]

    def extract(self, response: Response) -> Any:
        return self.func(response)


ResponseRule = Union[StringKey, KeySubset, Extractor]


def as_physical_id_rule(
    value: Union[None, str, Callable[[Response], Any], ResponseRule]
) -> Optional[ResponseRule]:
    """Normalize a ``return_physical_id`` option.

    Args:
        value: A response key name, a function of the response or an existing rule.

    Raises:
        TypeError: If the value is neither a string nor callable.

    Returns:
        The matching rule, or None if no value was configured.
    """
    if value is None or isinstance(value, (StringKey, KeySubset, Extractor)):
        return value
    if isinstance(value, str):
        return StringKey(value)
    if callable(value):
        return Extractor(value)
    raise TypeError(f"returnPhysicalId must be a string or a function, got {type(value)}")


def as_attributes_rule(
    value: Union[None, Sequence[str], Callable[[Response], Any], ResponseRule]
) -> Optional[ResponseRule]:
    """Normalize a ``return_attrs`` option.

    Args:
        value: A list of response keys, a function of the response or an existing rule.

    Raises:
        TypeError: If the value is neither a list of keys nor callable.

    Returns:
        The matching rule, or None if no value was configured.
    """
    if value is None or isinstance(value, (StringKey, KeySubset, Extractor)):
        return value
    if callable(value):
        return Extractor(value)
    if isinstance(value, str):
        return KeySubset((value,))
    if isinstance(value, Sequence):
        return KeySubset(tuple(value))
    raise TypeError(f"returnAttrs must be a list of keys or a function, got {type(value)}")
