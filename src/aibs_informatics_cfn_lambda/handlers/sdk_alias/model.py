from dataclasses import dataclass
from typing import Any, Dict, Optional

from aibs_informatics_core.models.base import (
    DictField,
    RawField,
    SchemaModel,
    StringField,
    custom_field,
)


@dataclass
class SDKAliasRequest(SchemaModel):
    physical_id: Optional[str] = custom_field(default=None, mm_field=StringField())
    properties: Dict[str, Any] = custom_field(default_factory=dict, mm_field=DictField())
    # Accepted so update events can be passed through as-is. Never sent to the SDK.
    old_properties: Optional[Dict[str, Any]] = custom_field(default=None, mm_field=DictField())


@dataclass
class SDKAliasResponse(SchemaModel):
    physical_id: Optional[str] = custom_field(default=None, mm_field=StringField())
    attributes: Optional[Any] = custom_field(default=None, mm_field=RawField())
