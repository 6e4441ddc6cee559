"""Tools API Schemas — request/response contracts for /tools endpoints.

Invariants:
    - Response field names are camelCase (what site.tools.js reads)
    - Request bodies validated by Pydantic before reaching the route handler
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class GuidResponse(_CamelModel):
    guid: str


class HashRequest(_CamelModel):
    algorithm: str = Field(..., min_length=1, max_length=16)
    format: str = Field(..., min_length=1, max_length=16)
    plaintext: str = Field("", max_length=4096)


class HashResponse(_CamelModel):
    hash: str


class MachineKeyResponse(_CamelModel):
    decryption_key: str
    validation_key: str
    machine_key_xml: str
