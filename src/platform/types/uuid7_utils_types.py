"""
https://docs.pydantic.dev/latest/concepts/types/#customizing-validation-with-__get_pydantic_core_schema__
UUID7 Pydantic Type Integration

uuid_utils.UUID has no pydantic validation or OpenAPI schema support.
UtilsUUID7 adds both so reservation ids can be used directly in
path parameters and response models.

```python
class ReservationResponse(BaseModel):
    id: UtilsUUID7  # "019a3fa5-..." in JSON, uuid_utils.UUID in Python
```
"""

from typing import Any

from pydantic import GetCoreSchemaHandler, GetJsonSchemaHandler
from pydantic.json_schema import JsonSchemaValue
from pydantic_core import core_schema
from uuid_utils import UUID


class UtilsUUID7(UUID):
    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        """
        JSON mode only accepts strings (JSON has no UUID type); Python mode also
        accepts uuid_utils.UUID and stdlib uuid.UUID instances. Output is always a string.

        json_or_python_schema is used instead of a plain validator function because
        PlainValidatorFunctionSchema cannot be turned into a JSON schema for OpenAPI.
        """

        def to_uuid(value: Any) -> UUID:
            if isinstance(value, UUID):
                return value
            try:
                return UUID(str(value))
            except ValueError as e:
                raise ValueError(f'Invalid UUID: {value}') from e

        from_str = core_schema.chain_schema(
            [
                core_schema.str_schema(),
                core_schema.no_info_plain_validator_function(to_uuid),
            ]
        )

        return core_schema.json_or_python_schema(
            json_schema=from_str,
            python_schema=core_schema.union_schema(
                [
                    core_schema.is_instance_schema(UUID),
                    core_schema.no_info_plain_validator_function(to_uuid),
                ]
            ),
            serialization=core_schema.plain_serializer_function_ser_schema(
                str,
                when_used='always',
                return_schema=core_schema.str_schema(),
            ),
        )

    @classmethod
    def __get_pydantic_json_schema__(
        cls, schema: core_schema.CoreSchema, handler: GetJsonSchemaHandler
    ) -> JsonSchemaValue:
        # handler(schema) would expand the internal validator chain into OpenAPI
        return {'type': 'string', 'format': 'uuid'}
