from .fields.field import Field
from .fields import (
    IntField,
    TextField,
    BoolField,
    FloatField,
)
from .type_enum import FieldType

__all__ = [
    'Field',
    'IntField',
    'TextField',
    'BoolField',
    'FloatField',
    'FieldType',
]
