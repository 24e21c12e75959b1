from .int_field import IntField
from .text_field import TextField
from .boolean_field import BoolField
from .float_field import FloatField

__all__ = ["IntField", "TextField", "BoolField", "FloatField"]
