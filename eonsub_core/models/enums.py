# eonsub_core/models/enums.py
# -*- coding: utf-8 -*-
from enum import Enum


class ErrorKind(Enum):
    NOT_FOUND = 'NotFound'
    TOO_LARGE = 'TooLarge'
    UNSUPPORTED_FORMAT = 'UnsupportedFormat'
    DECODE_ERROR = 'DecodeError'
    STRUCTURE_INVALID = 'StructureInvalid'
    MALFORMED_ENTRY = 'MalformedEntry'
    SECURITY_REJECTED = 'SecurityRejected'
    EMPTY_RESULT = 'EmptyResult'
    CANCELLED = 'Cancelled'


class HorizontalAlign(Enum):
    LEFT = 'left'
    CENTER = 'center'
    RIGHT = 'right'


class VerticalAlign(Enum):
    TOP = 'top'
    MIDDLE = 'middle'
    BOTTOM = 'bottom'
