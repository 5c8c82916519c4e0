from enum import Enum

class ScreenState(str, Enum):
    INPUT = "INPUT"
    LOADING = "LOADING"
    RESULT = "RESULT"

class FlowEvent(str, Enum):
    SUBMIT = "SUBMIT"
    COMPLETE = "COMPLETE"
    RESET = "RESET"

class Gender(str, Enum):
    M = "M"
    F = "F"
    NB = "NB"

class Verdict(str, Enum):
    QUALIFIED = "QUALIFIED"
    NOT_QUALIFIED = "NOT QUALIFIED"
    UNRECOGNIZED = "UNRECOGNIZED"
    ERROR = "ERROR"

class ErrorKind(str, Enum):
    TRANSPORT = "TRANSPORT"      # connection / DNS / timeout
    HTTP_STATUS = "HTTP_STATUS"  # non-2xx response
    PARSE = "PARSE"              # malformed body or missing field
