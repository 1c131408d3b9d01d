"""
Identifiers of the built-in constraint kinds. Custom validators may use any other string.
"""

# common
IS_DEFINED = "is-defined"
IS_OPTIONAL = "is-optional"
NESTED_VALIDATION = "nested-validation"
EQUALS = "equals"
NOT_EQUALS = "not-equals"
IS_EMPTY = "is-empty"
IS_NOT_EMPTY = "is-not-empty"
IS_IN = "is-in"
IS_NOT_IN = "is-not-in"

# types
IS_BOOLEAN = "is-boolean"
IS_DATE = "is-date"
IS_NUMBER = "is-number"
IS_INT = "is-int"
IS_STRING = "is-string"
IS_TYPE = "is-type"

# numbers
IS_DIVISIBLE_BY = "is-divisible-by"
IS_POSITIVE = "is-positive"
IS_NEGATIVE = "is-negative"
MIN = "min"
MAX = "max"
IS_IN_RANGE = "is-in-range"

# dates
MIN_DATE = "min-date"
MAX_DATE = "max-date"

# string types
IS_BOOLEAN_STRING = "is-boolean-string"
IS_NUMBER_STRING = "is-number-string"
IS_DATE_STRING = "is-date-string"

# strings
CONTAINS = "contains"
NOT_CONTAINS = "not-contains"
IS_ALPHA = "is-alpha"
IS_ALPHANUMERIC = "is-alphanumeric"
IS_ASCII = "is-ascii"
IS_BASE64 = "is-base64"
IS_BYTE_LENGTH = "is-byte-length"
IS_CREDIT_CARD = "is-credit-card"
IS_CURRENCY = "is-currency"
IS_EMAIL = "is-email"
IS_FQDN = "is-fqdn"
IS_FULL_WIDTH = "is-full-width"
IS_HALF_WIDTH = "is-half-width"
IS_VARIABLE_WIDTH = "is-variable-width"
IS_HEX_COLOR = "is-hex-color"
IS_HEXADECIMAL = "is-hexadecimal"
IS_IP = "is-ip"
IS_ISBN = "is-isbn"
IS_ISO8601 = "is-iso8601"
IS_JSON = "is-json"
IS_LOWERCASE = "is-lowercase"
IS_UPPERCASE = "is-uppercase"
IS_MONGO_ID = "is-mongo-id"
IS_MULTIBYTE = "is-multibyte"
IS_SURROGATE_PAIR = "is-surrogate-pair"
IS_URL = "is-url"
IS_UUID = "is-uuid"
LENGTH = "length"
MIN_LENGTH = "min-length"
MAX_LENGTH = "max-length"
MATCHES = "matches-pattern"

# arrays
ARRAY_CONTAINS = "array-contains"
ARRAY_NOT_CONTAINS = "array-not-contains"
ARRAY_NOT_EMPTY = "array-not-empty"
ARRAY_MIN_SIZE = "array-min-size"
ARRAY_MAX_SIZE = "array-max-size"
ARRAY_UNIQUE = "array-unique"

# synthetic kinds, produced by the engine and not resolvable in the catalog
WHITELIST_VALIDATION = "whitelist-validation"
UNKNOWN_VALUE = "unknown-value"
