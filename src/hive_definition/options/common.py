"""
Field parsing helpers shared by the option group checks.

Each helper raises HiveDefinitionError naming the field and its value.
"""
import ipaddress
from typing import Any, Optional

from pydantic import AnyHttpUrl, TypeAdapter, ValidationError

from ..errors import HiveDefinitionError
from ..schema.cidr import Cidr, parse_address
from ..schema.sizes import format_size, try_parse_size


def subnet_field(owner: Any, field: str) -> Cidr:
    value = getattr(owner, field)
    cidr = Cidr.try_parse(value)
    if cidr is None:
        raise HiveDefinitionError.for_field(owner, field, value, "is not a valid IPv4 subnet.")
    return cidr


def address_field(owner: Any, field: str) -> ipaddress.IPv4Address:
    value = getattr(owner, field)
    address = parse_address(value)
    if address is None:
        raise HiveDefinitionError.for_field(owner, field, value, "is not a valid IPv4 address.")
    return address


def size_field(owner: Any, field: str, minimum: Optional[int] = None) -> int:
    """ Parse a byte size field, optionally enforcing a minimum """
    value = getattr(owner, field)
    if value is None or value == "":
        raise HiveDefinitionError.for_missing(owner, field, "cannot be NULL or empty.")

    size = try_parse_size(value)
    if size is None:
        raise HiveDefinitionError.for_field(owner, field, value, "cannot be parsed.")
    if minimum is not None and size < minimum:
        raise HiveDefinitionError.for_field(
            owner, field, value, f"cannot be less than [{format_size(minimum)}].")
    return size


def port_field(owner: Any, field: str) -> int:
    value = getattr(owner, field)
    if not 0 < value <= 65535:
        raise HiveDefinitionError.for_field(owner, field, value, "is not a valid network port.")
    return value


_HTTP_URL = TypeAdapter(AnyHttpUrl)


def is_http_uri(text: str) -> bool:
    """ Check for an absolute http or https URI with a host """
    try:
        _HTTP_URL.validate_python(text)
    except ValidationError:
        return False
    return True
