"""Component identifier parsing"""

import re
from typing import Tuple

from ..api.exceptions import InvalidPackageNameError, MalformedIdentifierError, MissingSegmentError
from ..models.component import ComponentIdentifier


def _non_empty(kind: str, value: str) -> str:
    if not value:
        raise MissingSegmentError(kind)
    return value


def parse_component_identifier(raw: str) -> ComponentIdentifier:
    """Parse `component`, `project/component` or `account/project/component`

    Args:
        raw: Identifier as typed by the user

    Returns:
        Parsed identifier

    Raises:
        MalformedIdentifierError: If the segment count is not 1, 2 or 3
        MissingSegmentError: If a present segment is empty
    """
    segments = raw.split("/")

    if len(segments) == 1:
        return ComponentIdentifier(name=_non_empty("component", segments[0]))

    if len(segments) == 2:
        return ComponentIdentifier(
            project=_non_empty("project", segments[0]),
            name=_non_empty("component", segments[1]),
        )

    if len(segments) == 3:
        return ComponentIdentifier(
            account=_non_empty("account", segments[0]),
            project=_non_empty("project", segments[1]),
            name=_non_empty("component", segments[2]),
        )

    raise MalformedIdentifierError(raw)


PACKAGE_NAME_RE = re.compile(r"^[a-z][a-z0-9-]*:[a-z][a-z0-9-]*$")


def parse_package_name(raw: str) -> Tuple[str, str]:
    """Split a new component's `namespace:name` package name

    Raises:
        InvalidPackageNameError: If the name does not have that form
    """
    if not PACKAGE_NAME_RE.match(raw):
        raise InvalidPackageNameError(raw)
    namespace, name = raw.split(":")
    return namespace, name
