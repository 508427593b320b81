"""Lightweight GraphQL document inspection.

Only the top level of a document is scanned: enough to tell which
operations it defines and of which kind, without a full parser.
"""

import re
from dataclasses import dataclass

OPERATION_KINDS = frozenset({"query", "mutation", "subscription"})

_NAME = re.compile(r"[_A-Za-z][_0-9A-Za-z]*")
_IGNORED = frozenset(" \t\r\n,\ufeff")


@dataclass(frozen=True)
class OperationDefinition:
    """A top-level operation of a GraphQL document."""

    kind: str
    name: str | None = None


def _skip_block_string(document: str, start: int) -> int:
    position = start + 3
    while True:
        end = document.find('"""', position)
        if end == -1:
            return len(document)
        if document[end - 1] == "\\":
            position = end + 3
            continue
        return end + 3


def _skip_string(document: str, start: int) -> int:
    position = start + 1
    while position < len(document) and document[position] not in '"\n':
        position += 2 if document[position] == "\\" else 1
    return position + 1


def _read_name(document: str, start: int) -> tuple[str | None, int]:
    position = start
    while position < len(document) and document[position] in _IGNORED:
        position += 1
    match = _NAME.match(document, position)
    if match is None:
        return None, start
    return match.group(), match.end()


def parse_operations(document: str) -> list[OperationDefinition]:
    """List the operations defined at the top level of a document.

    A bare selection set (``{ ... }``) counts as an anonymous query.
    Fragment definitions are skipped. Strings, block strings and comments
    are ignored, so field names or arguments called "query" never count.

    Args:
        document: GraphQL document text

    Returns:
        Operation definitions in document order
    """
    operations: list[OperationDefinition] = []
    braces = parens = 0
    in_definition = False
    position = 0
    length = len(document)

    while position < length:
        char = document[position]

        if char == "#":
            end = document.find("\n", position)
            position = length if end == -1 else end + 1
        elif document.startswith('"""', position):
            position = _skip_block_string(document, position)
        elif char == '"':
            position = _skip_string(document, position)
        elif char == "(":
            parens += 1
            position += 1
        elif char == ")":
            parens = max(parens - 1, 0)
            position += 1
        elif char == "{" and parens == 0:
            if braces == 0:
                if not in_definition:
                    operations.append(OperationDefinition(kind="query"))
                in_definition = False
            braces += 1
            position += 1
        elif char == "}" and parens == 0:
            braces = max(braces - 1, 0)
            position += 1
        elif braces == 0 and parens == 0 and (match := _NAME.match(document, position)):
            word = match.group()
            position = match.end()
            if in_definition:
                continue
            if word in OPERATION_KINDS:
                name, position = _read_name(document, position)
                operations.append(OperationDefinition(kind=word, name=name))
                in_definition = True
            elif word == "fragment":
                in_definition = True
        else:
            position += 1

    return operations


def select_operation(document: str | None, operation_name: str | None = None) -> OperationDefinition | None:
    """Resolve the operation a request will run.

    With an operation name, the operation of that name is selected. Without
    one, the document must define exactly one operation.

    Args:
        document: GraphQL document text
        operation_name: Requested operation name, if any

    Returns:
        The selected operation, or None if it cannot be determined
    """
    operations = parse_operations(document or "")
    if operation_name:
        return next((op for op in operations if op.name == operation_name), None)
    if len(operations) == 1:
        return operations[0]
    return None
