"""Read generated package text back into routine signatures.

Used to summarize what a generation run produced and to check the shape
of rendered packages.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field


@dataclass
class RoutineParameter:
    """Parameter of a package procedure."""
    name: str
    data_type: str
    mode: str = "IN"  # IN, OUT, INOUT


@dataclass
class PackageRoutine:
    """Procedure found in a package specification or body."""
    package_name: str
    routine_name: str
    parameters: list[RoutineParameter] = field(default_factory=list)
    text: str = ""

    @property
    def qualified_name(self) -> str:
        return f"{self.package_name}.{self.routine_name}"

    @property
    def parameter_names(self) -> list[str]:
        return [p.name for p in self.parameters]


_PACKAGE_HEADER = re.compile(
    r'CREATE\s+(?:OR\s+REPLACE\s+)?PACKAGE\s+(BODY\s+)?(\w+)\s+(?:AS|IS)\b',
    re.IGNORECASE
)
_PROCEDURE_HEADER = re.compile(
    r'(?:^|\s)PROCEDURE\s+(\w+)\s*(\()?',
    re.IGNORECASE | re.MULTILINE
)


def parse_package_body(text: str) -> list[PackageRoutine]:
    """Extract procedure definitions from a CREATE PACKAGE BODY block.

    Each definition runs from its PROCEDURE header to its END name;

    Args:
        text: Package body source

    Returns:
        Routines in source order (empty if text is not a package body)
    """
    package = _package_contents(text, body=True)
    if package is None:
        return []
    package_name, contents = package

    routines = []
    for match in _PROCEDURE_HEADER.finditer(contents):
        routine_name = match.group(1)
        params_str, rest_start = _parameter_section(contents, match)
        if params_str is None:
            continue

        if not re.match(r'\s*(?:IS|AS)\b', contents[rest_start:], re.IGNORECASE):
            continue

        end_match = re.compile(
            rf'END\s+{re.escape(routine_name)}\s*;',
            re.IGNORECASE
        ).search(contents, rest_start)
        routine_end = end_match.end() if end_match else len(contents)

        routines.append(PackageRoutine(
            package_name=package_name,
            routine_name=routine_name,
            parameters=_extract_parameters(params_str),
            text=contents[match.start():routine_end].strip()
        ))

    return routines


def parse_package_spec(text: str) -> list[PackageRoutine]:
    """Extract procedure declarations from a CREATE PACKAGE block."""
    package = _package_contents(text, body=False)
    if package is None:
        return []
    package_name, contents = package

    routines = []
    for match in _PROCEDURE_HEADER.finditer(contents):
        params_str, rest_start = _parameter_section(contents, match)
        if params_str is None:
            continue

        semicolon = re.match(r'\s*;', contents[rest_start:])
        if not semicolon:
            continue

        routines.append(PackageRoutine(
            package_name=package_name,
            routine_name=match.group(1),
            parameters=_extract_parameters(params_str),
            text=contents[match.start():rest_start + semicolon.end()].strip()
        ))

    return routines


def summarize_routines(routines: list[PackageRoutine]) -> list[str]:
    """Format routines as one-line signatures, e.g. update_T(u_ID, u_NAME)."""
    return [
        f"{routine.routine_name}({', '.join(routine.parameter_names)})"
        for routine in routines
    ]


# ============================================================================
# Helper Functions
# ============================================================================

def _package_contents(text: str, body: bool) -> tuple[str, str] | None:
    """Return (package_name, text between IS and END package_name;)."""
    for header in _PACKAGE_HEADER.finditer(text):
        if bool(header.group(1)) != body:
            continue

        package_name = header.group(2)
        end_match = re.compile(
            rf'END\s+{re.escape(package_name)}\s*;',
            re.IGNORECASE
        ).search(text, header.end())
        contents_end = end_match.start() if end_match else len(text)
        return package_name, text[header.end():contents_end]

    return None


def _parameter_section(contents: str, match: re.Match) -> tuple[str | None, int]:
    """Return the parameter list text of a procedure header and where it ends.

    Procedures without parentheses have an empty parameter list.
    """
    if not match.group(2):
        return "", match.end()

    paren_start = match.end() - 1
    paren_end = _find_balanced_paren(contents, paren_start)
    if paren_end == -1:
        return None, match.end()

    return contents[paren_start + 1:paren_end], paren_end + 1


def _extract_parameters(params_str: str) -> list[RoutineParameter]:
    """Parse "name [IN|OUT|IN OUT] type" entries separated by commas."""
    params = []

    for part in params_str.split(','):
        tokens = part.split()
        if not tokens:
            continue

        name = tokens[0]
        idx = 1
        mode = "IN"

        if idx < len(tokens) and tokens[idx].upper() in ('IN', 'OUT'):
            if tokens[idx].upper() == 'IN' and idx + 1 < len(tokens) and tokens[idx + 1].upper() == 'OUT':
                mode = "INOUT"
                idx += 2
            else:
                mode = tokens[idx].upper()
                idx += 1

        params.append(RoutineParameter(
            name=name,
            data_type=' '.join(tokens[idx:]) or "unknown",
            mode=mode
        ))

    return params


def _find_balanced_paren(text: str, start: int) -> int:
    """Find the position of the closing parenthesis that balances the opening one.

    Args:
        text: The text to search in
        start: Position of the opening parenthesis

    Returns:
        Position of the closing parenthesis, or -1 if not found
    """
    if start >= len(text) or text[start] != '(':
        return -1

    depth = 0
    for i in range(start, len(text)):
        char = text[i]
        if char == '(':
            depth += 1
        elif char == ')':
            depth -= 1
            if depth == 0:
                return i

    return -1
