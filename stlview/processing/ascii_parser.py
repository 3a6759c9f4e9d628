"""Recursive-descent parser for the ASCII STL grammar.

The accepted grammar is::

    solid <name>
      ( facet normal <fx> <fy> <fz>
          outer loop
            vertex <x> <y> <z>
            vertex <x> <y> <z>
            vertex <x> <y> <z>
          endloop
        endfacet )+
    endsolid

Keywords must appear in exactly this order. Whitespace (space, tab, CR, LF)
separates tokens and is otherwise insignificant. Anything after ``endsolid``
is ignored.
"""

import re
from decimal import Decimal
from typing import Optional

import numpy as np

from stlview.core.exceptions import GrammarError, NumericLiteralError
from stlview.core.mesh import Mesh, Point3, Triangle

_WHITESPACE = re.compile(rb"[ \t\r\n]*")
_BLANKS = re.compile(rb"[ \t]*")
_TOKEN = re.compile(rb"[^ \t\r\n]+")
_NAME = re.compile(rb"[^ \t\r\n]*")


def _describe(token: Optional[bytes]) -> str:
    if token is None:
        return "end of input"
    return token.decode("utf-8", errors="replace")


def _to_float32(text: str) -> float:
    """Round a decimal literal to the nearest binary32 value."""
    # float() also accepts digit separators, which are not STL literals
    if "_" in text:
        raise ValueError(text)
    value = float(text)
    with np.errstate(over="ignore"):
        single = np.float32(value)
    if value == float(single) or not np.isfinite(single):
        return float(single)

    # Rounding through float64 can land exactly on a binary32 midpoint and
    # then tie to even. Decide such ties from the exact decimal value.
    toward = np.float32(np.inf if value > float(single) else -np.inf)
    neighbour = np.nextafter(single, toward)
    if not np.isfinite(neighbour) or value != (float(single) + float(neighbour)) / 2:
        return float(single)
    exact = Decimal(text)
    if exact == Decimal(value):
        return float(single)
    if (exact > Decimal(value)) == (float(neighbour) > float(single)):
        return float(neighbour)
    return float(single)


class _Scanner:
    """Cursor over the raw bytes of an ASCII STL file."""

    def __init__(self, data: bytes):
        self.data = data
        self.pos = 0

    def next_token(self) -> tuple[Optional[bytes], int]:
        """Skip whitespace and return the next token with its offset.

        The token is None at end of input.
        """
        self.pos = _WHITESPACE.match(self.data, self.pos).end()
        match = _TOKEN.match(self.data, self.pos)
        if match is None:
            return None, self.pos
        self.pos = match.end()
        return match.group(), match.start()

    def expect(self, keyword: str) -> None:
        token, offset = self.next_token()
        if token != keyword.encode("ascii"):
            raise GrammarError(
                f"Expected '{keyword}', found '{_describe(token)}'",
                offset,
                expected=keyword,
                found=None if token is None else _describe(token),
            )

    def read_float(self) -> float:
        token, offset = self.next_token()
        if token is None:
            raise GrammarError(
                "Expected a number, found end of input",
                offset,
                expected="number",
            )
        try:
            return _to_float32(token.decode("ascii"))
        except (UnicodeDecodeError, ValueError):
            raise NumericLiteralError(_describe(token), offset) from None

    def read_point(self) -> Point3:
        return Point3(self.read_float(), self.read_float(), self.read_float())

    def read_name(self) -> str:
        """Read the solid name that directly follows the ``solid`` keyword."""
        self.pos = _BLANKS.match(self.data, self.pos).end()
        match = _NAME.match(self.data, self.pos)
        start = self.pos
        self.pos = match.end()
        try:
            return match.group().decode("utf-8")
        except UnicodeDecodeError:
            raise GrammarError(
                "Solid name is not valid UTF-8", start, expected="name"
            ) from None


def _parse_facet(scanner: _Scanner) -> Triangle:
    # The leading "facet" keyword has already been consumed
    scanner.expect("normal")
    normal = scanner.read_point()
    scanner.expect("outer")
    scanner.expect("loop")
    vertices = []
    for _ in range(3):
        scanner.expect("vertex")
        vertices.append(scanner.read_point())
    scanner.expect("endloop")
    scanner.expect("endfacet")
    return Triangle(vertices=tuple(vertices), normal=normal)


def parse_ascii(data: bytes) -> Mesh:
    """Parse ASCII STL bytes into a Mesh.

    Args:
        data: Full file content, starting with "solid"

    Returns:
        Mesh with at least one triangle, in file order

    Raises:
        GrammarError: On any keyword or structure mismatch, including a solid
            without facets
        NumericLiteralError: If a coordinate token is not a float
    """
    if not data.startswith(b"solid"):
        found, _ = _Scanner(data).next_token()
        raise GrammarError(
            f"Expected 'solid', found '{_describe(found)}'",
            0,
            expected="solid",
            found=None if found is None else _describe(found),
        )

    scanner = _Scanner(data)
    scanner.pos = len(b"solid")
    name = scanner.read_name()

    triangles: list[Triangle] = []
    while True:
        token, offset = scanner.next_token()
        if token == b"facet":
            triangles.append(_parse_facet(scanner))
        elif token == b"endsolid" and triangles:
            break
        else:
            expected = "facet or endsolid" if triangles else "facet"
            raise GrammarError(
                f"Expected {expected}, found '{_describe(token)}'",
                offset,
                expected=expected,
                found=None if token is None else _describe(token),
            )

    return Mesh(name=name, triangles=tuple(triangles))
