"""Small formatted console output, hex dumps and integer parsing."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass

_MASK32 = 0xFFFFFFFF
_RADIXES = {"B": 2, "O": 8, "D": 10, "U": 10, "X": 16}
_DUMP_FORMATS = {1: " %02X", 2: " %04X", 4: " %08LX"}


def _signed32(value: int) -> int:
    value &= _MASK32
    return value - (1 << 32) if value & 0x80000000 else value


def _to_base(value: int, radix: int, lower: bool) -> str:
    alphabet = "0123456789abcdef" if lower else "0123456789ABCDEF"
    digits = []
    while True:
        value, rest = divmod(value, radix)
        digits.append(alphabet[rest])
        if value == 0:
            break
    return "".join(reversed(digits))


def _render(fmt: str, args: Sequence[object]) -> str:
    """Expand ``fmt`` without newline translation."""
    pending = iter(args)

    def next_arg() -> object:
        try:
            return next(pending)
        except StopIteration:
            raise TypeError("not enough arguments for format string") from None

    out: list[str] = []
    chars = iter(fmt)
    for c in chars:
        if c != "%":
            out.append(c)
            continue
        zero_pad = left = False
        c = next(chars, "")
        if c == "0":
            zero_pad = True
            c = next(chars, "")
        elif c == "-":
            left = True
            c = next(chars, "")
        width = 0
        while "0" <= c <= "9":
            width = width * 10 + int(c)
            c = next(chars, "")
        if c in ("l", "L"):
            c = next(chars, "")
        if not c:
            break
        kind = c.upper() if c.isascii() else c

        if kind == "S":
            text = next_arg()
            if not isinstance(text, str):
                raise TypeError(f"%{c} expects a string, got {type(text).__name__}")
            pad = " " * max(width - len(text), 0)
            out.append(text + pad if left else pad + text)
            continue
        if kind == "C":
            char = next_arg()
            if isinstance(char, str) and len(char) == 1:
                out.append(char)
            elif isinstance(char, int):
                out.append(chr(char & 0xFF))
            else:
                raise TypeError(f"%{c} expects a character, got {char!r}")
            continue
        radix = _RADIXES.get(kind)
        if radix is None:
            out.append(c)
            continue

        value = next_arg()
        if not isinstance(value, int):
            raise TypeError(f"%{c} expects an integer, got {type(value).__name__}")
        negative = False
        if kind == "D":
            value = _signed32(value)
            negative = value < 0
            value = abs(value)
        else:
            value &= _MASK32
        digits = _to_base(value, radix, lower=(c == "x"))
        if negative:
            digits = "-" + digits
        pad_count = max(width - len(digits), 0)
        if left:
            out.append(digits + " " * pad_count)
        else:
            out.append(("0" if zero_pad else " ") * pad_count + digits)
    return "".join(out)


def format_string(fmt: str, *args: object) -> str:
    """Format ``args`` into a string; each ``\\n`` becomes ``\\r\\n``.

    Supports ``%s %c %b %o %d %u %x %X`` with an optional ``0`` or ``-``
    flag, a minimum width and an ``l`` size prefix.
    """
    return _render(fmt, args).replace("\n", "\r\n")


def dump_line(data: Sequence[int], address: int, width: int) -> str:
    """One line of hex dump: address, items of ``width`` bytes, and for bytes an ASCII column.

    The returned line ends with ``\\n``.
    """
    fmt = _DUMP_FORMATS.get(width)
    if fmt is None:
        raise ValueError(f"unsupported item width: {width}")
    items = list(data)
    if width != 1 and not items:
        raise ValueError("nothing to dump")
    limit = 1 << (8 * width)
    for item in items:
        if not 0 <= item < limit:
            raise ValueError(f"item {item!r} does not fit in {width} byte(s)")

    parts = [_render("%08lX ", [address])]
    parts.extend(_render(fmt, [item]) for item in items)
    if width == 1:
        parts.append(" ")
        parts.extend(chr(item) if 0x20 <= item <= 0x7E else "." for item in items)
    parts.append("\n")
    return "".join(parts)


def parse_int(text: str) -> tuple[int, str]:
    """Read one integer from the start of ``text``.

    Leading spaces are skipped; ``-`` negates; ``0x``, ``0b`` and a leading
    ``0`` select hexadecimal, binary and octal. Returns the value as a
    32-bit signed integer and the unread remainder of ``text``.
    Raises ValueError if no valid number is found.
    """
    size = len(text)

    def at(k: int) -> str:
        return text[k] if k < size else "\0"

    i = 0
    while at(i) == " ":
        i += 1
    negative = False
    if at(i) == "-":
        negative = True
        i += 1

    c = at(i)
    if c == "0":
        i += 1
        c = at(i)
        if c == "x":
            radix = 16
            i += 1
        elif c == "b":
            radix = 2
            i += 1
        else:
            if c <= " ":
                return 0, text[i:]
            if not "0" <= c <= "9":
                raise ValueError(f"invalid character {c!r} in number")
            radix = 8
    else:
        if not "0" <= c <= "9":
            raise ValueError(f"no number at {text[i:]!r}")
        radix = 10

    value = 0
    while at(i) > " ":
        code = ord(at(i))
        if code > 0xFF:
            raise ValueError(f"invalid character {at(i)!r} in number")
        if code >= 0x61:
            code -= 0x20
        digit = (code - 0x30) & 0xFF
        if digit >= 17:
            digit -= 7
            if digit <= 9:
                raise ValueError(f"invalid character {at(i)!r} in number")
        if digit >= radix:
            raise ValueError(f"digit {at(i)!r} out of range for base {radix}")
        value = (value * radix + digit) & _MASK32
        i += 1
    if negative:
        value = -value
    return _signed32(value), text[i:]


@dataclass
class Console:
    """A character console over a character writer and a character reader.

    ``writer`` receives one character at a time. ``reader`` returns one
    character per call; an empty string or ``"\\0"`` marks end of stream.
    """

    writer: Callable[[str], None] | None = None
    reader: Callable[[], str] | None = None

    def putc(self, char: str) -> None:
        """Write one character, sending ``\\r`` before every ``\\n``."""
        if char == "\n":
            self.putc("\r")
        if self.writer is not None:
            self.writer(char)

    def puts(self, text: str) -> None:
        """Write a string."""
        for char in text:
            self.putc(char)

    def printf(self, fmt: str, *args: object) -> None:
        """Write formatted output, as :func:`format_string` formats it."""
        self.puts(_render(fmt, args))

    def put_dump(self, data: Sequence[int], address: int, width: int) -> None:
        """Write one hex dump line, as :func:`dump_line` formats it."""
        self.puts(dump_line(data, address, width))

    def gets(self, max_length: int) -> str | None:
        """Read a line ended by ``\\r``, keeping at most ``max_length`` characters.

        Visible characters and backspaces are echoed. Returns None when the
        reader is missing or the stream ends before a full line.
        """
        if self.reader is None:
            return None
        chars: list[str] = []
        while True:
            c = self.reader()
            if not c or c == "\0":
                return None
            if c == "\r":
                break
            if c == "\b" and chars:
                chars.pop()
                self.putc(c)
                continue
            if c >= " " and len(chars) < max_length:
                chars.append(c)
                self.putc(c)
        self.putc("\n")
        return "".join(chars)