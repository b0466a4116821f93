"""printf-style formatting with the verbs and error markers of the session API."""

from __future__ import annotations

import json
import math
import re
from typing import Any

_SPEC_RE = re.compile(r"%([-+# 0]*)(\d+)?(?:\.(\d*))?(.?)", re.S)


def _type_name(value: Any) -> str:
    if value is None:
        return "<nil>"
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, int):
        return "int"
    if isinstance(value, float):
        return "float64"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (bytes, bytearray)):
        return "[]uint8"
    return type(value).__name__


def _float_text(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    text = repr(value)
    return text[:-2] if text.endswith(".0") else text


def _value_text(value: Any) -> str:
    if value is None:
        return "<nil>"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return _float_text(value)
    if isinstance(value, (bytes, bytearray)):
        return "[" + " ".join(str(b) for b in value) + "]"
    return str(value)


def _bad_verb(verb: str, arg: Any) -> str:
    if arg is None:
        return f"%!{verb}(<nil>)"
    return f"%!{verb}({_type_name(arg)}={_value_text(arg)})"


def _format_one(flags: str, width: int | None, prec: int | None, verb: str, arg: Any) -> str:
    minus = "-" in flags
    plus = "+" in flags
    space = " " in flags
    sharp = "#" in flags
    zero = "0" in flags and not minus
    is_int = isinstance(arg, int) and not isinstance(arg, bool)

    def signed(text: str, negative: bool) -> str:
        if negative:
            return text
        if plus:
            return "+" + text
        if space:
            return " " + text
        return text

    if verb == "v":
        text = _value_text(arg)
    elif verb == "s":
        if isinstance(arg, str):
            text = arg
        elif isinstance(arg, (bytes, bytearray)):
            text = bytes(arg).decode("utf-8", "replace")
        elif arg is None or isinstance(arg, (bool, int, float)):
            return _bad_verb(verb, arg)
        else:
            text = str(arg)
        if prec is not None:
            text = text[:prec]
    elif verb == "q":
        if isinstance(arg, (bytes, bytearray)):
            arg = bytes(arg).decode("utf-8", "replace")
        if isinstance(arg, str):
            text = json.dumps(arg, ensure_ascii=False)
        elif is_int:
            text = "'" + chr(arg) + "'"
        else:
            return _bad_verb(verb, arg)
    elif verb == "d":
        if not is_int:
            return _bad_verb(verb, arg)
        text = signed(str(arg), arg < 0)
    elif verb in "boxX":
        if is_int:
            digits = format(abs(arg), verb)
            if sharp:
                digits = {"b": "0b", "o": "0", "x": "0x", "X": "0X"}[verb] + digits
            text = signed(("-" if arg < 0 else "") + digits, arg < 0)
        elif verb in "xX" and isinstance(arg, (str, bytes, bytearray)):
            raw = arg.encode() if isinstance(arg, str) else bytes(arg)
            text = raw.hex()
            if verb == "X":
                text = text.upper()
        else:
            return _bad_verb(verb, arg)
    elif verb == "c":
        if not is_int:
            return _bad_verb(verb, arg)
        text = chr(arg)
    elif verb in "fFeEgG":
        if not isinstance(arg, float):
            return _bad_verb(verb, arg)
        if math.isnan(arg) or math.isinf(arg):
            text = _float_text(arg)
            if plus and text == "NaN":
                text = "+NaN"
            elif not plus and text == "+Inf":
                text = "Inf" if not space else " Inf"
        else:
            if verb in "gG" and prec is None:
                text = _float_text(arg)
                if verb == "G":
                    text = text.upper()
            else:
                spec = verb.lower() if verb == "F" else verb
                text = format(arg, f".{6 if prec is None else prec}{spec}")
            text = signed(text, text.startswith("-"))
    elif verb == "t":
        if not isinstance(arg, bool):
            return _bad_verb(verb, arg)
        text = "true" if arg else "false"
    else:
        return _bad_verb(verb, arg)

    if width is None or len(text) >= width:
        return text
    if minus:
        return text.ljust(width)
    if zero:
        if text[:1] in "+- ":
            return text[0] + text[1:].rjust(width - 1, "0")
        return text.rjust(width, "0")
    return text.rjust(width)


def sprintf(fmt: str, *args: Any) -> str:
    """Format args according to fmt, marking missing, extra and bad arguments."""
    out: list[str] = []
    pos = 0
    used = 0
    for match in _SPEC_RE.finditer(fmt):
        out.append(fmt[pos:match.start()])
        pos = match.end()
        flags, width, prec, verb = match.groups()
        if verb == "":
            out.append("%!(NOVERB)")
            continue
        if verb == "%":
            out.append("%")
            continue
        if used >= len(args):
            out.append(f"%!{verb}(MISSING)")
            continue
        out.append(_format_one(
            flags,
            int(width) if width else None,
            (int(prec) if prec else 0) if prec is not None else None,
            verb,
            args[used],
        ))
        used += 1
    out.append(fmt[pos:])
    if used < len(args):
        extras = ", ".join(
            "<nil>" if a is None else f"{_type_name(a)}={_value_text(a)}"
            for a in args[used:]
        )
        out.append(f"%!(EXTRA {extras})")
    return "".join(out)


def apply_fmt(fmt: str, *args: Any) -> str:
    """Format fmt with args only when args are given; otherwise return fmt as is."""
    return sprintf(fmt, *args) if args else fmt