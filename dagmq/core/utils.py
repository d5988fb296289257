import importlib
import re
from typing import Tuple

# mesmo formato aceito por strtoul(..., 0): hex com 0x, octal com 0 inicial, senão decimal
_UINT_RE = re.compile(r"\s*\+?(0[xX][0-9a-fA-F]+|0[0-7]*|[1-9][0-9]*)")


def parse_uint(text: str) -> Tuple[int, str]:
    """
    Lê um inteiro sem sinal no início de `text` e devolve (valor, resto).
    O prefixo numérico mais longo é consumido ('0x1g' -> (1, 'g')).
    String vazia vale 0; texto sem dígitos levanta ValueError.
    """
    if not text:
        return 0, ""
    m = _UINT_RE.match(text)
    if not m:
        raise ValueError(f"no digits in '{text}'")
    digits = m.group(1)
    if digits[:2].lower() == "0x":
        value = int(digits, 16)
    elif digits.startswith("0"):
        value = int(digits, 8)
    else:
        value = int(digits)
    return value, text[m.end():]


def import_from_path(path: str):
    mod, cls = path.rsplit(".",1)
    return getattr(importlib.import_module(mod), cls)
