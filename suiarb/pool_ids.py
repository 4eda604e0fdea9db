"""Object ids the simulator should preload: system objects, pools and their related objects."""

from __future__ import annotations

import re
from enum import Enum
from pathlib import Path
from typing import Iterable, List, Set, Union

PathLike = Union[str, Path]

_OBJECT_ID_HEX_LEN = 64
_HEX_LITERAL = re.compile(r"0x([0-9a-fA-F]+)")


class Protocol(Enum):
    """Exchanges and lending protocols whose pools are tracked."""

    CETUS = "cetus"
    TURBOS = "turbos"
    KRIYA_AMM = "kriya_amm"
    BLUE_MOVE = "blue_move"
    KRIYA_CLMM = "kriya_clmm"
    FLOWX_CLMM = "flowx_clmm"
    NAVI = "navi"
    AFTERMATH = "aftermath"


def _object_id(value: str) -> str:
    """Normalise a ``0x`` hex literal to a full-width lower-case object id."""
    match = _HEX_LITERAL.fullmatch(value.strip())
    if match is None:
        raise ValueError(f"invalid object id: {value!r}")
    digits = match.group(1)
    if len(digits) > _OBJECT_ID_HEX_LEN:
        raise ValueError(f"object id too long: {value!r}")
    return "0x" + digits.lower().rjust(_OBJECT_ID_HEX_LEN, "0")


_SYSTEM_IDS = (
    "0x1",  # move stdlib package
    "0x2",  # framework package
    "0x3",  # system package
    "0xb",  # bridge package
    "0xdee9",  # deepbook package
    "0x5",  # system state object
    "0x6",  # clock object
    "0x7",  # authenticator state object
    "0x8",  # randomness state object
    "0x9",  # bridge object
    "0x403",  # deny list object
)

_EXTRA_GLOBAL_IDS = (
    "0x5306f64e312b581766351c07af79c72fcb1cd25147157fdc2f8ad76de9a3fb6a",  # Wormhole
    "0x26efee2b51c911237888e5dc6702868abca3c7ac12c53f76ef8eba0697695e3d",  # Wormhole 1
)


def supported_protocols() -> List[Protocol]:
    """Protocols whose pools and related objects are collected, in collection order."""
    return [
        Protocol.CETUS,
        Protocol.TURBOS,
        Protocol.KRIYA_AMM,
        Protocol.BLUE_MOVE,
        Protocol.KRIYA_CLMM,
        Protocol.FLOWX_CLMM,
        Protocol.NAVI,
        Protocol.AFTERMATH,
    ]


def global_ids() -> Set[str]:
    """System package and object ids plus other globally needed objects."""
    ids = {_object_id(raw) for raw in _SYSTEM_IDS}
    ids.update(_EXTRA_GLOBAL_IDS)
    return ids


def parse_path(value: str) -> List[str]:
    """Parse a comma separated list of pool ids into normalised object ids."""
    return [_object_id(part) for part in value.split(",")]


def read_ids(path: PathLike) -> Set[str]:
    """Read one id per line; blank lines are ignored."""
    text = Path(path).read_text(encoding="utf-8")
    return {line.strip() for line in text.splitlines() if line.strip()}


def write_ids(path: PathLike, ids: Iterable[str]) -> None:
    """Write ids one per line, replacing the file."""
    lines = sorted(set(ids))
    Path(path).write_text("\n".join(lines) + "\n", encoding="utf-8")