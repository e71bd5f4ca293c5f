"""Share-link query parameters and batch CSV export."""

from __future__ import annotations

import csv
import io
from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

CSV_HEADER = ("Variables", "Minterms", "Dont Cares", "Expression")


@dataclass(frozen=True)
class ShareState:
    nvars: int
    minterms: Tuple[int, ...]
    dontcares: Tuple[int, ...] = ()


@dataclass(frozen=True)
class BatchItem:
    nvars: int
    minterms: Tuple[int, ...]
    dontcares: Tuple[int, ...]
    expression: str


def parse_int_list(raw: Optional[str]) -> List[int]:
    """Parse ``"1, 3,x,5"`` into ``[1, 3, 5]``; non-integers are dropped."""
    values = []
    for item in (raw or "").split(","):
        item = item.strip()
        try:
            values.append(int(item))
        except ValueError:
            continue
    return values


def _join(values: Iterable[int]) -> str:
    return ",".join(str(v) for v in values)


def encode_share_params(
    nvars: int, minterms: Sequence[int], dontcares: Sequence[int] = ()
) -> Dict[str, str]:
    """Query parameters reproducing a map: ``v`` vars, ``m`` minterms, ``d`` don't cares."""
    params = {"v": str(nvars), "m": _join(minterms)}
    if dontcares:
        params["d"] = _join(dontcares)
    return params


def decode_share_params(params: Mapping[str, str]) -> Optional[ShareState]:
    """Inverse of :func:`encode_share_params`; ``None`` when ``v`` or ``m`` is missing."""
    if "v" not in params or "m" not in params:
        return None
    try:
        nvars = int(str(params["v"]).strip())
    except ValueError:
        return None
    return ShareState(
        nvars=nvars,
        minterms=tuple(parse_int_list(params["m"])),
        dontcares=tuple(parse_int_list(params.get("d"))),
    )


def batch_to_csv(items: Iterable[BatchItem]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for item in items:
        writer.writerow(
            [item.nvars, _join(item.minterms), _join(item.dontcares), item.expression]
        )
    return buffer.getvalue()
