# polycube/progress.py
from __future__ import annotations
import json
import os
import time
from collections import deque
from typing import Callable, Deque, Optional

from polycube.search import SearchStats

Emit = Callable[..., dict]


def stamp(now: Optional[float] = None) -> str:
    t = time.localtime(time.time() if now is None else now)
    return f"[{t.tm_hour:02d}:{t.tm_min:02d}:{t.tm_sec:02d}]"


def _ensure_parent(path: str):
    parent = os.path.dirname(os.path.abspath(path))
    if not os.path.isdir(parent):
        os.makedirs(parent, exist_ok=True)


def make_emit_progress(stream_path: Optional[str] = None,
                       echo: bool = True,
                       tail: Optional[Deque[dict]] = None) -> Emit:
    """
    Returns emit(event, **fields). Each call:
      - appends one JSON line to `stream_path` (if given)
      - keeps the payload in `tail` (if given)
      - echoes a short stamped line to stdout (if `echo`)
    """
    if stream_path:
        _ensure_parent(stream_path)

    def emit(event: str, **fields) -> dict:
        payload = {"event": event, "ts": time.time()}
        payload.update(fields)
        if stream_path:
            with open(stream_path, "a", encoding="utf-8") as f:
                f.write(json.dumps(payload, ensure_ascii=False) + "\n")
        if tail is not None:
            tail.append(payload)
        if echo:
            extras = " ".join(f"{k}={v}" for k, v in fields.items() if v is not None and v != "")
            line = f"{stamp(payload['ts'])} {event}"
            if extras:
                line += f" | {extras}"
            print(line, flush=True)
        return payload

    return emit


def progress_fields(stats: SearchStats) -> dict:
    elapsed = stats.elapsed_seconds()
    return {
        "depth": stats.depth,
        "low_water": stats.low_water,
        "best_depth": stats.best_depth_ever,
        "nodes": stats.nodes,
        "attempts": stats.attempts,
        "solutions": stats.solutions,
        "attempts_per_sec": int(stats.attempts / elapsed) if elapsed > 0 else 0,
    }


def make_tail(maxlen: int = 256) -> Deque[dict]:
    return deque(maxlen=maxlen)
