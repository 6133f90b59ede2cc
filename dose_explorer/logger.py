"""Per-session event log (JSON lines) and its CSV export."""

from __future__ import annotations

import csv
import io
import json
import logging
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from . import config

log = logging.getLogger(__name__)

_SESSION_LOG_STATE: Dict[str, Dict[str, Any]] = {}


def safe_session_id(session_id: Optional[str]) -> str:
    return session_id if isinstance(session_id, str) and session_id else "unknown"


def next_seq_and_elapsed(session_id: str) -> Dict[str, Any]:
    state = _SESSION_LOG_STATE.setdefault(session_id, {"seq": 0, "last_t_server_ms": None})
    now_ms = int(time.time() * 1000)
    seq = state["seq"] + 1
    state["seq"] = seq
    elapsed = 0
    if state["last_t_server_ms"] is not None:
        elapsed = max(now_ms - state["last_t_server_ms"], 0)
    state["last_t_server_ms"] = now_ms
    ts = datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
    return {"seq": seq, "elapsed_time_ms": elapsed, "t_server_iso": ts}


def session_log_path(session_id: str, data_dir: Optional[Path] = None) -> Path:
    base = data_dir if data_dir is not None else config.DATA_DIR
    return base / f"session_{safe_session_id(session_id)}.jsonl"


def append_jsonl(path: Path, record: Dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("a", encoding="utf-8") as fh:
        fh.write(json.dumps(record, ensure_ascii=False) + "\n")
        fh.flush()


def build_event_record(session_id: str, event: str, **fields: Any) -> Dict[str, Any]:
    record: Dict[str, Any] = {
        "schema_version": config.SCHEMA_VERSION,
        "session_id": safe_session_id(session_id),
        "event": event,
        "mode": config.APP_MODE,
    }
    record.update(next_seq_and_elapsed(record["session_id"]))
    record.update(fields)
    return record


def log_event(session_id: str, event: str, *, data_dir: Optional[Path] = None, **fields: Any) -> Dict[str, Any]:
    record = build_event_record(session_id, event, **fields)
    if not config.LOG_EVENTS:
        return record
    path = session_log_path(record["session_id"], data_dir)
    try:
        append_jsonl(path, record)
    except OSError as exc:
        log.warning("could not write event %s to %s: %s", event, path, exc)
    return record


def read_session_records(session_id: str, data_dir: Optional[Path] = None) -> List[Dict[str, Any]]:
    path = session_log_path(session_id, data_dir)
    if not path.exists():
        return []
    records: List[Dict[str, Any]] = []
    with path.open("r", encoding="utf-8") as fh:
        for line in fh:
            line = line.strip()
            if not line:
                continue
            try:
                records.append(json.loads(line))
            except json.JSONDecodeError:
                log.debug("skipping malformed line in %s", path)
    return records


def flatten_record_for_csv(record: Dict[str, Any]) -> Dict[str, Any]:
    flat = dict.fromkeys(config.SCHEMA_COLUMNS, None)
    for key, value in record.items():
        if key in flat:
            flat[key] = value
    return flat


def build_csv_content(records: List[Dict[str, Any]]) -> Optional[str]:
    if not records:
        return None
    columns = list(config.SCHEMA_COLUMNS)
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=columns, extrasaction="ignore")
    writer.writeheader()
    for rec in records:
        writer.writerow(flatten_record_for_csv(rec))
    return buffer.getvalue()
