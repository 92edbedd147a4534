"""Simple on-disk DBC store and metadata index helpers.

Functions here centralize where persisted DBC files and an index.json live.
The store location is controlled by the environment variable DBCS_PATH. If not
set, it defaults to <repo_root>/data/dbcs.
"""
from __future__ import annotations

import os
import json
import logging
import pathlib
from datetime import datetime, timezone
from typing import Dict, Any, Optional

from signal_decoder.config import AppSettings
from signal_decoder.exceptions import DbcError
from signal_decoder.services.dbc_service import DbcService

logger = logging.getLogger(__name__)


_dbcs_dir: Optional[str] = None


def set_dbcs_dir(path: Optional[str]) -> None:
    """Pin the store location (used by the app lifespan from its configuration)."""
    global _dbcs_dir
    _dbcs_dir = path


def get_dbcs_dir() -> str:
    if _dbcs_dir:
        return os.path.abspath(_dbcs_dir)
    return AppSettings(dbc_dir=os.environ.get("DBCS_PATH")).get_dbc_dir()


def ensure_dir() -> str:
    d = get_dbcs_dir()
    pathlib.Path(d).mkdir(parents=True, exist_ok=True)
    return d


def _index_path(dbcs_dir: str) -> str:
    return os.path.join(dbcs_dir, "index.json")


def _now() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def load_index(dbcs_dir: str) -> Dict[str, Any]:
    p = _index_path(dbcs_dir)
    if not os.path.exists(p):
        return {"files": {}}
    try:
        with open(p, "r", encoding="utf-8") as fh:
            return json.load(fh)
    except (OSError, json.JSONDecodeError) as e:
        logger.warning(f"Failed to read DBC index {p}: {e}")
        return {"files": {}}


def save_index(dbcs_dir: str, index: Dict[str, Any]) -> None:
    p = _index_path(dbcs_dir)
    with open(p, "w", encoding="utf-8") as fh:
        json.dump(index, fh, indent=2, sort_keys=True)


def _unique_name(dbcs_dir: str, name: str) -> str:
    base, ext = os.path.splitext(name)
    candidate = name
    i = 1
    while os.path.exists(os.path.join(dbcs_dir, candidate)):
        candidate = f"{base}-{i}{ext}"
        i += 1
    return candidate


def save_dbc(name: str, contents: bytes, messages: int = 0) -> str:
    """Save DBC bytes to the store. If a name conflict exists, generate a unique name.

    Returns the actual filename used.
    """
    dbcs_dir = ensure_dir()
    final_name = _unique_name(dbcs_dir, os.path.basename(name))
    path = os.path.join(dbcs_dir, final_name)
    with open(path, "wb") as fh:
        fh.write(contents)
    idx = load_index(dbcs_dir)
    idx.setdefault("files", {})[final_name] = {
        "filename": final_name,
        "original_name": name,
        "messages": messages,
        "uploaded_at": _now(),
    }
    save_index(dbcs_dir, idx)
    logger.info(f"Stored DBC {name} as {final_name}")
    return final_name


def load_all_dbcs() -> Dict[str, DbcService]:
    """Load every persisted DBC into its own DbcService, skipping files that fail to parse."""
    dbs: Dict[str, DbcService] = {}
    dbcs_dir = ensure_dir()
    for fname in sorted(os.listdir(dbcs_dir)):
        if not fname.lower().endswith(".dbc"):
            continue
        service = DbcService()
        try:
            service.load_dbc_file(os.path.join(dbcs_dir, fname))
        except DbcError as e:
            logger.warning(f"Skipping persisted DBC {fname}: {e}")
            continue
        dbs[fname] = service
    return dbs


def delete_dbc(name: str) -> bool:
    dbcs_dir = ensure_dir()
    path = os.path.join(dbcs_dir, os.path.basename(name))
    if not os.path.exists(path):
        return False
    try:
        os.remove(path)
    except OSError as e:
        logger.warning(f"Failed to delete DBC {name}: {e}")
        return False
    idx = load_index(dbcs_dir)
    idx.get("files", {}).pop(name, None)
    save_index(dbcs_dir, idx)
    return True


def get_index() -> Dict[str, Any]:
    dbcs_dir = ensure_dir()
    return load_index(dbcs_dir)
