"""Context variables for structured logging."""

from contextvars import ContextVar
from typing import Dict, Optional

_run_id: ContextVar[str] = ContextVar("run_id", default="")
_stage_name: ContextVar[str] = ContextVar("stage_name", default="")
_asset_id: ContextVar[str] = ContextVar("asset_id", default="")
_connection_id: ContextVar[str] = ContextVar("connection_id", default="")


def set_log_context(
    run_id: Optional[str] = None,
    stage: Optional[str] = None,
    asset_id: Optional[str] = None,
    connection_id: Optional[str] = None,
) -> None:
    if run_id is not None:
        _run_id.set(run_id)
    if stage is not None:
        _stage_name.set(stage)
    if asset_id is not None:
        _asset_id.set(asset_id)
    if connection_id is not None:
        _connection_id.set(connection_id)


def get_log_context() -> Dict[str, str]:
    return {
        "run_id": _run_id.get(),
        "stage": _stage_name.get(),
        "asset_id": _asset_id.get(),
        "connection_id": _connection_id.get(),
    }


def clear_log_context() -> None:
    _run_id.set("")
    _stage_name.set("")
    _asset_id.set("")
    _connection_id.set("")
