"""Utility functions for logging."""


def _log_debug(message: str) -> None:
    """Append a timestamped line to the lstackctl debug log.

    Writes to ``state_root()/lstackctl.log``. Best-effort: any IO or config
    error is ignored so logging never changes a command's outcome or exit
    status.
    """
    try:
        import time

        from ..core.config import debug_log_path

        log_path = debug_log_path()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        timestamp = time.strftime("%Y-%m-%d %H:%M:%S", time.localtime())
        with open(log_path, "a", encoding="utf-8") as f:
            f.write(f"[{timestamp}] {message}\n")
    except Exception:
        pass
