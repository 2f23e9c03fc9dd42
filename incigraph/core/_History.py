import inspect
import json
import time
from datetime import UTC, datetime
from functools import wraps

import numpy as np
import polars as pl

from ._helpers import Edge, Vertex


class History:
    # History and Timeline

    # Mutating methods to wrap. Add here if you add new mutators.
    _HISTORY_OPS = ("add_vertex", "add_edge", "build_from_adjacency_matrix")

    def _init_history(self):
        self._history_enabled = True
        self._history = []  # list[dict]
        self._history_seq = 0
        self._history_clock0 = time.perf_counter_ns()
        self._install_history_hooks()

    def _utcnow_iso(self) -> str:
        return datetime.now(UTC).isoformat(timespec="microseconds").replace("+00:00", "Z")

    def _jsonify(self, x):
        # Make args/return JSON-safe & compact.

        if x is None or isinstance(x, (bool, int, float, str)):
            return x
        if isinstance(x, Vertex):
            return x.name
        if isinstance(x, Edge):
            return list(x.as_tuple())
        if isinstance(x, (set, frozenset)):
            return sorted(self._jsonify(v) for v in x)
        if isinstance(x, (list, tuple)):
            return [self._jsonify(v) for v in x]
        if isinstance(x, dict):
            return {str(k): self._jsonify(v) for k, v in x.items()}
        # NumPy scalars
        if isinstance(x, (np.generic,)):
            return x.item()
        if isinstance(x, np.ndarray):
            return x.tolist()
        if x is self:
            return "<<graph>>"
        # SciPy or other heavy objects -> just a tag
        t = type(x).__name__
        return f"<<{t}>>"

    def _log_event(self, op: str, **fields):
        if not self._history_enabled:
            return
        self._history_seq += 1
        evt = {
            "seq": self._history_seq,
            "version": self._version,
            "ts_utc": self._utcnow_iso(),  # ISO-8601 with Z
            "mono_ns": time.perf_counter_ns() - self._history_clock0,
            "op": op,
        }
        # sanitize
        for k, v in fields.items():
            evt[k] = self._jsonify(v)
        self._history.append(evt)

    def _log_mutation(self, name=None):
        def deco(fn):
            op = name or fn.__name__
            sig = inspect.signature(fn)

            @wraps(fn)
            def wrapper(*args, **kwargs):
                bound = sig.bind(*args, **kwargs)
                bound.apply_defaults()
                result = fn(*args, **kwargs)
                payload = {}
                for k, v in bound.arguments.items():
                    payload[k] = v
                payload["result"] = result
                self._log_event(op, **payload)
                return result

            return wrapper

        return deco

    def _install_history_hooks(self):
        for name in self._HISTORY_OPS:
            if hasattr(self, name):
                fn = getattr(self, name)
                # Avoid double-wrapping
                if getattr(fn, "__wrapped__", None) is None:
                    setattr(self, name, self._log_mutation(name)(fn))

    def history(self, as_df: bool = False):
        """Return the append-only mutation history.

        Parameters
        --
        as_df : bool, default False
            If True, return a Polars DF [DataFrame]; otherwise return a list of dicts.

        Returns
        ---
        list[dict] or polars.DataFrame
            Each event includes: 'seq', 'version' (structural version after the
            call), 'ts_utc' (ISO-8601 UTC), 'mono_ns' (monotonic nanoseconds since
            the graph was created), 'op', the call arguments and 'result'.

        Notes
        -
        Bulk construction logs one event per vertex and edge it adds, followed by
        its own event. The log is in-memory until exported.

        """
        if as_df:
            return self._history_frame()
        return list(self._history)

    def _history_frame(self):
        # Argument columns differ per op; encode them as JSON text so every
        # column has a single dtype.
        fixed = {"seq", "version", "ts_utc", "mono_ns", "op"}
        rows = [
            {k: (v if k in fixed else json.dumps(v, ensure_ascii=False)) for k, v in r.items()}
            for r in self._history
        ]
        if not rows:
            return pl.DataFrame(
                schema={
                    "seq": pl.Int64,
                    "version": pl.Int64,
                    "ts_utc": pl.Utf8,
                    "mono_ns": pl.Int64,
                    "op": pl.Utf8,
                }
            )
        return pl.DataFrame(rows, infer_schema_length=None)

    def export_history(self, path: str):
        """Write the mutation history to disk.

        Parameters
        --
        path : str
            Output path. Supported extensions: '.parquet', '.ndjson' (a.k.a. '.jsonl'),
            '.json', '.csv'. Unknown extensions default to Parquet by appending '.parquet'.

        Returns
        ---
        int
            Number of events written. Returns 0 if the history is empty.

        """
        if not self._history:
            return 0
        path = str(path)
        p = path.lower()
        if p.endswith(".ndjson") or p.endswith(".jsonl"):
            with open(path, "w", encoding="utf-8") as f:
                for r in self._history:
                    f.write(json.dumps(r, ensure_ascii=False) + "\n")
            return len(self._history)
        if p.endswith(".json"):
            with open(path, "w", encoding="utf-8") as f:
                json.dump(self._history, f, ensure_ascii=False)
            return len(self._history)

        df = self._history_frame()
        if p.endswith(".csv"):
            df.write_csv(path)
            return len(df)
        if p.endswith(".parquet"):
            df.write_parquet(path)
            return len(df)
        # Default to Parquet if unknown
        df.write_parquet(path + ".parquet")
        return len(df)

    def enable_history(self, flag: bool = True):
        """Enable or disable in-memory mutation logging."""
        self._history_enabled = bool(flag)

    def clear_history(self):
        """Clear the in-memory mutation log (exported files are left alone)."""
        self._history.clear()

    def mark(self, label: str):
        """Insert a manual marker into the mutation history.

        Parameters
        --
        label : str
            Human-readable tag for the marker event.

        """
        self._log_event("mark", label=label)
