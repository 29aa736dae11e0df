from __future__ import annotations

from pathlib import Path
from typing import Protocol

from .errors import SinkWriteError
from .models import LogRecord
from .utils import compact_json_dumps

DELIMITER = ",\n"


class RecordSink(Protocol):
    def write(self, record: LogRecord) -> None: ...

    def write_raw(self, fragment: str) -> None: ...


class CommaDelimitedFileSink:
    """Output file of ``{...},\\n`` entries, one per record, in arrival order.

    The result is not a JSON document: wrap it in ``[`` ``]`` and drop the
    last comma to load it as an array.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self.count = 0
        try:
            if self._path.parent != Path("."):
                self._path.parent.mkdir(parents=True, exist_ok=True)
            self._f = self._path.open("w", encoding="utf-8")
        except OSError as e:
            raise SinkWriteError(f"cannot open {self._path}: {e}") from e

    @property
    def path(self) -> Path:
        return self._path

    def write(self, record: LogRecord) -> None:
        self.write_raw(compact_json_dumps(record.to_dict()))

    def write_raw(self, fragment: str) -> None:
        try:
            self._f.write(fragment + DELIMITER)
            self._f.flush()
        except (OSError, ValueError) as e:
            raise SinkWriteError(f"write to {self._path} failed: {e}") from e
        self.count += 1

    def close(self) -> None:
        self._f.close()

    def __enter__(self) -> "CommaDelimitedFileSink":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
