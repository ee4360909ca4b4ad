from __future__ import annotations

from typing import Any

import numpy as np

_options: dict[str, int] = {"edge_items": 4}


def configure(*, edge_items: int = 4) -> None:
    _options["edge_items"] = int(edge_items)


def _visible(length: int) -> list[int | None]:
    """Indices to print along one axis; None stands for the elided middle."""

    edge = _options["edge_items"]
    if length <= 2 * edge:
        return list(range(length))
    return [*range(edge), None, *range(length - edge, length)]


def _entry(value: Any) -> str:
    item = value.item() if isinstance(value, np.generic) else value
    if isinstance(item, bool):
        return str(int(item))
    if isinstance(item, float):
        return f"{item:g}"
    return str(item)


def array_lines(array: Any) -> list[str]:
    """A 2-D array as bracketed rows, eliding the middle of large axes."""

    arr = np.asarray(array)
    if arr.ndim != 2:
        return [str(arr)]
    if arr.size == 0:
        return ["[]"]

    cols = _visible(arr.shape[1])
    lines = ["["]
    for i in _visible(arr.shape[0]):
        if i is None:
            lines.append(" ...")
            continue
        cells = ["..." if j is None else _entry(arr[i, j]) for j in cols]
        lines.append(f" [{' '.join(cells)}]")
    lines.append("]")
    return lines


def describe(matrix: Any) -> str:
    value = matrix.get_value()
    if hasattr(matrix, "is_cached"):
        cached = matrix.is_cached()
    else:
        cached = matrix.get_cached_inverse() is not None
    header = (
        f"{type(matrix).__name__}(shape={tuple(value.shape)}, "
        f"version={matrix.version}, cached={cached})"
    )
    return "\n".join([header, *array_lines(value)])


class CachingMatrixDisplay:
    def __str__(self) -> str:
        return describe(self)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} shape={self.shape} version={self.version}>"
