from __future__ import annotations
from typing import Type
from ..inputs.base import BaseInput
from ..outputs.base import BaseOutput

INPUT_KINDS = ("fixedwidth", "jsonl")
OUTPUT_KINDS = ("fixedwidth", "jsonl", "parquet")


def get_input_cls(kind: str) -> Type[BaseInput]:
    """
    Return the input class for the given kind.
    Supported kinds: "fixedwidth" (FixedWidthInput), "jsonl" (JSONLInput)
    """
    if kind == "fixedwidth":
        from ..inputs.fixed_width_input import FixedWidthInput
        return FixedWidthInput
    if kind == "jsonl":
        from ..inputs.jsonl_input import JSONLInput
        return JSONLInput
    raise KeyError(f"Unknown input kind: {kind}")


def get_output_cls(kind: str) -> Type[BaseOutput]:
    if kind == "fixedwidth":
        from ..outputs.fixed_width_output import FixedWidthOutput
        return FixedWidthOutput
    if kind == "jsonl":
        from ..outputs.jsonl_output import JSONLOutput
        return JSONLOutput
    if kind == "parquet":
        from ..outputs.parquet_output import ParquetOutput
        return ParquetOutput
    raise KeyError(f"Unknown output kind: {kind}")
