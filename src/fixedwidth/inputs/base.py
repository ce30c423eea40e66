from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any, Iterable


class BaseInput(ABC):
    """
    Abstract base class for all input types.

    :param source: Path of the file to read.
    :type source: str
    :param opts: Additional options for the input type (e.g. ``encoding``).
    :type opts: Any
    """
    def __init__(self, source: str, **opts: Any):
        self.source = source
        self.opts = opts

    @abstractmethod
    def iter_rows(self) -> Iterable[Any]:
        """
        Iterate over items in the input source.

        :return: An iterable of items (lines or row dicts, depending on the input).
        """
