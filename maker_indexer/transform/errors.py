# maker_indexer/transform/errors.py

from typing import List, Optional


class TransformerError(Exception):
    pass


class TransformerNotConfigured(TransformerError):
    pass


class FatalRangeQueryError(TransformerError):
    def __init__(self, event_name: str, starting_block_number: int, ending_block_number: int,
                 cause: Exception):
        self.event_name = event_name
        self.starting_block_number = starting_block_number
        self.ending_block_number = ending_block_number
        self.cause = cause
        super().__init__(
            f"error fetching missing {event_name} headers for blocks "
            f"{starting_block_number}-{ending_block_number}: {cause}"
        )


class StageError(TransformerError):
    stage = "transform"

    def __init__(self, cause: Exception, header_id: Optional[int] = None,
                 block_number: Optional[int] = None):
        self.cause = cause
        self.header_id = header_id
        self.block_number = block_number
        super().__init__(self._describe())

    def _describe(self) -> str:
        location = []
        if self.block_number is not None:
            location.append(f"block {self.block_number}")
        if self.header_id is not None:
            location.append(f"header {self.header_id}")
        where = f" ({', '.join(location)})" if location else ""
        return f"{self.stage} error{where}: {self.cause}"


class FetchError(StageError):
    stage = "fetch"


class ConvertError(StageError):
    stage = "convert"


class PersistError(StageError):
    stage = "persist"


class TransformationFailed(TransformerError):
    """Raised at the end of a run when any header failed in any stage"""

    def __init__(self, event_name: str, errors: List[StageError]):
        self.event_name = event_name
        self.errors = list(errors)
        super().__init__(f"{len(self.errors)} error(s) transforming {event_name} event logs")

    def details(self) -> str:
        return "\n".join(str(error) for error in self.errors)
