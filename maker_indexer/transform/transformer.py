# maker_indexer/transform/transformer.py

from typing import Any, List, Optional, Tuple

from ..core.logging import LoggingMixin
from ..events.base import EventDescriptor
from ..types import Header, RawLog, TransformerConfig, build_topic_filter
from .errors import (
    ConvertError,
    FatalRangeQueryError,
    FetchError,
    PersistError,
    StageError,
    TransformationFailed,
    TransformerNotConfigured,
)
from .interfaces import HeaderSource, LogConverter, LogFetcher, RecordRepository


class EventTransformer(LoggingMixin):
    """
    Transforms the logs of one event type for headers that lack its records.

    A run fetches logs header by header, decodes every fetched log in a single
    converter call and writes one record per entity linked to its header.
    Per-header failures are collected and raised together as
    ``TransformationFailed`` once the run is over; a failing header query is
    raised immediately.
    """

    def __init__(self,
                 descriptor: EventDescriptor,
                 header_source: HeaderSource,
                 fetcher: LogFetcher,
                 converter: LogConverter,
                 repository: RecordRepository,
                 config: Optional[TransformerConfig] = None):
        self.descriptor = descriptor
        self.header_source = header_source
        self.fetcher = fetcher
        self.converter = converter
        self.repository = repository
        self._config: Optional[TransformerConfig] = None

        if config is not None:
            self.set_config(config)

    @property
    def config(self) -> Optional[TransformerConfig]:
        return self._config

    def set_config(self, config: TransformerConfig) -> None:
        config.validate()
        self._config = config

        self.log_debug("Transformer configured",
                      event_name=self.descriptor.name,
                      contract_address=config.contract_address,
                      starting_block_number=config.starting_block_number,
                      ending_block_number=config.ending_block_number)

    def execute(self) -> None:
        config = self._config
        if config is None:
            raise TransformerNotConfigured(
                f"{self.descriptor.name} transformer has no config, call set_config() first"
            )

        topics = build_topic_filter(config.topics)
        headers = self._missing_headers(config)

        errors: List[StageError] = []
        fetched = self._fetch_logs(config, headers, topics, errors)

        logs = [log for _, header_logs in fetched for log in header_logs]
        entities = self._convert(config, logs, errors)

        persisted = 0
        if entities is not None:
            offset = 0
            for header, header_logs in fetched:
                header_entities = entities[offset:offset + len(header_logs)]
                offset += len(header_logs)
                persisted += self._persist_header(header, header_entities, errors)

        if errors:
            self.log_error("Transformation finished with errors",
                          event_name=self.descriptor.name,
                          header_count=len(headers),
                          error_count=len(errors))
            raise TransformationFailed(self.descriptor.name, errors)

        self.log_info("Transformation finished",
                     event_name=self.descriptor.name,
                     header_count=len(headers),
                     log_count=len(logs),
                     records_written=persisted)

    def _missing_headers(self, config: TransformerConfig) -> List[Header]:
        try:
            headers = self.header_source.missing_headers(
                config.starting_block_number, config.ending_block_number
            )
        except Exception as e:
            self.log_error("Failed to fetch missing headers",
                          event_name=self.descriptor.name,
                          starting_block_number=config.starting_block_number,
                          ending_block_number=config.ending_block_number,
                          error=str(e))
            raise FatalRangeQueryError(
                self.descriptor.name, config.starting_block_number, config.ending_block_number, e
            ) from e

        self.log_debug("Missing headers loaded",
                      event_name=self.descriptor.name,
                      header_count=len(headers))
        return headers

    def _fetch_logs(self, config: TransformerConfig, headers: List[Header], topics,
                    errors: List[StageError]) -> List[Tuple[Header, List[RawLog]]]:
        fetched = []
        for header in headers:
            try:
                logs = self.fetcher.fetch_logs(config.contract_address, topics, header.block_number)
            except Exception as e:
                self._record(errors, FetchError(e, header.id, header.block_number))
                continue
            fetched.append((header, list(logs)))
        return fetched

    def _convert(self, config: TransformerConfig, logs: List[RawLog],
                 errors: List[StageError]) -> Optional[List[Any]]:
        """Entities parallel to ``logs``, or None when the batch could not be converted"""
        if not logs:
            return []

        try:
            entities = list(self.converter.to_entities(config.contract_address, config.contract_abi, logs))
        except Exception as e:
            self._record(errors, ConvertError(e))
            return None

        if len(entities) != len(logs):
            self._record(errors, ConvertError(ValueError(
                f"converter returned {len(entities)} entities for {len(logs)} logs"
            )))
            return None

        return entities

    def _persist_header(self, header: Header, entities: List[Any], errors: List[StageError]) -> int:
        written = 0
        failed = False

        for entity in entities:
            try:
                model = self.descriptor.to_model(entity)
            except Exception as e:
                self._record(errors, ConvertError(e, header.id, header.block_number))
                failed = True
                continue

            try:
                self.repository.create_record(header.id, model)
            except Exception as e:
                self._record(errors, PersistError(e, header.id, header.block_number))
                failed = True
                continue

            written += 1

        if not failed:
            try:
                self.header_source.mark_header_checked(header.id)
            except Exception as e:
                self._record(errors, PersistError(e, header.id, header.block_number))

        return written

    def _record(self, errors: List[StageError], error: StageError) -> None:
        self.log_error(f"Error transforming {self.descriptor.name} event logs",
                      event_name=self.descriptor.name,
                      stage=error.stage,
                      header_id=error.header_id,
                      block_number=error.block_number,
                      error=str(error.cause))
        errors.append(error)
