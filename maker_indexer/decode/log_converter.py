# maker_indexer/decode/log_converter.py

from typing import Any, Dict, List

from web3 import Web3
from web3._utils.events import get_event_data

from ..contracts.abi_loader import AbiLoadError, parse_abi
from ..core.logging import LoggingMixin
from ..events.base import EventDescriptor
from ..types import RawLog


class LogDecodeError(ValueError):
    pass


class AbiLogConverter(LoggingMixin):
    """
    Decodes raw logs of one event type into entities using the contract ABI.

    Every log must match the event; the first one that does not fails the
    whole batch so no partial entity list is ever returned.
    """

    def __init__(self, descriptor: EventDescriptor):
        self.descriptor = descriptor
        self.w3 = Web3()

    def _event_abi(self, contract_abi: str) -> Dict[str, Any]:
        try:
            abi = parse_abi(contract_abi)
        except AbiLoadError as e:
            raise LogDecodeError(str(e)) from e

        for entry in abi:
            if entry.get("type") == "event" and entry.get("name") == self.descriptor.abi_event_name:
                return entry

        raise LogDecodeError(
            f"Event '{self.descriptor.abi_event_name}' not found in contract ABI"
        )

    def to_entities(self, contract_address: str, contract_abi: str, logs: List[RawLog]) -> List[Any]:
        event_abi = self._event_abi(contract_abi)
        expected_address = contract_address.lower()

        entities = []
        for log in logs:
            log_address = log.get("address")
            if log_address and log_address.lower() != expected_address:
                raise LogDecodeError(
                    f"Log at index {log.get('logIndex')} is from {log_address}, expected {contract_address}"
                )

            try:
                event_data = get_event_data(self.w3.codec, event_abi, log)
                entity = self.descriptor.entity_from_event(event_data, log)
                if not isinstance(entity, self.descriptor.entity_type):
                    raise TypeError(
                        f"expected {self.descriptor.entity_type.__name__}, got {type(entity).__name__}"
                    )
            except Exception as e:
                self.log_error("Failed to decode log",
                              event_name=self.descriptor.name,
                              block_number=log.get("blockNumber"),
                              log_index=log.get("logIndex"),
                              error=str(e))
                raise LogDecodeError(
                    f"Failed to decode {self.descriptor.name} log at index {log.get('logIndex')}: {e}"
                ) from e

            entities.append(entity)

        self.log_debug("Converted logs to entities",
                      event_name=self.descriptor.name,
                      log_count=len(logs))
        return entities
