# maker_indexer/fetch/log_fetcher.py

from typing import List

from web3 import Web3

from ..core.logging import LoggingMixin
from ..types import RawLog, TopicFilter, RpcConfig


def build_web3(config: RpcConfig) -> Web3:
    provider = Web3.HTTPProvider(config.endpoint_url, request_kwargs={'timeout': config.timeout})
    return Web3(provider)


class Web3LogFetcher(LoggingMixin):
    """Fetches event logs for a single block through ``eth_getLogs``"""

    def __init__(self, w3: Web3):
        self.w3 = w3

    def fetch_logs(self, contract_address: str, topics: TopicFilter, block_number: int) -> List[RawLog]:
        filter_params = {
            'fromBlock': block_number,
            'toBlock': block_number,
            'address': Web3.to_checksum_address(contract_address),
            'topics': [
                [Web3.to_hex(topic) for topic in group] if group is not None else None
                for group in topics
            ],
        }

        logs = self.w3.eth.get_logs(filter_params)

        self.log_debug("Fetched logs",
                      contract_address=contract_address,
                      block_number=block_number,
                      log_count=len(logs))
        return list(logs)
