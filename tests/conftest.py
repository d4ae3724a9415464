# tests/conftest.py
"""
pytest configuration and fixtures for the event transformer tests
"""

import json
import random

import pytest
from eth_abi import encode
from hexbytes import HexBytes
from web3 import Web3
from web3.datastructures import AttributeDict

from maker_indexer.core.logging import IndexerLogger
from maker_indexer.database.connection import DatabaseManager
from maker_indexer.events import FLIP_KICK, FLIP_KICK_EVENT_ABI, FLIP_KICK_SIGNATURE, FlipKickEntity
from maker_indexer.types import DatabaseConfig, Header, TransformerConfig


CONTRACT_ADDRESS = Web3.to_checksum_address("0x" + "12" * 20)
GAL_ADDRESS = Web3.to_checksum_address("0x" + "34" * 20)
URN = HexBytes("0x" + "56" * 32)


class FakeError(Exception):
    pass


# === Test doubles ===

class MockHeaderSource:
    def __init__(self, headers=None):
        self.headers_to_return = list(headers or [])
        self.missing_headers_error = None
        self.mark_checked_error = None
        self.starting_block_number = None
        self.ending_block_number = None
        self.missing_headers_calls = 0
        self.checked_header_ids = []

    def missing_headers(self, starting_block_number, ending_block_number):
        self.missing_headers_calls += 1
        self.starting_block_number = starting_block_number
        self.ending_block_number = ending_block_number
        if self.missing_headers_error:
            raise self.missing_headers_error
        return list(self.headers_to_return)

    def mark_header_checked(self, header_id):
        if self.mark_checked_error:
            raise self.mark_checked_error
        self.checked_header_ids.append(header_id)


class MockLogFetcher:
    def __init__(self, logs=None):
        self.logs_to_return = list(logs or [])
        self.logs_by_block = {}
        self.failing_blocks = set()
        self.fetcher_error = None
        self.fetched_contract_address = None
        self.fetched_topics = None
        self.fetched_blocks = []
        self.calls = []

    def fetch_logs(self, contract_address, topics, block_number):
        self.calls.append((contract_address, topics, block_number))
        self.fetched_contract_address = contract_address
        self.fetched_topics = topics
        self.fetched_blocks.append(block_number)
        if self.fetcher_error or block_number in self.failing_blocks:
            raise self.fetcher_error or FakeError(f"fetch failed for block {block_number}")
        if block_number in self.logs_by_block:
            return list(self.logs_by_block[block_number])
        return list(self.logs_to_return)


class MockConverter:
    """Returns one entity per log, using ``entity_for`` when set"""

    def __init__(self, entity=None):
        self.entity = entity
        self.entity_for = None
        self.converter_error = None
        self.converter_contract = None
        self.converter_abi = None
        self.logs_to_convert = None
        self.entities_converted = None
        self.call_count = 0

    def to_entities(self, contract_address, contract_abi, logs):
        self.call_count += 1
        self.converter_contract = contract_address
        self.converter_abi = contract_abi
        self.logs_to_convert = list(logs)
        if self.converter_error:
            raise self.converter_error
        if self.entity_for is not None:
            entities = [self.entity_for(log) for log in logs]
        else:
            entities = [self.entity for _ in logs]
        self.entities_converted = entities
        return entities


class MockRepository:
    def __init__(self):
        self.create_record_error = None
        self.failing_header_ids = set()
        self.header_ids = []
        self.models_created = []

    def create_record(self, header_id, model):
        if self.create_record_error or header_id in self.failing_header_ids:
            raise self.create_record_error or FakeError(f"persist failed for header {header_id}")
        self.header_ids.append(header_id)
        self.models_created.append(model)


# === Sample data ===

def make_flip_kick_log(block_number=1000, log_index=0, bid_id=1, lot=10 ** 18, bid=0,
                       end=1538137200, tab=5 * 10 ** 45, address=CONTRACT_ADDRESS):
    data = encode(['uint256', 'uint256', 'uint48', 'uint256'], [lot, bid, end, tab])
    return AttributeDict({
        'address': address,
        'blockHash': HexBytes("0x" + "ab" * 32),
        'blockNumber': block_number,
        'data': HexBytes(data),
        'logIndex': log_index,
        'removed': False,
        'topics': [
            HexBytes(FLIP_KICK_SIGNATURE),
            HexBytes(encode(['uint256'], [bid_id])),
            HexBytes(encode(['address'], [GAL_ADDRESS])),
            URN,
        ],
        'transactionHash': HexBytes("0x" + "cd" * 32),
        'transactionIndex': 3,
    })


def make_flip_kick_entity(bid_id=1, log_index=0, raw=None):
    return FlipKickEntity(
        bid_id=bid_id,
        lot=10 ** 18,
        bid=0,
        gal=GAL_ADDRESS,
        end=1538137200,
        urn=bytes(URN),
        tab=5 * 10 ** 45,
        transaction_index=3,
        log_index=log_index,
        raw=raw,
    )


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    IndexerLogger.reset()


@pytest.fixture
def contract_abi():
    return json.dumps([FLIP_KICK_EVENT_ABI])


@pytest.fixture
def flip_kick_log():
    return make_flip_kick_log()


@pytest.fixture
def flip_kick_entity(flip_kick_log):
    return make_flip_kick_entity(raw=flip_kick_log)


@pytest.fixture
def transformer_config(contract_abi):
    starting_block_number = random.randint(0, 10 ** 9)
    return TransformerConfig(
        contract_address=CONTRACT_ADDRESS,
        contract_abi=contract_abi,
        topics=[FLIP_KICK_SIGNATURE],
        starting_block_number=starting_block_number,
        ending_block_number=starting_block_number + 5,
    )


@pytest.fixture
def header():
    return Header(
        id=random.randint(1, 10 ** 9),
        block_number=random.randint(1, 10 ** 9),
        hash="0x",
        raw=None,
    )


@pytest.fixture
def header_source(header):
    return MockHeaderSource([header])


@pytest.fixture
def fetcher(flip_kick_log):
    return MockLogFetcher([flip_kick_log])


@pytest.fixture
def converter(flip_kick_entity):
    return MockConverter(flip_kick_entity)


@pytest.fixture
def repository():
    return MockRepository()


@pytest.fixture
def flip_kick_descriptor():
    return FLIP_KICK


@pytest.fixture
def db_manager():
    manager = DatabaseManager(DatabaseConfig(url="sqlite://"))
    manager.initialize()
    manager.create_tables()
    yield manager
    manager.shutdown()
