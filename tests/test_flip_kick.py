# tests/test_flip_kick.py

import json
from datetime import datetime, timezone

import pytest
from msgspec.structs import replace
from web3 import Web3

from maker_indexer.decode import AbiLogConverter, LogDecodeError
from maker_indexer.events import FLIP_KICK, FLIP_KICK_SIGNATURE, event_registry
from maker_indexer.events.flip_kick import to_model

from .conftest import CONTRACT_ADDRESS, GAL_ADDRESS, URN, make_flip_kick_log


def test_signature_is_the_keccak_of_the_event():
    expected = Web3.to_hex(Web3.keccak(text="Kick(uint256,uint256,uint256,address,uint48,bytes32,uint256)"))

    assert FLIP_KICK_SIGNATURE == expected
    assert FLIP_KICK_SIGNATURE.startswith("0x") and len(FLIP_KICK_SIGNATURE) == 66


def test_flip_kick_is_registered():
    assert event_registry.get("flip_kick") is FLIP_KICK
    assert "flip_kick" in event_registry.keys()


def test_unknown_event_lists_registered_keys():
    with pytest.raises(KeyError, match="flip_kick"):
        event_registry.get("flop_kick")


class TestAbiLogConverter:

    @pytest.fixture
    def converter(self):
        return AbiLogConverter(FLIP_KICK)

    def test_decodes_logs_into_entities(self, converter, contract_abi, flip_kick_log):
        entities = converter.to_entities(CONTRACT_ADDRESS, contract_abi, [flip_kick_log])

        assert len(entities) == 1
        entity = entities[0]
        assert entity.bid_id == 1
        assert entity.lot == 10 ** 18
        assert entity.bid == 0
        assert entity.gal == GAL_ADDRESS
        assert entity.end == 1538137200
        assert entity.urn == bytes(URN)
        assert entity.tab == 5 * 10 ** 45
        assert entity.transaction_index == 3
        assert entity.log_index == 0
        assert entity.raw is flip_kick_log

    def test_keeps_log_order(self, converter, contract_abi):
        logs = [make_flip_kick_log(log_index=i, bid_id=100 - i) for i in range(3)]

        entities = converter.to_entities(CONTRACT_ADDRESS, contract_abi, logs)

        assert [entity.bid_id for entity in entities] == [100, 99, 98]

    def test_accepts_wrapped_abi(self, converter, contract_abi, flip_kick_log):
        wrapped = json.dumps({"abi": json.loads(contract_abi)})

        assert len(converter.to_entities(CONTRACT_ADDRESS, wrapped, [flip_kick_log])) == 1

    def test_address_comparison_ignores_case(self, converter, contract_abi, flip_kick_log):
        assert len(converter.to_entities(CONTRACT_ADDRESS.lower(), contract_abi, [flip_kick_log])) == 1

    def test_rejects_invalid_abi(self, converter, flip_kick_log):
        with pytest.raises(LogDecodeError):
            converter.to_entities(CONTRACT_ADDRESS, "test abi", [flip_kick_log])

    def test_rejects_entities_of_the_wrong_type(self, contract_abi, flip_kick_log):
        descriptor = replace(FLIP_KICK, entity_from_event=lambda event_data, raw_log: dict(event_data["args"]))
        converter = AbiLogConverter(descriptor)

        with pytest.raises(LogDecodeError, match="expected FlipKickEntity, got dict"):
            converter.to_entities(CONTRACT_ADDRESS, contract_abi, [flip_kick_log])

    def test_rejects_abi_without_the_event(self, converter, flip_kick_log):
        with pytest.raises(LogDecodeError, match="Kick"):
            converter.to_entities(CONTRACT_ADDRESS, "[]", [flip_kick_log])

    def test_rejects_logs_from_other_contracts(self, converter, contract_abi):
        other = Web3.to_checksum_address("0x" + "99" * 20)

        with pytest.raises(LogDecodeError):
            converter.to_entities(CONTRACT_ADDRESS, contract_abi, [make_flip_kick_log(address=other)])

    def test_rejects_logs_of_another_event(self, converter, contract_abi):
        log = make_flip_kick_log()
        log = log.__class__({**log, 'topics': [bytes(32)] + list(log['topics'][1:])})

        with pytest.raises(LogDecodeError):
            converter.to_entities(CONTRACT_ADDRESS, contract_abi, [log])

    def test_one_bad_log_fails_the_batch(self, converter, contract_abi):
        good = make_flip_kick_log(log_index=0)
        bad = make_flip_kick_log(log_index=1)
        bad = bad.__class__({**bad, 'data': bad['data'][:32]})

        with pytest.raises(LogDecodeError):
            converter.to_entities(CONTRACT_ADDRESS, contract_abi, [good, bad])

    def test_empty_batch(self, converter, contract_abi):
        assert converter.to_entities(CONTRACT_ADDRESS, contract_abi, []) == []


def test_to_model_projects_entity_for_storage(flip_kick_entity, flip_kick_log):
    model = to_model(flip_kick_entity)

    assert model.bid_id == "1"
    assert model.lot == str(10 ** 18)
    assert model.bid == "0"
    assert model.gal == GAL_ADDRESS.lower()
    assert model.end == datetime(2018, 9, 28, 12, 20, tzinfo=timezone.utc)
    assert model.urn == "0x" + "56" * 32
    assert model.tab == str(5 * 10 ** 45)
    assert model.tx_idx == 3
    assert model.log_idx == 0
    assert json.loads(model.raw_log)["logIndex"] == flip_kick_log["logIndex"]
