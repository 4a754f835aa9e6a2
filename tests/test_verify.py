# tests/test_verify.py
from dataclasses import replace

from starchain.chain.blockchain import Blockchain
from starchain.core.encoding import encode_body
from starchain.crypto.hashing import compute_content_hash
from starchain.verify.validator import (
    BROKEN_LINK,
    HASH_MISMATCH,
    ChainValidator,
    ValidationResult,
)


def create_test_chain(n_stars=4):
    chain = Blockchain(verifier=lambda m, i, s: True, clock=lambda: 1_770_000_000)
    for i in range(n_stars):
        owner = "alice" if i % 2 == 0 else "bob"
        chain.submit_star(owner, chain.issue_challenge(owner), "sig", {"story": f"Star #{i}"})
    return chain


def test_valid_chain():
    for n in (0, 1, 6):
        result = create_test_chain(n).validate_chain()
        assert isinstance(result, ValidationResult)
        assert result.is_valid is True
        assert len(result) == 0
        assert list(result) == []


def test_genesis_only_chain_is_valid():
    chain = Blockchain()
    assert chain.validate_chain().is_valid


def test_tamper_body():
    chain = create_test_chain(5).get_chain()
    tampered = chain.copy()
    tampered[2] = replace(tampered[2], body=encode_body({"data": {"star": {"story": "HACKED"}, "owner": "mallory"}}))

    result = ChainValidator().validate(tampered)
    assert result.is_valid is False
    mismatches = result.of_kind(HASH_MISMATCH)
    assert [v.index for v in mismatches] == [2]
    assert mismatches[0].block_hash == chain[2].hash


def test_tamper_every_field_detected():
    chain = create_test_chain(3).get_chain()
    for changes in ({"time": 1}, {"height": 7}, {"previous_block_hash": "00" * 32}):
        tampered = chain.copy()
        tampered[1] = replace(tampered[1], **changes)
        result = ChainValidator().validate(tampered)
        assert 1 in [v.index for v in result.of_kind(HASH_MISMATCH)]


def test_tamper_in_store_detected_by_validate_chain():
    chain = create_test_chain(3)
    blocks = chain.store._blocks
    blocks[2] = replace(blocks[2], time=blocks[2].time + 60)

    result = chain.validate_chain()
    assert not result
    assert [v.index for v in result.of_kind(HASH_MISMATCH)] == [2]


def test_broken_hash_link():
    chain = create_test_chain(5).get_chain()
    tampered = chain.copy()
    # rehash so only the link is wrong, not the block's own hash
    relinked = replace(tampered[3], previous_block_hash="deadbeef" * 8)
    tampered[3] = replace(relinked, hash=compute_content_hash(relinked))

    result = ChainValidator().validate(tampered)
    assert result.is_valid is False
    assert [v.index for v in result.of_kind(BROKEN_LINK)] == [3]
    assert result.of_kind(HASH_MISMATCH) == []


def test_rewritten_block_breaks_successor_link():
    chain = create_test_chain(4).get_chain()
    tampered = chain.copy()
    forged = replace(tampered[2], time=tampered[2].time + 1)
    tampered[2] = replace(forged, hash=compute_content_hash(forged))

    result = ChainValidator().validate(tampered)
    assert [v.index for v in result.of_kind(BROKEN_LINK)] == [3]


def test_removed_block_reported():
    chain = create_test_chain(4).get_chain()
    tampered = chain[:2] + chain[3:]

    result = ChainValidator().validate(tampered)
    assert not result.is_valid
    assert all(v.kind == BROKEN_LINK for v in result)
    assert 2 in [v.index for v in result]


def test_all_violations_reported_in_one_pass():
    chain = create_test_chain(5).get_chain()
    tampered = chain.copy()
    tampered[1] = replace(tampered[1], time=0)
    tampered[4] = replace(tampered[4], time=0)

    result = ChainValidator().validate(tampered)
    assert [v.index for v in result.of_kind(HASH_MISMATCH)] == [1, 4]
    assert result.first_violation.index == 1
    assert "FAILED (2 violations)" in str(result)


def test_genesis_with_previous_hash():
    chain = create_test_chain(1).get_chain()
    tampered = chain.copy()
    tampered[0] = replace(tampered[0], previous_block_hash="00" * 32)

    result = ChainValidator().validate(tampered)
    assert any(v.kind == BROKEN_LINK and v.index == 0 for v in result)


def test_valid_str():
    assert str(ValidationResult()) == "Chain is valid ✓"


def test_unhashable_field_reported_not_raised():
    chain = create_test_chain(2).get_chain()
    tampered = chain.copy()
    tampered[0] = replace(tampered[0], time=float("nan"))

    result = ChainValidator().validate(tampered)
    assert not result.is_valid
    assert [v.index for v in result.of_kind(HASH_MISMATCH)] == [0]
    assert "cannot be hashed" in result.first_violation.message
