import pytest

from cosignkit.rekor_entries import (
    AlgorithmKind,
    Data,
    EntryKind,
    Format,
    Hash,
    Hashedrekord,
    ProposedEntry,
    PublicKey,
    SearchIndex,
    SearchIndexPublicKey,
    SearchLogQuery,
    Signature,
    Spec,
)


def _spec_dict():
    return {
        "signature": {
            "format": "x509",
            "content": "c2lnbmF0dXJl",
            "publicKey": {"content": "placeholder"},
        },
        "data": {
            "hash": {"algorithm": "sha256", "value": "abcdef"},
            "url": "https://artifacts.example.com/file.tar",
        },
    }


def test_spec_round_trip():
    spec = Spec.from_dict(_spec_dict())
    assert spec.to_dict() == _spec_dict()
    assert spec.data.hash.algorithm is AlgorithmKind.SHA256
    assert spec.signature.public_key == PublicKey("placeholder")


def test_spec_built_by_hand_matches_parsed():
    built = Spec(
        Signature("x509", "c2lnbmF0dXJl", PublicKey("placeholder")),
        Data(Hash(AlgorithmKind.SHA256, "abcdef"), "https://artifacts.example.com/file.tar"),
    )
    assert built == Spec.from_dict(_spec_dict())


def test_hash_accepts_algorithm_name():
    assert Hash("sha1", "00").algorithm is AlgorithmKind.SHA1


def test_unknown_algorithm_rejected():
    with pytest.raises(ValueError):
        Hash.from_dict({"algorithm": "md5", "value": "00"})


def test_relative_url_rejected():
    with pytest.raises(ValueError):
        Data(Hash(AlgorithmKind.SHA256, "00"), "not a url")


def test_missing_public_key_rejected():
    raw = _spec_dict()
    del raw["signature"]["publicKey"]
    with pytest.raises(ValueError, match="publicKey"):
        Spec.from_dict(raw)


def test_hashedrekord_round_trip():
    raw = {"kind": "hashedrekord", "apiVersion": "0.0.1", "spec": _spec_dict()}
    entry = Hashedrekord.from_dict(raw)
    assert entry.to_dict() == raw
    assert entry.api_version == "0.0.1"


def test_proposed_hashedrekord_has_typed_spec():
    raw = {"kind": "hashedrekord", "apiVersion": "0.0.1", "spec": _spec_dict()}
    entry = ProposedEntry.from_dict(raw)
    assert entry.kind is EntryKind.HASHEDREKORD
    assert isinstance(entry.spec, Spec)
    assert entry.to_dict() == raw


@pytest.mark.parametrize("kind", [k for k in EntryKind if k is not EntryKind.HASHEDREKORD])
def test_proposed_entry_other_kinds_keep_json_spec(kind):
    raw = {"kind": kind.value, "apiVersion": "0.0.1", "spec": {"anything": [1, 2]}}
    entry = ProposedEntry.from_dict(raw)
    assert entry.kind is kind
    assert entry.spec == {"anything": [1, 2]}
    assert entry.to_dict() == raw


def test_proposed_entry_unknown_kind_rejected():
    with pytest.raises(ValueError):
        ProposedEntry.from_dict({"kind": "nope", "apiVersion": "0.0.1", "spec": {}})


def test_proposed_entry_missing_spec_rejected():
    with pytest.raises(ValueError, match="spec"):
        ProposedEntry.from_dict({"kind": "rpm", "apiVersion": "0.0.1"})


def test_proposed_hashedrekord_bad_spec_rejected():
    with pytest.raises(ValueError):
        ProposedEntry.from_dict({"kind": "hashedrekord", "apiVersion": "0.0.1", "spec": {}})


def test_search_index_public_key_defaults_to_pgp():
    assert SearchIndexPublicKey().format is Format.PGP
    assert SearchIndexPublicKey().to_dict() == {"format": "pgp"}


def test_search_index_public_key_requires_format():
    with pytest.raises(ValueError, match="format"):
        SearchIndexPublicKey.from_dict({"content": "placeholder"})


def test_search_index_public_key_unknown_format():
    with pytest.raises(ValueError):
        SearchIndexPublicKey.from_dict({"format": "gpg2"})


def test_search_index_skips_missing_fields():
    assert SearchIndex().to_dict() == {}
    query = SearchIndex(email="someone@example.com")
    assert query.to_dict() == {"email": "someone@example.com"}


def test_search_index_round_trip():
    raw = {
        "email": "someone@example.com",
        "publicKey": {"format": "ssh", "url": "https://keys.example.com/a.pub"},
        "hash": "sha256:abc",
    }
    query = SearchIndex.from_dict(raw)
    assert query.public_key.format is Format.SSH
    assert query.to_dict() == raw


def test_search_log_query_round_trip():
    raw = {
        "entryUUIDs": ["u1", "u2"],
        "logIndexes": [1, 2, 3],
        "entries": [{"kind": "jar", "apiVersion": "0.0.1", "spec": {}}],
    }
    query = SearchLogQuery.from_dict(raw)
    assert query.log_indexes == [1, 2, 3]
    assert query.entries[0].kind is EntryKind.JAR
    assert query.to_dict() == raw


def test_search_log_query_empty():
    assert SearchLogQuery().to_dict() == {}
    assert SearchLogQuery.from_dict({}) == SearchLogQuery()


def test_search_log_query_index_out_of_range():
    with pytest.raises(ValueError):
        SearchLogQuery.from_dict({"logIndexes": [1 << 31]})