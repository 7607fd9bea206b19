import hashlib

import pytest

from cosignkit.tuf_cache import (
    RepositoryHelper,
    TargetRepository,
    TufTargetNotFoundError,
    fetch_target,
    fetch_target_or_reuse_local_cache,
    is_local_file_outdated,
)

FILES = {
    "fulcio.crt.pem": b"-----BEGIN CERTIFICATE-----\nfirst made-up cert\n-----END CERTIFICATE-----\n",
    "fulcio_v1.crt.pem": b"-----BEGIN CERTIFICATE-----\nsecond made-up cert\n-----END CERTIFICATE-----\n",
    "rekor.pub": b"-----BEGIN PUBLIC KEY-----\nmade-up rekor key\n-----END PUBLIC KEY-----\n",
    "ctfe.pub": b"-----BEGIN PUBLIC KEY-----\nmade-up ctfe key\n-----END PUBLIC KEY-----\n",
}


def make_repo(files=FILES, calls=None):
    hashes = {name: hashlib.sha256(data).hexdigest() for name, data in files.items()}

    def fetcher(name):
        if calls is not None:
            calls.append(name)
        return files.get(name)

    return TargetRepository(hashes, fetcher)


def expected_certs():
    return sorted([FILES["fulcio.crt.pem"], FILES["fulcio_v1.crt.pem"]])


def test_fulcio_target_names_filtered():
    helper = RepositoryHelper(make_repo())
    assert sorted(helper.fulcio_cert_target_names()) == [
        "fulcio.crt.pem",
        "fulcio_v1.crt.pem",
    ]


def test_get_files_without_using_local_cache():
    helper = RepositoryHelper(make_repo())
    assert sorted(helper.fulcio_certs()) == expected_certs()
    assert helper.rekor_pub_key() == FILES["rekor.pub"]


def test_download_files_to_local_cache(tmp_path):
    helper = RepositoryHelper(make_repo(), checkout_dir=tmp_path)
    assert sorted(helper.fulcio_certs()) == expected_certs()
    key = helper.rekor_pub_key()
    assert (tmp_path / "rekor.pub").read_bytes() == key
    assert (tmp_path / "fulcio_v1.crt.pem").read_bytes() == FILES["fulcio_v1.crt.pem"]


def test_update_local_cache(tmp_path):
    for name in ("fulcio.crt.pem", "fulcio_v1.crt.pem"):
        (tmp_path / name).write_bytes(b"fake fulcio")
    (tmp_path / "rekor.pub").write_bytes(b"fake rekor")

    helper = RepositoryHelper(make_repo(), checkout_dir=tmp_path)
    assert sorted(helper.fulcio_certs()) == expected_certs()
    key = helper.rekor_pub_key()
    assert key == FILES["rekor.pub"]
    assert (tmp_path / "rekor.pub").read_bytes() == key
    assert (tmp_path / "fulcio.crt.pem").read_bytes() == FILES["fulcio.crt.pem"]


def test_current_local_cache_is_reused(tmp_path):
    (tmp_path / "rekor.pub").write_bytes(FILES["rekor.pub"])
    calls = []
    helper = RepositoryHelper(make_repo(calls=calls), checkout_dir=tmp_path)
    assert helper.rekor_pub_key() == FILES["rekor.pub"]
    assert calls == []


def test_is_local_file_outdated(tmp_path):
    repo = make_repo()
    path = tmp_path / "rekor.pub"
    assert is_local_file_outdated(repo, "rekor.pub", path) == (True, None)
    path.write_bytes(b"stale")
    assert is_local_file_outdated(repo, "rekor.pub", path) == (True, None)
    path.write_bytes(FILES["rekor.pub"])
    assert is_local_file_outdated(repo, "rekor.pub", path) == (
        False,
        FILES["rekor.pub"].decode(),
    )


def test_is_local_file_outdated_unknown_target(tmp_path):
    with pytest.raises(TufTargetNotFoundError):
        is_local_file_outdated(make_repo(), "missing.pub", tmp_path / "missing.pub")


def test_fetch_target_missing():
    with pytest.raises(TufTargetNotFoundError) as info:
        fetch_target(make_repo(), "nothing.here")
    assert info.value.target_name == "nothing.here"


def test_fetch_target_when_fetcher_finds_nothing():
    repo = TargetRepository({"rekor.pub": hashlib.sha256(b"x").hexdigest()}, lambda _n: None)
    with pytest.raises(TufTargetNotFoundError):
        fetch_target(repo, "rekor.pub")


def test_read_target_rejects_tampered_content():
    repo = TargetRepository(
        {"rekor.pub": hashlib.sha256(b"genuine").hexdigest()}, lambda _n: b"tampered"
    )
    with pytest.raises(ValueError):
        repo.read_target("rekor.pub")


def test_fetch_without_local_file_returns_download():
    data = fetch_target_or_reuse_local_cache(make_repo(), "ctfe.pub", None)
    assert data == FILES["ctfe.pub"]


def test_target_sha256_value():
    repo = make_repo()
    assert repo.target_sha256("rekor.pub") == hashlib.sha256(FILES["rekor.pub"]).digest()
    with pytest.raises(TufTargetNotFoundError):
        repo.target_sha256("absent")