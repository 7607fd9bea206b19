# cosignkit

Building blocks for checking signed container images and talking to a
Rekor transparency log:

- **Simple signing payloads** (`cosignkit.simple_signing`): parse the
  container signature JSON format and check it against an expected manifest
  digest and a set of annotations.
- **TUF targets with a local cache** (`cosignkit.tuf_constants`,
  `cosignkit.tuf_cache`): pick out Fulcio certificate and Rekor public key
  targets. Files in a local checkout directory are reused while their SHA-256
  matches the recorded digest. They are refreshed when it does not match.
- **Rekor client** (`cosignkit.rekor_api`, `cosignkit.rekor_config`):
  async functions for the Rekor REST API. The data models are in
  `cosignkit.rekor_log`, `cosignkit.rekor_entries` and `cosignkit.rekor_kinds`.

## Installation

```
pip install cosignkit
```

Python 3.10 or later is required. The Rekor client uses `httpx`.

## Checking a signature payload

```python
from cosignkit.simple_signing import SimpleSigning

payload = SimpleSigning.from_json("""
{
  "critical": {
    "type": "cosign container image signature",
    "image": {"docker-manifest-digest": "sha256:something"},
    "identity": {"docker-reference": "registry.example.com/busybox"}
  },
  "optional": {"env": "prod", "number": 1, "bool": true}
}
""")

payload.satisfies_manifest_digest("sha256:something")              # True
payload.satisfies_annotations({"env": "prod", "number": "1"})      # True
payload.satisfies_annotations({"env": "staging"})                  # False
payload.satisfies_annotations({})                                  # True
```

Annotation values are compared as strings. String, number and boolean values
in the payload are supported, and `true`/`false` are written in lower case. Any
other value type fails the check. An empty set of annotations is always
satisfied. A payload without an `optional` section, or one whose `optional`
section has no keys besides `creator` and `timestamp`, satisfies no non-empty
set of annotations.

Malformed payloads raise `ValueError`. `to_dict()` gives back the JSON
structure, and `str(payload)` gives it as indented JSON.

## TUF targets

`cosignkit.tuf_constants` holds the rule for recognising Fulcio certificate
targets and the name of the Rekor key target (`REKOR_PUB_KEY_TARGET`, which is
`"rekor.pub"`):

```python
from cosignkit.tuf_constants import is_fulcio_cert_target, sigstore_root

is_fulcio_cert_target("fulcio.crt.pem")      # True
is_fulcio_cert_target("fulcio_v1.crt.pem")   # True
is_fulcio_cert_target("fulcio-v2.crt.pem")   # False

root_json = sigstore_root()                  # embedded root.json as bytes
```

`cosignkit.tuf_cache` works over a `TargetRepository`. You build one from the
target digests and a download function:

```python
import hashlib
from cosignkit.tuf_cache import RepositoryHelper, TargetRepository

files = {"fulcio.crt.pem": b"...pem...", "rekor.pub": b"...key..."}
repository = TargetRepository(
    hashes={name: hashlib.sha256(data).hexdigest() for name, data in files.items()},
    fetcher=files.get,
)

helper = RepositoryHelper(repository, checkout_dir="/tmp/sigstore-cache")
helper.fulcio_cert_target_names()   # ["fulcio.crt.pem"]
helper.fulcio_certs()               # [b"...pem..."]
helper.rekor_pub_key()              # b"...key..."
```

- `hashes` maps each target name to its hex SHA-256 digest.
- `fetcher` returns a target's bytes, or `None` if it cannot be found.
- Downloaded data is checked against the recorded digest. A mismatch raises
  `ValueError`.
- A target that is not listed, or that the fetcher cannot find, raises
  `TufTargetNotFoundError`.

With a `checkout_dir`, a local file whose digest matches is returned as is.
A missing or outdated file is downloaded and written to that directory. The
lower-level functions `fetch_target`, `is_local_file_outdated` and
`fetch_target_or_reuse_local_cache` are available too.

## Talking to Rekor

The API functions in `cosignkit.rekor_api` are coroutines that take a
`Configuration`. By default it points at the public Rekor instance.

```python
import asyncio

from cosignkit.rekor_api import get_log_entry_by_index, get_log_info
from cosignkit.rekor_config import Configuration, ResponseError


async def main():
    configuration = Configuration()
    info = await get_log_info(configuration)
    print(info.tree_size, info.root_hash)

    try:
        entry = await get_log_entry_by_index(configuration, 1)
    except ResponseError as error:
        print("Rekor refused the request:", error.status, error.entity)
    else:
        print(entry.to_dict())


asyncio.run(main())
```

| Function | Endpoint | Returns |
| --- | --- | --- |
| `create_log_entry(configuration, proposed_entry)` | `POST /api/v1/log/entries` | `LogEntry` |
| `get_log_entry_by_index(configuration, log_index)` | `GET /api/v1/log/entries?logIndex=` | `LogEntry` |
| `get_log_entry_by_uuid(configuration, entry_uuid)` | `GET /api/v1/log/entries/{uuid}` | `LogEntry` |
| `search_log_query(configuration, entry)` | `POST /api/v1/log/entries/retrieve` | raw response text |
| `search_index(configuration, query)` | `POST /api/v1/index/retrieve` | list of UUIDs |
| `get_public_key(configuration, tree_id=None)` | `GET /api/v1/log/publicKey` | response text |
| `get_rekor_version(configuration)` | `GET /api/v1/version` | `RekorVersion` |
| `get_log_info(configuration)` | `GET /api/v1/log` | `LogInfo` |
| `get_log_proof(configuration, last_size, first_size=None, tree_id=None)` | `GET /api/v1/log/proof` | `ConsistencyProof` |

The log entry endpoints answer with an object keyed by the entry UUID.
`parse_response` reshapes it into a flat object with a `uuid` field before it
is decoded.

`Configuration` fields:

- `base_path`: the server URL.
- `user_agent`: sent as the `User-Agent` header, or no header if `None`.
- `client`: an optional shared `httpx.AsyncClient`. Without one, a client is
  opened for each call.

The fields `basic_auth`, `oauth_access_token`, `bearer_access_token` and
`api_key` can be set, but they are not sent with requests.

Models:

- Request bodies come from `cosignkit.rekor_entries`: `ProposedEntry` (tagged
  by `EntryKind`), `Hashedrekord` and its `Spec`, `SearchIndex`,
  `SearchIndexPublicKey` (with `Format`) and `SearchLogQuery`.
- Responses are decoded into `cosignkit.rekor_log` models: `LogEntry`,
  `LogInfo`, `ConsistencyProof`, `InclusionProof`, `RekorVersion` and
  `ErrorResponse`.
- The entry kinds with a free-form spec are in `cosignkit.rekor_kinds`:
  `Alpine`, `Helm`, `Intoto`, `Jar`, `Rekord`, `Rfc3161`, `Rpm` and `Tuf`, plus
  their `...AllOf` variants.

Every model has `from_dict` and `to_dict`. `from_dict` raises `ValueError`
on malformed data.

All client errors derive from `RekorError`:

- `TransportError`: the request could not be sent or the answer could not be
  read.
- `DecodeError`: a successful response body could not be decoded.
- `ResponseError`: the server answered with a 4xx or 5xx status. It carries
  `status`, `content` and `entity`. `entity` is an `ErrorResponse` when the body
  is an error object, otherwise the parsed JSON, or `None`.

## What this package does not do

- It does not download or verify TUF metadata. `sigstore_root()` only
  provides the embedded root document. No signatures, thresholds or
  expiration dates are checked. The target digests given to
  `TargetRepository` are trusted as they are.
- It does not verify signatures, certificates or inclusion proofs. It only
  carries them as data.
- It has no command-line interface.

## Running the tests

```
pip install -e ".[test]"
pytest
```