import json

import pytest

from cosignkit.simple_signing import (
    Critical,
    Identity,
    Image,
    OptionalInfo,
    SimpleSigning,
)


def _payload(digest="sha256:something"):
    return {
        "critical": {
            "type": "type_foo",
            "image": {"docker-manifest-digest": digest},
            "identity": {"docker-reference": "registry.foo.bar/busybox"},
        }
    }


def test_does_not_satisfy_annotations_when_optional_is_none():
    ss = SimpleSigning.from_dict(_payload())
    assert ss.satisfies_annotations({"env": "prod"}) is False


def test_satisfies_empty_annotations_even_when_optional_is_none():
    ss = SimpleSigning.from_dict(_payload())
    assert ss.satisfies_annotations({}) is True


def test_optional_has_all_the_required_annotations():
    optional = OptionalInfo.from_dict({"env": "prod", "number": 1, "bool": True})
    annotations = {"env": "prod", "number": "1", "bool": "true"}
    assert optional.satisfies_annotations(annotations) is True


def test_optional_missing_annotation():
    optional = OptionalInfo.from_dict({"owner": "alice", "team": "devops"})
    assert optional.satisfies_annotations({"env": "prod", "owner": "alice"}) is False


def test_optional_annotation_with_different_value():
    optional = OptionalInfo.from_dict(
        {"env": "staging", "owner": "alice", "team": "devops"}
    )
    assert optional.satisfies_annotations({"env": "prod", "owner": "alice"}) is False


def test_optional_satisfies_when_no_annotation_provided():
    optional = OptionalInfo.from_dict({"env": "prod", "owner": "alice", "team": "devops"})
    assert optional.satisfies_annotations({}) is True


def test_optional_without_extra_never_satisfies():
    optional = OptionalInfo.from_dict({"creator": "cosign", "timestamp": 5})
    assert optional.extra == {}
    assert optional.satisfies_annotations({}) is False


def test_optional_unsupported_value_type():
    optional = OptionalInfo.from_dict({"list": [1, 2]})
    assert optional.satisfies_annotations({"list": "[1,2]"}) is False


def test_optional_false_bool():
    optional = OptionalInfo.from_dict({"flag": False})
    assert optional.satisfies_annotations({"flag": "false"}) is True
    assert optional.satisfies_annotations({"flag": "0"}) is False


def test_satisfy_manifest_digest():
    ss = SimpleSigning.from_dict(_payload("sha256:something"))
    assert ss.satisfies_manifest_digest("sha256:something") is True
    assert ss.satisfies_manifest_digest("something different") is False


def test_simple_signing_delegates_to_optional():
    data = _payload()
    data["optional"] = {"creator": "cosign", "env": "prod"}
    ss = SimpleSigning.from_dict(data)
    assert ss.optional.creator == "cosign"
    assert ss.satisfies_annotations({"env": "prod"}) is True
    assert ss.satisfies_annotations({"env": "dev"}) is False


def test_optional_fields_are_separated_from_extra():
    optional = OptionalInfo.from_dict({"creator": "c", "timestamp": 42, "env": "prod"})
    assert optional.creator == "c"
    assert optional.timestamp == 42
    assert optional.extra == {"env": "prod"}
    assert optional.to_dict() == {"creator": "c", "timestamp": 42, "env": "prod"}


def test_round_trip_through_json():
    data = _payload()
    data["optional"] = {"creator": None, "timestamp": 7, "env": "prod"}
    ss = SimpleSigning.from_json(json.dumps(data))
    assert SimpleSigning.from_json(str(ss)) == ss
    assert json.loads(str(ss)) == data


def test_to_dict_without_optional_emits_null():
    ss = SimpleSigning.from_dict(_payload())
    assert ss.to_dict()["optional"] is None
    assert ss.to_dict()["critical"]["type"] == "type_foo"


def test_nested_to_dict():
    critical = Critical(
        type_name="t",
        image=Image("sha256:abc"),
        identity=Identity("registry.example.com/app"),
    )
    assert critical.to_dict() == {
        "type": "t",
        "image": {"docker-manifest-digest": "sha256:abc"},
        "identity": {"docker-reference": "registry.example.com/app"},
    }


def test_missing_critical_raises():
    with pytest.raises(ValueError):
        SimpleSigning.from_dict({"optional": {}})


def test_missing_digest_raises():
    data = _payload()
    del data["critical"]["image"]["docker-manifest-digest"]
    with pytest.raises(ValueError):
        SimpleSigning.from_dict(data)


def test_bad_timestamp_raises():
    with pytest.raises(ValueError):
        OptionalInfo.from_dict({"timestamp": "soon"})


def test_invalid_json_raises():
    with pytest.raises(ValueError):
        SimpleSigning.from_json("{not json")