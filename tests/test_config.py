from __future__ import annotations

import dataclasses
import textwrap

import pytest

from cssident.config import Configuration, default_configuration, load_configuration
from cssident.errors import ConfigurationError, MalformedHashSpecError, UnsupportedAlgorithmError


def test_default_configuration_values() -> None:
    configuration = default_configuration()
    assert configuration == Configuration()
    assert configuration.hash_algorithm == "md5"
    assert configuration.hash_digest == "hex"
    assert configuration.hash_digest_length == 16
    assert configuration.root is None
    assert configuration.strict_unknown_tokens is False
    assert configuration.ext_with_dot is True


def test_configuration_is_immutable() -> None:
    configuration = default_configuration()
    with pytest.raises(dataclasses.FrozenInstanceError):
        configuration.hash_algorithm = "sha1"  # type: ignore[misc]


def test_from_mapping_accepts_camel_and_snake_case() -> None:
    configuration = Configuration.from_mapping(
        {
            "hashAlgorithm": "SHA1",
            "hash_digest": "base64url",
            "hashDigestLength": 8,
            "context": "/repo",
            "strictUnknownTokens": True,
        }
    )
    assert configuration.hash_algorithm == "sha1"
    assert configuration.hash_digest == "base64url"
    assert configuration.hash_digest_length == 8
    assert configuration.root == "/repo"
    assert configuration.strict_unknown_tokens is True


def test_from_mapping_rejects_bad_input() -> None:
    with pytest.raises(ConfigurationError):
        Configuration.from_mapping({"hashSalt": "x"})
    with pytest.raises(ConfigurationError):
        Configuration.from_mapping({"root": "/a", "context": "/b"})
    with pytest.raises(ConfigurationError):
        Configuration.from_mapping(["hashAlgorithm"])  # type: ignore[arg-type]
    with pytest.raises(ConfigurationError):
        Configuration.from_mapping({"strictUnknownTokens": "yes"})
    with pytest.raises(UnsupportedAlgorithmError):
        Configuration.from_mapping({"hashAlgorithm": "crc32"})
    with pytest.raises(MalformedHashSpecError):
        Configuration.from_mapping({"hashDigest": "base99"})
    with pytest.raises(MalformedHashSpecError):
        Configuration.from_mapping({"hashDigestLength": 0})


def test_replace_validates_changes() -> None:
    configuration = default_configuration().replace(hash_digest_length=4)
    assert configuration.hash_digest_length == 4
    with pytest.raises(UnsupportedAlgorithmError):
        configuration.replace(hash_algorithm="nope")


def test_load_configuration_from_section(tmp_path) -> None:
    config_file = tmp_path / "cssident.yaml"
    config_file.write_text(
        textwrap.dedent(
            """
            cssident:
              hashAlgorithm: sha256
              hashDigestLength: 6
              extWithDot: false
            """
        ),
        encoding="utf-8",
    )
    configuration = load_configuration(config_file)
    assert configuration.hash_algorithm == "sha256"
    assert configuration.hash_digest_length == 6
    assert configuration.ext_with_dot is False


def test_load_configuration_top_level_and_empty(tmp_path) -> None:
    config_file = tmp_path / "options.yaml"
    config_file.write_text("hash_digest: base36\n", encoding="utf-8")
    assert load_configuration(config_file).hash_digest == "base36"

    empty = tmp_path / "empty.yaml"
    empty.write_text("", encoding="utf-8")
    assert load_configuration(empty) == default_configuration()


def test_load_configuration_errors(tmp_path) -> None:
    with pytest.raises(FileNotFoundError):
        load_configuration(tmp_path / "missing.yaml")

    listing = tmp_path / "list.yaml"
    listing.write_text("- md5\n", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_configuration(listing)

    broken = tmp_path / "broken.yaml"
    broken.write_text("cssident: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_configuration(broken)
