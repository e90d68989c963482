from __future__ import annotations

import pytest

from cssident.config import Configuration
from cssident.errors import UnknownPlaceholderError
from cssident.placeholders import PlaceholderKind, scan_template, substitute_template
from cssident.resolver import build_context

CONTEXT = build_context("src/pages/index.module.css", "test")


def test_scan_classifies_tokens_in_order() -> None:
    placeholders = scan_template("[path][name][ext]__[local]-[folder]-[hash:md5:hex:4]")
    assert [p.kind for p in placeholders] == [
        PlaceholderKind.PATH,
        PlaceholderKind.NAME,
        PlaceholderKind.EXT,
        PlaceholderKind.LOCAL,
        PlaceholderKind.FOLDER,
        PlaceholderKind.HASH,
    ]
    assert placeholders[-1].params == ("md5", "hex", "4")
    assert placeholders[0].start == 0 and placeholders[0].end == len("[path]")


def test_params_on_plain_keywords_make_token_unknown() -> None:
    (placeholder,) = scan_template("[name:upper]")
    assert placeholder.kind is PlaceholderKind.UNKNOWN
    assert placeholder.params == ("upper",)


def test_keywords_are_case_sensitive() -> None:
    (placeholder,) = scan_template("[Name]")
    assert placeholder.kind is PlaceholderKind.UNKNOWN


def test_non_token_brackets_are_literal() -> None:
    assert scan_template("[] [a-b] [1]") == []
    template = "[[local]]"
    (placeholder,) = scan_template(template)
    assert placeholder.kind is PlaceholderKind.LOCAL
    assert substitute_template(template, CONTEXT, Configuration()) == "[test]"


def test_substitution_before_sanitizing() -> None:
    result = substitute_template("[path][name][ext]__[local]", CONTEXT, Configuration())
    assert result == "src/pages/index.module.css__test"


def test_unknown_tokens_pass_through_verbatim() -> None:
    assert substitute_template("x[bogus]y", CONTEXT, Configuration()) == "x[bogus]y"


def test_strict_mode_reports_token_and_offset() -> None:
    with pytest.raises(UnknownPlaceholderError) as excinfo:
        substitute_template("ab[bogus]", CONTEXT, Configuration(strict_unknown_tokens=True))
    assert excinfo.value.token == "[bogus]"
    assert excinfo.value.position == 2


def test_each_hash_token_uses_its_own_spec() -> None:
    result = substitute_template("[hash:md5:hex:4]|[hash:4]|[hash]", CONTEXT, Configuration())
    assert result == "ef7f|ef7f|ef7fd779372bab24"


def test_configured_hash_defaults_apply_to_bare_hash() -> None:
    configuration = Configuration(hash_algorithm="sha256", hash_digest_length=8)
    assert substitute_template("[hash]", CONTEXT, configuration) == "af2f36c4"
