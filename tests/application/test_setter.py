"""Tests for the setter functions that build new ``Config`` stores."""

from __future__ import annotations

from collections.abc import Mapping

import pytest
from hypothesis import given
from hypothesis import strategies as st

from lib_option_tree.application.setter import MAX_DEPTH, new_config, set_option, set_options
from lib_option_tree.domain.config import Config
from lib_option_tree.domain.errors import DataDepth

NAME = st.text(alphabet="abcdefghij", min_size=1, max_size=4)
SCALAR = st.one_of(st.booleans(), st.integers(), st.text(max_size=5), st.lists(st.integers(), max_size=3))


def option_values(depth: int) -> st.SearchStrategy[object]:
    """Values nested at most *depth* mappings deep."""

    if depth == 0:
        return SCALAR
    return st.one_of(SCALAR, st.dictionaries(NAME, option_values(depth - 1), min_size=1, max_size=3))


OPTIONS = st.dictionaries(NAME, option_values(3), max_size=4)
DOTTED = st.lists(NAME, min_size=1, max_size=4).map(".".join)


def nested(depth: int) -> dict[str, object]:
    """Build an options tree of *depth* nested mappings around one value."""

    tree: dict[str, object] = {"param": "Value"}
    for level in range(depth - 1):
        tree = {f"level{level}": tree}
    return tree


@pytest.fixture()
def config() -> Config:
    base = new_config({"core": {"language": "en"}})
    return set_option(base, "core.prefix.function", "jaxon_")


def test_new_config_flattens_tree(config: Config) -> None:
    """Nested options should be reachable both by full dotted name and through their parents."""

    assert config.get("core.language") == "en"
    assert config.get("core.prefix.function") == "jaxon_"
    assert config.get("core") == {"language": "en", "prefix": {"function": "jaxon_"}}
    assert config.changed() is True


def test_new_config_with_empty_tree() -> None:
    """An empty tree should produce the shared empty store whatever the prefixes."""

    assert dict(new_config().values()) == {}
    assert dict(new_config({}, "lib", "core").values()) == {}


def test_new_config_with_prefixes() -> None:
    """Prefixes should be normalised before narrowing the tree and renaming the options."""

    config = new_config({"jaxon": {"core": {"language": "en"}}}, " lib. ", ".jaxon ")
    assert config.get("lib.core.language") == "en"
    assert config.get("lib") == {"core": {"language": "en"}}
    assert not config.has("jaxon.core.language")


def test_set_option_back_fills_ancestors() -> None:
    """Every parent of a new leaf should expose it through its aggregated sub-mapping."""

    config = set_option(Config(), "a.b.c", 42)
    assert config.get("a.b.c") == 42
    assert config.get("a.b") == {"c": 42}
    assert config.get("a") == {"b": {"c": 42}}
    assert config.changed() is True


def test_set_option_keeps_siblings(config: Config) -> None:
    """Adding a leaf must not drop the options already stored beside it."""

    updated = set_option(config, "core.prefix.class", "Jx")
    assert updated.get("core.prefix") == {"function": "jaxon_", "class": "Jx"}
    assert updated.get("core")["language"] == "en"
    assert updated.option_names("core.prefix") == {
        "function": "core.prefix.function",
        "class": "core.prefix.class",
    }


def test_set_option_replaces_terminal_ancestor() -> None:
    """A parent holding a terminal value becomes a mapping when a child is set under it."""

    config = set_option(Config(), "core.array", [1, 2])
    updated = set_option(config, "core.array.first", 1)
    assert updated.get("core.array") == {"first": 1}
    assert updated.get("core") == {"array": {"first": 1}}


def test_set_option_leaves_input_untouched(config: Config) -> None:
    """The store passed to the setter must keep its values."""

    before = config.as_dict()
    set_option(config, "core.language", "fr")
    assert config.as_dict() == before


def test_set_options_with_name_prefix(config: Config) -> None:
    """The name prefix should be prepended to every stored option."""

    updated = set_options(config, {"debug": {"on": False}}, "jaxon.core")
    assert updated.get("jaxon.core.debug.on") is False
    assert updated.option_names("jaxon.core") == {"debug": "jaxon.core.debug"}
    assert not updated.has("jaxon.core.debug.off")


def test_set_options_stores_arrays_as_terminals(config: Config) -> None:
    """Lists, index-keyed and empty mappings are stored as single opaque values."""

    updated = set_options(config, {"core": {"array": [1, 2, 3, 4], "map": {0: "a", 1: "b"}, "empty": {}}})
    assert updated.get("core.array") == [1, 2, 3, 4]
    assert updated.option_names("core.array") == {}
    assert updated.get("core.map") == {0: "a", 1: "b"}
    assert not updated.has("core.map.0")
    assert updated.get("core.empty") == {}


def test_set_options_trims_keys(config: Config) -> None:
    """Whitespace around option keys should not leak into stored names."""

    updated = set_options(config, {" core ": {" debug ": True}})
    assert updated.get("core.debug") is True


def test_set_options_missing_section_is_noop(config: Config) -> None:
    """A missing section leaves the values in place and reports no change."""

    updated = set_options(config, {"core": {}}, "", "core.missing")
    assert updated.changed() is False
    assert dict(updated.values()) == dict(config.values())


def test_set_options_terminal_section_is_noop(config: Config) -> None:
    """A section naming a terminal value is treated like a missing one."""

    updated = set_options(config, {"core": {"string": "String"}}, "", "core.string")
    assert updated.changed() is False
    assert not updated.has("core.string")


def test_set_options_resets_changed_flag(config: Config) -> None:
    """A successful merge after a no-op should report a change again."""

    noop = set_options(config, {}, "", "missing")
    assert set_options(noop, {"core": {"debug": True}}).changed() is True


def test_set_options_depth_limit(config: Config) -> None:
    """Trees nested past the limit abort the whole merge and leave the store untouched."""

    tree = {
        "core": {
            "one": {
                "two": {
                    "three": {
                        "four": {
                            "five": {
                                "six": {"seven": {"eight": {"nine": {"ten": {"param": "Value"}}}}},
                            },
                        },
                    },
                },
            },
        },
    }
    before = config.as_dict()
    with pytest.raises(DataDepth) as excinfo:
        set_options(config, tree)
    assert excinfo.value.depth == MAX_DEPTH + 1
    assert excinfo.value.prefix == "core.one.two.three.four.five.six.seven.eight.nine."
    assert config.as_dict() == before


def test_set_options_accepts_maximum_depth() -> None:
    """Trees exactly at the limit are accepted; one level more is rejected."""

    config = set_options(Config(), nested(MAX_DEPTH + 1))
    assert config.get("level8.level7.level6.level5.level4.level3.level2.level1.level0.param") == "Value"
    with pytest.raises(DataDepth):
        set_options(Config(), nested(MAX_DEPTH + 2))


def test_set_options_copies_terminal_values() -> None:
    """Later changes to the raw tree must not reach the store."""

    raw = {"core": {"array": [1, 2]}}
    config = set_options(Config(), raw)
    raw["core"]["array"].append(3)
    assert config.get("core.array") == [1, 2]


def test_set_option_copies_value() -> None:
    """Later changes to a value passed to ``set_option`` must not reach the store."""

    items = [1, 2]
    config = set_option(Config(), "core.array", items)
    items.append(3)
    assert config.get("core.array") == [1, 2]
    assert config.get("core") == {"array": [1, 2]}


def test_set_option_accepts_section_of_another_store(config: Config) -> None:
    """A read-only section taken from one store can be stored in another."""

    copied = set_option(Config(), "copy", config.get("core"))
    assert copied.get("copy") == {"language": "en", "prefix": {"function": "jaxon_"}}
    assert copied.get("copy.language") is None


def test_successive_stores_do_not_share_writable_sections(config: Config) -> None:
    """Sections carried over into a new store must stay read-only in both stores."""

    second = set_option(config, "other", 1)
    with pytest.raises(TypeError):
        second.get("core")["language"] = "fr"
    assert config.get("core")["language"] == "en"
    assert second.get("core")["language"] == "en"


def test_prefix_listing_collapses_one_level() -> None:
    """Option names under a prefix stop one level below it."""

    raw = {"jaxon": {"core": {"language": "en", "prefix": {"function": "jaxon_", "class": "Jx"}}}}
    config = new_config(raw)
    assert config.option_names("jaxon.core") == {
        "language": "jaxon.core.language",
        "prefix": "jaxon.core.prefix",
    }


@given(DOTTED, SCALAR)
def test_set_option_round_trip(name: str, value: object) -> None:
    """Any stored value should be returned unchanged, with all parents populated."""

    config = set_option(Config(), name, value)
    assert config.get(name) == value
    assert config.changed() is True
    segments = name.split(".")
    for size in range(1, len(segments)):
        parent = config.get(".".join(segments[:size]))
        assert isinstance(parent, Mapping) and segments[size] in parent


@given(OPTIONS)
def test_merge_is_idempotent(options: dict[str, object]) -> None:
    """Merging the same tree twice should give the same flat store as merging it once."""

    once = set_options(Config(), options)
    twice = set_options(once, options)
    assert dict(once.values()) == dict(twice.values())


@given(OPTIONS, OPTIONS)
def test_later_values_win(first: dict[str, object], second: dict[str, object]) -> None:
    """Terminal values from the later tree should override the earlier ones."""

    merged = set_options(set_options(Config(), first), second)
    for key, value in second.items():
        if not isinstance(value, dict):
            assert merged.get(key) == value
