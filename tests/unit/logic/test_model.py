"""
cheevo-lint - unit tests for full logic parsing

File: tests/unit/logic/test_model.py
Last updated: 2026-10-19

Purpose
- Validate group splitting, mode inference and address extraction.

What this test file should cover
- Alt-group splitting that ignores ``S`` inside a ``0xS`` size prefix.
- Value-mode splitting on ``$`` and empty groups.
- ``get_addresses`` skipping the requirement after an AddAddress link.
- Pointer-qualified memory lookups.
- Chain termination over every parsed group.
"""

from __future__ import annotations

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from cheevo_lint.logic import ConditionFlag, Logic, LogicParseError, walk_pointer_chains

_LINK = st.sampled_from(["A:0xH10", "B:0xH11*2", "I:0xX20", "N:0xH12=1", "O:d0xH13=2", "C:0xH14=1"])
_TERMINAL = st.sampled_from(["0xH10=1", "P:0xH11=2", "R:0xH12=0", "Z:0xH13=1", "M:0xH14=5"])


def test_trigger_logic_splits_core_and_alts() -> None:
    logic = Logic.from_string("0xH1234=1_d0xH1234=0S0xH10=2S0xH11=3")

    assert not logic.value_mode
    assert len(logic.groups) == 3
    assert len(logic.core) == 2
    assert [len(group) for group in logic.alts] == [1, 1]
    assert str(logic) == "0xH1234=1_d0xH1234=0S0xH10=2S0xH11=3"


def test_bit6_prefix_is_not_an_alt_delimiter() -> None:
    logic = Logic.from_string("0xS1234=1S0xH10=1")

    assert len(logic.groups) == 2
    assert logic.core[0].lhs.size is not None
    assert logic.core[0].lhs.size.label == "Bit6"


def test_value_mode_is_inferred_from_dollar() -> None:
    logic = Logic.from_string("M:0xH10$M:0xH20")

    assert logic.value_mode
    assert len(logic.groups) == 2
    assert logic.to_logic_string() == "M:0xH00000010$M:0xH00000020"


def test_forced_value_mode_without_delimiter() -> None:
    logic = Logic.from_string("0xH10*2", value_mode=True)

    assert logic.value_mode
    assert len(logic.groups) == 1


def test_empty_groups_are_legal() -> None:
    empty = Logic.from_string("")
    assert empty.groups == ((),)
    assert empty.core == ()
    assert empty.get_addresses() == ()

    with_empty_core = Logic.from_string("S0xH10=1")
    assert with_empty_core.core == ()
    assert len(with_empty_core.alts) == 1


def test_parse_error_is_wrapped_at_logic_level() -> None:
    with pytest.raises(LogicParseError) as excinfo:
        Logic.from_string("0xH10=1_bogus!")

    assert excinfo.value.category == "logic"
    assert excinfo.value.fragment == "0xH10=1_bogus!"
    assert isinstance(excinfo.value.__cause__, LogicParseError)


def test_get_addresses_skips_requirement_after_addaddress() -> None:
    logic = Logic.from_string("I:0xX100_0xH8=1_0xH200=2_I:0xX100+4_0xH10=d0xH10")

    assert logic.get_addresses() == (0x100, 0x200, 0x100)


def test_get_addresses_keeps_duplicates_in_source_order() -> None:
    logic = Logic.from_string("0xH10=1_0xH20=0xH10S0xH10=2")

    assert logic.get_addresses() == (0x10, 0x20, 0x10, 0x10)


def test_memory_lookups_are_pointer_qualified_and_distinct() -> None:
    logic = Logic.from_string("I:0xX100_0xH8=1_0xH8=2_I:0xX200_0xH8=3")

    assert logic.get_memory_lookups() == (
        "0x00000100:0x00000008",
        "0x00000008",
        "0x00000200:0x00000008",
    )


def test_walk_pointer_chains_concatenates_links() -> None:
    group = Logic.from_string("I:0xX100+16_I:0xX4_0xH8=1").core

    walked = list(walk_pointer_chains(group))

    assert len(walked) == 1
    req, prefix = walked[0]
    assert req.lhs.value == 8
    assert prefix == "0x00000100+16:0x00000004:"


def test_flags_operands_and_markdown() -> None:
    logic = Logic.from_string("A:0xH10_0xH11=5S0x12>d0x12")

    assert logic.get_flags() == (ConditionFlag.ADD_SOURCE,)
    assert len(logic.get_operands()) == 5
    markdown = logic.to_markdown()
    assert markdown.startswith("### Core\n```\n  1: AddSource")
    assert "### Alt 1" in markdown


def test_source_text_is_not_part_of_equality() -> None:
    assert Logic.from_string("0xH10=1") == Logic.from_string("0xH0010=v1")


@settings(max_examples=30, derandomize=True, deadline=None)
@given(groups=st.lists(st.tuples(st.lists(_LINK, max_size=4), _TERMINAL), min_size=1, max_size=3))
def test_every_chain_ends_on_a_terminating_requirement(
    groups: list[tuple[list[str], str]],
) -> None:
    text = "S".join("_".join([*links, terminal]) for links, terminal in groups)

    logic = Logic.from_string(text, value_mode=False)

    for group in logic.groups:
        assert group[-1].is_terminating()
        for req in group:
            if req.flag is not None and req.flag.combinator:
                assert not req.is_terminating()
