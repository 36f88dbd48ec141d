# tests/test_registry.py
"""
Tests for the domain tables and the registry holding them.
"""

import pytest

from flagdec.domains import ALL_DOMAINS, REGISTRY
from flagdec.errors import UnrecognizedDomainError
from flagdec.registry import BitDef, Domain, DomainRegistry, SubField, check_domain
from tests.conftest import KEYWORDS, TOY, domain


class TestShippedTables:

    def test_no_table_problems(self):
        assert REGISTRY.check() == []

    def test_keyword_order(self):
        assert REGISTRY.keywords() == KEYWORDS

    def test_list_domains_matches_declaration(self):
        assert REGISTRY.list_domains() == ALL_DOMAINS

    @pytest.mark.parametrize("keyword", KEYWORDS)
    def test_bits_are_ascending(self, keyword):
        masks = [e.mask for e in domain(keyword).entries]
        assert masks == sorted(masks)

    @pytest.mark.parametrize("keyword", KEYWORDS)
    def test_single_bit_masks(self, keyword):
        for bit in domain(keyword).bits:
            assert bin(bit.mask).count("1") == 1, bit.name

    def test_zero_labels(self):
        assert domain("task").zero_label == "TASK_SLEEPING"
        assert domain("stet").zero_label == "STRM_ET_NONE"
        assert domain("conn").zero_label is None
        assert domain("conn").empty_token == "0"

    def test_labels(self):
        assert domain("conn").label == "conn->flags"
        assert domain("stet").label == "strm->et"
        assert domain("ana").label == "chn->ana"

    def test_txn_subfields(self):
        names = [sf.name for sf in domain("txn").subfields]
        assert names == ["TX_CK_MASK", "TX_SCK_MASK"]

    def test_strm_subfields(self):
        names = [sf.name for sf in domain("strm").subfields]
        assert names == ["SF_ERR_MASK", "SF_FINST_MASK"]

    def test_subfields_excluded_from_bits(self):
        txn = domain("txn")
        field_mask = 0
        for sf in txn.subfields:
            field_mask |= sf.mask
        assert all(b.mask & field_mask == 0 for b in txn.bits)

    def test_process_fe_be_alias_kept_once(self):
        names = [b.name for b in domain("ana").bits]
        assert "AN_RES_HTTP_PROCESS_FE" in names
        assert "AN_RES_HTTP_PROCESS_BE" not in names

    def test_third_conn_bit_is_bit_two(self):
        assert domain("conn").bits[2].mask == 0x00000004

    @pytest.mark.parametrize("keyword", KEYWORDS)
    def test_domains_are_hashable(self, keyword):
        d = domain(keyword)
        assert hash(d) == hash(REGISTRY.lookup_domain(keyword))
        assert d in {d}

    def test_subfield_values_are_read_only(self):
        ck = domain("txn").subfields[0]
        with pytest.raises(TypeError):
            ck.values[0] = (0x20, "TX_CK_OTHER")
        with pytest.raises(AttributeError):
            ck.values = ()
        assert ck.lookup(0x20) == "TX_CK_INVALID"

    def test_mapping_frozen_into_pairs(self):
        mode = TOY.subfields[0]
        assert mode.values == (
            (0x0, "TOY_MODE_NONE"),
            (0x2, "TOY_MODE_A"),
            (0x4, "TOY_MODE_B"),
        )
        assert mode.lookup(0x6) is None
        assert mode.names() == ("TOY_MODE_NONE", "TOY_MODE_A", "TOY_MODE_B")

    def test_known_mask(self):
        assert TOY.known_mask == 0x0000000f
        assert domain("txn").known_mask & 0x000007e0 == 0x000007e0


class TestLookup:

    def test_exact_match(self):
        assert REGISTRY.lookup_domain("conn") is domain("conn")

    def test_case_sensitive(self):
        assert REGISTRY.lookup_domain("CONN") is None
        assert REGISTRY.lookup_domain("Conn") is None

    def test_no_prefix_match(self):
        assert REGISTRY.lookup_domain("con") is None
        assert REGISTRY.lookup_domain("strm->flags") is None

    def test_contains(self):
        assert "txn" in REGISTRY
        assert "0x1" not in REGISTRY

    def test_require_unknown(self):
        with pytest.raises(UnrecognizedDomainError) as info:
            REGISTRY.require("bogus")
        assert info.value.keyword == "bogus"
        assert info.value.code == "FLAG-0003"
        assert "conn" in info.value.hint

    def test_len_and_iter(self):
        assert len(REGISTRY) == len(KEYWORDS)
        assert [d.keyword for d in REGISTRY] == KEYWORDS


class TestCheckDomain:

    def test_toy_is_clean(self):
        assert check_domain(TOY) == []

    def test_multi_bit_single_flag(self):
        bad = Domain("bad", "bad", entries=(BitDef("TWO_BITS", 0x3),))
        problems = check_domain(bad)
        assert any("more than one bit" in p for p in problems)

    def test_overlapping_bits(self):
        bad = Domain("bad", "bad", entries=(BitDef("A", 0x4), BitDef("B", 0x4)))
        assert any("overlaps" in p for p in check_domain(bad))

    def test_subfield_overlapping_bit(self):
        bad = Domain("bad", "bad", entries=(
            SubField("F_MASK", 0x6, {0x2: "F_ONE"}),
            BitDef("B", 0x4),
        ))
        assert any("overlaps" in p for p in check_domain(bad))

    def test_value_outside_subfield(self):
        bad = Domain("bad", "bad", entries=(SubField("F_MASK", 0x6, {0x8: "F_OUT"}),))
        assert any("outside the mask" in p for p in check_domain(bad))

    def test_mask_wider_than_word(self):
        bad = Domain("bad", "bad", entries=(BitDef("WIDE", 1 << 32),))
        assert any("32-bit" in p for p in check_domain(bad))

    def test_duplicate_keyword(self):
        reg = DomainRegistry([TOY, TOY])
        assert any("declared 2 times" in p for p in reg.check())

    def test_duplicate_keyword_lookup_keeps_first(self):
        other = Domain("toy", "other", entries=(BitDef("X", 0x1),))
        reg = DomainRegistry([TOY, other])
        assert reg.lookup_domain("toy") is TOY

    def test_construction_never_validates(self):
        bad = Domain("bad", "bad", entries=(BitDef("TWO_BITS", 0x3),))
        reg = DomainRegistry([bad])
        assert reg.lookup_domain("bad") is bad
