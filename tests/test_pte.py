import pytest

from rvhyp.address import Pfn
from rvhyp.pte import Pte, PteFieldBit, PteFieldBits, PteLeafPerms


def test_field_bit_positions():
    assert PteFieldBit.VALID.shift() == 0
    assert PteFieldBit.LOCKED.shift() == 8
    assert PteFieldBit.LOCKED.mask() == 1 << PteFieldBit.LOCKED.shift()


def test_is_set_matches_mask():
    assert PteFieldBit.LOCKED.is_set(0x100)
    assert not PteFieldBit.LOCKED.is_set(0xFF)
    assert PteFieldBit.VALID.is_set(1)
    for bit in PteFieldBit:
        assert bit.is_set(bit.mask())
        assert not bit.is_set(0)


def test_rwx_combines_each_permission():
    rwx = int(PteLeafPerms.RWX)
    for perm in (PteLeafPerms.R, PteLeafPerms.RW, PteLeafPerms.X, PteLeafPerms.RX):
        assert int(perm) & rwx == int(perm)
    assert int(PteLeafPerms.RW) == int(PteLeafPerms.R) | PteFieldBit.WRITE.mask()


def test_field_bits_set_and_clear():
    status = PteFieldBits()
    status.set_bit(PteFieldBit.USER)
    assert PteFieldBit.USER.is_set(status.bits)
    status.clear_bit(PteFieldBit.USER)
    assert status.bits == 0


def test_leaf_with_perms_and_non_leaf():
    assert PteFieldBits.leaf_with_perms(PteLeafPerms.RX).bits == int(PteLeafPerms.RX)
    assert PteFieldBits.non_leaf().bits == 0


def test_set_roundtrips_pfn():
    pte = Pte()
    pfn = Pfn.supervisor(0x80_000)
    pte.set(pfn, PteFieldBits.leaf_with_perms(PteLeafPerms.RWX))
    assert pte.valid()
    assert pte.leaf()
    assert pte.pfn() == pfn


def test_non_leaf_entry_is_not_leaf():
    pte = Pte()
    pte.set(Pfn.supervisor(0x1234), PteFieldBits.non_leaf())
    assert pte.valid()
    assert not pte.leaf()
    assert pte.pfn().bits == 0x1234


def test_invalidate_keeps_pfn():
    pte = Pte()
    pte.set(Pfn.supervisor(0x42), PteFieldBits.leaf_with_perms(PteLeafPerms.R))
    pte.invalidate()
    assert not pte.valid()
    assert pte.pfn().bits == 0x42
    pte.mark_valid()
    assert pte.valid()


def test_lock_and_unlock():
    pte = Pte()
    assert not pte.locked()
    pte.lock()
    assert pte.locked()
    assert not pte.valid()
    assert pte.pfn().bits == 0
    pte.unlock()
    assert not pte.locked()
    assert pte.bits == 0


def test_clear():
    pte = Pte()
    pte.set(Pfn.supervisor(0x99), PteFieldBits.leaf_with_perms(PteLeafPerms.RW))
    pte.lock()
    pte.clear()
    assert pte.bits == 0
    assert not pte.valid()


@pytest.mark.parametrize("pfn_bits", [0, 1, (1 << 44) - 1])
def test_pfn_truncated_to_44_bits(pfn_bits):
    pte = Pte()
    pte.set(Pfn.supervisor(pfn_bits), PteFieldBits.non_leaf())
    assert pte.pfn().bits == pfn_bits