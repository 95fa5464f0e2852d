import pytest

from oslab.page_table_walk import (
    PAGE_SIZE,
    PTE_READ,
    PTE_VALID,
    PTE_WRITE,
    PageFault,
    PageTableEntry,
    PermissionDenied,
    SingleLevelPageTable,
    make_pa,
    va_to_offset,
    va_to_vpn,
)


@pytest.fixture
def table():
    return SingleLevelPageTable(1024)


def test_va_decompose():
    assert va_to_vpn(0x12345678) == 0x12345
    assert va_to_offset(0x12345678) == 0x678


def test_va_decompose_zero():
    assert va_to_vpn(0) == 0
    assert va_to_offset(0) == 0


def test_va_decompose_page_boundary():
    assert va_to_vpn(0x3000) == 3
    assert va_to_offset(0x3000) == 0


def test_va_out_of_range():
    with pytest.raises(ValueError):
        va_to_vpn(1 << 32)
    with pytest.raises(ValueError):
        va_to_offset(-1)


def test_make_pa():
    assert make_pa(0x80, 0x100) == 0x80 * 4096 + 0x100
    assert make_pa(0, 0) == 0
    assert make_pa(1, 0) == 4096


def test_map_and_lookup(table):
    table.map(5, 100, PTE_VALID | PTE_READ)
    entry = table.lookup(5)
    assert entry == PageTableEntry(100, PTE_VALID | PTE_READ)
    assert entry.ppn == 100
    assert entry.flags == PTE_VALID | PTE_READ


def test_lookup_unmapped(table):
    assert table.lookup(0) is None


def test_lookup_out_of_range(table):
    assert table.lookup(5000) is None


def test_map_out_of_range(table):
    with pytest.raises(IndexError):
        table.map(1024, 1, PTE_VALID)


def test_unmap(table):
    table.map(10, 200, PTE_VALID | PTE_READ)
    assert table.lookup(10) == PageTableEntry(200, PTE_VALID | PTE_READ)
    table.unmap(10)
    assert table.lookup(10) is None


def test_translate_basic(table):
    table.map(1, 0x80, PTE_VALID | PTE_READ)
    assert table.translate(0x1100, False) == 0x80100


def test_translate_page_fault(table):
    with pytest.raises(PageFault):
        table.translate(0x5000, False)


def test_translate_beyond_table_is_page_fault(table):
    with pytest.raises(PageFault):
        table.translate(0xFFFFF000, False)


def test_translate_write_permission(table):
    table.map(2, 0x90, PTE_VALID | PTE_READ)
    assert table.translate(0x2000, False) == 0x90 * PAGE_SIZE
    with pytest.raises(PermissionDenied):
        table.translate(0x2000, True)


def test_translate_writable_page(table):
    table.map(3, 0xA0, PTE_VALID | PTE_READ | PTE_WRITE)
    assert table.translate(0x3456, True) == 0xA0 * PAGE_SIZE + 0x456


def test_translate_invalid_entry(table):
    table.map(4, 0x50, PTE_READ)
    with pytest.raises(PageFault):
        table.translate(0x4000, False)


def test_multiple_mappings(table):
    table.map(0, 0x10, PTE_VALID | PTE_READ)
    table.map(1, 0x20, PTE_VALID | PTE_READ | PTE_WRITE)
    table.map(2, 0x30, PTE_VALID | PTE_READ)
    assert table.translate(0x0FFF, False) == 0x10FFF
    assert table.translate(0x1000, True) == 0x20000
    assert table.translate(0x2800, False) == 0x30800


def test_translate_after_unmap_faults(table):
    table.map(6, 0x60, PTE_VALID | PTE_READ)
    assert table.translate(0x6010, False) == 0x60010
    table.unmap(6)
    with pytest.raises(PageFault):
        table.translate(0x6010, False)