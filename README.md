# oslab

Small, self-contained Python models of the mechanisms an operating system is
built from. Each module covers one idea and can be used and tested on its own.
The package has no dependencies outside the standard library.

## Modules

| Module | What it models |
| --- | --- |
| `oslab.atomic_counter` | `AtomicCounter` (unsigned 64-bit, wrapping) with `increment`, `decrement`, `get`, `compare_and_swap` (raises `CasFailed` carrying the actual value) and a CAS-loop `fetch_multiply` |
| `oslab.atomic_ordering` | `FlagChannel` (`produce` a value, `consume` waits until it is ready, `reset`) and a set-once `OnceCell` (`init`, `get`) |
| `oslab.spinlock` | `SpinLock` with explicit `lock`, `unlock` and `try_lock`; the protected object is `data` |
| `oslab.spinlock_guard` | `SpinLock` whose `lock()` returns a `SpinGuard`; the guard gives access through `value` and releases the lock on leaving a `with` block or on `release()` |
| `oslab.rwlock` | Writer-priority `RwLock`; `read()` returns an `RwLockReadGuard`, `write()` an `RwLockWriteGuard` |
| `oslab.green_threads` | Cooperative round-robin `Scheduler` (`spawn`, `run`, `states`), `ThreadState` and `yield_now()` |
| `oslab.basic_future` | Hand-written awaitables `CountDown` (result `"liftoff!"`) and `YieldOnce` |
| `oslab.tasks` | `concurrent_squares` and `parallel_sleep_tasks` |
| `oslab.async_channel` | `producer_consumer` and `fan_in` over a bounded `asyncio.Queue` |
| `oslab.select_timeout` | `with_timeout` and `race` |
| `oslab.pte_flags` | RISC-V SV39 page-table-entry bits: `PteFlags`, `make_pte`, `extract_ppn`, `extract_flags`, `is_valid`, `is_leaf`, `check_permission` |
| `oslab.page_table_walk` | `SingleLevelPageTable` of `PageTableEntry` items; `translate` raises `PageFault` or `PermissionDenied`; plus `va_to_vpn`, `va_to_offset`, `make_pa` |
| `oslab.multi_level_pt` | Three-level `Sv39PageTable` built from `PageTableNode`s, with 4 KiB (`map_page`) and 2 MiB (`map_superpage`) mappings; `translate` raises `PageFault` |
| `oslab.tlb_sim` | FIFO `Tlb` of `TlbEntry` slots with whole, per-VPN and per-ASID flushes and `TlbStats`, and an `Mmu` that consults the TLB before its table of `PageMapping`s |

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Examples

Locks:

```python
from oslab.spinlock_guard import SpinLock

lock = SpinLock([])
with lock.lock() as guard:
    guard.value.append(1)
```

Three-level address translation:

```python
from oslab.multi_level_pt import Sv39PageTable
from oslab.pte_flags import PteFlags

pt = Sv39PageTable()
pt.map_page(0x2000, 0x90000000, PteFlags.V | PteFlags.R | PteFlags.W)
assert pt.translate(0x2ABC) == 0x90000ABC
```

An unmapped address raises `PageFault`.

A TLB in front of a page table:

```python
from oslab.tlb_sim import Mmu

mmu = Mmu(4)
mmu.add_mapping(1, 0x100, 0x200, 0x7)
mmu.switch_asid(1)
mmu.translate(0x100)   # miss, searches the table, fills the TLB
mmu.translate(0x100)   # hit
print(mmu.tlb.stats.hit_rate())  # 0.5
```

Green threads:

```python
from oslab.green_threads import Scheduler, yield_now

log = []

def worker():
    log.append("a")
    yield_now()
    log.append("b")

sched = Scheduler()
sched.spawn(worker)
sched.spawn(worker)
sched.run()
print(log)  # ['a', 'a', 'b', 'b']
```

Async helpers:

```python
import asyncio
from oslab.select_timeout import with_timeout

async def main():
    return await with_timeout(asyncio.sleep(1, result=42), 50)

print(asyncio.run(main()))  # None: the timeout came first
```

## What it does not do

These are models, not the mechanisms themselves. The atomics and locks are
built on `threading` primitives rather than processor instructions. Each green
thread runs on its own operating-system thread and the scheduler hands control
from one to the next, so there is no register-level context switch and no
separate stack allocation. The page tables and TLB are in-memory data
structures; they do not touch real memory or hardware. There is no
command-line tool.