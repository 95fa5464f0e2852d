"""Small models of operating-system mechanisms: atomics, locks, green threads, async patterns, page tables and TLBs."""

__version__ = "0.1.0"

__all__ = [
    "atomic_counter",
    "atomic_ordering",
    "spinlock",
    "spinlock_guard",
    "rwlock",
    "green_threads",
    "basic_future",
    "tasks",
    "async_channel",
    "select_timeout",
    "pte_flags",
    "page_table_walk",
    "multi_level_pt",
    "tlb_sim",
]