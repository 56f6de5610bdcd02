#!/usr/bin/env python3
"""Memo Cache — Compute each lookup once, serve the rest from memory.

WHY MEMOIZE
───────────
Lookups by identifier (a user row, a config blob, a remote profile) are
often repeated many times within one process.  MemoCache stores the first
successful answer per key and never asks the supplier again for that key.

LOOKUP OUTCOMES
───────────────
    Supplier returns      Stored?   get_or_compute returns
    ───────────────────── ───────── ──────────────────────────
    plain value v         yes       Ok(v)
    Ok(v)                 yes       Ok(v)
    Err(e)                no        Err(e)
    None                  no        Err(NoValueError)
    raises                no        (exception propagates)

ARCHITECTURE
────────────
    get_or_compute("user-42", supplier)
            │
            ├── hit  ──────────────────────▶ Ok(stored)
            │
            └── miss ──▶ supplier() ──▶ Ok ──▶ store ──▶ Ok(value)
                                    └──▶ absent ───────▶ Err(...)

Run: python examples/01_memo_cache.py

See Also:
    02_bounded_retry — wrap the supplier itself in a retry
"""
from lambdakit import MemoCache, memoize
from lambdakit.core import Err, Ok


def main():
    print("=" * 60)
    print("Memo Cache Examples")
    print("=" * 60)

    # === 1. Populate once, hit afterwards ===
    print("\n[1] Populate Once")

    supplier_calls = 0

    def load_user():
        nonlocal supplier_calls
        supplier_calls += 1
        return "User-42"

    cache: MemoCache[str, str] = MemoCache(name="users")
    for call in range(1, 4):
        result = cache.get_or_compute("user-42", load_user)
        print(f"  Call {call}: {result}  (supplier calls: {supplier_calls})")

    # === 2. Plain lookup ===
    print("\n[2] Plain Lookup")

    print(f"  get('user-42')  → {cache.get('user-42')}")
    print(f"  get('user-99')  → {cache.get('user-99')}")

    # === 3. Absent supplier results are not stored ===
    print("\n[3] Absent Results")

    cache.get_or_compute("ghost", lambda: None)
    cache.get_or_compute("banned", lambda: Err(PermissionError("user is banned")))
    print(f"  'ghost' cached:  {'ghost' in cache}")
    print(f"  'banned' cached: {'banned' in cache}")
    print(f"  Keys: {cache.keys()}")

    # === 4. Supplier may return Ok explicitly ===
    print("\n[4] Explicit Ok")

    print(f"  {cache.get_or_compute('user-7', lambda: Ok('User-7'))}")

    # === 5. Statistics ===
    print("\n[5] Statistics")

    for name, value in cache.stats.to_dict().items():
        print(f"  {name}: {value}")

    # === 6. memoize decorator ===
    print("\n[6] memoize Decorator")

    @memoize
    def square(n):
        print(f"    computing {n}²")
        return n * n

    print(f"  square(12) → {square(12)}")
    print(f"  square(12) → {square(12)}")
    print(f"  Cache size: {len(square.cache)}")

    print("\n" + "=" * 60)
    print("[OK] Memo Cache Complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
