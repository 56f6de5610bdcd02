#!/usr/bin/env python3
"""Resource Scope — Acquire, use, and always release.

    scoped(acquire, release)      context manager
    using(acquire, release, body) one-shot call returning body's result

The release function runs exactly once after a successful acquire, whether
the body returns or raises.  If acquire itself fails there is nothing to
release.

Run: python examples/04_resource_scope.py

See Also:
    01_memo_cache — a cache populated from inside a scoped connection
"""
from lambdakit.core import MemoCache, scoped, using


class Connection:
    """Stand-in for a database connection."""

    def __init__(self, dsn):
        self.dsn = dsn
        self.open = True
        print(f"    connect {dsn}")

    def fetch_user(self, user_id):
        if not self.open:
            raise RuntimeError("connection closed")
        return {"id": user_id, "name": user_id.replace("-", " ").title()}

    def close(self):
        self.open = False
        print(f"    close {self.dsn}")


def main():
    print("=" * 60)
    print("Resource Scope Examples")
    print("=" * 60)

    # === 1. Context manager ===
    print("\n[1] scoped")

    with scoped(lambda: Connection("sqlite:///users.db"), Connection.close) as conn:
        print(f"    fetched {conn.fetch_user('user-42')}")

    # === 2. Release on failure ===
    print("\n[2] Body Raises")

    try:
        with scoped(lambda: Connection("sqlite:///users.db"), Connection.close):
            raise LookupError("row not found")
    except LookupError as e:
        print(f"  Propagated: {e!r}")

    # === 3. Higher-order form ===
    print("\n[3] using")

    name = using(
        lambda: Connection("sqlite:///users.db"),
        Connection.close,
        lambda c: c.fetch_user("user-7")["name"],
    )
    print(f"  Result: {name}")

    # === 4. Scoped connection feeding a cache ===
    print("\n[4] Cache Populated Inside a Scope")

    cache = MemoCache(name="users")
    with scoped(lambda: Connection("sqlite:///users.db"), Connection.close) as conn:
        for user_id in ("user-42", "user-42", "user-7"):
            result = cache.get_or_compute(user_id, lambda: conn.fetch_user(user_id))
            print(f"    {user_id} → {result.unwrap()['name']}")
    print(f"  Computations: {cache.stats.computations}")

    print("\n" + "=" * 60)
    print("[OK] Resource Scope Complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
