#!/usr/bin/env python3
"""Function Adapters — Compose, filter, order and validate with plain functions.

ADAPTERS
────────
    identity(x)            → x
    compose(f, g, h)(x)    → h(g(f(x)))       left to right
    flip(f)(a, b)          → f(b, a)
    where(pred)(items)     → tuple of matching items
    order_by(key)(items)   → tuple sorted by key
    make_validator(...)    → value → Ok(value) | Err(ValidationError)
    all_of(v1, v2, ...)    → first Err wins

Run: python examples/03_function_adapters.py
"""
from lambdakit.core import (
    all_of,
    compose,
    flip,
    make_validator,
    order_by,
    where,
)


USERS = [
    {"id": "user-42", "name": "Ada", "age": 36},
    {"id": "user-7", "name": "Grace", "age": 85},
    {"id": "user-13", "name": "Linus", "age": 17},
]


def main():
    print("=" * 60)
    print("Function Adapter Examples")
    print("=" * 60)

    # === 1. Pipelines ===
    print("\n[1] compose")

    adults_by_age = compose(where(lambda u: u["age"] >= 18), order_by(lambda u: u["age"]))
    for user in adults_by_age(USERS):
        print(f"  {user['name']} ({user['age']})")

    # === 2. Argument order ===
    print("\n[2] flip")

    def subtract(a, b):
        return a - b

    print(f"  subtract(10, 3)       → {subtract(10, 3)}")
    print(f"  flip(subtract)(10, 3) → {flip(subtract)(10, 3)}")

    # === 3. Validation ===
    print("\n[3] Validators")

    has_name = make_validator(lambda u: bool(u["name"]), "name is required", field="name")
    is_adult = make_validator(
        lambda u: u["age"] >= 18, "must be 18 or older", field="age", constraint="age >= 18"
    )
    valid_user = all_of(has_name, is_adult)

    for user in USERS:
        result = valid_user(user)
        status = "valid" if result.is_ok() else f"invalid: {result.error}"
        print(f"  {user['id']}: {status}")

    print("\n" + "=" * 60)
    print("[OK] Function Adapters Complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
