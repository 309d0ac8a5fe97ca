#!/usr/bin/env python3
"""
Connection Check Script

Run this to verify the database and the completion provider are reachable.
Usage: python scripts/check_connections.py
"""
import sys
sys.path.insert(0, '.')

from coach_gateway.core.config import get_settings
from coach_gateway.db.postgres import test_postgres_connection
from coach_gateway.services.llm_client import get_completion_client


def main() -> int:
    settings = get_settings()
    failures = 0
    print("=" * 50)
    print("INTERVIEW COACH GATEWAY - CONNECTION CHECK")
    print("=" * 50)

    # PostgreSQL
    print("\n[1] Checking PostgreSQL...")
    print(f"    URL: {settings.database_url.split('@')[-1]}")
    if test_postgres_connection():
        print("    ✅ PostgreSQL: CONNECTED")
    else:
        print("    ❌ PostgreSQL: FAILED")
        failures += 1

    # Groq
    print("\n[2] Checking completion provider...")
    print(f"    Base URL: {settings.groq_base_url}")
    print(f"    Model: {settings.llm_model}")
    result = get_completion_client().ping()
    if result.status.value == "ok":
        print(f"    ✅ Provider: OK ({result.latency_ms} ms)")
    elif result.status.value == "no_key":
        print("    ⚠️  Provider: GROQ_API_KEY not configured")
        failures += 1
    else:
        print(f"    ❌ Provider: {result.status.value} - {result.message}")
        failures += 1

    print("\n" + "=" * 50)
    print("Connection check complete!")
    print("=" * 50)
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
