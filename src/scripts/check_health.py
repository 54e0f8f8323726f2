"""Health Check Script - Store connection and recent appointments."""

import asyncio

from src.config.settings import get_settings
from src.core.errors import PersistenceFailure
from src.services.supabase import get_appointment_store


async def check_health() -> bool:
    settings = get_settings()
    print(f"Connecting to Supabase at {settings.supabase_url or '<not set>'}...")

    store = get_appointment_store()

    print("1. Testing Database Connection...")
    try:
        await store.ping()
        print("[OK] Connection Successful.")
    except PersistenceFailure as e:
        print(f"[ERROR] Database Connection Failed: {e}")
        return False

    print("\n2. Checking Recent Appointments (last 5)...")
    try:
        rows = await store.list_appointments()
    except PersistenceFailure as e:
        print(f"[ERROR] Failed to list appointments: {e}")
        return False

    if not rows:
        print("[INFO] No appointments found.")
    for row in rows[-5:]:
        print(
            f"   - [{row.get('created_at')}] {row.get('appointment_type')} | "
            f"{row.get('appointment_date')} {row.get('appointment_time')}"
        )

    print("\n3. Checking Flow Endpoint Configuration...")
    print(f"   Private key: {'[OK]' if settings.has_private_key else '[ERROR] missing'}")
    print(
        "   App secret: "
        + ("[OK]" if settings.app_secret else "[WARN] not set, signatures not checked")
    )
    return True


if __name__ == "__main__":
    raise SystemExit(0 if asyncio.run(check_health()) else 1)
