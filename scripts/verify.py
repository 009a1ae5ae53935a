import httpx
import asyncio
import os

BASE_URL = os.getenv("BASE_URL", "http://localhost:8000")
ADMIN_TOKEN = os.getenv("ADMIN_TOKEN", "")

async def run_verification():
    print(f"🚀  Starting Verification against {BASE_URL}...\n")

    admin = {"Authorization": f"Bearer {ADMIN_TOKEN}"}

    async with httpx.AsyncClient(base_url=BASE_URL, timeout=10.0) as client:
        # 1. Health Check
        print("1. [Health] Checking /api/health...")
        try:
            resp = await client.get("/api/health")
            if resp.status_code == 200 and resp.json().get("ok") is True:
                print("   ✅  Health Check Passed")
            else:
                print(f"   ❌  Health Check Failed: {resp.text}")
                return
        except httpx.HTTPError as e:
            print(f"   ❌  Connection Error: {e}")
            return

        # 2. Create Link
        print("\n2. [API] Creating Short Link...")
        target_url = "https://example.com/page"
        resp = await client.post("/api/create", json={"url": target_url, "note": "verify"})
        if resp.status_code == 200:
            code = resp.json()["code"]
            print(f"   ✅  Created: {BASE_URL}/{code}")
        else:
            print(f"   ❌  Create Failed: {resp.status_code} {resp.text}")
            return

        # 3. Inactive links must not redirect
        print("\n3. [API] Verifying new link is inactive...")
        resp = await client.get(f"/{code}", follow_redirects=False)
        if resp.status_code == 404:
            print("   ✅  Inactive link answers 404")
        else:
            print(f"   ❌  Expected 404, got {resp.status_code}")

        # 4. Admin auth
        print("\n4. [Admin] Verifying admin auth...")
        resp = await client.get("/api/admin/links")
        if resp.status_code == 401:
            print("   ✅  Missing token rejected")
        else:
            print(f"   ❌  Expected 401, got {resp.status_code}")

        if not ADMIN_TOKEN:
            print("\n   ⚠️  ADMIN_TOKEN not set, skipping admin checks")
            return

        resp = await client.get("/api/admin/links", params={"pageSize": 100}, headers=admin)
        link = next((row for row in resp.json().get("data", []) if row["code"] == code), None)
        if link:
            print(f"   ✅  Link listed with id {link['id']}")
        else:
            print(f"   ❌  Link not listed: {resp.status_code} {resp.text}")
            return

        # 5. Activate and redirect
        print("\n5. [Admin] Activating link and verifying redirect...")
        await client.patch(f"/api/admin/links/{link['id']}", json={"is_active": True}, headers=admin)
        resp = await client.get(f"/{code}", follow_redirects=False)
        if resp.status_code == 302 and resp.headers.get("location") == target_url:
            print(f"   ✅  Redirect Location matches: {resp.headers['location']}")
        else:
            print(f"   ❌  Redirect Failed: {resp.status_code} {resp.headers.get('location')}")

        # 6. Soft delete
        print("\n6. [Admin] Soft-deleting link...")
        await client.delete(f"/api/admin/links/{link['id']}", headers=admin)
        resp = await client.get(f"/{code}", follow_redirects=False)
        if resp.status_code == 404:
            print("   ✅  Deleted link answers 404")
        else:
            print(f"   ❌  Expected 404, got {resp.status_code}")

        # 7. Metrics
        print("\n7. [Observability] Verifying Metrics...")
        resp = await client.get("/api/admin/metrics", headers=admin)
        if resp.status_code == 200 and "shortlinks_http_requests_total" in resp.text:
            print("   ✅  Metrics Endpoint Exposed")
        else:
            print(f"   ❌  Metrics Failed: {resp.status_code}")

    print("\n✨ Verification Complete!")

if __name__ == "__main__":
    asyncio.run(run_verification())
