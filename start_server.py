#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Start the storefront API with a pre-flight check of imports and the database."""
import sys
import traceback

print("=" * 70)
print("Starting Storefront Catalog Service")
print("=" * 70)

# Step 1: Test imports
print("\n[1/3] Testing imports...")
try:
    from app.main import app
    print(f"✓ App imported: {app.title} v{app.version}")
    print(f"✓ Routes registered: {len(app.routes)}")
except Exception as e:
    print(f"✗ Import failed: {e}")
    traceback.print_exc()
    sys.exit(1)

# Step 2: Create tables
print("\n[2/3] Preparing database...")
try:
    from app.core.config import get_settings
    from app.core.database import init_db

    init_db()
    print(f"✓ Tables ready at {get_settings().database_url}")
except Exception as e:
    print(f"✗ Database preparation failed: {e}")
    traceback.print_exc()
    sys.exit(1)

# Step 3: Start server
print("\n[3/3] Starting server...")
print("=" * 70)
print("Server starting at: http://127.0.0.1:8000")
print("API Documentation: http://127.0.0.1:8000/docs")
print("=" * 70)
print("\nPress Ctrl+C to stop the server\n")

try:
    import uvicorn
    uvicorn.run(
        "app.main:app",
        host="127.0.0.1",
        port=8000,
        reload=True,
        log_level="info"
    )
except KeyboardInterrupt:
    print("\n\nServer stopped by user")
except Exception as e:
    print(f"\n✗ Server failed to start: {e}")
    traceback.print_exc()
    sys.exit(1)
