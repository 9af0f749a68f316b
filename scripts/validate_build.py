#!/usr/bin/env python3
"""Pre-push build validation — run before every git push to catch issues early.

Usage: python scripts/validate_build.py

Checks:
  1. All Python files compile (no syntax errors)
  2. Flask app creates successfully against a throwaway data dir
  3. Public routes respond 200
  4. Admin routes reject anonymous requests and accept the configured login
"""
import base64
import glob
import os
import py_compile
import sys
import tempfile

# Ensure repo root is in path
REPO_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, REPO_ROOT)
os.chdir(REPO_ROOT)

CHECK_USER = "admin"
CHECK_PASS = "validate-build"


def check_syntax():
    """Check all .py files for syntax errors."""
    errors = []
    files = glob.glob("portfolio/**/*.py", recursive=True) + ["app.py", "logging_config.py"]
    for f in files:
        if not os.path.exists(f):
            continue
        try:
            py_compile.compile(f, doraise=True)
        except py_compile.PyCompileError as e:
            errors.append(f"{f}: {e}")
    return errors, len(files)


def check_app_creates(data_dir):
    """Check Flask app creates without crash."""
    try:
        from app import create_app
        app = create_app({
            "DATA_DIR": data_dir,
            "WORK_DIR": os.path.join(data_dir, "work"),
            "ADMIN_USER": CHECK_USER,
            "ADMIN_PASS": CHECK_PASS,
            "CONFIGURE_LOGGING": False,
            "RATE_LIMIT_ENABLED": False,
        })
        routes = len(list(app.url_map.iter_rules()))
        return None, routes, app
    except Exception as e:
        return str(e), 0, None


def check_routes(app):
    """Check key routes respond."""
    creds = base64.b64encode(f"{CHECK_USER}:{CHECK_PASS}".encode()).decode()
    h = {"Authorization": f"Basic {creds}"}
    errors = []
    with app.test_client() as c:
        for path in ["/", "/en", "/fr", "/api/health"]:
            r = c.get(path)
            if r.status_code != 200:
                errors.append(f"{path} → {r.status_code}")
        for path in ["/admin/about", "/admin/work", "/admin/translations"]:
            if c.get(path).status_code != 401:
                errors.append(f"{path} reachable without auth")
            r = c.get(path, headers=h)
            if r.status_code != 200:
                errors.append(f"{path} (auth) → {r.status_code}")
    return errors


if __name__ == "__main__":
    print("=" * 60)
    print("BUILD VALIDATION")
    print("=" * 60)

    all_ok = True

    print("\n1. Syntax check...")
    errs, count = check_syntax()
    if errs:
        print(f"   FAIL: {len(errs)} syntax errors")
        for e in errs:
            print(f"   - {e}")
        all_ok = False
    else:
        print(f"   OK: {count} files compiled")

    with tempfile.TemporaryDirectory() as tmp:
        print("\n2. App creation...")
        err, routes, app = check_app_creates(tmp)
        if err:
            print(f"   FAIL: {err}")
            all_ok = False
        else:
            print(f"   OK: {routes} routes")

        if app:
            print("\n3. Route checks...")
            errs = check_routes(app)
            if errs:
                print(f"   FAIL: {len(errs)} routes broken")
                for e in errs:
                    print(f"   - {e}")
                all_ok = False
            else:
                print("   OK: public routes 200, admin routes guarded")

    print("\n" + "=" * 60)
    if all_ok:
        print("BUILD VALIDATION: ALL PASSED")
        print("=" * 60)
        sys.exit(0)
    else:
        print("BUILD VALIDATION: FAILED — do not push")
        print("=" * 60)
        sys.exit(1)
