#!/usr/bin/env python3
"""
Test runner for Life Calendar

Runs each suite separately, then everything with coverage:
1. Week arithmetic and grid classification (domain)
2. Reflection provider (LiteLLM boundary)
3. Preference store and app service
4. Grid image rendering
"""

import subprocess
import sys
import os
from pathlib import Path


def run_command(cmd, description):
    """Run a command and handle errors"""
    print(f"\n{'='*60}")
    print(f"🔄 {description}")
    print(f"{'='*60}")

    try:
        result = subprocess.run(cmd, shell=True, check=True, capture_output=True, text=True)
        print(result.stdout)
        if result.stderr:
            print("STDERR:", result.stderr)
        print(f"✅ {description} completed successfully")
        return True
    except subprocess.CalledProcessError as e:
        print(f"❌ {description} failed")
        print("STDOUT:", e.stdout)
        print("STDERR:", e.stderr)
        return False


def main():
    """Main test runner"""
    print("🚀 Starting Life Calendar Test Suite")

    project_dir = Path(__file__).parent
    os.chdir(project_dir)

    if not run_command("python -m pip install -e '.[test]'", "Installing project dependencies"):
        print("⚠️  Warning: Failed to install dependencies, continuing anyway...")

    test_commands = [
        ("python -m pytest tests/test_services/test_life_weeks_domain.py -v",
         "Week Arithmetic & Grid Classification Tests"),

        ("python -m pytest tests/test_services/test_reflection_service.py -v",
         "Reflection Provider Tests"),

        ("python -m pytest tests/test_services/test_preferences_store.py "
         "tests/test_services/test_life_calendar_app.py -v",
         "Preference Store & App Service Tests"),

        ("python -m pytest tests/services/test_life_weeks_image.py -v",
         "Grid Image Rendering Tests"),

        ("python -m pytest tests/ -v --cov=life_calendar --cov-report=term-missing",
         "All Tests with Coverage Report"),
    ]

    results = []
    for cmd, description in test_commands:
        success = run_command(cmd, description)
        results.append((description, success))

    print(f"\n{'='*60}")
    print("📊 TEST RESULTS SUMMARY")
    print(f"{'='*60}")

    passed = 0
    failed = 0

    for description, success in results:
        status = "✅ PASSED" if success else "❌ FAILED"
        print(f"{status:<10} {description}")
        if success:
            passed += 1
        else:
            failed += 1

    print(f"\n📈 Overall Results: {passed} passed, {failed} failed")

    return 0 if failed == 0 else 1


if __name__ == "__main__":
    sys.exit(main())
