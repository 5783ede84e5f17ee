#!/usr/bin/env python3
"""Validate local desiderata engine environment readiness."""

from __future__ import annotations

import importlib
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from desiderata.domain.constraints import QuotaPolicy, validate_quota_policy
from desiderata.repository.payloads import parse_holidays, parse_period
from desiderata.services.availability_service import calculate_period_availability
from desiderata.services.mandatory_service import auto_extend_for_mandatory_weekend
from desiderata.services.selection_service import validate_selection
from desiderata.utils.config import get_settings

SEPARATOR_LINE = "=" * 44

SAMPLE_PERIOD = {
    "id": "env-check",
    "name": "Environment check",
    "startDate": "2024-01-01",
    "endDate": "2024-01-05",
    "editingStatus": "open-desiderata",
}
SAMPLE_HOLIDAYS = [{"date": "2024-01-02", "name": "Sample holiday", "type": "public"}]


def _print_result(name: str, success: bool, detail: str = "") -> tuple[bool, str]:
    if success:
        return True, f"[PASS] {name}{detail}"
    return False, f"[FAIL] {name}: {detail}"


def main() -> int:
    results: list[str] = []
    all_passed = True

    # CHECK 1 — Python version >= 3.10
    if sys.version_info >= (3, 10):
        ok, line = _print_result("Python " + sys.version.split()[0], True)
    else:
        ok, line = _print_result(
            "Python version >= 3.10",
            False,
            f"found {sys.version.split()[0]}",
        )
    results.append(line)
    all_passed = all_passed and ok

    # CHECK 2 — Required packages importable
    import_errors: list[str] = []
    for module_name in ("pydantic", "pandas", "pytest"):
        try:
            importlib.import_module(module_name)
        except Exception as exc:  # pragma: no cover - runtime guard
            import_errors.append(f"{module_name} ({exc})")
    if import_errors:
        ok, line = _print_result(
            "Required packages",
            False,
            "missing/unimportable -> " + "; ".join(import_errors),
        )
    else:
        ok, line = _print_result("Required packages: all importable", True)
    results.append(line)
    all_passed = all_passed and ok

    # CHECK 3 — Quota policy from settings
    settings = get_settings()
    try:
        validate_quota_policy(
            QuotaPolicy(
                senior_priority_tier=settings.senior_priority_tier,
                senior_quota_divisor=settings.senior_quota_divisor,
                standard_quota_divisor=settings.standard_quota_divisor,
            )
        )
        ok, line = _print_result("Quota policy settings", True)
    except Exception as exc:
        ok, line = _print_result("Quota policy settings", False, str(exc))
    results.append(line)
    all_passed = all_passed and ok

    # CHECK 4 — Availability on the sample period
    try:
        period = parse_period(SAMPLE_PERIOD)
        holidays = parse_holidays(SAMPLE_HOLIDAYS)
        availability = calculate_period_availability(period, holidays)
        observed = (
            availability.available_working_days,
            availability.available_weekend_days,
            availability.total_available_days,
        )
        if observed != (2, 0, 2):
            raise RuntimeError(f"expected (2, 0, 2), got {observed}")
        ok, line = _print_result("Sample availability: 2 working / 0 weekend", True)
    except Exception as exc:
        ok, line = _print_result("Sample availability", False, str(exc))
    results.append(line)
    all_passed = all_passed and ok

    # CHECK 5 — Extension and validation round
    try:
        period = parse_period(SAMPLE_PERIOD)
        extension = auto_extend_for_mandatory_weekend("2024-01-06", "2024-01-06", period, [])
        if not extension.extended or extension.start_date.isoformat() != "2024-01-05":
            raise RuntimeError("Saturday pick was not extended to Friday-Sunday")
        validation = validate_selection("2024-01-01", "2024-01-02", period, [], priority=2)
        if not validation.is_valid:
            raise RuntimeError("; ".join(validation.errors))
        ok, line = _print_result(
            "Extension and validation",
            True,
            f": remaining_working={validation.remaining_working_days}",
        )
    except Exception as exc:
        ok, line = _print_result("Extension and validation", False, str(exc))
    results.append(line)
    all_passed = all_passed and ok

    print(SEPARATOR_LINE)
    print(f" {settings.app_name} {settings.app_version} Environment Validation")
    print(SEPARATOR_LINE)
    for line in results:
        print(f" {line}")
    print(SEPARATOR_LINE)
    if all_passed:
        print(" All checks passed. Environment is ready.")
        print(SEPARATOR_LINE)
        return 0
    print(" One or more checks failed.")
    print(SEPARATOR_LINE)
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
