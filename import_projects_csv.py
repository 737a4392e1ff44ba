#!/usr/bin/env python3
"""
Bulk-create projects from a CSV file through the API.
Required columns: name, panel_count, inverter_power_kw, roof_type
Optional columns: address, phone, inverter_brand, installer, installation_date
Each created project gets its checklist generated by the API.
"""

import argparse
import csv
import requests
import sys
from pathlib import Path

API_BASE = "http://localhost:8000"

REQUIRED_COLUMNS = ("name", "panel_count", "inverter_power_kw", "roof_type")
OPTIONAL_COLUMNS = ("address", "phone", "inverter_brand", "installer", "installation_date")


def read_projects(csv_path: str):
    """
    Parse the CSV into project payloads.
    Rows with missing or non-numeric required fields are skipped and reported.
    """
    payloads = []

    print(f"📖 Reading {csv_path}...")

    with open(csv_path, 'r', encoding='utf-8') as f:
        reader = csv.DictReader(f)

        missing = [c for c in REQUIRED_COLUMNS if c not in (reader.fieldnames or [])]
        if missing:
            raise ValueError(f"CSV is missing required columns: {', '.join(missing)}")

        for row_num, row in enumerate(reader, start=2):
            try:
                values = {k: (row.get(k) or '').strip() for k in REQUIRED_COLUMNS + OPTIONAL_COLUMNS}

                if not all(values[k] for k in REQUIRED_COLUMNS):
                    print(f"⚠️  Skipping row {row_num}: missing required fields")
                    continue

                payload = {
                    "name": values["name"],
                    "panel_count": int(values["panel_count"]),
                    "inverter_power_kw": float(values["inverter_power_kw"].replace(',', '.')),
                    "roof_type": values["roof_type"].lower(),
                }
                payload.update({k: values[k] for k in OPTIONAL_COLUMNS if values[k]})
                payloads.append((row_num, payload))

            except ValueError as e:
                print(f"⚠️  Skipping row {row_num}: {e}")
                continue

    print(f"✅ Parsed {len(payloads)} projects")
    return payloads


def create_project(api_base: str, payload: dict) -> dict | None:
    """Create project and return the API response."""
    try:
        response = requests.post(f"{api_base}/projects/", json=payload, timeout=10)
        response.raise_for_status()
        return response.json()
    except requests.exceptions.RequestException as e:
        detail = e.response.text if e.response is not None else str(e)
        print(f"❌ Failed to create project {payload.get('name')!r}: {detail}")
        return None


def main(argv=None):
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument("csv_path", help="CSV file with one project per row")
    parser.add_argument("--api", default=API_BASE, help=f"API base URL (default {API_BASE})")
    args = parser.parse_args(argv)

    csv_path = Path(args.csv_path)
    if not csv_path.exists():
        print(f"❌ File not found: {csv_path}")
        return False

    payloads = read_projects(str(csv_path))
    print()

    # Check API connectivity
    print("🔗 Checking API connectivity...")
    try:
        response = requests.get(f"{args.api}/health/ready", timeout=5)
        response.raise_for_status()
        print(f"✅ API is ready at {args.api}")
    except requests.exceptions.RequestException as e:
        print(f"❌ API not reachable at {args.api}: {e}")
        print("   Start the API with: uvicorn main:app --reload")
        return False

    print()

    success_count = 0
    fail_count = 0

    for row_num, payload in payloads:
        project = create_project(args.api, payload)
        if project:
            print(
                f"  ✅ Row {row_num}: project {project.get('id')} {project.get('name')!r} "
                f"({project.get('string_configuration')}, {project.get('total_items')} checklist items)"
            )
            success_count += 1
        else:
            fail_count += 1

    print()
    print("=" * 70)
    print("📊 IMPORT SUMMARY")
    print("=" * 70)
    print(f"Rows parsed:    {len(payloads)}")
    print(f"Created:        {success_count}")
    print(f"Failed:         {fail_count}")

    return fail_count == 0 and success_count > 0


if __name__ == '__main__':
    try:
        success = main()
        sys.exit(0 if success else 1)
    except Exception as e:
        print(f"❌ Fatal error: {e}")
        sys.exit(1)
