# load_data.py
"""
Load the seed customers and invoices from data/*.csv into the database.

Usage:
    python scripts/init_db.py   # (re)create tables
    python load_data.py
    python load_data.py --dry-run   # parse and report only
"""

import sys

from scripts.ingest import parse_seed_data, load_into_db


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    dry_run = "--dry-run" in argv

    customers_list, invoices_list, stats = parse_seed_data()
    if not dry_run:
        load_into_db(customers_list, invoices_list)
        print("Load complete.")

    print(f"Total CSV rows read:   {stats['n_rows']}")
    print(f"Customers parsed:      {stats['n_customers']}")
    print(f"Invoices parsed:       {stats['n_invoices']}")
    print(f"Rows with errors:      {stats['n_errors']}")
    print(f"Duplicate ids:         {stats['n_duplicates']}")

    if stats["error_examples"]:
        print("\nExample errors:")
        for ex in stats["error_examples"]:
            print(f"- {ex['source']} row {ex['row_number']}: {ex['error']}")


if __name__ == "__main__":
    main()
