"""
🖨️ Console Report
══════════════════

Prints query results to standard output. Two formats:

  json  — the documents exactly as MongoDB returned them, pretty-printed.
          bson.json_util is used instead of the plain json module so BSON
          types (ObjectId, Decimal128, dates) still print.

  table — one row per evolution, flattened with pandas:

            name        num  evolution.name  evolution.num  evolution.avg_spawns
            Bulbasaur   001  Ivysaur         002            4.2
            Bulbasaur   001  Venusaur        003            1.7
"""

import pandas as pd
from bson import json_util


def to_json(results):
    return json_util.dumps(results, indent=2)


def to_dataframe(results):
    """
    Flatten result documents into a DataFrame.

    Documents with a next_evolutions list are exploded to one row per
    evolution (columns prefixed with "evolution."); the base pokemon's
    name/num are repeated on every row. Anything else is normalized as is.
    """
    if not results:
        return pd.DataFrame()

    if all("next_evolutions" in doc for doc in results):
        meta = [field for field in ("name", "num") if all(field in doc for doc in results)]
        return pd.json_normalize(
            results,
            record_path="next_evolutions",
            meta=meta,
            record_prefix="evolution.",
        )[meta + _evolution_columns(results)]

    return pd.json_normalize(results)


def _evolution_columns(results):
    # keep the payload's field order, first time each field is seen
    columns = []
    for doc in results:
        for evolution in doc["next_evolutions"]:
            for field in evolution:
                column = f"evolution.{field}"
                if column not in columns:
                    columns.append(column)
    return columns


def to_table(results):
    df = to_dataframe(results)
    if df.empty:
        return "(no results)"
    return df.to_string(index=False)


def print_results(title, results, output_format="json"):
    """Print a titled block with the result count and the documents."""
    print("\n" + "=" * 60)
    print(f"📋 {title}")
    print(f"   {len(results)} result(s)")
    print("=" * 60)

    if output_format == "json":
        print(to_json(results))
    elif output_format == "table":
        print(to_table(results))
    else:
        raise ValueError(f"Unknown output format '{output_format}'. Valid formats: ['json', 'table']")
