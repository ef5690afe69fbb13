"""
Playlens CLI - Command line interface for streaming-history imports and reports.
"""

from __future__ import annotations

import argparse

from . import config
from .analysis import (
    calculate_streaks,
    calculate_total_listening_time,
    calculate_total_plays,
    get_content_split,
    get_golden_year,
    get_monthly_data,
    get_peak_day,
    get_time_of_day_summary,
    get_top_albums,
    get_top_artists,
    get_top_genres,
    get_top_songs,
    get_yearly_data,
)
from .catalog import PlayCatalog
from .export import export_table, plays_to_frame, records_to_frame
from .filters import FilterState
from .ingest import ingest_files
from .logging_utils import setup_logging


AVAILABLE_TABLES = [
    "plays",
    "top_songs",
    "top_artists",
    "top_albums",
    "top_genres",
    "monthly",
    "yearly",
    "content_split",
]


def _table(name: str, plays, filters: FilterState, limit: int):
    metric = filters.metric
    if name == "plays":
        return plays_to_frame(plays)
    if name == "top_songs":
        records = get_top_songs(plays, limit=limit, metric=metric)
    elif name == "top_artists":
        records = get_top_artists(plays, limit=limit, metric=metric)
    elif name == "top_albums":
        records = get_top_albums(plays, limit=limit, metric=metric)
    elif name == "top_genres":
        records = get_top_genres(plays, metric=metric)
    elif name == "monthly":
        records = get_monthly_data(plays, metric=metric)
    elif name == "yearly":
        records = get_yearly_data(plays, metric=metric)
    elif name == "content_split":
        records = get_content_split(plays)
    else:
        raise SystemExit(f"Unknown table: {name}")
    return records_to_frame(records)


def _print_report(plays, filters: FilterState, limit: int) -> None:
    if not plays:
        print("No listening data")
        return
    metric = filters.metric
    streaks = calculate_streaks(plays)
    print(f"Total listening time: {calculate_total_listening_time(plays):,} hours")
    print(f"Total plays: {calculate_total_plays(plays):,}")
    print(f"Golden year: {get_golden_year(plays)}")
    print(f"Peak day: {get_peak_day(plays)}")
    print(f"Longest streak: {streaks['longest_streak']} day(s), current: {streaks['current_streak']}")
    print(get_time_of_day_summary(plays, metric=metric))

    print(f"\nTop songs (by {metric}):")
    for i, s in enumerate(get_top_songs(plays, limit=limit, metric=metric), 1):
        print(f"  {i:>2}. {s['artist_name']} - {s['track_name']}  "
              f"{s['minutes']:,} min, {s['play_count']:,} plays ({s['percentage']:.1f}%)")

    print(f"\nTop artists (by {metric}):")
    for i, a in enumerate(get_top_artists(plays, limit=limit, metric=metric), 1):
        print(f"  {i:>2}. {a['artist_name']}  {a['minutes']:,} min, {a['play_count']:,} plays")

    print("\nTop genres:")
    for g in get_top_genres(plays, metric=metric)[:limit]:
        print(f"  {g['genre']:<20} {g['percentage']:.1f}%")


def main(argv=None):
    ap = argparse.ArgumentParser(
        prog="playlens",
        description="Spotify streaming history -> listening analytics.",
    )
    ap.add_argument("--data-dir", default=None,
                    help=f"Catalog directory (default: {config.DATA_DIR})")
    ap.add_argument("--log-level", default=config.LOG_LEVEL, help="Logging level (default: INFO)")
    sub = ap.add_subparsers(dest="cmd", required=True)

    # Import command
    ap_import = sub.add_parser("import", help="Import streaming-history ZIP/JSON files.")
    ap_import.add_argument("files", nargs="+", help="Spotify export archives or Streaming_History*.json files")

    # Status command
    sub.add_parser("status", help="Show imported sources and play counts.")

    # Report command
    ap_report = sub.add_parser("report", help="Print a listening overview.")
    ap_report.add_argument("--metric", choices=["minutes", "plays"], default="minutes")
    ap_report.add_argument("--limit", type=int, default=10, help="Entries per top list (default: 10)")
    ap_report.add_argument("--content-type", choices=["both", "music", "podcast"], default="both")

    # Export command
    ap_export = sub.add_parser("export", help="Export a table to disk.")
    ap_export.add_argument("--table", required=True, choices=AVAILABLE_TABLES,
                           help="Which table to export.")
    ap_export.add_argument("--out", required=True, help="Output path (.parquet or .csv)")
    ap_export.add_argument("--metric", choices=["minutes", "plays"], default="minutes")
    ap_export.add_argument("--limit", type=int, default=25, help="Max rows for top_* tables (default: 25)")

    # Clear command
    sub.add_parser("clear", help="Remove all imported sources and plays.")

    args = ap.parse_args(argv)

    setup_logging(log_dir=config.LOG_DIR, log_level=args.log_level)
    catalog = PlayCatalog.open(args.data_dir)

    if args.cmd == "import":
        result = ingest_files(args.files, catalog=catalog)
        for err in result.errors:
            print(f"⚠️  {err}")
        if result.failed:
            print(f"❌ {result.message}")
            return 1
        catalog.save()
        print(f"✅ {result.message}")
        return 0

    if args.cmd == "status":
        if not catalog.sources:
            print("No sources imported yet.")
            return 0
        counts = catalog.play_counts()
        for s in catalog.sources:
            flag = "on " if s.is_enabled else "off"
            user = f" ({s.detected_username})" if s.detected_username else ""
            print(f"  [{flag}] {s.name}{user}: {counts.get(s.id, 0):,} plays")
        print(f"Total: {len(catalog.plays):,} plays from {len(catalog.sources)} source(s)")
        return 0

    if args.cmd == "report":
        filters = FilterState(content_type=args.content_type, metric=args.metric)
        _print_report(catalog.filtered_plays(filters), filters, args.limit)
        return 0

    if args.cmd == "export":
        filters = FilterState(metric=args.metric)
        df = _table(args.table, catalog.filtered_plays(filters), filters, args.limit)
        path = export_table(df, args.out)
        print(f"✅ Exported {len(df):,} rows to {path}")
        return 0

    if args.cmd == "clear":
        catalog.clear()
        catalog.save()
        print("✅ Catalog cleared")
        return 0

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
