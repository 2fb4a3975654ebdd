import argparse

from guest_assistant.application.dto.ingest_dto import IngestCorpusRequest
from guest_assistant.config.composition import build_ingest_use_case
from guest_assistant.config.logging_config import configure_logging
from guest_assistant.config.settings import AppSettings


def build_parser(settings: AppSettings) -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser("ingest", description="Chunk the corpus into a snapshot.")
    ap.add_argument("--data-dir", default=settings.data_dir)
    ap.add_argument("--snapshot", default=settings.snapshot_path)
    ap.add_argument("--pattern", action="append", dest="patterns", help="Glob, repeatable")
    ap.add_argument("--chunk-size", type=int, default=settings.chunk_size)
    ap.add_argument("--chunk-overlap", type=int, default=settings.chunk_overlap)
    return ap


def main(argv: list[str] | None = None) -> int:
    settings = AppSettings()
    configure_logging(settings.log_level)
    args = build_parser(settings).parse_args(argv)

    uc = build_ingest_use_case(AppSettings(snapshot_path=args.snapshot))
    req = IngestCorpusRequest(
        data_dir=args.data_dir,
        patterns=tuple(args.patterns or ("*.txt",)),
        chunk_size=args.chunk_size,
        chunk_overlap=args.chunk_overlap,
    )
    result = uc.execute(req)
    if not result.ok:
        print(f"[ERROR] {type(result.error).__name__}: {result.error}")
        return 1
    print(f"Snapshot saved to {args.snapshot}: {result.value} chunk(s)")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
