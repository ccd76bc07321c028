import argparse
import sys

from pydantic import ValidationError

from path2url.config import ConverterConfig, Settings
from path2url.pipelines.orchestrator import ConversionOrchestrator
from path2url.walkers.directory_walker import ScanError


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Rewrite relative src/href/url() references into absolute URLs."
    )
    parser.add_argument(dest="root", help="top-level directory to rewrite in place")
    parser.add_argument(dest="base_domain", help="absolute URL the references are anchored to")
    parser.add_argument("-e", "--ext", dest="extensions", action="append", default=None,
                        help="file extension to process (repeatable, default: html css js)")
    parser.add_argument("-l", "--log-file", dest="log_file", default=None,
                        help="append-only run log (default: url_converter.log)")
    parser.add_argument("--no-backup", dest="enable_backup", default=None,
                        action="store_false", help="overwrite files without backing them up")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    settings = Settings()

    try:
        config = ConverterConfig.from_settings(
            args.root,
            args.base_domain,
            settings,
            extensions=args.extensions,
            log_file=args.log_file,
            enable_backup=args.enable_backup,
        )
    except ValidationError as exc:
        print(exc, file=sys.stderr)
        return 2

    orchestrator = ConversionOrchestrator.from_config(config)

    try:
        stats = orchestrator.run()
    except ScanError as exc:
        print(exc, file=sys.stderr)
        return 1

    print(stats.model_dump_json(indent=2))
    for path in orchestrator.get_processed_files():
        print(path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
