"""
Kubernetes Vulnerability Database collection entry point

USAGE EXAMPLES:
k8s-vuln-db collect                               # Fetch feed and write one JSON per CVE
k8s-vuln-db collect --output-dir out --single-file
k8s-vuln-db collect --feed-file index.json        # Use a saved copy of the feed
k8s-vuln-db config                                # Show effective settings
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from ..config import settings
from ..sources.base.common_loader import CommonLoader
from ..sources.base.exceptions import ValidationException, VulnSourceException
from ..sources.k8s_official import K8S_CVE_FEED_CONFIG, K8sVulnDBCollector

logger = logging.getLogger(__name__)

DATABASE_FILE = "k8s-vuln-db.json"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Kubernetes Vulnerability Database Collector')
    parser.add_argument('--log-level', default=settings.LOG_LEVEL,
                        help='Logging level (default: %(default)s)')
    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    collect_parser = subparsers.add_parser('collect', help='Collect and write the database')
    collect_parser.add_argument('--output-dir', default=settings.OUTPUT_DIR,
                                help='Directory receiving the JSON output (default: %(default)s)')
    collect_parser.add_argument('--single-file', action='store_true',
                                help=f'Write the whole database to {DATABASE_FILE}')
    collect_parser.add_argument('--feed-file',
                                help='Read the Kubernetes CVE feed from a local JSON file')
    collect_parser.add_argument('--progress', action='store_true',
                                help='Show a progress bar while processing the feed')

    subparsers.add_parser('config', help='Show effective settings')
    return parser


def run_collect(args: argparse.Namespace) -> int:
    collector = K8sVulnDBCollector(show_progress=args.progress)
    logger.info(f"🚀 Collecting {K8S_CVE_FEED_CONFIG['display_name']}")
    try:
        if args.feed_file:
            with open(args.feed_file, 'r') as file:
                feed = collector.parser.parse_json(file.read())
            vuln_db = collector.parse_vuln_db_data(feed)
        else:
            vuln_db = collector.collect()
    except ValidationException as e:
        logger.error(f"❌ Validation failed:\n{e}")
        return 2
    except (VulnSourceException, OSError) as e:
        logger.error(f"❌ Collection failed: {e}")
        return 1
    finally:
        collector.fetcher.cleanup()

    loader = CommonLoader(K8S_CVE_FEED_CONFIG['source_name'])
    output_dir = Path(args.output_dir)
    try:
        if args.single_file:
            loader.load_single_file(vuln_db, output_dir / DATABASE_FILE)
        else:
            stats = loader.load_vulnerabilities(vuln_db, output_dir)
            if stats['errors']:
                return 1
    except VulnSourceException as e:
        logger.error(f"❌ {e}")
        return 1

    logger.info(f"✅ Collected {len(vuln_db.cves)} CVEs into {output_dir}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    if args.command == 'collect':
        return run_collect(args)
    if args.command == 'config':
        print(json.dumps(settings.model_dump(), indent=2, default=str))
        return 0

    parser.print_help()
    return 1


if __name__ == '__main__':
    sys.exit(main())
