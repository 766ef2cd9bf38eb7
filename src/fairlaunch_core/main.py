import argparse
from typing import List, Optional

from fairlaunch_core.common.config import CurveConfig, load_config
from fairlaunch_core.common.logger import get_logger, setup_logging
from fairlaunch_core.webapi.webapi import create_app


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Serve bonding curve quotes over HTTP.")
    parser.add_argument("--config", help="YAML file with 'curve' and 'logging' sections")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=5000)
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None):
    args = parse_args(argv)
    config_data = load_config(args.config) if args.config else {"curve": {}, "logging": {}}

    setup_logging(config_data["logging"])
    curve_config = CurveConfig.from_dict(config_data["curve"])

    get_logger(__name__).info("Starting quote API", host=args.host, port=args.port)
    create_app(curve_config).run(host=args.host, port=args.port)


if __name__ == "__main__":
    main()
