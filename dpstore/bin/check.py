"""
Load and check configuration from given directory, print any errors, and exit.
"""

import sys

from pydantic import ValidationError

from dpstore.api.internal.config import validate_config
from dpstore.common.config import read_config_dir


def init_parser(parser):
    parser.add_argument(
        "config_dir",
        metavar="CONFIG_DIRECTORY",
        help="Path to a directory containing configuration files (e.g. /etc/dpstore/config)",
    )


def main(args) -> int:
    try:
        config = read_config_dir(args.config_dir, recursive=True)
    except OSError as e:
        print(f"Cannot open configuration directory: {e}", file=sys.stderr)
        return 1

    try:
        api_config, db_config = validate_config(config)
    except ValidationError as e:
        print("Invalid configuration:", file=sys.stderr)
        for err in e.errors():
            loc = ".".join(str(part) for part in err["loc"])
            print(f"  {e.title} -> {loc}: {err['msg']}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 1

    print(
        f"Configuration OK (database '{db_config.db_name}', "
        f"collection '{db_config.collection}', "
        f"{len(api_config.auth.tokens)} access token(s))."
    )
    return 0
